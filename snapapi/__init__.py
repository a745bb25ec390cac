"""
SnapAPI Python Client

Python client for the SnapAPI screenshot, PDF, video, extraction and
analysis API.

Example:
    >>> from snapapi import SnapAPIClient, ScreenshotOptions
    >>>
    >>> client = SnapAPIClient(api_key="sk_live_xxxxx")
    >>> png = client.screenshot(ScreenshotOptions(url="https://example.com"))
"""

from .client import SnapAPIClient, __version__
from .errors import (
    AuthenticationError,
    Cancelled,
    ErrorKind,
    JobFailedError,
    JobTimeoutError,
    RateLimitError,
    ResponseParseError,
    SerializationError,
    SnapAPIClientError,
    SnapAPIError,
    ValidationError,
    is_retryable,
)
from .polling import JobHandle, JobKind, JobState, JobStatus, PollPolicy, poll_job
from .retry import RetryPolicy, with_retry
from .types import (
    AnalyzeOptions,
    AnalyzeResult,
    AsyncScreenshotResult,
    BatchOptions,
    BatchResult,
    BatchStatus,
    CapabilitiesResult,
    Cookie,
    DevicePreset,
    DevicesResult,
    ExtractOptions,
    ExtractResult,
    ExtractType,
    PDFOptions,
    PingResult,
    ScreenshotJobStatus,
    ScreenshotOptions,
    ScreenshotResult,
    Usage,
    VideoOptions,
    VideoResult,
)

__all__ = [
    # Client
    "SnapAPIClient",
    # Errors
    "ErrorKind",
    "SnapAPIError",
    "AuthenticationError",
    "RateLimitError",
    "ValidationError",
    "JobFailedError",
    "JobTimeoutError",
    "SnapAPIClientError",
    "SerializationError",
    "ResponseParseError",
    "Cancelled",
    "is_retryable",
    # Retry and polling
    "RetryPolicy",
    "with_retry",
    "PollPolicy",
    "JobHandle",
    "JobKind",
    "JobState",
    "JobStatus",
    "poll_job",
    # Types
    "ScreenshotOptions",
    "ScreenshotResult",
    "PDFOptions",
    "Cookie",
    "DevicePreset",
    "VideoOptions",
    "VideoResult",
    "BatchOptions",
    "BatchResult",
    "BatchStatus",
    "AsyncScreenshotResult",
    "ScreenshotJobStatus",
    "ExtractOptions",
    "ExtractResult",
    "ExtractType",
    "AnalyzeOptions",
    "AnalyzeResult",
    "Usage",
    "DevicesResult",
    "CapabilitiesResult",
    "PingResult",
]
