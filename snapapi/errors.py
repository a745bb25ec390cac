"""
Error types for the SnapAPI Python client.

Two families:

* ``SnapAPIError`` and its subclasses: the service answered with an error
  status, or could not be reached. Always carry a ``code`` and a
  ``status_code``.
* ``SnapAPIClientError`` and its subclasses: local failures (bad request
  body, undecodable response, cancellation). No error code.
"""

from enum import Enum
from typing import Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .polling import JobHandle, JobStatus


class ErrorKind(str, Enum):
    """Error codes returned by the API."""
    INVALID_URL = "INVALID_URL"
    INVALID_PARAMS = "INVALID_PARAMS"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    RATE_LIMITED = "RATE_LIMITED"
    TIMEOUT = "TIMEOUT"
    CAPTURE_FAILED = "CAPTURE_FAILED"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    HTTP_ERROR = "HTTP_ERROR"


class SnapAPIError(Exception):
    """Base exception for errors reported by (or reaching) the SnapAPI service."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 0,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.code = code.value if isinstance(code, ErrorKind) else code
        self.message = message
        self.status_code = status_code
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"[{self.code}] {self.message} (HTTP {self.status_code}): {self.details}"
        return f"[{self.code}] {self.message} (HTTP {self.status_code})"

    def is_retryable(self) -> bool:
        return is_retryable(self)


class AuthenticationError(SnapAPIError):
    """Raised when the API key is missing or rejected."""

    def __init__(
        self,
        message: str = "Invalid or missing API key",
        status_code: int = 401,
        details: Optional[Any] = None,
    ):
        super().__init__(ErrorKind.UNAUTHORIZED, message, status_code, details)


class RateLimitError(SnapAPIError):
    """Raised when the rate limit is exceeded."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        status_code: int = 429,
        details: Optional[Any] = None,
        retry_after: Optional[int] = None,
    ):
        super().__init__(ErrorKind.RATE_LIMITED, message, status_code, details)
        self.retry_after = retry_after


class ValidationError(SnapAPIError):
    """Raised client-side when a request is missing required input."""

    def __init__(self, message: str):
        super().__init__(ErrorKind.INVALID_PARAMS, message, 400)


class JobFailedError(SnapAPIError):
    """Raised when the service reports an asynchronous job as failed."""

    def __init__(self, handle: "JobHandle", status: "JobStatus"):
        reason = status.error or "job failed"
        super().__init__(
            ErrorKind.CAPTURE_FAILED,
            f"{handle.kind.value} job {handle.job_id} failed: {reason}",
        )
        self.handle = handle
        self.status = status
        self.reason = reason


class JobTimeoutError(SnapAPIError):
    """
    Raised when polling gives up before the job reached a terminal state.

    The job may still be running on the service; ``last_status`` is the most
    recent status observed, if any.
    """

    def __init__(
        self,
        handle: "JobHandle",
        attempts: int,
        last_status: Optional["JobStatus"] = None,
    ):
        super().__init__(
            ErrorKind.TIMEOUT,
            f"{handle.kind.value} job {handle.job_id} not finished "
            f"after {attempts} status checks",
        )
        self.handle = handle
        self.attempts = attempts
        self.last_status = last_status


class SnapAPIClientError(Exception):
    """Base exception for local failures that never reached the service's error taxonomy."""


class SerializationError(SnapAPIClientError):
    """Raised when a request body cannot be encoded as JSON."""


class ResponseParseError(SnapAPIClientError):
    """Raised when a successful response body cannot be decoded."""


class Cancelled(SnapAPIClientError):
    """Raised when a retry or polling loop is cancelled by the caller."""


def is_retryable(error: SnapAPIError) -> bool:
    """
    Whether the same request may succeed if sent again later.

    Rate limiting, timeouts and any 5xx status are retryable; every other
    code is terminal.
    """
    return (
        error.code == ErrorKind.RATE_LIMITED
        or error.code == ErrorKind.TIMEOUT
        or error.status_code >= 500
    )
