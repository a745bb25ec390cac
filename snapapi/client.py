"""
SnapAPI Python Client

HTTP client for the SnapAPI screenshot service.
"""

import json
import logging
import threading
from dataclasses import replace
from typing import Any, Callable, Optional, TypeVar, Union

import requests

from .decoder import decode_error, decode_json, parse_retry_after
from .errors import (
    ErrorKind,
    ResponseParseError,
    SerializationError,
    SnapAPIError,
    ValidationError,
)
from .polling import JobHandle, JobKind, JobStatus, PollPolicy, poll_job
from .types import (
    AnalyzeOptions,
    AnalyzeResult,
    AsyncScreenshotResult,
    BatchOptions,
    BatchResult,
    BatchStatus,
    CapabilitiesResult,
    DevicePreset,
    DevicesResult,
    ExtractOptions,
    ExtractResult,
    ExtractType,
    PDFOptions,
    PingResult,
    RequestOptions,
    ScreenshotJobStatus,
    ScreenshotOptions,
    ScreenshotResult,
    Usage,
    VideoOptions,
    VideoResult,
)

__version__ = "1.2.0"

logger = logging.getLogger(__name__)

R = TypeVar("R")

Body = Union[RequestOptions, dict[str, Any]]


class SnapAPIClient:
    """
    Client for the SnapAPI screenshot service.

    Example:
        >>> client = SnapAPIClient(api_key="sk_live_xxxxx")
        >>> png = client.screenshot(ScreenshotOptions(url="https://example.com"))
        >>> open("screenshot.png", "wb").write(png)

    Args:
        api_key: API key for authentication (required).
        base_url: Base URL for the API.
            Default: https://api.snapapi.pics
        timeout: Request timeout in seconds. Default: 60
        session: Optional ``requests.Session`` to send requests through.
            Its headers are updated in place with the API key, content type
            and user agent, so do not share it with other services.

    Calls are never retried implicitly; see ``snapapi.retry.with_retry``.
    """

    DEFAULT_BASE_URL = "https://api.snapapi.pics"
    DEFAULT_TIMEOUT = 60
    USER_AGENT = f"snapapi-python/{__version__}"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValidationError("api_key is required")

        self.api_key = api_key
        self.base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout

        # Create a session for connection pooling
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Content-Type": "application/json",
                "X-Api-Key": api_key,
                "User-Agent": self.USER_AGENT,
            }
        )

    def _request(
        self,
        method: str,
        path: str,
        body: Optional[Body] = None,
    ) -> bytes:
        """Make an authenticated request to the API and return the raw body."""
        url = f"{self.base_url}{path}"

        data = None
        if body is not None:
            payload = body.to_dict() if isinstance(body, RequestOptions) else body
            try:
                data = json.dumps(payload, allow_nan=False).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise SerializationError(f"failed to marshal request body: {e}") from e

        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method, url, data=data, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning("Connection to %s failed: %s", url, e)
            raise SnapAPIError(
                ErrorKind.CONNECTION_ERROR, f"connection error: {e}", 0
            ) from e

        if response.status_code >= 400:
            raise decode_error(
                response.content,
                response.status_code,
                retry_after=parse_retry_after(response.headers.get("Retry-After")),
            )

        return response.content

    def _request_json(
        self,
        method: str,
        path: str,
        parse: Callable[[dict[str, Any]], R],
        body: Optional[Body] = None,
    ) -> R:
        """Make a request whose response is a JSON object and parse it."""
        data = decode_json(self._request(method, path, body))
        try:
            return parse(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ResponseParseError(f"failed to parse response: {e!r}") from e

    @staticmethod
    def _require_source(options: ScreenshotOptions) -> None:
        if not (options.url or options.html or options.markdown):
            raise ValidationError("URL, HTML, or Markdown is required")

    @staticmethod
    def _require_job_id(job_id: str) -> None:
        if not job_id:
            raise ValidationError("job id is required")

    # Screenshot Methods

    def screenshot(self, options: ScreenshotOptions) -> bytes:
        """
        Capture a screenshot of a URL, HTML or Markdown document.

        Args:
            options: Screenshot options. One of ``url``, ``html`` or
                ``markdown`` is required.

        Returns:
            The response body as returned by the service: image bytes for
            the default binary response type, base64 text for
            ``response_type="base64"``, or JSON for ``response_type="json"``
            (prefer ``screenshot_with_metadata`` for the latter).

        Example:
            >>> png = client.screenshot(
            ...     ScreenshotOptions(url="https://example.com", full_page=True)
            ... )
        """
        self._require_source(options)
        return self._request("POST", "/v1/screenshot", options)

    def screenshot_with_metadata(self, options: ScreenshotOptions) -> ScreenshotResult:
        """
        Capture a screenshot and return it with page metadata.

        Returns:
            ScreenshotResult; the image is base64 in ``data``
            (see ``ScreenshotResult.image_bytes``).
        """
        self._require_source(options)
        options = replace(options, response_type="json")
        return self._request_json(
            "POST", "/v1/screenshot", ScreenshotResult.from_dict, options
        )

    def screenshot_from_html(
        self,
        html: str,
        options: Optional[ScreenshotOptions] = None,
    ) -> bytes:
        """Capture a screenshot of an HTML document."""
        if not html:
            raise ValidationError("HTML content is required")
        options = replace(options or ScreenshotOptions(), html=html, url=None)
        return self._request("POST", "/v1/screenshot", options)

    def screenshot_from_markdown(
        self,
        markdown: str,
        options: Optional[ScreenshotOptions] = None,
    ) -> bytes:
        """Capture a screenshot of a rendered Markdown document."""
        if not markdown:
            raise ValidationError("Markdown content is required")
        options = replace(
            options or ScreenshotOptions(), markdown=markdown, url=None, html=None
        )
        return self._request("POST", "/v1/screenshot", options)

    def screenshot_device(
        self,
        url: str,
        device: Union[DevicePreset, str],
        options: Optional[ScreenshotOptions] = None,
    ) -> bytes:
        """
        Capture a screenshot emulating a device preset.

        Example:
            >>> png = client.screenshot_device(
            ...     "https://example.com", DevicePreset.IPHONE_15_PRO
            ... )
        """
        if not url:
            raise ValidationError("URL is required")
        options = replace(options or ScreenshotOptions(), url=url, device=device)
        return self._request("POST", "/v1/screenshot", options)

    def pdf(self, options: ScreenshotOptions) -> bytes:
        """
        Render a URL, HTML or Markdown document to PDF.

        Returns:
            PDF bytes.
        """
        self._require_source(options)
        options = replace(options, format="pdf", response_type="binary")
        return self._request("POST", "/v1/screenshot", options)

    def pdf_from_html(
        self,
        html: str,
        pdf_options: Optional[PDFOptions] = None,
    ) -> bytes:
        """Render an HTML document to PDF."""
        if not html:
            raise ValidationError("HTML content is required")
        options = ScreenshotOptions(
            html=html,
            format="pdf",
            response_type="binary",
            pdf_options=pdf_options,
        )
        return self._request("POST", "/v1/screenshot", options)

    # Video Methods

    def video(self, options: VideoOptions) -> bytes:
        """
        Capture a video of a page, optionally with scroll animation.

        Returns:
            Video bytes.
        """
        if not options.url:
            raise ValidationError("URL is required")
        return self._request("POST", "/v1/video", options)

    def video_with_result(self, options: VideoOptions) -> VideoResult:
        """Capture a video and return it with metadata."""
        if not options.url:
            raise ValidationError("URL is required")
        options = replace(options, response_type="json")
        return self._request_json("POST", "/v1/video", VideoResult.from_dict, options)

    # Batch Methods

    def batch(self, options: BatchOptions) -> BatchResult:
        """
        Submit a batch screenshot job.

        Returns:
            BatchResult with the job id to poll.

        Example:
            >>> job = client.batch(BatchOptions(urls=[
            ...     "https://example.com",
            ...     "https://example.org",
            ... ]))
            >>> status = client.wait_for_batch(job.job_id)
            >>> print(f"{status.completed}/{status.total}")
        """
        if not options.urls:
            raise ValidationError("URLs are required")
        return self._request_json(
            "POST", "/v1/screenshot/batch", BatchResult.from_dict, options
        )

    def get_batch_status(self, job_id: str) -> BatchStatus:
        """Get the current status of a batch job."""
        self._require_job_id(job_id)
        return self._request_json(
            "GET", f"/v1/screenshot/batch/{job_id}", BatchStatus.from_dict
        )

    def wait_for_batch(
        self,
        job_id: str,
        policy: Optional[PollPolicy] = None,
        cancel: Optional[threading.Event] = None,
        on_status: Optional[Callable[[JobStatus], Any]] = None,
    ) -> BatchStatus:
        """
        Poll a batch job until it completes.

        Args:
            job_id: Job id returned by ``batch``.
            policy: Polling interval and budget. Default: 15 checks, 2s apart.
            cancel: Event that aborts polling when set.
            on_status: Called each time the job's state changes.

        Returns:
            The completed BatchStatus.

        Raises:
            JobFailedError: The batch failed.
            JobTimeoutError: The batch was still running when polling gave up.
        """
        self._require_job_id(job_id)
        handle = JobHandle(job_id, JobKind.BATCH_CAPTURE)
        status = poll_job(
            handle,
            lambda h: self.get_batch_status(h.job_id).job_status(),
            policy=policy,
            cancel=cancel,
            on_status=on_status,
        )
        return status.result

    # Async Screenshot Methods

    def screenshot_async(self, options: ScreenshotOptions) -> AsyncScreenshotResult:
        """
        Submit a screenshot to be captured in the background.

        Returns:
            AsyncScreenshotResult with the job id to poll. If the service
            answered synchronously, ``job_id`` is empty and ``data`` holds
            the capture.
        """
        self._require_source(options)
        return self._request_json(
            "POST", "/v1/screenshot/async", AsyncScreenshotResult.from_dict, options
        )

    def get_screenshot_status(self, job_id: str) -> ScreenshotJobStatus:
        """Get the current status of an async screenshot job."""
        self._require_job_id(job_id)
        return self._request_json(
            "GET", f"/v1/screenshot/async/{job_id}", ScreenshotJobStatus.from_dict
        )

    def wait_for_screenshot(
        self,
        job_id: str,
        policy: Optional[PollPolicy] = None,
        cancel: Optional[threading.Event] = None,
        on_status: Optional[Callable[[JobStatus], Any]] = None,
    ) -> ScreenshotJobStatus:
        """
        Poll an async screenshot job until it completes.

        See ``wait_for_batch`` for arguments and errors.
        """
        self._require_job_id(job_id)
        handle = JobHandle(job_id, JobKind.ASYNC_CAPTURE)
        status = poll_job(
            handle,
            lambda h: self.get_screenshot_status(h.job_id).job_status(),
            policy=policy,
            cancel=cancel,
            on_status=on_status,
        )
        return status.result

    # Extraction and Analysis

    def extract(self, options: ExtractOptions) -> ExtractResult:
        """
        Extract content from a page.

        Example:
            >>> result = client.extract(
            ...     ExtractOptions(url="https://example.com", type=ExtractType.MARKDOWN)
            ... )
            >>> print(result.content)
        """
        if not options.url:
            raise ValidationError("URL is required")
        return self._request_json(
            "POST", "/v1/extract", ExtractResult.from_dict, options
        )

    def extract_markdown(self, url: str) -> ExtractResult:
        """Extract page content as Markdown."""
        return self.extract(ExtractOptions(url=url, type=ExtractType.MARKDOWN))

    def extract_article(self, url: str) -> ExtractResult:
        """Extract the main article of a page."""
        return self.extract(ExtractOptions(url=url, type=ExtractType.ARTICLE))

    def extract_structured(self, url: str) -> ExtractResult:
        """Extract structured data (headings, tables, lists) from a page."""
        return self.extract(ExtractOptions(url=url, type=ExtractType.STRUCTURED))

    def extract_text(self, url: str) -> ExtractResult:
        """Extract the visible text of a page."""
        return self.extract(ExtractOptions(url=url, type=ExtractType.TEXT))

    def extract_links(self, url: str) -> ExtractResult:
        """Extract all links on a page."""
        return self.extract(ExtractOptions(url=url, type=ExtractType.LINKS))

    def extract_images(self, url: str) -> ExtractResult:
        """Extract all images on a page."""
        return self.extract(ExtractOptions(url=url, type=ExtractType.IMAGES))

    def extract_metadata(self, url: str) -> ExtractResult:
        """Extract page metadata such as title, description and Open Graph tags."""
        return self.extract(ExtractOptions(url=url, type=ExtractType.METADATA))

    def analyze(self, options: AnalyzeOptions) -> AnalyzeResult:
        """
        Run an AI analysis of a page.

        Args:
            options: Analyze options. ``url`` and ``prompt`` are required.
        """
        if not options.url:
            raise ValidationError("URL is required")
        if not options.prompt:
            raise ValidationError("Prompt is required")
        return self._request_json(
            "POST", "/v1/analyze", AnalyzeResult.from_dict, options
        )

    # Account and Service Info

    def get_usage(self) -> Usage:
        """Get API usage for the current billing period."""
        return self._request_json("GET", "/v1/usage", Usage.from_dict)

    def get_devices(self) -> DevicesResult:
        """List available device presets."""
        return self._request_json("GET", "/v1/devices", DevicesResult.from_dict)

    def get_capabilities(self) -> CapabilitiesResult:
        """Get API version and supported features."""
        return self._request_json(
            "GET", "/v1/capabilities", CapabilitiesResult.from_dict
        )

    def ping(self) -> PingResult:
        """Check API health."""
        return self._request_json("GET", "/v1/ping", PingResult.from_dict)

    def close(self) -> None:
        """Close the client session."""
        self._session.close()

    def __enter__(self) -> "SnapAPIClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
