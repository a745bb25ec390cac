"""
Type definitions for the SnapAPI Python client.

Option records serialize to the camelCase JSON the API expects. Fields left
as ``None`` (or empty collections) are omitted from the request rather than
sent as ``null``.
"""

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Optional, Union

from .decoder import decode_base64
from .polling import JobState, JobStatus


class DevicePreset(str, Enum):
    """Device presets accepted by the ``device`` option."""
    DESKTOP_1080P = "desktop-1080p"
    DESKTOP_1440P = "desktop-1440p"
    DESKTOP_4K = "desktop-4k"
    MACBOOK_PRO_13 = "macbook-pro-13"
    MACBOOK_PRO_16 = "macbook-pro-16"
    IMAC_24 = "imac-24"
    IPHONE_SE = "iphone-se"
    IPHONE_12 = "iphone-12"
    IPHONE_13 = "iphone-13"
    IPHONE_14 = "iphone-14"
    IPHONE_14_PRO = "iphone-14-pro"
    IPHONE_15 = "iphone-15"
    IPHONE_15_PRO = "iphone-15-pro"
    IPHONE_15_PRO_MAX = "iphone-15-pro-max"
    IPAD = "ipad"
    IPAD_MINI = "ipad-mini"
    IPAD_AIR = "ipad-air"
    IPAD_PRO_11 = "ipad-pro-11"
    IPAD_PRO_12_9 = "ipad-pro-12.9"
    PIXEL_7 = "pixel-7"
    PIXEL_8 = "pixel-8"
    PIXEL_8_PRO = "pixel-8-pro"
    SAMSUNG_GALAXY_S23 = "samsung-galaxy-s23"
    SAMSUNG_GALAXY_S24 = "samsung-galaxy-s24"
    SAMSUNG_GALAXY_TAB_S9 = "samsung-galaxy-tab-s9"


class ScrollEasing(str, Enum):
    """Easing functions for video scroll animation."""
    LINEAR = "linear"
    EASE_IN = "ease_in"
    EASE_OUT = "ease_out"
    EASE_IN_OUT = "ease_in_out"
    EASE_IN_OUT_QUINT = "ease_in_out_quint"


class ExtractType(str, Enum):
    """Content types for the extract endpoint."""
    HTML = "html"
    TEXT = "text"
    MARKDOWN = "markdown"
    ARTICLE = "article"
    LINKS = "links"
    IMAGES = "images"
    METADATA = "metadata"
    STRUCTURED = "structured"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _to_payload(value: Any) -> Any:
    """Recursively convert option records into JSON-ready values."""
    if is_dataclass(value) and not isinstance(value, type):
        result: dict[str, Any] = {}
        for f in fields(value):
            item = getattr(value, f.name)
            if item is None or (isinstance(item, (list, dict)) and not item):
                continue
            result[f.metadata.get("json", _camel(f.name))] = _to_payload(item)
        return result
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_to_payload(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_payload(v) for k, v in value.items()}
    return value


class RequestOptions:
    """Mixin for option records sent as a request body."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to API request format."""
        return _to_payload(self)


# Request option types


@dataclass
class Cookie(RequestOptions):
    """Browser cookie set before the page loads."""
    name: str
    value: str
    domain: Optional[str] = None
    path: Optional[str] = None
    expires: Optional[int] = None
    http_only: Optional[bool] = None
    secure: Optional[bool] = None
    same_site: Optional[str] = None


@dataclass
class HTTPAuth(RequestOptions):
    """HTTP basic authentication credentials."""
    username: str
    password: str


@dataclass
class ProxyConfig(RequestOptions):
    """Proxy the browser connects through."""
    server: str
    username: Optional[str] = None
    password: Optional[str] = None
    bypass: Optional[list[str]] = None


@dataclass
class Geolocation(RequestOptions):
    """Emulated geolocation."""
    latitude: float
    longitude: float
    accuracy: Optional[float] = None


@dataclass
class PDFOptions(RequestOptions):
    """PDF rendering options."""
    page_size: Optional[str] = None
    width: Optional[str] = None
    height: Optional[str] = None
    landscape: Optional[bool] = None
    margin_top: Optional[str] = None
    margin_right: Optional[str] = None
    margin_bottom: Optional[str] = None
    margin_left: Optional[str] = None
    print_background: Optional[bool] = None
    header_template: Optional[str] = None
    footer_template: Optional[str] = None
    display_header_footer: Optional[bool] = None
    scale: Optional[float] = None
    page_ranges: Optional[str] = None
    prefer_css_page_size: Optional[bool] = field(
        default=None, metadata={"json": "preferCSSPageSize"}
    )


@dataclass
class ThumbnailOptions(RequestOptions):
    """Thumbnail generated alongside a screenshot."""
    enabled: bool = True
    width: Optional[int] = None
    height: Optional[int] = None
    fit: Optional[str] = None


@dataclass
class ExtractMetadataOptions(RequestOptions):
    """Additional page metadata to collect with a screenshot."""
    fonts: Optional[bool] = None
    colors: Optional[bool] = None
    links: Optional[bool] = None
    http_status_code: Optional[bool] = None


@dataclass
class ScreenshotOptions(RequestOptions):
    """Options for screenshot and PDF requests. One of url, html or markdown is required."""
    url: Optional[str] = None
    html: Optional[str] = None
    markdown: Optional[str] = None
    format: Optional[str] = None
    quality: Optional[int] = None
    device: Optional[Union[DevicePreset, str]] = None
    width: Optional[int] = None
    height: Optional[int] = None
    device_scale_factor: Optional[float] = None
    is_mobile: Optional[bool] = None
    has_touch: Optional[bool] = None
    is_landscape: Optional[bool] = None
    full_page: Optional[bool] = None
    full_page_scroll_delay: Optional[int] = None
    full_page_max_height: Optional[int] = None
    selector: Optional[str] = None
    selector_scroll_into_view: Optional[bool] = None
    clip_x: Optional[int] = None
    clip_y: Optional[int] = None
    clip_width: Optional[int] = None
    clip_height: Optional[int] = None
    delay: Optional[int] = None
    timeout: Optional[int] = None
    wait_until: Optional[str] = None
    wait_for_selector: Optional[str] = None
    wait_for_selector_timeout: Optional[int] = None
    dark_mode: Optional[bool] = None
    reduced_motion: Optional[bool] = None
    css: Optional[str] = None
    javascript: Optional[str] = None
    hide_selectors: Optional[list[str]] = None
    click_selector: Optional[str] = None
    click_delay: Optional[int] = None
    block_ads: Optional[bool] = None
    block_trackers: Optional[bool] = None
    block_cookie_banners: Optional[bool] = None
    block_chat_widgets: Optional[bool] = None
    block_resources: Optional[list[str]] = None
    user_agent: Optional[str] = None
    extra_headers: Optional[dict[str, str]] = None
    cookies: Optional[list[Cookie]] = None
    http_auth: Optional[HTTPAuth] = None
    proxy: Optional[ProxyConfig] = None
    geolocation: Optional[Geolocation] = None
    timezone: Optional[str] = None
    locale: Optional[str] = None
    pdf_options: Optional[PDFOptions] = None
    thumbnail: Optional[ThumbnailOptions] = None
    fail_on_http_error: Optional[bool] = None
    cache: Optional[bool] = None
    cache_ttl: Optional[int] = None
    response_type: Optional[str] = None
    include_metadata: Optional[bool] = None
    extract_metadata: Optional[ExtractMetadataOptions] = None
    fail_if_content_missing: Optional[list[str]] = None
    fail_if_content_contains: Optional[list[str]] = None


@dataclass
class VideoOptions(RequestOptions):
    """Options for video capture. ``url`` is required."""
    url: Optional[str] = None
    format: Optional[str] = None
    quality: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    device: Optional[Union[DevicePreset, str]] = None
    duration: Optional[int] = None
    fps: Optional[int] = None
    delay: Optional[int] = None
    timeout: Optional[int] = None
    wait_until: Optional[str] = None
    wait_for_selector: Optional[str] = None
    dark_mode: Optional[bool] = None
    block_ads: Optional[bool] = None
    block_cookie_banners: Optional[bool] = None
    css: Optional[str] = None
    javascript: Optional[str] = None
    hide_selectors: Optional[list[str]] = None
    user_agent: Optional[str] = None
    cookies: Optional[list[Cookie]] = None
    response_type: Optional[str] = None
    scroll: Optional[bool] = None
    scroll_delay: Optional[int] = None
    scroll_duration: Optional[int] = None
    scroll_by: Optional[int] = None
    scroll_easing: Optional[ScrollEasing] = None
    scroll_back: Optional[bool] = None
    scroll_complete: Optional[bool] = None


@dataclass
class BatchOptions(RequestOptions):
    """Options for a batch screenshot job."""
    urls: list[str] = field(default_factory=list)
    format: Optional[str] = None
    quality: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    full_page: Optional[bool] = None
    dark_mode: Optional[bool] = None
    block_ads: Optional[bool] = None
    block_cookie_banners: Optional[bool] = None
    webhook_url: Optional[str] = None


@dataclass
class ExtractOptions(RequestOptions):
    """Options for content extraction. ``url`` is required."""
    url: Optional[str] = None
    type: Optional[Union[ExtractType, str]] = None
    selector: Optional[str] = None
    wait_for_selector: Optional[str] = None
    timeout: Optional[int] = None
    max_length: Optional[int] = None
    clean_output: Optional[bool] = None
    block_ads: Optional[bool] = None
    block_cookie_banners: Optional[bool] = None


@dataclass
class AnalyzeOptions(RequestOptions):
    """Options for AI analysis. ``url`` and ``prompt`` are required."""
    url: Optional[str] = None
    prompt: Optional[str] = None
    provider: Optional[str] = None
    api_key: Optional[str] = None
    model: Optional[str] = None
    json_schema: Optional[dict[str, Any]] = None
    include_screenshot: Optional[bool] = None
    include_metadata: Optional[bool] = None
    max_content_length: Optional[int] = None
    timeout: Optional[int] = None
    block_ads: Optional[bool] = None
    block_cookie_banners: Optional[bool] = None


# Response types


@dataclass
class ScreenshotMetadata:
    """Page metadata returned with a screenshot."""
    title: Optional[str] = None
    description: Optional[str] = None
    favicon: Optional[str] = None
    og_title: Optional[str] = None
    og_description: Optional[str] = None
    og_image: Optional[str] = None
    http_status_code: Optional[int] = None
    fonts: Optional[list[str]] = None
    colors: Optional[list[str]] = None
    links: Optional[list[str]] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScreenshotMetadata":
        """Create from API response data."""
        return cls(
            title=data.get("title"),
            description=data.get("description"),
            favicon=data.get("favicon"),
            og_title=data.get("ogTitle"),
            og_description=data.get("ogDescription"),
            og_image=data.get("ogImage"),
            http_status_code=data.get("httpStatusCode"),
            fonts=data.get("fonts"),
            colors=data.get("colors"),
            links=data.get("links"),
        )


@dataclass
class ScreenshotResult:
    """Screenshot returned as JSON with metadata."""
    success: bool
    data: str
    width: int
    height: int
    file_size: int
    took: int
    format: str
    cached: bool = False
    metadata: Optional[ScreenshotMetadata] = None
    thumbnail: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScreenshotResult":
        """Create from API response data."""
        metadata = None
        if data.get("metadata"):
            metadata = ScreenshotMetadata.from_dict(data["metadata"])
        return cls(
            success=data.get("success", False),
            data=data.get("data", ""),
            width=data.get("width", 0),
            height=data.get("height", 0),
            file_size=data.get("fileSize", 0),
            took=data.get("took", 0),
            format=data.get("format", ""),
            cached=data.get("cached", False),
            metadata=metadata,
            thumbnail=data.get("thumbnail"),
        )

    def image_bytes(self) -> bytes:
        """Decode the base64 image data."""
        return decode_base64(self.data)

    def thumbnail_bytes(self) -> Optional[bytes]:
        """Decode the base64 thumbnail, if one was requested."""
        if not self.thumbnail:
            return None
        return decode_base64(self.thumbnail)


@dataclass
class VideoResult:
    """Video returned as JSON with metadata."""
    success: bool
    format: str
    width: int
    height: int
    file_size: int
    duration: int
    took: int
    data: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VideoResult":
        """Create from API response data."""
        return cls(
            success=data.get("success", False),
            format=data.get("format", ""),
            width=data.get("width", 0),
            height=data.get("height", 0),
            file_size=data.get("fileSize", 0),
            duration=data.get("duration", 0),
            took=data.get("took", 0),
            data=data.get("data"),
        )

    def video_bytes(self) -> bytes:
        """Decode the base64 video data."""
        return decode_base64(self.data or "")


@dataclass
class BatchResult:
    """Acknowledgement of a submitted batch job."""
    success: bool
    job_id: str
    status: str
    total: int
    completed: int = 0
    failed: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BatchResult":
        """Create from API response data."""
        return cls(
            success=data.get("success", False),
            job_id=data.get("jobId", ""),
            status=data.get("status", ""),
            total=data.get("total", 0),
            completed=data.get("completed", 0),
            failed=data.get("failed", 0),
        )


@dataclass
class BatchItemResult:
    """Result for one URL of a batch job."""
    url: str
    status: str
    data: Optional[str] = None
    error: Optional[str] = None
    duration: Optional[int] = None


@dataclass
class BatchStatus:
    """Status of a batch job."""
    success: bool
    job_id: str
    status: str
    total: int
    completed: int
    failed: int
    results: list[BatchItemResult] = field(default_factory=list)
    created_at: Optional[str] = None
    completed_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BatchStatus":
        """Create from API response data."""
        results = [
            BatchItemResult(
                url=r.get("url", ""),
                status=r.get("status", ""),
                data=r.get("data"),
                error=r.get("error"),
                duration=r.get("duration"),
            )
            for r in data.get("results") or []
        ]
        return cls(
            success=data.get("success", False),
            job_id=data.get("jobId", ""),
            status=data.get("status", ""),
            total=data.get("total", 0),
            completed=data.get("completed", 0),
            failed=data.get("failed", 0),
            results=results,
            created_at=data.get("createdAt"),
            completed_at=data.get("completedAt"),
        )

    def job_status(self) -> JobStatus:
        """View this record as a generic ``JobStatus``."""
        error = None
        if self.failed:
            error = "; ".join(
                f"{r.url}: {r.error}" for r in self.results if r.error
            ) or f"{self.failed} of {self.total} captures failed"
        return JobStatus(
            state=JobState(self.status),
            completed=self.completed,
            total=self.total,
            failed=self.failed,
            result=self,
            error=error,
        )


@dataclass
class AsyncScreenshotResult:
    """
    Acknowledgement of an async screenshot.

    ``job_id`` is empty when the service answered synchronously; the
    capture is then in ``data``.
    """
    success: bool
    job_id: str
    status: str
    data: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AsyncScreenshotResult":
        """Create from API response data."""
        return cls(
            success=data.get("success", False),
            job_id=data.get("jobId", ""),
            status=data.get("status", ""),
            data=data.get("data"),
        )


@dataclass
class ScreenshotJobStatus:
    """Status of an async screenshot job."""
    success: bool
    job_id: str
    status: str
    data: Optional[str] = None
    format: Optional[str] = None
    error: Optional[str] = None
    created_at: Optional[str] = None
    completed_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScreenshotJobStatus":
        """Create from API response data."""
        return cls(
            success=data.get("success", False),
            job_id=data.get("jobId", ""),
            status=data.get("status", ""),
            data=data.get("data"),
            format=data.get("format"),
            error=data.get("error"),
            created_at=data.get("createdAt"),
            completed_at=data.get("completedAt"),
        )

    def job_status(self) -> JobStatus:
        """View this record as a generic ``JobStatus``."""
        state = JobState(self.status)
        return JobStatus(
            state=state,
            completed=1 if state == JobState.COMPLETED else 0,
            total=1,
            failed=1 if state == JobState.FAILED else 0,
            result=self,
            error=self.error,
        )

    def image_bytes(self) -> bytes:
        """Decode the base64 image data of a completed job."""
        return decode_base64(self.data or "")


@dataclass
class ExtractResult:
    """Content extracted from a page."""
    success: bool
    type: str
    url: str
    content: Any = None
    links: Optional[list[Any]] = None
    images: Optional[list[Any]] = None
    metadata: Optional[dict[str, Any]] = None
    word_count: Optional[int] = None
    took: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExtractResult":
        """Create from API response data."""
        return cls(
            success=data.get("success", False),
            type=data.get("type", ""),
            url=data.get("url", ""),
            content=data.get("content"),
            links=data.get("links"),
            images=data.get("images"),
            metadata=data.get("metadata"),
            word_count=data.get("wordCount"),
            took=data.get("took"),
        )


@dataclass
class AnalyzeResult:
    """AI analysis of a page."""
    success: bool
    url: str
    analysis: Any
    provider: Optional[str] = None
    model: Optional[str] = None
    took: Optional[int] = None
    screenshot: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalyzeResult":
        """Create from API response data."""
        return cls(
            success=data.get("success", False),
            url=data.get("url", ""),
            analysis=data.get("analysis"),
            provider=data.get("provider"),
            model=data.get("model"),
            took=data.get("took"),
            screenshot=data.get("screenshot"),
            metadata=data.get("metadata"),
        )


@dataclass
class DeviceInfo:
    """A device preset."""
    id: str
    name: str
    width: int
    height: int
    device_scale_factor: float
    is_mobile: bool


@dataclass
class DevicesResult:
    """Available device presets, grouped by category."""
    success: bool
    devices: dict[str, list[DeviceInfo]]
    total: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DevicesResult":
        """Create from API response data."""
        devices = {
            group: [
                DeviceInfo(
                    id=d["id"],
                    name=d.get("name", d["id"]),
                    width=d.get("width", 0),
                    height=d.get("height", 0),
                    device_scale_factor=d.get("deviceScaleFactor", 1.0),
                    is_mobile=d.get("isMobile", False),
                )
                for d in items
            ]
            for group, items in (data.get("devices") or {}).items()
        }
        return cls(
            success=data.get("success", False),
            devices=devices,
            total=data.get("total", 0),
        )


@dataclass
class CapabilitiesResult:
    """API version and feature flags."""
    success: bool
    version: str
    capabilities: dict[str, Any]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CapabilitiesResult":
        """Create from API response data."""
        return cls(
            success=data.get("success", False),
            version=data.get("version", ""),
            capabilities=data.get("capabilities") or {},
        )


@dataclass
class Usage:
    """API usage for the current billing period."""
    used: int
    limit: int
    remaining: int
    reset_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Usage":
        """Create from API response data."""
        return cls(
            used=data.get("used", 0),
            limit=data.get("limit", 0),
            remaining=data.get("remaining", 0),
            reset_at=data.get("resetAt"),
        )


@dataclass
class PingResult:
    """Health check response."""
    status: str
    timestamp: Optional[Any] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PingResult":
        """Create from API response data."""
        return cls(status=data.get("status", ""), timestamp=data.get("timestamp"))
