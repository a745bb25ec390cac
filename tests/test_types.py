"""Tests for request and response types."""

from snapapi import (
    BatchStatus,
    Cookie,
    DevicePreset,
    JobState,
    PDFOptions,
    ScreenshotJobStatus,
    ScreenshotOptions,
    ScreenshotResult,
)
from snapapi.types import Geolocation, HTTPAuth, ThumbnailOptions


class TestRequestOptions:
    """Tests for option serialization."""

    def test_unset_fields_are_omitted(self) -> None:
        """Only fields that were set are sent."""
        assert ScreenshotOptions(url="https://example.com").to_dict() == {
            "url": "https://example.com"
        }

    def test_explicit_false_is_sent(self) -> None:
        """False is a value, not an absence."""
        assert ScreenshotOptions(url="https://example.com", full_page=False).to_dict() == {
            "url": "https://example.com",
            "fullPage": False,
        }

    def test_nested_records_and_enums(self) -> None:
        """Nested options, enums and lists serialize in camelCase."""
        options = ScreenshotOptions(
            url="https://example.com",
            device=DevicePreset.PIXEL_8,
            device_scale_factor=2.0,
            hide_selectors=[".banner"],
            block_resources=[],
            http_auth=HTTPAuth(username="u", password="p"),
            geolocation=Geolocation(latitude=52.52, longitude=13.405),
            cookies=[Cookie(name="sid", value="1", http_only=True, same_site="Lax")],
            thumbnail=ThumbnailOptions(width=200),
            pdf_options=PDFOptions(prefer_css_page_size=True, margin_top="1cm"),
            fail_on_http_error=True,
            cache_ttl=300,
        )

        assert options.to_dict() == {
            "url": "https://example.com",
            "device": "pixel-8",
            "deviceScaleFactor": 2.0,
            "hideSelectors": [".banner"],
            "httpAuth": {"username": "u", "password": "p"},
            "geolocation": {"latitude": 52.52, "longitude": 13.405},
            "cookies": [{"name": "sid", "value": "1", "httpOnly": True, "sameSite": "Lax"}],
            "thumbnail": {"enabled": True, "width": 200},
            "pdfOptions": {"preferCSSPageSize": True, "marginTop": "1cm"},
            "failOnHttpError": True,
            "cacheTtl": 300,
        }


class TestResults:
    """Tests for result parsing."""

    def test_screenshot_result_without_metadata(self) -> None:
        result = ScreenshotResult.from_dict({
            "success": True,
            "data": "aGk=",
            "width": 10,
            "height": 10,
            "fileSize": 2,
            "took": 5,
            "format": "png",
        })

        assert result.metadata is None
        assert result.thumbnail_bytes() is None
        assert result.image_bytes() == b"hi"

    def test_batch_status_as_job_status(self) -> None:
        """Batch records expose progress and item errors."""
        status = BatchStatus.from_dict({
            "success": True,
            "jobId": "job_1",
            "status": "failed",
            "total": 2,
            "completed": 1,
            "failed": 1,
            "results": [
                {"url": "https://a.example", "status": "completed", "data": "aGk="},
                {"url": "https://b.example", "status": "failed", "error": "timeout"},
            ],
        })

        job = status.job_status()

        assert job.state == JobState.FAILED
        assert (job.completed, job.total, job.failed) == (1, 2, 1)
        assert job.error == "https://b.example: timeout"
        assert job.result is status

    def test_screenshot_job_status(self) -> None:
        status = ScreenshotJobStatus.from_dict({
            "success": True,
            "jobId": "shot_1",
            "status": "pending",
        })

        job = status.job_status()

        assert job.state == JobState.QUEUED
        assert job.total == 1
        assert job.completed == 0
