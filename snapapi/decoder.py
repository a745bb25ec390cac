"""
Response decoding for the SnapAPI Python client.

Turns raw response bodies into either parsed payloads or ``SnapAPIError``
values. Error decoding never raises: a body that cannot be understood still
produces an ``HTTP_ERROR``.
"""

import base64
import binascii
import json
from typing import Any, Optional, Union

from .errors import (
    AuthenticationError,
    ErrorKind,
    RateLimitError,
    ResponseParseError,
    SnapAPIError,
)

# Fallback codes for the flat error shape, whose "error" field is usually
# the HTTP reason phrase rather than an error code.
STATUS_ERROR_KINDS = {
    400: ErrorKind.INVALID_PARAMS,
    401: ErrorKind.UNAUTHORIZED,
    403: ErrorKind.FORBIDDEN,
    408: ErrorKind.TIMEOUT,
    429: ErrorKind.RATE_LIMITED,
    504: ErrorKind.TIMEOUT,
}

_KNOWN_CODES = {kind.value for kind in ErrorKind}


def _load(body: Union[bytes, str]) -> Any:
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return json.loads(body)


def _error_fields(payload: Any, status_code: int) -> Optional[tuple[str, str, Any]]:
    """Extract (code, message, details) from either error shape, or None."""
    if not isinstance(payload, dict):
        return None

    error = payload.get("error")
    if isinstance(error, dict):
        # {"error": {"code": ..., "message": ..., "details": [...]}}
        code = error.get("code")
        message = error.get("message")
        if not code and not message:
            return None
        return (
            str(code or STATUS_ERROR_KINDS.get(status_code, ErrorKind.HTTP_ERROR).value),
            str(message or f"HTTP {status_code}"),
            error.get("details"),
        )

    # {"statusCode": N, "error": "Unauthorized", "message": ..., "details": [...]}
    message = payload.get("message")
    code = payload.get("code")
    if not code and isinstance(error, str) and error.upper() in _KNOWN_CODES:
        code = error.upper()
    if not code and not message and not error:
        return None
    if not code:
        code = STATUS_ERROR_KINDS.get(status_code, ErrorKind.HTTP_ERROR).value
    return (
        str(code),
        str(message or error or f"HTTP {status_code}"),
        payload.get("details"),
    )


def decode_error(
    body: Union[bytes, str],
    status_code: int,
    retry_after: Optional[int] = None,
) -> SnapAPIError:
    """
    Build the error for a response with status >= 400.

    Args:
        body: Raw response body.
        status_code: HTTP status of the response.
        retry_after: Parsed ``Retry-After`` header, if the response had one.

    Returns:
        A ``SnapAPIError`` (or subclass). Unparseable bodies yield
        ``HTTP_ERROR`` with message ``"HTTP <status>"``.
    """
    try:
        fields = _error_fields(_load(body), status_code)
    except ValueError:
        fields = None

    if fields is None:
        return SnapAPIError(ErrorKind.HTTP_ERROR, f"HTTP {status_code}", status_code)

    code, message, details = fields
    if code == ErrorKind.UNAUTHORIZED:
        return AuthenticationError(message, status_code, details)
    if code == ErrorKind.RATE_LIMITED:
        return RateLimitError(message, status_code, details, retry_after=retry_after)
    return SnapAPIError(code, message, status_code, details)


def decode_json(body: Union[bytes, str]) -> dict[str, Any]:
    """Parse a successful JSON response body."""
    try:
        payload = _load(body)
    except ValueError as e:
        raise ResponseParseError(f"failed to parse response: {e}") from e
    if not isinstance(payload, dict):
        raise ResponseParseError(
            f"failed to parse response: expected a JSON object, got {type(payload).__name__}"
        )
    return payload


def decode_base64(data: Union[bytes, str]) -> bytes:
    """
    Decode a base64 payload, with or without a ``data:<mime>;base64,`` prefix.
    """
    try:
        if isinstance(data, bytes):
            data = data.decode("ascii")
        data = data.strip()
        if data.startswith("data:") and "," in data:
            data = data.split(",", 1)[1]
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ResponseParseError(f"failed to decode base64 data: {e}") from e


def parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Parse a ``Retry-After`` header given in seconds; HTTP dates are ignored."""
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None
