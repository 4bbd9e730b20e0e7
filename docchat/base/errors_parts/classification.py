"""Map arbitrary exceptions onto :class:`ErrorCode`.

Order of evidence: an existing ``ProviderError`` code, the exception type
(timeouts, httpx connection failures), an HTTP status found on the exception
or its ``response``, and finally keywords in the message.
"""
from __future__ import annotations

import asyncio
from typing import Any, Optional

import httpx

from .error_code import ErrorCode
from .provider_error import ProviderError

_TIMEOUT_TYPES = (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException)
_TRANSIENT_TYPES = (httpx.ConnectError, httpx.RemoteProtocolError)

_STATUS_CODES = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

# First match wins; AUTH precedes VALIDATION so "invalid api key" is an auth failure.
_KEYWORDS = (
    (ErrorCode.RATE_LIMIT, ("rate limit", "rate-limit", "ratelimit", "too many requests")),
    (ErrorCode.TIMEOUT, ("timeout", "timed out")),
    (ErrorCode.AUTH, ("unauthorized", "forbidden", "api key")),
    (ErrorCode.NOT_FOUND, ("not found", "does not exist")),
    (ErrorCode.UNAVAILABLE, ("unavailable", "connection refused")),
    (ErrorCode.VALIDATION, ("invalid", "malformed")),
    (ErrorCode.SERVER_ERROR, ("server error", "internal error")),
)


def _valid_status(value: Any) -> Optional[int]:
    return value if isinstance(value, int) and 100 <= value <= 599 else None


def status_of(exc: Any) -> Optional[int]:
    """HTTP status carried by ``exc`` (``status_code``, ``status`` or ``response.status_code``)."""
    direct = _valid_status(getattr(exc, "status_code", None)) or _valid_status(getattr(exc, "status", None))
    if direct is not None:
        return direct
    try:
        response = getattr(exc, "response", None)
    except RuntimeError:
        # httpx request-only errors raise on .response
        return None
    return _valid_status(getattr(response, "status_code", None))


def _code_for_status(status: int) -> Optional[ErrorCode]:
    code = _STATUS_CODES.get(status)
    if code is None and status >= 500:
        return ErrorCode.SERVER_ERROR
    return code


def _code_for_message(message: str) -> Optional[ErrorCode]:
    lowered = message.lower()
    for code, keywords in _KEYWORDS:
        if any(word in lowered for word in keywords):
            return code
    return None


def classify_exception(exc: Any) -> ErrorCode:
    """Best-effort :class:`ErrorCode` for ``exc``; ``UNKNOWN`` when nothing matches."""
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, _TIMEOUT_TYPES):
        return ErrorCode.TIMEOUT
    if isinstance(exc, _TRANSIENT_TYPES):
        return ErrorCode.TRANSIENT
    status = status_of(exc)
    code = _code_for_status(status) if status is not None else None
    if code is None:
        code = _code_for_message(str(exc))
    return code or ErrorCode.UNKNOWN


__all__ = ["classify_exception", "status_of"]
