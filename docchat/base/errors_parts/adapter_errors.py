"""
Protocol adapter specific error types.

``MalformedResponse`` and ``BackendNotFound`` are user-visible and carry the
normalized taxonomy. ``StreamFrameIncomplete`` is internal control flow for the
stream parser and never escapes it.
"""
from __future__ import annotations

from dataclasses import dataclass

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class MalformedResponse(ProviderError):
    """A complete non-streaming response lacks ``choices[0].message.content``."""

    code: ErrorCode = ErrorCode.VALIDATION
    message: str = "response has no choices[0].message.content"


@dataclass
class BackendNotFound(ProviderError):
    """No backend is registered under the requested name."""

    code: ErrorCode = ErrorCode.NOT_FOUND
    message: str = "backend not registered"


class StreamFrameIncomplete(Exception):
    """A ``data:`` line is not yet complete; wait for more bytes."""

    def __init__(self, position: int) -> None:
        super().__init__(f"incomplete frame at {position}")
        self.position = position


__all__ = ["MalformedResponse", "BackendNotFound", "StreamFrameIncomplete"]
