"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `docchat.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, RETRYABLE_CODES
from .provider_error import ProviderError
from .adapter_errors import BackendNotFound, MalformedResponse, StreamFrameIncomplete
from .classification import classify_exception

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "ProviderError",
    "BackendNotFound",
    "MalformedResponse",
    "StreamFrameIncomplete",
    "classify_exception",
]
