"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``docchat.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode, RETRYABLE_CODES
from .errors_parts.provider_error import ProviderError
from .errors_parts.adapter_errors import BackendNotFound, MalformedResponse, StreamFrameIncomplete
from .errors_parts.classification import classify_exception

__all__ = [
    "ErrorCode",
    "RETRYABLE_CODES",
    "ProviderError",
    "BackendNotFound",
    "MalformedResponse",
    "StreamFrameIncomplete",
    "classify_exception",
]
