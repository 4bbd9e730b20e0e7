"""Timeout configuration for the HTTP transport.

``get_timeout_config()`` returns a process-cached :class:`TimeoutConfig`,
parsing environment overrides on first use only:

    DOCCHAT_HTTP_TIMEOUT_SECONDS     connect/write/pool timeout, and the read
                                     timeout of non-streaming requests
    DOCCHAT_STREAM_TIMEOUT_SECONDS   read timeout between streamed chunks

Unparseable or non-positive values fall back to the defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from ..config.defaults import DEFAULT_HTTP_TIMEOUT_SECONDS, DEFAULT_STREAM_TIMEOUT_SECONDS


@dataclass(frozen=True)
class TimeoutConfig:
    """Normalized timeout values (seconds)."""

    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    stream_timeout_seconds: float = DEFAULT_STREAM_TIMEOUT_SECONDS


_CACHED: Optional[TimeoutConfig] = None


def _parse_positive(value: Optional[str], default: float) -> float:
    if not value:
        return default
    try:
        parsed = float(value)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the cached timeout configuration, loading it on first call."""
    global _CACHED
    if _CACHED is None:
        _CACHED = TimeoutConfig(
            http_timeout_seconds=_parse_positive(
                os.getenv("DOCCHAT_HTTP_TIMEOUT_SECONDS"), DEFAULT_HTTP_TIMEOUT_SECONDS
            ),
            stream_timeout_seconds=_parse_positive(
                os.getenv("DOCCHAT_STREAM_TIMEOUT_SECONDS"), DEFAULT_STREAM_TIMEOUT_SECONDS
            ),
        )
    return _CACHED


def reset_timeout_config() -> None:
    """Drop the cached configuration so the next call re-reads the environment."""
    global _CACHED
    _CACHED = None


__all__ = ["TimeoutConfig", "get_timeout_config", "reset_timeout_config"]
