"""Shared constants for the OpenAI-compatible wire protocol.

Central location to avoid scattering magic strings.

# pragma: allowlist secret
"""
from __future__ import annotations

# Event stream framing
DATA_MARKER = "data:"
DONE_SENTINEL = "[DONE]"

# Request defaults
JSON_CONTENT_TYPE = "application/json"
DEFAULT_HEADERS = {"Content-Type": JSON_CONTENT_TYPE}

# Missing credential sentinel
MISSING_API_KEY_ERROR = "missing_api_key"  # pragma: allowlist secret - generic placeholder string

__all__ = [
    "DATA_MARKER",
    "DONE_SENTINEL",
    "JSON_CONTENT_TYPE",
    "DEFAULT_HEADERS",
    "MISSING_API_KEY_ERROR",
]
