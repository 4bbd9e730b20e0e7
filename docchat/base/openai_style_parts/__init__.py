"""OpenAI-compatible protocol adapter.

- ``request_builder``: request body and HTTP request construction
- ``response_parser``: non-streaming response interpretation
- ``style``: per-variant dispatch surface

Re-exports provide a stable import surface for convenience.
"""

from .request_builder import build_http_request, build_request
from .response_parser import parse_response
from .style import OpenAICompatibleStyle, ProtocolStyle, style_for

__all__ = [
    "build_request",
    "build_http_request",
    "parse_response",
    "OpenAICompatibleStyle",
    "ProtocolStyle",
    "style_for",
]
