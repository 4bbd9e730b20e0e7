"""Streaming package.

Exposes the incremental event-stream parser and the event helpers under a
single namespace.
"""

from .stream_parser import StreamParser, extract_delta_content
from .streaming import ChatStreamEvent, accumulate_events, iter_stream_events

__all__ = [
    "StreamParser",
    "extract_delta_content",
    "ChatStreamEvent",
    "iter_stream_events",
    "accumulate_events",
]
