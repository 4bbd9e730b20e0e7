"""Streaming primitives built on top of :class:`StreamParser`.

Keeps event-shaped streaming concerns separate from the line parser so the
transport can either consume fragments directly or as ``ChatStreamEvent``s.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .stream_parser import Chunk, StreamParser


@dataclass(frozen=True)
class ChatStreamEvent:
    """Represents an incremental delta from a streaming backend.

    Fields:
      provider: backend name
      model: model name
      delta: text fragment (``None`` on the terminal event)
      finish: True on the final event only
    """

    provider: str
    model: str
    delta: Optional[str]
    finish: bool = False


def iter_stream_events(
    chunks: Iterable[Chunk],
    *,
    provider: str,
    model: str,
    parser: Optional[StreamParser] = None,
) -> Iterator[ChatStreamEvent]:
    """Translate raw transport chunks into delta events.

    One event per emitted fragment, followed by exactly one terminal event
    with ``finish=True``. Iteration stopping early (cancellation) leaves the
    parser in a consistent state; it can simply be discarded.
    """
    parser = parser or StreamParser(provider=provider, model=model)
    for chunk in chunks:
        for fragment in parser.feed(chunk):
            yield ChatStreamEvent(provider=provider, model=model, delta=fragment)
    already = len(parser.fragments)
    parser.finish()
    for fragment in parser.fragments[already:]:
        yield ChatStreamEvent(provider=provider, model=model, delta=fragment)
    yield ChatStreamEvent(provider=provider, model=model, delta=None, finish=True)


def accumulate_events(events: Iterable[ChatStreamEvent]) -> str:
    """Concatenate the text deltas of a sequence of events."""
    return "".join(e.delta for e in events if e.delta)


__all__ = [
    "ChatStreamEvent",
    "iter_stream_events",
    "accumulate_events",
]
