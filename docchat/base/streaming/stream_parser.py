"""Incremental parser for OpenAI-compatible event streams.

The parser is fed raw chunks as the transport receives them and returns the
text fragments that became available. It is re-entrant and single-threaded:
call ``feed`` once per received chunk (an empty chunk is a no-op), then
``finish`` once the transport reports end-of-stream.

Frame handling
--------------
* Only lines starting with ``data:`` carry payloads; SSE comments, ``event:``
  lines and blank separators are skipped.
* A payload equal to ``[DONE]`` (after trimming) ends the stream and emits
  nothing.
* Each other payload is a JSON object; ``choices[0].delta.content`` is the
  fragment. Deltas without content (role-only, ``null``) contribute nothing.
* A line that is not yet newline-terminated is incomplete: the read position
  rewinds to the start of that line and the parser waits for more bytes.
  Nothing partial is ever emitted. ``finish`` treats a trailing unterminated
  line as complete.
* A newline-terminated line that does not parse is malformed. It is logged at
  WARNING and skipped so one bad frame cannot stall the rest of the stream.
"""

from __future__ import annotations

import codecs
import json
import logging
from typing import Any, List, Optional, Tuple, Union

from ..constants import DATA_MARKER, DONE_SENTINEL
from ..errors import StreamFrameIncomplete
from ..logging import LogContext, get_logger, log_event

Chunk = Union[bytes, bytearray, str]


def extract_delta_content(event: Any) -> Optional[str]:
    """Return ``choices[0].delta.content`` of a decoded stream event, if any."""
    if not isinstance(event, dict):
        return None
    choices = event.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    delta = choices[0].get("delta")
    if not isinstance(delta, dict):
        return None
    content = delta.get("content")
    return content if isinstance(content, str) and content else None


class StreamParser:
    """Stateful, incremental ``data:`` line parser.

    Example:
        >>> parser = StreamParser()
        >>> parser.feed(b'data: {"choices":[{"delta":{"content":"Hel"}}]}\\n')
        ['Hel']
        >>> parser.feed(b'data: {"choices":[{"delta":{"content":"lo"}}]}\\ndata: [DONE]\\n')
        ['lo']
        >>> parser.finish()
        'Hello'
    """

    def __init__(
        self,
        *,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""
        self._pos = 0
        self._fragments: List[str] = []
        self._done = False
        self._ctx = LogContext(provider=provider, model=model)
        self._logger = logger or get_logger("docchat.stream")

    @property
    def done(self) -> bool:
        """True once the ``[DONE]`` terminator has been seen."""
        return self._done

    @property
    def fragments(self) -> List[str]:
        return list(self._fragments)

    @property
    def text(self) -> str:
        """Concatenation of every fragment emitted so far."""
        return "".join(self._fragments)

    def feed(self, chunk: Optional[Chunk]) -> List[str]:
        """Append ``chunk`` and return the fragments it completed, in order."""
        if not chunk:
            return []
        if isinstance(chunk, (bytes, bytearray)):
            self._buffer += self._decoder.decode(bytes(chunk))
        else:
            self._buffer += chunk
        return self._drain(final=False)

    def finish(self) -> str:
        """Flush a trailing unterminated line and return the full text."""
        self._buffer += self._decoder.decode(b"", final=True)
        self._drain(final=True)
        return self.text

    # ----- internals -----

    def _drain(self, *, final: bool) -> List[str]:
        emitted: List[str] = []
        while self._pos < len(self._buffer):
            try:
                fragment = self._consume_line(final=final)
            except StreamFrameIncomplete as incomplete:
                self._pos = incomplete.position
                break
            if fragment is not None:
                self._fragments.append(fragment)
                emitted.append(fragment)
        # Consumed text is never revisited
        self._buffer = self._buffer[self._pos:]
        self._pos = 0
        return emitted

    def _next_line(self, *, final: bool) -> Tuple[str, int, bool]:
        """Return ``(line, next_position, terminated)`` at the read position."""
        newline = self._buffer.find("\n", self._pos)
        if newline == -1:
            return self._buffer[self._pos:], len(self._buffer), final
        return self._buffer[self._pos:newline], newline + 1, True

    def _consume_line(self, *, final: bool) -> Optional[str]:
        start = self._pos
        line, next_pos, terminated = self._next_line(final=final)
        if not terminated:
            raise StreamFrameIncomplete(start)
        self._pos = next_pos
        line = line.rstrip("\r")
        if not line.startswith(DATA_MARKER):
            return None

        payload = line[len(DATA_MARKER):].strip()
        if payload == DONE_SENTINEL:
            if not self._done:
                self._done = True
                log_event(self._logger, "stream.done", self._ctx, level=logging.DEBUG, fragments=len(self._fragments))
            return None
        if not payload:
            return None

        try:
            event = json.loads(payload)
            if not isinstance(event, dict):
                raise ValueError(f"expected a JSON object, got {type(event).__name__}")
        except ValueError as e:
            log_event(
                self._logger,
                "stream.frame_malformed",
                self._ctx,
                level=logging.WARNING,
                error=str(e),
                payload=payload[:200],
            )
            return None
        return extract_delta_content(event)


__all__ = ["StreamParser", "extract_delta_content"]
