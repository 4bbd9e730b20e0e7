"""Document value objects.

The host owns the text and knows which spans were written by the assistant.
:class:`Document` captures that contract: the text, the response spans, spans
the user marked as ignored, the markup mode (which decides the link syntax) and
the directory relative ``file:`` links resolve against.

Offsets are 0-based character indices into ``text``; spans are half-open
``(start, end)`` pairs.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Literal, Optional, Sequence, Tuple

from ..config.defaults import BOUNDS_SUFFIX

DocumentMode = Literal["markdown", "org", "text"]
Span = Tuple[int, int]
RegionRole = Literal["user", "assistant"]

_MODE_BY_SUFFIX = {
    ".md": "markdown",
    ".markdown": "markdown",
    ".org": "org",
}


def mode_for_path(path: Path) -> DocumentMode:
    """Infer the document mode from a file suffix (``text`` when unknown)."""
    return _MODE_BY_SUFFIX.get(path.suffix.lower(), "text")  # type: ignore[return-value]


def _normalize_spans(spans: Iterable[Sequence[int]], length: int, kind: str) -> Tuple[Span, ...]:
    out = []
    for span in spans or ():
        if len(span) != 2:
            raise ValueError(f"{kind} span must be a (start, end) pair: {span!r}")
        start, end = int(span[0]), int(span[1])
        if not 0 <= start <= end <= length:
            raise ValueError(f"{kind} span {start, end} outside document of length {length}")
        if start < end:
            out.append((start, end))
    return tuple(sorted(out))


@dataclass(frozen=True)
class Region:
    """One conversational turn: a contiguous span with its author role."""

    start: int
    end: int
    role: RegionRole

    @property
    def is_response(self) -> bool:
        return self.role == "assistant"


@dataclass(frozen=True)
class Document:
    """Text plus the annotation spans supplied by the host.

    Raises:
        ValueError: When a span is out of range or spans overlap.
    """

    text: str
    response_spans: Tuple[Span, ...] = ()
    ignore_spans: Tuple[Span, ...] = ()
    mode: DocumentMode = "text"
    base_dir: Optional[Path] = None
    source: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        responses = _normalize_spans(self.response_spans, len(self.text), "response")
        ignored = _normalize_spans(self.ignore_spans, len(self.text), "ignore")
        merged = sorted(responses + ignored)
        for (_, prev_end), (next_start, _) in zip(merged, merged[1:]):
            if next_start < prev_end:
                raise ValueError(f"annotation spans overlap at offset {next_start}")
        object.__setattr__(self, "response_spans", responses)
        object.__setattr__(self, "ignore_spans", ignored)

    @classmethod
    def from_file(
        cls,
        path: Path,
        *,
        bounds_path: Optional[Path] = None,
        mode: Optional[DocumentMode] = None,
    ) -> "Document":
        """Load a document and its optional bounds sidecar.

        The sidecar (default ``<path>.bounds.json``) holds
        ``{"response": [[start, end], ...], "ignore": [[start, end], ...]}``.
        A missing default sidecar means no annotations; a missing explicit
        one raises ``FileNotFoundError``.
        """
        path = Path(path)
        text = path.read_text(encoding="utf-8")
        explicit = bounds_path is not None
        bounds_file = Path(bounds_path) if explicit else path.with_name(path.name + BOUNDS_SUFFIX)
        bounds = {}
        if explicit or bounds_file.is_file():
            bounds = json.loads(bounds_file.read_text(encoding="utf-8"))
            if not isinstance(bounds, dict):
                raise ValueError(f"{bounds_file}: expected a JSON object")
        return cls(
            text=text,
            response_spans=tuple(tuple(s) for s in bounds.get("response", ())),
            ignore_spans=tuple(tuple(s) for s in bounds.get("ignore", ())),
            mode=mode or mode_for_path(path),
            base_dir=path.parent.resolve(),
            source=path,
        )


__all__ = ["Document", "DocumentMode", "Region", "RegionRole", "Span", "mode_for_path"]
