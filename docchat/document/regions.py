"""Partition a document into conversational regions."""
from __future__ import annotations

from typing import List

from .document import Document, Region


def clamp_cursor(document: Document, cursor: int | None) -> int:
    if cursor is None:
        return len(document.text)
    return max(0, min(int(cursor), len(document.text)))


def compute_regions(document: Document, cursor: int | None = None) -> List[Region]:
    """Return the regions of ``[0, cursor)`` in document order.

    Every response span becomes its own assistant region, so two adjacent
    responses stay two turns. Ignore spans are dropped. The untagged gaps
    between annotations are user regions. Spans crossing the cursor are cut
    at it.
    """
    cursor = clamp_cursor(document, cursor)
    tagged = [(s, e, "assistant") for s, e in document.response_spans]
    tagged += [(s, e, None) for s, e in document.ignore_spans]
    tagged.sort()

    regions: List[Region] = []
    pos = 0
    for start, end, role in tagged:
        if start >= cursor:
            break
        end = min(end, cursor)
        if start > pos:
            regions.append(Region(pos, start, "user"))
        if role is not None:
            regions.append(Region(start, end, role))
        pos = max(pos, end)
    if pos < cursor:
        regions.append(Region(pos, cursor, "user"))
    return regions


__all__ = ["clamp_cursor", "compute_regions"]
