"""Build the chat message list from an annotated document.

The extractor walks the regions before the cursor from newest to oldest,
converts each one with :func:`split_region` and prepends it, so the result is
chronological. A ``system`` message always comes first.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from ..base.logging import get_logger, log_event
from ..base.models import Message
from .document import Document, Region
from .prefixes import Prefixes
from .regions import clamp_cursor, compute_regions
from .splitter import split_region

_logger = get_logger("docchat.document")


def extract_prompts(
    document: Document,
    cursor: Optional[int] = None,
    *,
    system_prompt: str,
    max_entries: Optional[int] = None,
    supports_images: bool = False,
    prefixes: Optional[Prefixes] = None,
    track_responses: bool = True,
) -> List[Message]:
    """Return ``[system, *turns]`` for the text before ``cursor``.

    Parameters:
        document: Annotated document.
        cursor: Offset the conversation ends at (``None`` = end of text).
        system_prompt: Content of the leading ``system`` message.
        max_entries: Consider at most this many of the newest regions,
            counting regions that end up empty.
        supports_images: Whether user regions may carry inline images.
        prefixes: ``(prompt_prefix, response_prefix)`` markers to trim.
        track_responses: ``False`` sends ``[0, cursor)`` as one user prompt.
    """
    if max_entries is not None and max_entries < 0:
        raise ValueError("max_entries must be >= 0")
    cursor = clamp_cursor(document, cursor)
    if track_responses:
        regions = compute_regions(document, cursor)
    else:
        regions = [Region(0, cursor, "user")] if cursor else []

    turns: List[Message] = []
    index = len(regions) - 1
    consumed = 0
    while index >= 0 and (max_entries is None or consumed < max_entries):
        region = regions[index]
        index -= 1
        consumed += 1
        content = split_region(
            document,
            region.start,
            region.end,
            response=region.is_response,
            supports_images=supports_images,
            prefixes=prefixes,
        )
        if not content:
            continue
        turns.insert(0, Message(role=region.role, content=content))

    log_event(
        _logger,
        "prompt.extract",
        level=logging.DEBUG,
        regions=len(regions),
        consumed=consumed,
        messages=len(turns),
    )
    return [Message(role="system", content=system_prompt), *turns]


__all__ = ["extract_prompts"]
