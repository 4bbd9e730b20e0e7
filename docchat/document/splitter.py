"""Split a prompt region into text and inline image blocks.

Purpose:
    Turn the span of one conversational turn into message content. Text-only
    models and response regions get a trimmed string. Image-capable models
    get a list of :class:`ContentPart` blocks when the region contains
    stand-alone links to images.

Link handling:
    - ``file`` links resolve against ``Document.base_dir``; they must be local,
      existing, readable image files and are inlined as base64 data URIs.
    - ``http``/``https``/``ftp`` links are embedded by URL when the URL path
      has an image extension.
    - Any other link stays in the text. Each skipped link is logged at DEBUG
      as ``media.link_skipped`` with its :class:`LinkDisposition`.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Union

from ..base.logging import get_logger, log_event
from ..base.models import ContentPart
from .document import Document
from .links import Link, find_links, is_standalone
from .media import encode_data_uri, is_image_file, is_image_url, is_remote_path, resolve_local
from .prefixes import NO_PREFIXES, Prefixes, trim_leading, trim_prefixes, trim_trailing

_logger = get_logger("docchat.document")

RegionContent = Union[str, List[ContentPart]]


class LinkDisposition(str, Enum):
    EMBEDDED = "embedded"
    UNSUPPORTED = "unsupported"
    NOT_STANDALONE = "not_standalone"
    REMOTE = "remote"
    MISSING_FILE = "missing_file"
    NOT_IMAGE = "not_image"
    UNREADABLE = "unreadable"


def classify_link(
    document: Document, link: Link, start: int = 0, end: Optional[int] = None
) -> tuple[LinkDisposition, Optional[str]]:
    """Return the disposition of ``link`` and, when embedded, the image URL.

    ``start``/``end`` bound the region the link belongs to.
    """
    if not link.supported:
        return LinkDisposition.UNSUPPORTED, None
    if not is_standalone(document.text, link, start, end):
        return LinkDisposition.NOT_STANDALONE, None
    if link.type.is_url:
        if not is_image_url(link.path):
            return LinkDisposition.NOT_IMAGE, None
        return LinkDisposition.EMBEDDED, link.path
    if is_remote_path(link.path):
        return LinkDisposition.REMOTE, None
    path = resolve_local(link.path, document.base_dir)
    if not path.is_file():
        return LinkDisposition.MISSING_FILE, None
    if not is_image_file(path):
        return LinkDisposition.NOT_IMAGE, None
    try:
        return LinkDisposition.EMBEDDED, encode_data_uri(path)
    except OSError:
        return LinkDisposition.UNREADABLE, None


def _finalize(blocks: List[ContentPart], prefixes: Prefixes) -> List[ContentPart]:
    prompt_prefix, response_prefix = prefixes
    last = len(blocks) - 1
    out: List[ContentPart] = []
    for i, block in enumerate(blocks):
        if block.is_image():
            out.append(block)
            continue
        text = block.text or ""
        if i == 0:
            text = trim_leading(text, prompt_prefix)
        if i == last:
            text = trim_trailing(text, response_prefix)
        if text:
            out.append(ContentPart.of_text(text))
    return out


def split_region(
    document: Document,
    start: int,
    end: int,
    *,
    response: bool = False,
    supports_images: bool = False,
    prefixes: Optional[Prefixes] = None,
) -> Optional[RegionContent]:
    """Convert ``document.text[start:end]`` into message content.

    Returns a string, a list of blocks (only when at least one image was
    embedded) or ``None`` when the region is empty after trimming.
    """
    prefixes = prefixes or NO_PREFIXES
    text = document.text
    if response or not supports_images:
        return trim_prefixes(text[start:end], prefixes)

    blocks: List[ContentPart] = []
    cursor = start
    for link in find_links(text, document.mode, start, end):
        disposition, url = classify_link(document, link, start, end)
        if url is None:
            log_event(
                _logger,
                "media.link_skipped",
                level=logging.DEBUG,
                target=link.target,
                link_type=link.type.value,
                disposition=disposition.value,
            )
            continue
        blocks.append(ContentPart.of_text(text[cursor : link.start]))
        blocks.append(ContentPart.of_image(url))
        cursor = link.end

    if not blocks:
        return trim_prefixes(text[start:end], prefixes)
    blocks.append(ContentPart.of_text(text[cursor:end]))
    return _finalize(blocks, prefixes) or None


__all__ = ["LinkDisposition", "RegionContent", "classify_link", "split_region"]
