"""Link discovery in document text.

Markdown links are ``[desc](target)`` or ``![alt](target)``; org links are
``[[target]]`` or ``[[target][desc]]``. Plain ``text`` documents have no link
syntax. Each match is classified by the scheme of its target.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .document import DocumentMode


class LinkType(str, Enum):
    FILE = "file"
    HTTP = "http"
    HTTPS = "https"
    FTP = "ftp"
    OTHER = "other"

    @property
    def is_url(self) -> bool:
        return self in (LinkType.HTTP, LinkType.HTTPS, LinkType.FTP)


SUPPORTED_LINK_TYPES = frozenset({LinkType.FILE, LinkType.HTTP, LinkType.HTTPS, LinkType.FTP})

_MARKDOWN_LINK = re.compile(r"!?\[(?P<desc>[^\]\n]*)\]\((?P<target>[^)\n]*)\)")
_ORG_LINK = re.compile(r"\[\[(?P<target>[^\]\n]+)\](?:\[(?P<desc>[^\]\n]*)\])?\]")
# Single letters are drive names, not schemes
_SCHEME = re.compile(r"^(?P<scheme>[A-Za-z][A-Za-z0-9+.-]+):(?P<rest>.*)$", re.S)
_ORG_FILE_PREFIXES = ("/", "./", "../", "~")


@dataclass(frozen=True)
class Link:
    """A link occurrence; ``start``/``end`` are offsets into the full text."""

    start: int
    end: int
    type: LinkType
    target: str
    path: str
    description: Optional[str] = None

    @property
    def supported(self) -> bool:
        return self.type in SUPPORTED_LINK_TYPES


def _markdown_target(raw: str) -> str:
    target = raw.strip()
    if target.startswith("<") and ">" in target:
        return target[1 : target.index(">")]
    # Drop an optional "title"
    return target.split(None, 1)[0] if target else target


def classify_target(target: str, mode: DocumentMode) -> tuple[LinkType, str]:
    """Return ``(type, path)`` for a link target.

    ``path`` is the filesystem path for file links and the full URL for URL
    links. A bare path is a file link in markdown, and in org only when it
    looks like a path (``/``, ``./``, ``../``, ``~``).
    """
    match = _SCHEME.match(target)
    if match is None:
        if mode == "markdown" or target.startswith(_ORG_FILE_PREFIXES):
            return LinkType.FILE, target
        return LinkType.OTHER, target
    scheme = match.group("scheme").lower()
    if scheme == "file":
        rest = match.group("rest")
        if rest.startswith("//"):
            rest = rest[2:]
        return LinkType.FILE, rest
    try:
        return LinkType(scheme), target
    except ValueError:
        return LinkType.OTHER, target


def find_links(text: str, mode: DocumentMode, start: int = 0, end: Optional[int] = None) -> List[Link]:
    """Return links lying entirely within ``[start, end)`` in order of appearance."""
    end = len(text) if end is None else end
    if mode == "markdown":
        pattern = _MARKDOWN_LINK
    elif mode == "org":
        pattern = _ORG_LINK
    else:
        return []
    links: List[Link] = []
    for m in pattern.finditer(text, start, end):
        raw = m.group("target")
        target = _markdown_target(raw) if mode == "markdown" else raw.strip()
        if not target:
            continue
        link_type, path = classify_target(target, mode)
        links.append(Link(m.start(), m.end(), link_type, target, path, m.group("desc")))
    return links


def is_standalone(text: str, link: Link, start: int = 0, end: Optional[int] = None) -> bool:
    """True when ``link`` is the only non-whitespace content on its line.

    The line is clipped to ``[start, end)`` so text of a neighbouring region
    sharing the line does not count.
    """
    end = len(text) if end is None else end
    line_start = max(text.rfind("\n", 0, link.start) + 1, start)
    line_end = text.find("\n", link.end, end)
    if line_end == -1:
        line_end = end
    return not text[line_start : link.start].strip() and not text[link.end : line_end].strip()


__all__ = [
    "Link",
    "LinkType",
    "SUPPORTED_LINK_TYPES",
    "classify_target",
    "find_links",
    "is_standalone",
]
