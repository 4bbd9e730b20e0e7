"""Prompt/response prefix trimming.

Hosts usually insert a marker before each prompt (``### `` in markdown) and
may insert one before responses. Those markers are presentation, not content:
``trim_prefixes`` removes surrounding whitespace, an optional prompt prefix
at the start and an optional response prefix at the end.
"""
from __future__ import annotations

import re
from typing import Optional, Tuple

Prefixes = Tuple[str, str]
NO_PREFIXES: Prefixes = ("", "")

_WS = r"[\t\r\n ]*"


def _leading(prefix: str) -> "re.Pattern[str]":
    marker = f"(?:{re.escape(prefix.strip())})?" if prefix.strip() else ""
    return re.compile(rf"\A{_WS}{marker}{_WS}")


def _trailing(prefix: str) -> "re.Pattern[str]":
    marker = f"(?:{re.escape(prefix.strip())})?" if prefix.strip() else ""
    return re.compile(rf"{_WS}{marker}{_WS}\Z")


def trim_leading(text: str, prompt_prefix: str = "") -> str:
    return _leading(prompt_prefix).sub("", text, count=1)


def trim_trailing(text: str, response_prefix: str = "") -> str:
    return _trailing(response_prefix).sub("", text, count=1)


def trim_prefixes(text: str, prefixes: Prefixes = NO_PREFIXES) -> Optional[str]:
    """Trim whitespace and edge prefix markers; ``None`` if nothing remains."""
    prompt_prefix, response_prefix = prefixes
    trimmed = trim_trailing(trim_leading(text, prompt_prefix), response_prefix)
    return trimmed or None


__all__ = ["Prefixes", "NO_PREFIXES", "trim_leading", "trim_trailing", "trim_prefixes"]
