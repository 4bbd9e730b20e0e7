"""Document-side conversation assembly.

Turns an annotated document into chat messages: region partitioning,
prefix trimming, link discovery and inline image embedding.
"""
from __future__ import annotations

from .document import Document, DocumentMode, Region, mode_for_path
from .extractor import extract_prompts
from .links import Link, LinkType, find_links, is_standalone
from .prefixes import Prefixes, trim_prefixes
from .regions import compute_regions
from .splitter import LinkDisposition, split_region

__all__ = [
    "Document",
    "DocumentMode",
    "Region",
    "mode_for_path",
    "compute_regions",
    "extract_prompts",
    "split_region",
    "LinkDisposition",
    "Link",
    "LinkType",
    "find_links",
    "is_standalone",
    "Prefixes",
    "trim_prefixes",
]
