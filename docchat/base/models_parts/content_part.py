"""
Typed content block model for multimodal messages.

A message's content is either a plain string or an ordered list of
`ContentPart` items. Two kinds exist: text segments and image references,
where an image reference is a ``data:`` URI (inlined local file) or a remote
URL passed through untouched.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional


ContentPartType = Literal["text", "image_url"]


@dataclass(frozen=True)
class ContentPart:
    """A single typed unit within a multimodal message.

    Attributes:
        type: ``"text"`` or ``"image_url"``.
        text: Text of a ``"text"`` part.
        url: Data URI or URL of an ``"image_url"`` part.

    Methods:
        to_dict: Return the OpenAI-compatible wire representation.
    """

    type: ContentPartType
    text: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def of_text(cls, text: str) -> "ContentPart":
        return cls(type="text", text=text)

    @classmethod
    def of_image(cls, url: str) -> "ContentPart":
        return cls(type="image_url", url=url)

    def is_image(self) -> bool:
        return self.type == "image_url"

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-serializable wire shape of the part."""
        if self.type == "image_url":
            return {"type": "image_url", "image_url": {"url": self.url}}
        return {"type": "text", "text": self.text or ""}


__all__ = [
    "ContentPart",
    "ContentPartType",
]
