"""
Message DTO produced by the prompt extractor.

Content may be either plain text or an ordered list of `ContentPart` objects
for image-capable models. Helpers are provided for serialization and for a
flattened text view used in logs.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Union

from .content_part import ContentPart


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class Message:
    """A role-tagged chat message.

    Attributes:
        role: ``"system"``, ``"user"`` or ``"assistant"``.
        content: Either a plain text string or an ordered list of
            `ContentPart` items preserving document order.
    """

    role: Role
    content: Union[str, List[ContentPart]]

    def is_structured(self) -> bool:
        """Return True if the message content is a list of parts."""
        return isinstance(self.content, list)

    def text_or_joined(self) -> str:
        """Return a flattened string view; image parts render as ``[image]``."""
        if isinstance(self.content, str):
            return self.content
        return "".join("[image]" if p.is_image() else (p.text or "") for p in self.content)

    def to_dict(self) -> Dict[str, Any]:
        """Return the ``{"role", "content"}`` wire mapping."""
        if isinstance(self.content, str):
            return {"role": self.role, "content": self.content}
        return {"role": self.role, "content": [p.to_dict() for p in self.content]}


__all__ = [
    "Message",
    "Role",
]
