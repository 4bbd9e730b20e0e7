"""Request-scoped fields attached to structured log events."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Backend, model and request id shared by the events of one request.

    ``extra`` entries are flattened next to the named fields.
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    request_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        merged: Dict[str, Any] = {"provider": self.provider, "model": self.model, "request_id": self.request_id}
        merged.update(self.extra or {})
        return {k: v for k, v in merged.items() if v is not None}


__all__ = ["LogContext"]
