"""The single exception type raised across docchat's backend boundary."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Failure tagged with an :class:`ErrorCode`.

    ``provider`` names the backend, ``model`` the model in use when known.
    ``retryable`` is advisory only; ``raw`` keeps the underlying exception.
    """

    code: ErrorCode
    message: str
    provider: str = "unknown"
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:
        where = f"{self.provider}/{self.model}" if self.model else self.provider
        return f"[{self.code.value}] {where}: {self.message}"


__all__ = ["ProviderError"]
