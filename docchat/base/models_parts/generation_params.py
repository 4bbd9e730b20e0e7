"""
Pydantic model for per-request generation parameters.

Validates caller input before it reaches the request builder: the model name
must be non-empty and sampling parameters must be within provider bounds.
Invalid input raises ``pydantic.ValidationError``.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GenerationParams(BaseModel):
    """Transient generation parameters for one request.

    Parameters:
        model: Target model identifier (non-empty).
        stream: Whether the caller asks for a streaming response. The request
            builder may still send ``false`` if the backend cannot stream.
        temperature: Optional sampling temperature within [0.0, 2.0].
        max_tokens: Optional positive completion token cap.
    """

    model_config = ConfigDict(frozen=True)

    model: str = Field(..., min_length=1)
    stream: bool = False
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0)


__all__ = ["GenerationParams"]
