"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``docchat.base.models_parts`` to keep a stable import path.
"""

from .models_parts.content_part import ContentPart, ContentPartType
from .models_parts.message import Message, Role
from .models_parts.generation_params import GenerationParams
from .models_parts.http_request import HttpRequest

__all__ = [
    "ContentPart",
    "ContentPartType",
    "Message",
    "Role",
    "GenerationParams",
    "HttpRequest",
]
