"""docchat package

Chat with language models from inside a document.

Purpose:
    Turn a plain-text document, annotated with which spans the assistant
    wrote, into an OpenAI-compatible chat request, send it, and parse the
    (optionally streamed) reply.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError`, :class:`ErrorCode`
    - Backends: :class:`BackendRegistry`, :func:`register_openai_compatible`,
      :func:`register_azure`
    - Documents: :class:`Document`, :func:`extract_prompts`
    - Wire: :func:`build_request`, :func:`parse_response`, :class:`StreamParser`
    - Composition: :class:`Conversation`, :func:`default_registry`
"""

from .base.backends import BackendConfig, BackendRegistry, register_azure, register_openai_compatible
from .base.errors import ErrorCode, ProviderError
from .base.models import ContentPart, GenerationParams, Message
from .base.openai_style_parts import build_request, parse_response
from .base.streaming import StreamParser
from .document import Document, extract_prompts
from .service.conversation import Conversation, default_registry

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ProviderError",
    "ErrorCode",
    "BackendConfig",
    "BackendRegistry",
    "register_openai_compatible",
    "register_azure",
    "ContentPart",
    "GenerationParams",
    "Message",
    "build_request",
    "parse_response",
    "StreamParser",
    "Document",
    "extract_prompts",
    "Conversation",
    "default_registry",
]
