"""
Immutable backend endpoint description.

A `BackendConfig` is created once at registration time and never mutated.
Every component reads its shared fields; only the header defaults depend on
the `BackendVariant` discriminant.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional, Tuple

from ...config.env import KeyHandle

HeaderFn = Callable[[], Optional[Mapping[str, str]]]


class BackendVariant(str, Enum):
    """Closed set of backend flavours sharing the OpenAI-compatible wire shape."""

    OPENAI_COMPATIBLE = "openai_compatible"
    AZURE_COMPATIBLE = "azure_compatible"


@dataclass(frozen=True)
class BackendConfig:
    """Description of one chat-completions endpoint.

    Attributes:
        name: Unique registry key.
        host: Host (optionally with port), e.g. ``api.openai.com``.
        endpoint: Path appended to the host, e.g. ``/v1/chat/completions``.
        protocol: ``"http"``, ``"https"`` or ``None`` when ``host`` already
            carries a scheme.
        header: Zero-argument callable producing extra request headers.
        models: Ordered, de-duplicated model names.
        stream: Whether the endpoint supports streaming responses.
        key: Credential handle (string, callable or ``None``).
        curl_args: Opaque transport options.
        variant: Backend flavour.
        media_models: Models able to read images.
        request_params: Extra payload keys merged into every request.
    """

    name: str
    host: str
    endpoint: str
    protocol: Optional[str] = "https"
    header: Optional[HeaderFn] = None
    models: Tuple[str, ...] = ()
    stream: bool = False
    key: KeyHandle = None
    curl_args: Tuple[str, ...] = ()
    variant: BackendVariant = BackendVariant.OPENAI_COMPATIBLE
    media_models: FrozenSet[str] = frozenset()
    request_params: Mapping[str, Any] = field(default_factory=dict)

    @property
    def url(self) -> str:
        """Computed endpoint URL."""
        if self.protocol:
            return f"{self.protocol}://{self.host}{self.endpoint}"
        return f"{self.host}{self.endpoint}"

    @property
    def supports_streaming(self) -> bool:
        return self.stream

    def supports_images(self, model: Optional[str]) -> bool:
        """Return True when ``model`` is flagged image-capable."""
        return model is not None and model in self.media_models

    def headers(self) -> Dict[str, str]:
        """Evaluate the header function; ``None`` results yield no headers."""
        if self.header is None:
            return {}
        produced = self.header()
        return {str(k): str(v) for k, v in (produced or {}).items()}


def unique_models(models) -> Tuple[str, ...]:
    """Return model names de-duplicated, first occurrence wins."""
    return tuple(dict.fromkeys(str(m) for m in models or ()))


__all__ = ["BackendConfig", "BackendVariant", "HeaderFn", "unique_models"]
