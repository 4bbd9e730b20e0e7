"""Protocol style dispatch for backend variants.

Every backend variant speaks the same OpenAI-compatible wire shape, so one
``OpenAICompatibleStyle`` implementation serves all of them. ``style_for``
selects the instance for a backend's variant; variant-specific behaviour
(credential header) is already baked into the backend at registration time.
"""

from __future__ import annotations

import typing as _t
from dataclasses import dataclass

from ..backends import BackendConfig, BackendVariant
from ..models import GenerationParams, HttpRequest, Message
from ..streaming import StreamParser
from .request_builder import build_http_request, build_request
from .response_parser import parse_response


class ProtocolStyle(_t.Protocol):
    """Capability surface: produce requests, parse responses."""

    variant: BackendVariant

    def build_request(
        self,
        messages: _t.Sequence[Message],
        params: GenerationParams,
        backend: BackendConfig,
        *,
        streaming_enabled: bool = True,
    ) -> HttpRequest: ...

    def parse_response(self, response: _t.Any, backend: BackendConfig, model: _t.Optional[str] = None) -> str: ...

    def new_stream_parser(self, backend: BackendConfig, model: _t.Optional[str] = None) -> StreamParser: ...


@dataclass(frozen=True)
class OpenAICompatibleStyle:
    """Chat Completions wire protocol."""

    variant: BackendVariant

    def build_request(
        self,
        messages: _t.Sequence[Message],
        params: GenerationParams,
        backend: BackendConfig,
        *,
        streaming_enabled: bool = True,
    ) -> HttpRequest:
        body = build_request(messages, params, backend, streaming_enabled=streaming_enabled)
        return build_http_request(body, backend)

    def parse_response(self, response: _t.Any, backend: BackendConfig, model: _t.Optional[str] = None) -> str:
        return parse_response(response, provider=backend.name, model=model)

    def new_stream_parser(self, backend: BackendConfig, model: _t.Optional[str] = None) -> StreamParser:
        return StreamParser(provider=backend.name, model=model)


_STYLES: _t.Dict[BackendVariant, ProtocolStyle] = {
    variant: OpenAICompatibleStyle(variant=variant) for variant in BackendVariant
}


def style_for(backend: BackendConfig) -> ProtocolStyle:
    """Return the protocol style serving ``backend``'s variant."""
    return _STYLES[backend.variant]


__all__ = ["ProtocolStyle", "OpenAICompatibleStyle", "style_for"]
