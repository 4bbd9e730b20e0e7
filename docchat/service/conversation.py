"""Composition root tying documents, backends and the transport together.

``Conversation`` owns a :class:`BackendRegistry` and resolved
:class:`Settings`. ``prepare`` is pure apart from credential lookup and
returns the :class:`HttpRequest` that would be sent; ``send`` performs it.
"""
from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..base.backends import BackendConfig, BackendRegistry, register_openai_compatible
from ..base.constants import MISSING_API_KEY_ERROR
from ..base.errors import ErrorCode, ProviderError
from ..base.http import send as http_send
from ..base.logging import LogContext, get_logger, log_event, normalized_log_event
from ..base.models import GenerationParams, HttpRequest
from ..base.openai_style_parts import style_for
from ..config import Settings, get_settings
from ..config.defaults import (
    DEFAULT_BACKEND,
    OPENAI_DEFAULT_ENDPOINT,
    OPENAI_DEFAULT_HOST,
    OPENAI_DEFAULT_MODELS,
    OPENAI_MEDIA_MODELS,
)
from ..config.env import env_var_for_backend, resolve_key
from ..document import Document, extract_prompts

_logger = get_logger("docchat.chat")


def default_registry() -> BackendRegistry:
    """Return a registry holding the built-in ``openai`` backend.

    The key is read from ``OPENAI_API_KEY`` at request time.
    """
    registry = BackendRegistry()
    register_openai_compatible(
        registry,
        DEFAULT_BACKEND,
        host=OPENAI_DEFAULT_HOST,
        endpoint=OPENAI_DEFAULT_ENDPOINT,
        models=OPENAI_DEFAULT_MODELS,
        stream=True,
        media_models=OPENAI_MEDIA_MODELS,
    )
    return registry


class Conversation:
    """Build and send chat requests for annotated documents."""

    def __init__(self, registry: Optional[BackendRegistry] = None, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.registry = registry if registry is not None else default_registry()

    def resolve_model(self, backend: BackendConfig, model: Optional[str] = None) -> str:
        """Explicit model, then the configured default, then the backend's first model."""
        chosen = model or self.settings.model or (backend.models[0] if backend.models else None)
        if not chosen:
            raise ProviderError(
                code=ErrorCode.VALIDATION,
                message=f"no model given and backend {backend.name!r} lists none",
                provider=backend.name,
            )
        return chosen

    def prepare(
        self,
        document: Document,
        cursor: Optional[int] = None,
        *,
        backend: Optional[str] = None,
        model: Optional[str] = None,
        stream: Optional[bool] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> HttpRequest:
        """Return the request for the conversation ending at ``cursor``.

        Raises:
            BackendNotFound: Unknown backend name.
            ProviderError: No model could be chosen.
            pydantic.ValidationError: Out-of-range generation parameters.
        """
        settings = self.settings
        cfg = self.registry.lookup(backend or settings.backend)
        chosen = self.resolve_model(cfg, model)
        messages = extract_prompts(
            document,
            cursor,
            system_prompt=settings.system_prompt,
            max_entries=settings.max_entries,
            supports_images=cfg.supports_images(chosen),
            prefixes=settings.prefixes_for(document.mode),
            track_responses=settings.track_responses,
        )
        params = GenerationParams(
            model=chosen,
            stream=settings.stream if stream is None else stream,
            temperature=settings.temperature if temperature is None else temperature,
            max_tokens=settings.max_tokens if max_tokens is None else max_tokens,
        )
        if resolve_key(cfg.key, cfg.name) is None:
            log_event(
                _logger,
                "chat.missing_key",
                LogContext(provider=cfg.name, model=chosen),
                level=logging.WARNING,
                error_code=MISSING_API_KEY_ERROR,
                env_var=env_var_for_backend(cfg.name),
            )
        return style_for(cfg).build_request(messages, params, cfg, streaming_enabled=settings.stream)

    def send(
        self,
        document: Document,
        cursor: Optional[int] = None,
        *,
        backend: Optional[str] = None,
        model: Optional[str] = None,
        stream: Optional[bool] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        on_delta=None,
        client: Optional[httpx.Client] = None,
    ) -> str:
        """Prepare and send the request; return the assistant text."""
        name = backend or self.settings.backend
        request = self.prepare(
            document,
            cursor,
            backend=name,
            model=model,
            stream=stream,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        cfg = self.registry.lookup(name)
        chosen = request.body["model"]
        ctx = LogContext(provider=name, model=chosen)
        normalized_log_event(
            _logger, "chat.start", ctx, phase="start", attempt=1, stream=request.stream,
            messages=len(request.body["messages"]),
        )
        parser = style_for(cfg).new_stream_parser(cfg, chosen) if request.stream else None
        try:
            text = http_send(request, provider=name, model=chosen, on_delta=on_delta, parser=parser, client=client)
        except ProviderError as e:
            normalized_log_event(
                _logger, "chat.error", ctx, phase="finalize", emitted=False,
                error_code=e.code.value, level=logging.ERROR, error=e.message,
            )
            raise
        normalized_log_event(_logger, "chat.finish", ctx, phase="finalize", emitted=bool(text), chars=len(text))
        return text


__all__ = ["Conversation", "default_registry"]
