"""
Request payload construction for OpenAI-compatible chat completions.

Pure functions only: no network I/O. ``build_request`` produces the JSON body;
``build_http_request`` wraps it with the backend URL and merged headers.
"""

from __future__ import annotations

import typing as _t

from ..backends import BackendConfig
from ..constants import DEFAULT_HEADERS
from ..models import GenerationParams, HttpRequest, Message


def build_request(
    messages: _t.Sequence[Message],
    params: GenerationParams,
    backend: BackendConfig,
    *,
    streaming_enabled: bool = True,
) -> dict:
    """Assemble the request body for a chat completion call.

    Parameters:
        messages: Ordered messages as produced by the prompt extractor. The
            order is preserved exactly.
        params: Generation parameters for this request.
        backend: Target backend; its ``request_params`` are merged underneath
            the core keys.
        streaming_enabled: Global streaming switch.

    Returns:
        A dict with ``model``, ``messages`` and ``stream``, plus
        ``temperature`` / ``max_tokens`` only when set. ``stream`` is ``True``
        only if the caller asked for it, the backend supports it and
        streaming is globally enabled.
    """
    body: dict = dict(backend.request_params)
    body["model"] = params.model
    body["messages"] = [m.to_dict() for m in messages]
    body["stream"] = bool(params.stream and backend.supports_streaming and streaming_enabled)
    if params.temperature is not None:
        body["temperature"] = float(params.temperature)
    if params.max_tokens is not None:
        body["max_tokens"] = int(params.max_tokens)
    return body


def build_http_request(body: dict, backend: BackendConfig) -> HttpRequest:
    """Wrap ``body`` into a ``POST`` against ``backend.url``.

    Headers are the protocol defaults overlaid with ``backend.headers()``;
    backend headers win on conflict.
    """
    headers = {**DEFAULT_HEADERS, **backend.headers()}
    return HttpRequest(
        url=backend.url,
        headers=headers,
        body=body,
        stream=bool(body.get("stream")),
        curl_args=backend.curl_args,
    )


__all__ = ["build_request", "build_http_request"]
