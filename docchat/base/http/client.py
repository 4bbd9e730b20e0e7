"""Reference HTTP transport built on ``httpx``.

Purpose:
    Send an :class:`HttpRequest` produced by the request builder and turn the
    response into text, feeding streamed bytes through :class:`StreamParser`
    as they arrive.

External dependencies:
    - ``httpx`` for the underlying synchronous HTTP client.

Pooling:
    - Clients are cached per purpose (``"chat"`` / ``"stream"``) and closed at
      interpreter exit via ``atexit``. Tests may call
      :func:`close_all_clients` or pass their own client.

Failure semantics:
    - Non-2xx responses and ``httpx`` errors become :class:`ProviderError`
      with a code from :func:`classify_exception`. Nothing is retried here;
      ``retryable`` is only a hint for the caller.
    - Backend ``curl_args`` are carried on the request for transports that
      understand them; this transport does not interpret them.
"""

from __future__ import annotations

import atexit
import threading
from typing import Callable, Dict, Optional

import httpx

from ..errors import RETRYABLE_CODES, ProviderError, classify_exception
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import HttpRequest
from ..openai_style_parts.response_parser import parse_response
from ..streaming import StreamParser, iter_stream_events
from ..timeouts import get_timeout_config

_CLIENTS: Dict[str, httpx.Client] = {}
_LOCK = threading.RLock()
_logger = get_logger("docchat.http")

DeltaCallback = Callable[[str], None]


def _timeout_for(purpose: str) -> httpx.Timeout:
    cfg = get_timeout_config()
    read = cfg.stream_timeout_seconds if purpose == "stream" else cfg.http_timeout_seconds
    return httpx.Timeout(cfg.http_timeout_seconds, read=read)


def get_httpx_client(purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for ``purpose`` (``"chat"`` or ``"stream"``).

    Thread-safety:
        Creation is guarded by a re-entrant lock; reuse is lock-free.
    """
    client = _CLIENTS.get(purpose)
    if client is not None:
        return client
    with _LOCK:
        client = _CLIENTS.get(purpose)
        if client is None:
            client = httpx.Client(timeout=_timeout_for(purpose))
            _CLIENTS[purpose] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            c.close()
        _CLIENTS.clear()


atexit.register(close_all_clients)


def _error_detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200]
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return resp.text[:200]


def _check_status(resp: httpx.Response, provider: str, model: Optional[str]) -> None:
    if not resp.is_error:
        return
    resp.read()
    try:
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        code = classify_exception(e)
        raise ProviderError(
            code=code,
            message=f"HTTP {resp.status_code}: {_error_detail(resp)}",
            provider=provider,
            model=model,
            retryable=code in RETRYABLE_CODES,
            raw=e,
        ) from e


def send(
    request: HttpRequest,
    *,
    provider: str = "unknown",
    model: Optional[str] = None,
    on_delta: Optional[DeltaCallback] = None,
    parser: Optional[StreamParser] = None,
    client: Optional[httpx.Client] = None,
) -> str:
    """Send ``request`` and return the assistant text.

    Parameters:
        request: Request built by ``build_http_request``.
        provider: Backend name for errors and logs.
        model: Model name for errors and logs.
        on_delta: Called with each streamed fragment as soon as it is parsed.
            Non-streaming responses invoke it once with the full text.
        parser: Stream parser to feed (defaults to a fresh one).
        client: Explicit client; defaults to the pooled one for the purpose.

    Raises:
        ProviderError: Transport failure or non-2xx status.
        MalformedResponse: Non-streaming body without message content.
    """
    http = client or get_httpx_client("stream" if request.stream else "chat")
    ctx = LogContext(provider=provider, model=model)
    try:
        if request.stream:
            with http.stream(
                request.method, request.url, headers=request.headers, content=request.body_bytes()
            ) as resp:
                _check_status(resp, provider, model)
                parser = parser or StreamParser(provider=provider, model=model)
                for event in iter_stream_events(resp.iter_bytes(), provider=provider, model=model or "", parser=parser):
                    if event.delta and on_delta is not None:
                        on_delta(event.delta)
                normalized_log_event(
                    _logger, "http.stream_end", ctx, phase="finalize", emitted=bool(parser.fragments),
                    done=parser.done, fragments=len(parser.fragments),
                )
                return parser.text

        resp = http.request(request.method, request.url, headers=request.headers, content=request.body_bytes())
        _check_status(resp, provider, model)
        text = parse_response(resp.content, provider=provider, model=model)
        if on_delta is not None and text:
            on_delta(text)
        return text
    except httpx.HTTPError as e:
        code = classify_exception(e)
        raise ProviderError(
            code=code,
            message=str(e) or type(e).__name__,
            provider=provider,
            model=model,
            retryable=code in RETRYABLE_CODES,
            raw=e,
        ) from e


__all__ = ["get_httpx_client", "close_all_clients", "send"]
