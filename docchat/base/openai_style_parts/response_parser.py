"""
Non-streaming response interpretation.

``parse_response`` extracts ``choices[0].message.content`` from one complete
response object. A missing path is surfaced as ``MalformedResponse`` and is
never retried here.
"""

from __future__ import annotations

import json
import typing as _t

from ..errors import MalformedResponse


def _load(response: _t.Any, provider: str, model: _t.Optional[str]) -> _t.Any:
    if isinstance(response, (bytes, bytearray)):
        response = response.decode("utf-8", errors="replace")
    if isinstance(response, str):
        try:
            return json.loads(response)
        except ValueError as e:
            raise MalformedResponse(provider=provider, model=model, message=f"response is not valid JSON: {e}") from e
    return response


def parse_response(response: _t.Any, *, provider: str = "unknown", model: _t.Optional[str] = None) -> str:
    """Return the assistant text of a complete chat completion response.

    Parameters:
        response: Decoded JSON mapping, or the raw body as ``str``/``bytes``.
        provider: Backend name for error context.
        model: Model name for error context.

    Raises:
        MalformedResponse: When ``choices[0].message.content`` is absent or
            not a string, or the raw body is not JSON.
    """
    data = _load(response, provider, model)
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponse(provider=provider, model=model) from e
    if not isinstance(content, str):
        raise MalformedResponse(
            provider=provider,
            model=model,
            message=f"choices[0].message.content is {type(content).__name__}, expected str",
        )
    return content


__all__ = ["parse_response"]
