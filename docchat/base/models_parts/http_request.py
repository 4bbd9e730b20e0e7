"""
Outbound HTTP request description.

The request builder produces this value; the transport sends it. Nothing here
performs I/O.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Tuple


REDACTED = "***"
_SENSITIVE_HEADERS = frozenset({"authorization", "api-key", "x-api-key"})


@dataclass(frozen=True)
class HttpRequest:
    """A fully-resolved ``POST`` to a chat completions endpoint.

    Attributes:
        url: Absolute endpoint URL (``BackendConfig.url``).
        headers: Merged header map (defaults + backend headers).
        body: JSON-serializable request payload.
        stream: Whether the payload asks for an event stream.
        curl_args: Opaque transport options carried from the backend.
        method: Always ``"POST"`` for chat completions.
    """

    url: str
    headers: Dict[str, str]
    body: Dict[str, Any]
    stream: bool = False
    curl_args: Tuple[str, ...] = ()
    method: str = "POST"

    def body_bytes(self) -> bytes:
        """Return the UTF-8 JSON encoding of the body."""
        return json.dumps(self.body, ensure_ascii=False).encode("utf-8")

    def redacted_headers(self) -> Dict[str, str]:
        """Return headers with credential values masked, for display and logs."""
        return {k: (REDACTED if k.lower() in _SENSITIVE_HEADERS else v) for k, v in self.headers.items()}


__all__ = ["HttpRequest", "REDACTED"]
