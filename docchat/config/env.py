"""docchat.config.env
==================

Environment variable helpers for backend credentials and boolean flags.

A backend's credential handle is opaque to the core: a literal string, a
zero-argument callable, or ``None``. ``resolve_key`` turns the handle into a
string, falling back to ``<NAME>_API_KEY`` in the environment. Helpers never
raise on unset variables; callers decide how to proceed.
"""

from __future__ import annotations

import os
import re
from typing import Callable, Optional, Union

KeyHandle = Union[str, Callable[[], Optional[str]], None]

_TRUTHY = frozenset({"1", "t", "true", "y", "yes", "on"})
_FALSY = frozenset({"0", "f", "false", "n", "no", "off"})


def env_var_for_backend(name: str) -> str:
    """Return the conventional API key variable for a backend name.

    ``"OpenAI"`` → ``OPENAI_API_KEY``; ``"my-azure"`` → ``MY_AZURE_API_KEY``.
    """
    stem = re.sub(r"[^0-9A-Za-z]+", "_", name).strip("_").upper()
    return f"{stem}_API_KEY"


def resolve_key(handle: KeyHandle, backend_name: Optional[str] = None) -> Optional[str]:
    """Resolve a credential handle into a key string.

    Parameters
    ----------
    handle:
        Literal key, zero-argument callable returning the key, or ``None``.
    backend_name:
        When the handle is ``None`` (or yields nothing), the backend's
        conventional environment variable is consulted.

    Returns
    -------
    Optional[str]
        The resolved key, or ``None`` when nothing is configured.
    """
    key: Optional[str] = None
    if callable(handle):
        key = handle()
    elif isinstance(handle, str):
        key = handle
    if not (key and key.strip()) and backend_name:
        key = os.getenv(env_var_for_backend(backend_name))
    return key.strip() if key and key.strip() else None


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    """Permissive truthy/falsey parsing for environment flags."""
    if value is None:
        return default
    val = value.strip().lower()
    if val in _TRUTHY:
        return True
    if val in _FALSY:
        return False
    return default


__all__ = ["KeyHandle", "env_var_for_backend", "resolve_key", "parse_bool"]
