"""Unified configuration layer.

Goals
-----
* Centralize defaults (system prompt, backend/model selection, prefixes).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by DOCCHAT_CONFIG_FILE
    3. Environment variables (DOCCHAT_SYSTEM_PROMPT, DOCCHAT_STREAM, ...)
    4. In-code overrides passed to ``get_settings``
* Provide a single call site: ``get_settings()``.

External Config File (Optional)
-------------------------------
JSON is tried first, then YAML. Structure example:

```
system_prompt: "You are helpful."
stream: true
backend: openai
model: gpt-4o-mini
max_entries: 20
prompt_prefixes:
  markdown: "## "
```
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .defaults import (
    DEFAULT_BACKEND,
    DEFAULT_MODEL,
    DEFAULT_PROMPT_PREFIXES,
    DEFAULT_RESPONSE_PREFIXES,
    DEFAULT_SYSTEM_PROMPT,
)
from .env import parse_bool

CONFIG_FILE_ENV = "DOCCHAT_CONFIG_FILE"


@dataclass(frozen=True)
class Settings:
    """Resolved conversation settings.

    Attributes:
        system_prompt: Content of the synthetic first ``system`` message.
        stream: Global streaming switch; ``False`` forces non-streaming requests.
        backend: Default backend name.
        model: Default model name (``None`` → backend's first model).
        max_entries: Maximum number of document regions sent (``None`` = all).
        track_responses: When ``False`` the document is sent as a single prompt.
        temperature: Default sampling temperature (``None`` = omit).
        max_tokens: Default completion cap (``None`` = omit).
        prompt_prefixes: Prompt prefix marker per document mode.
        response_prefixes: Response prefix marker per document mode.
    """

    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    stream: bool = True
    backend: str = DEFAULT_BACKEND
    model: Optional[str] = DEFAULT_MODEL
    max_entries: Optional[int] = None
    track_responses: bool = True
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    prompt_prefixes: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PROMPT_PREFIXES))
    response_prefixes: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_RESPONSE_PREFIXES))

    def prefixes_for(self, mode: str) -> tuple[str, str]:
        """Return ``(prompt_prefix, response_prefix)`` for a document mode."""
        return self.prompt_prefixes.get(mode, ""), self.response_prefixes.get(mode, "")


_FILE_CACHE: Optional[Dict[str, Any]] = None

# env var -> (field, parser)
_ENV_FIELDS = {
    "DOCCHAT_SYSTEM_PROMPT": ("system_prompt", str),
    "DOCCHAT_STREAM": ("stream", lambda v: parse_bool(v, default=True)),
    "DOCCHAT_BACKEND": ("backend", str),
    "DOCCHAT_MODEL": ("model", str),
    "DOCCHAT_MAX_ENTRIES": ("max_entries", int),
    "DOCCHAT_TRACK_RESPONSES": ("track_responses", lambda v: parse_bool(v, default=True)),
    "DOCCHAT_TEMPERATURE": ("temperature", float),
    "DOCCHAT_MAX_TOKENS": ("max_tokens", int),
}


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        data = yaml.safe_load(text) or {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_settings_cache() -> None:
    """Forget the cached config file contents (tests, config reloads)."""
    global _FILE_CACHE
    _FILE_CACHE = None


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for var, (name, parse) in _ENV_FIELDS.items():
        raw = os.getenv(var)
        if raw is None or raw.strip() == "":
            continue
        try:
            out[name] = parse(raw)
        except ValueError as e:
            raise ValueError(f"{var}: cannot parse {raw!r}") from e
    return out


def _merge(settings: Settings, data: Mapping[str, Any]) -> Settings:
    known = {f.name for f in fields(Settings)}
    changes: Dict[str, Any] = {}
    for k, v in data.items():
        if k not in known:
            continue
        if k in ("prompt_prefixes", "response_prefixes") and isinstance(v, Mapping):
            # Per-mode maps merge instead of replacing
            changes[k] = {**getattr(settings, k), **{str(m): str(p) for m, p in v.items()}}
        else:
            changes[k] = v
    return replace(settings, **changes)


def get_settings(overrides: Optional[Mapping[str, Any]] = None) -> Settings:
    """Return merged settings.

    Merge order (later wins): defaults -> config file -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored.
    """
    settings = Settings()
    settings = _merge(settings, _load_external_config())
    settings = _merge(settings, _env_overrides())
    if overrides:
        settings = _merge(settings, {k: v for k, v in overrides.items() if v is not None})
    return settings


__all__ = [
    "Settings",
    "get_settings",
    "reset_settings_cache",
    "CONFIG_FILE_ENV",
]
