"""Pytest configuration for the docchat test suite.

Every test runs with a clean environment: no ``DOCCHAT_*`` overrides, no
ambient API keys, fresh settings/timeout caches and no pooled HTTP clients.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List

import pytest

from docchat.base.backends import BackendRegistry, register_openai_compatible
from docchat.base.http import close_all_clients
from docchat.base.timeouts import reset_timeout_config
from docchat.config import reset_settings_cache

# Smallest valid PNG header; enough for extension/encoding checks
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in list(os.environ):
        if name.startswith("DOCCHAT_") or name.endswith("_API_KEY"):
            monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    reset_timeout_config()
    logging.getLogger("docchat").setLevel(logging.INFO)
    yield
    reset_settings_cache()
    reset_timeout_config()
    close_all_clients()


class _ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.payloads: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            payload = {"msg": record.getMessage()}
        payload["level"] = record.levelname
        self.payloads.append(payload)


@pytest.fixture()
def events(monkeypatch: pytest.MonkeyPatch) -> Iterator[List[Dict[str, Any]]]:
    """Collect structured log payloads emitted under the ``docchat`` logger."""

    monkeypatch.setenv("DOCCHAT_LOG_LEVEL", "DEBUG")
    base = logging.getLogger("docchat")
    base.setLevel(logging.DEBUG)
    handler = _ListHandler()
    base.addHandler(handler)
    yield handler.payloads
    base.removeHandler(handler)
    base.setLevel(logging.INFO)


@pytest.fixture()
def tmp_png(tmp_path: Path) -> Path:
    path = tmp_path / "cat.png"
    path.write_bytes(PNG_BYTES)
    return path


@pytest.fixture()
def registry() -> BackendRegistry:
    """Registry with one local streaming backend; ``llava`` reads images."""

    reg = BackendRegistry()
    register_openai_compatible(
        reg,
        "local",
        host="localhost:8080",
        protocol="http",
        models=("llama", "llava"),
        stream=True,
        key="sk-test",
        media_models=("llava",),
    )
    return reg
