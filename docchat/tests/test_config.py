from __future__ import annotations

import json

import pytest

from docchat.base.timeouts import get_timeout_config, reset_timeout_config
from docchat.config import Settings, get_settings, reset_settings_cache
from docchat.config.defaults import DEFAULT_SYSTEM_PROMPT
from docchat.config.env import env_var_for_backend, parse_bool, resolve_key


def test_defaults():
    s = get_settings()
    assert s == Settings()  # nosec B101
    assert s.system_prompt == DEFAULT_SYSTEM_PROMPT  # nosec B101
    assert s.prefixes_for("markdown") == ("### ", "")  # nosec B101
    assert s.prefixes_for("unknown") == ("", "")  # nosec B101


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DOCCHAT_STREAM", "off")
    monkeypatch.setenv("DOCCHAT_MAX_ENTRIES", "4")
    monkeypatch.setenv("DOCCHAT_TEMPERATURE", "0.5")
    monkeypatch.setenv("DOCCHAT_SYSTEM_PROMPT", "Be terse.")
    s = get_settings()
    assert s.stream is False  # nosec B101
    assert s.max_entries == 4  # nosec B101
    assert s.temperature == 0.5  # nosec B101
    assert s.system_prompt == "Be terse."  # nosec B101


def test_bad_env_value_raises(monkeypatch):
    monkeypatch.setenv("DOCCHAT_MAX_ENTRIES", "many")
    with pytest.raises(ValueError, match="DOCCHAT_MAX_ENTRIES"):
        get_settings()


def test_yaml_config_file_then_env_then_overrides(tmp_path, monkeypatch):
    cfg = tmp_path / "docchat.yaml"
    cfg.write_text("backend: local\nmodel: llama\nprompt_prefixes:\n  org: '* '\n", encoding="utf-8")
    monkeypatch.setenv("DOCCHAT_CONFIG_FILE", str(cfg))
    monkeypatch.setenv("DOCCHAT_MODEL", "llava")
    reset_settings_cache()
    s = get_settings({"max_tokens": 32, "temperature": None})
    assert s.backend == "local"  # nosec B101
    assert s.model == "llava"  # nosec B101 - env beats file
    assert s.max_tokens == 32  # nosec B101
    assert s.temperature is None  # nosec B101
    assert s.prefixes_for("org") == ("* ", "")  # nosec B101
    assert s.prefixes_for("markdown") == ("### ", "")  # nosec B101 - per-mode maps merge


def test_json_config_file(tmp_path, monkeypatch):
    cfg = tmp_path / "docchat.json"
    cfg.write_text(json.dumps({"track_responses": False, "unknown_key": 1}), encoding="utf-8")
    monkeypatch.setenv("DOCCHAT_CONFIG_FILE", str(cfg))
    reset_settings_cache()
    assert get_settings().track_responses is False  # nosec B101


def test_resolve_key_precedence(monkeypatch):
    monkeypatch.setenv("MY_AZURE_API_KEY", "from-env")
    assert env_var_for_backend("my-azure") == "MY_AZURE_API_KEY"  # nosec B101
    assert resolve_key("literal", "my-azure") == "literal"  # nosec B101
    assert resolve_key(lambda: "  ", "my-azure") == "from-env"  # nosec B101
    assert resolve_key(None, "my-azure") == "from-env"  # nosec B101
    assert resolve_key(None, "other") is None  # nosec B101


@pytest.mark.parametrize("raw, expected", [("yes", True), ("0", False), ("maybe", True), (None, True)])
def test_parse_bool(raw, expected):
    assert parse_bool(raw, default=True) is expected  # nosec B101


def test_timeout_config_env(monkeypatch):
    monkeypatch.setenv("DOCCHAT_HTTP_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("DOCCHAT_STREAM_TIMEOUT_SECONDS", "-1")
    reset_timeout_config()
    cfg = get_timeout_config()
    assert cfg.http_timeout_seconds == 5.0  # nosec B101
    assert cfg.stream_timeout_seconds == 300.0  # nosec B101 - non-positive falls back
