"""Unit coverage for structured logging utilities."""

from __future__ import annotations

import io
import json
import logging

from docchat.base.log_support import JsonFormatter
from docchat.base.logging import (
    LogContext,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)


def test_get_logger_env_overrides_level(monkeypatch, capsys):
    monkeypatch.setenv("DOCCHAT_LOG_LEVEL", "ERROR")
    logger = get_logger(name="test.levels", json_mode=True, level=logging.DEBUG)
    logger.info("hello")
    assert capsys.readouterr().err == ""  # nosec B101
    logger.error("fail")
    data = json.loads(capsys.readouterr().err.strip())
    assert data["level"] == "ERROR"  # nosec B101
    assert data["logger"] == "docchat.test.levels"  # nosec B101


def test_log_event_drops_none_and_hoists_context(capsys):
    logger = get_logger(name="test.events")
    log_event(logger, "unit.event", LogContext(provider="p", model="m"), count=2, skipped=None)
    data = json.loads(capsys.readouterr().err.strip())
    assert data["event"] == "unit.event"  # nosec B101
    assert data["provider"] == "p" and data["model"] == "m"  # nosec B101
    assert data["count"] == 2  # nosec B101
    assert "skipped" not in data  # nosec B101


def test_normalized_log_event_includes_required_keys(capsys):
    logger = get_logger(name="test.normalized")
    normalized_log_event(
        logger,
        "chat.finish",
        LogContext(provider="p", request_id="r1"),
        phase="finalize",
        emitted=True,
        chars=5,
    )
    data = json.loads(capsys.readouterr().err.strip())
    for k in ("phase", "attempt", "emitted"):
        assert k in data  # nosec B101
    assert data["attempt"] is None  # nosec B101
    assert "error_code" not in data  # nosec B101
    assert data["chars"] == 5  # nosec B101
    assert data["request_id"] == "r1"  # nosec B101


def test_json_formatter_hoists_json_message():
    record = logging.LogRecord(
        name="docchat.test.json",
        level=logging.INFO,
        pathname=__file__,
        lineno=0,
        msg=json.dumps({"provider": "local", "event": "cli.run"}),
        args=(),
        exc_info=None,
    )
    payload = json.loads(JsonFormatter().format(record))
    assert payload["provider"] == "local"  # nosec B101
    assert payload["event"] == "cli.run"  # nosec B101


def test_child_logger_uses_parent_handler_without_duplicates():
    logger = get_logger(name="test.child", json_mode=False)
    base_logger = logging.getLogger("docchat")
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))
    base_logger.addHandler(handler)
    try:
        logger.info("alpha")
    finally:
        base_logger.removeHandler(handler)
    assert [ln for ln in stream.getvalue().splitlines() if ln] == ["alpha"]  # nosec B101


def test_configure_logger_file_handler(tmp_path):
    target = tmp_path / "logs" / "docchat.log"
    logger = configure_logger(level="INFO", file_path=str(target))
    try:
        get_logger("test.file").info("to-file")
        for h in logger.handlers:
            h.flush()
        assert "to-file" in target.read_text(encoding="utf-8")  # nosec B101
    finally:
        configure_logger(level=logging.INFO, file_path=None)
