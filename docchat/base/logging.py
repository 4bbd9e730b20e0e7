"""Structured logging for docchat.

Every module logs through children of the ``docchat`` logger. The base logger
owns one console handler on stderr (JSON lines by default) and, optionally, a
rotating file handler added by :func:`configure_logger`.

Events are JSON objects built by :func:`log_event`; ``JsonFormatter`` lifts
their keys to the top level of each line. :func:`normalized_log_event` adds
the ``phase``/``attempt``/``emitted`` keys shared by request lifecycle events.

``DOCCHAT_LOG_LEVEL`` overrides the level whenever it is set.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "docchat"
LOG_LEVEL_ENV = "DOCCHAT_LOG_LEVEL"
REQUIRED_NORMALIZED_KEYS = ("phase", "attempt", "emitted")

_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_READY_FLAG = "_docchat_ready"
_CONSOLE_FLAG = "_docchat_console"
_FILE_FLAG = "_docchat_file"
_ROTATE_BYTES = 10 * 1024 * 1024
_ROTATE_BACKUPS = 5


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _level_from(value: Any, fallback: int) -> int:
    """Turn ``"debug"``, ``"WARN"``, ``10`` ... into a level; unknown names give ``fallback``."""
    if isinstance(value, int):
        return value
    if not value:
        return fallback
    name = str(value).strip().upper()
    if name == "WARN":
        name = "WARNING"
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else fallback


def _console_handlers(logger: logging.Logger):
    return [h for h in logger.handlers if getattr(h, _CONSOLE_FLAG, False)]


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    base = logging.getLogger(BASE_LOGGER_NAME)
    env_level = os.getenv(LOG_LEVEL_ENV)

    if not getattr(base, _READY_FLAG, False):
        console = logging.StreamHandler(sys.stderr)
        setattr(console, _CONSOLE_FLAG, True)
        base.handlers[:] = [console]
        base.propagate = False
        base.setLevel(_level_from(env_level, level))
        setattr(base, _READY_FLAG, True)
    elif env_level:
        base.setLevel(_level_from(env_level, base.level))

    for console in _console_handlers(base):
        console.setLevel(base.level)
        # Follow stderr replacements (pytest capture, redirected CLIs)
        if isinstance(console, logging.StreamHandler) and console.stream is not sys.stderr:
            console.stream = sys.stderr
        if console.formatter is None or json_mode != isinstance(console.formatter, JsonFormatter):
            console.setFormatter(_formatter(json_mode))
    return base


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` as a child of the ``docchat`` logger.

    Names without the ``docchat.`` prefix get it. Children carry no handlers of
    their own, so each record is written once by the base handlers.
    """
    base = _ensure_base_logger(json_mode, level)
    if name == BASE_LOGGER_NAME:
        return base
    qualified = name if name.startswith(BASE_LOGGER_NAME + ".") else f"{BASE_LOGGER_NAME}.{name}"
    child = logging.getLogger(qualified)
    child.setLevel(logging.NOTSET)
    child.propagate = True
    return child


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Adjust the shared logger at runtime.

    Args:
        level: New level as a number or name; ``None`` keeps the current one.
        file_path: Attach a rotating file handler writing there (10 MB x 5),
            replacing the previous one. ``None`` detaches it.
        json_mode: JSON lines (default) or plain text for all handlers.

    Returns:
        The ``docchat`` base logger.
    """
    base = _ensure_base_logger(json_mode, logging.INFO)
    if level is not None:
        base.setLevel(_level_from(level, base.level))
        for handler in base.handlers:
            handler.setLevel(base.level)

    for old in [h for h in base.handlers if getattr(h, _FILE_FLAG, False)]:
        base.removeHandler(old)
        old.close()
    if file_path is not None:
        target = os.path.abspath(os.path.expanduser(file_path))
        os.makedirs(os.path.dirname(target), exist_ok=True)
        rotating = RotatingFileHandler(target, maxBytes=_ROTATE_BYTES, backupCount=_ROTATE_BACKUPS, encoding="utf-8")
        setattr(rotating, _FILE_FLAG, True)
        rotating.setLevel(base.level)
        rotating.setFormatter(_formatter(json_mode))
        base.addHandler(rotating)
    return base


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Log ``event`` as one JSON object merged from ``ctx`` and ``fields``.

    ``None`` values are dropped unless ``keep_none`` is true.
    """
    if not logger.isEnabledFor(level):
        return
    record: Dict[str, Any] = {"event": event}
    if ctx:
        record.update(ctx.to_dict())
    record.update(fields if keep_none else {k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(record, ensure_ascii=False, default=str))


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Lifecycle event with ``phase``, ``attempt`` and ``emitted`` always present.

    ``error_code`` appears only when given; extra fields never replace the
    normalized keys and ``None`` extras are dropped.
    """
    fields: Dict[str, Any] = dict(zip(REQUIRED_NORMALIZED_KEYS, (phase, attempt, emitted)))
    if error_code is not None:
        fields["error_code"] = error_code
    fields.update({k: v for k, v in extra_fields.items() if v is not None and k not in fields})
    log_event(logger, event, ctx, level=level, keep_none=True, **fields)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
]
