"""One-JSON-object-per-line formatter for the ``docchat`` handlers."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

# Attributes every LogRecord has; anything else came in through ``extra=``.
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime", "taskName"}


def _as_object(text: str):
    try:
        value = json.loads(text)
    except ValueError:
        return None
    return value if isinstance(value, dict) else None


class JsonFormatter(logging.Formatter):
    """Emit ``ts``, ``level``, ``logger`` and ``msg`` plus any ``extra`` fields.

    Messages that are JSON objects (see ``log_event``) are merged into the
    line instead of being nested as a string.
    """

    def format(self, record: logging.LogRecord) -> str:
        text = record.getMessage()
        line = {
            "ts": datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": text,
        }
        line.update(_as_object(text) or {})
        for key, value in vars(record).items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                line.setdefault(key, value)
        if record.exc_info:
            line["exc"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False, default=str)


__all__ = ["JsonFormatter", "TIMESTAMP_FORMAT"]
