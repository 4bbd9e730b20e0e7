"""Logging building blocks: the JSON formatter and the per-request context."""

from .json_formatter import JsonFormatter, TIMESTAMP_FORMAT
from .logging_context import LogContext

__all__ = ["JsonFormatter", "TIMESTAMP_FORMAT", "LogContext"]
