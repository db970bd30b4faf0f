"""Logging helpers for Blogcraft."""

import json
import logging
import sys
from typing import Optional

from blogcraft.core.config import settings

_LOGGING_INITIALIZED = False

_RESERVED_ATTRS = frozenset(
    (
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "message",
        "module",
        "msecs",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "taskName",
        "thread",
        "threadName",
    )
)

_NOISY_LOGGERS = ("uvicorn.access", "httpx", "openai", "sqlalchemy.engine")


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        data = {
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Attach extras if present
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps(value)
                data[key] = value
            except (TypeError, ValueError):
                data[key] = str(value)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False)


def init_logging(level: Optional[str] = None, format: Optional[str] = None) -> None:
    """
    Initialize global logging configuration.

    Falls back to LOG_LEVEL / LOG_FORMAT from settings. Supported formats are
    ``plain`` (human readable, one line per record) and ``json`` (JSON lines).
    Calling it more than once is a no-op.
    """
    global _LOGGING_INITIALIZED
    if _LOGGING_INITIALIZED:
        return

    resolved_level = (level or settings.log_level or "INFO").upper()
    resolved_format = (format or settings.log_format or "plain").lower()
    log_level = logging.getLevelName(resolved_level)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    root = logging.getLogger()
    root.setLevel(log_level)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if resolved_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )
    root.addHandler(handler)

    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(max(log_level, logging.WARNING))

    get_logger("blogcraft.start").info(
        "Initializing logging | level=%s format=%s", resolved_level, resolved_format
    )
    _LOGGING_INITIALIZED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger with the provided name, or the package logger if None."""
    return logging.getLogger(name or "blogcraft")
