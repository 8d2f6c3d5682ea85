"""
Structured logging: JSON for cloud aggregators, readable format for dev.
Configured from Settings (LOG_LEVEL, LOG_JSON, LOG_FILE).
"""

import json
import logging
import sys
import uuid
from typing import Any

from core.config import Settings

_RESERVED_ATTRS = frozenset(
    (
        "name", "msg", "args", "created", "filename", "funcName", "levelname", "levelno",
        "lineno", "module", "msecs", "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "message", "taskName", "thread", "threadName",
    )
)


def configure_logging(settings: Settings, name: str | None = None) -> logging.Logger:
    """
    Build a logger owned by one app instance. Components receive it (or a child)
    at construction time. Use logger.info("event", extra={"key": "value"}) for structured fields.

    The name carries a per-call suffix, so two apps in one process never share
    handlers or levels.
    """
    logger = logging.getLogger(f"{name or settings.APP_NAME}.{uuid.uuid4().hex[:8]}")

    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    if settings.LOG_FILE:
        handler: logging.Handler = logging.FileHandler(settings.LOG_FILE, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    if settings.LOG_JSON:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
    logger.addHandler(handler)
    logger.propagate = False
    return logger


class JsonFormatter(logging.Formatter):
    """Format log records as single-line JSON for CloudWatch, Datadog, etc."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)
        # Merge extra dict into top level for structured search
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_obj[key] = value
        return json.dumps(log_obj, default=str)
