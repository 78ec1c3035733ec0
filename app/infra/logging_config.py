"""Logging setup shared by the API process and scripts."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional

from app.config import get_settings

ROOT_LOGGER_NAME = "chat_orchestra"

_EXTRA_FIELDS = (
    "session_id",
    "message_id",
    "role",
    "status",
    "backend",
    "duration_ms",
    "error",
)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "message": record.getMessage(),
            "logger": record.name,
        }
        for field in _EXTRA_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data, default=str)


class LoggingConfig:
    """Configure the application's logger tree once per process.

    Production gets one JSON object per line; every other environment gets
    a human readable format.
    """

    _configured = False

    def __init__(self, level: Optional[str] = None, json_output: Optional[bool] = None) -> None:
        settings = get_settings()
        self.level = (level or settings.log_level or "INFO").upper()
        self.json_output = settings.is_production if json_output is None else json_output
        if not LoggingConfig._configured:
            self.configure()

    def configure(self) -> None:
        handler = logging.StreamHandler(sys.stdout)
        if self.json_output:
            handler.setFormatter(StructuredFormatter())
        else:
            handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s %(levelname)s [%(name)s] %(message)s"
                )
            )

        logger = logging.getLogger(ROOT_LOGGER_NAME)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(self.level)

        # app.* modules that use logging.getLogger(__name__) share the handler
        app_logger = logging.getLogger("app")
        app_logger.handlers.clear()
        app_logger.addHandler(handler)
        app_logger.setLevel(self.level)

        LoggingConfig._configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the application namespace."""
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)
