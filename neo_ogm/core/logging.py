"""Structured logging module for neo-ogm.

This module provides:
- JSONFormatter with timestamp, level, service, module, message
- RotatingFileHandler writing JSON lines when a log file is configured
- Log level configurable via NEO_OGM_LOG_LEVEL env var

Library modules only call logging.getLogger(__name__); applications opt in
to JSON output by calling setup_structured_logging() once at startup.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from neo_ogm.core.config import get_settings

LOGGER_NAME = "neo_ogm"


class JSONFormatter(logging.Formatter):
    """JSON log formatter with standard fields."""

    def __init__(self, service_name: str = "neo-ogm", **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "module": record.module,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


def get_log_level_from_env(service_prefix: str = "NEO_OGM") -> int:
    """Get log level from NEO_OGM_LOG_LEVEL env var."""
    env_var = f"{service_prefix}_LOG_LEVEL"
    level_str = os.environ.get(env_var, get_settings().log_level).upper()
    level = getattr(logging, level_str, None)
    return level if isinstance(level, int) else logging.INFO


def create_file_handler(
    log_file_path: str,
    service_name: str = "neo-ogm",
    max_bytes: int = 10_485_760,
    backup_count: int = 5,
) -> RotatingFileHandler:
    """Create a rotating file handler for JSON logs."""
    log_dir = Path(log_file_path).parent
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=log_file_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(JSONFormatter(service_name=service_name))
    return handler


def setup_structured_logging(
    service_name: str | None = None,
    log_file_path: str | None = None,
    log_level: int | None = None,
) -> logging.Logger:
    """Attach JSON handlers to the package logger.

    Arguments left as None fall back to the NEO_OGM_* settings.
    """
    settings = get_settings()
    service_name = service_name or settings.service_name
    log_file_path = log_file_path or settings.log_file_path
    if log_level is None:
        log_level = get_log_level_from_env()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(JSONFormatter(service_name=service_name))
    logger.addHandler(console_handler)

    if log_file_path:
        try:
            file_handler = create_file_handler(log_file_path, service_name)
            file_handler.setLevel(log_level)
            logger.addHandler(file_handler)
        except PermissionError:
            logger.warning("Cannot write to %s, file logging disabled", log_file_path)

    logger.propagate = False
    return logger
