"""
Logging Configuration Module.

Builds the ``logging.config.dictConfig`` schema for Talanta Gallery from the
application settings and applies it.

Features:
- Console handler at the configured level
- Size-rotated log file that always receives DEBUG
- ``simple``, ``detailed`` and ``json`` (one object per line) formats
- Per-module levels that keep SQLAlchemy, httpx and SMTP chatter down
- Every record carries the id of the HTTP request that produced it
"""

import json
import logging
import logging.config
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Dict, Optional

from talanta_gallery.server.core.config import settings

LOG_FILE_NAME = "talanta_gallery.log"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Set by the request monitoring middleware; "-" outside a request
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - [%(filename)s:%(lineno)d] - %(message)s"

LOG_FORMATS = ("simple", "detailed", "json")

MODULE_LOG_LEVELS = {
    "talanta_gallery.core": "INFO",
    "talanta_gallery.notifications": "DEBUG",
    "talanta_gallery.server": "INFO",
    "talanta_gallery.server.api": "DEBUG",
    "talanta_gallery.server.services": "DEBUG",
    # Third-party libraries
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "alembic": "INFO",
    "httpx": "WARNING",
    "aiosmtplib": "WARNING",
    "multipart": "WARNING",
    "uvicorn.access": "INFO",
}


class RequestIdFilter(logging.Filter):
    """Stamp each record with the current request id."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON object.

    Values passed through ``extra=`` (for example the middleware's ``method``
    and ``duration_ms``) become top-level keys.
    """

    _RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "request_id"}

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", request_id_var.get()),
            "message": record.getMessage(),
            "location": f"{record.filename}:{record.lineno}",
        }
        for key, value in vars(record).items():
            if key not in self._RECORD_FIELDS:
                payload[key] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def build_logging_config(
    log_level: str,
    log_format: str,
    log_file: Optional[Path] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> Dict[str, Any]:
    """
    Build the ``dictConfig`` schema.

    Args:
        log_level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: simple, detailed or json; anything else falls back to detailed
        log_file: Path of the rotated log file, or None for console only
        max_bytes: Size at which the log file is rotated
        backup_count: Number of rotated files kept

    Returns:
        A configuration dictionary for ``logging.config.dictConfig``
    """
    formatter = log_format if log_format in LOG_FORMATS else "detailed"
    handlers: Dict[str, Dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": log_level.upper(),
            "formatter": formatter,
            "filters": ["request_id"],
        }
    }
    if log_file is not None:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "filename": str(log_file),
            "maxBytes": max_bytes,
            "backupCount": backup_count,
            "encoding": "utf-8",
            "level": "DEBUG",
            "formatter": formatter,
            "filters": ["request_id"],
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"request_id": {"()": RequestIdFilter}},
        "formatters": {
            "simple": {"format": SIMPLE_FORMAT},
            "detailed": {"format": DETAILED_FORMAT, "datefmt": DATE_FORMAT},
            "json": {"()": JsonFormatter, "datefmt": DATE_FORMAT},
        },
        "handlers": handlers,
        "loggers": {name: {"level": level} for name, level in MODULE_LOG_LEVELS.items()},
        # Capture everything; the handlers filter
        "root": {"level": "DEBUG", "handlers": list(handlers)},
    }


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Configure logging for the application from settings.

    Calling it again replaces the previous handlers.

    Args:
        log_level: Override ``TALANTA_LOG_LEVEL``
        log_format: Override ``LOG_FORMAT``
        enable_file: Set False to skip the log file even when ``ENABLE_FILE_LOGGING`` is on
    """
    level = (log_level or settings.log_level).upper()
    fmt = log_format or settings.log_format

    log_file = None
    if enable_file and settings.enable_file_logging:
        log_dir = Path(settings.log_file_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / LOG_FILE_NAME

    logging.config.dictConfig(
        build_logging_config(
            level,
            fmt,
            log_file,
            max_bytes=settings.log_file_max_bytes,
            backup_count=settings.log_file_backup_count,
        )
    )
    logging.getLogger(__name__).info(f"Logging configured: level={level}, format={fmt}, file={log_file or 'off'}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a module (typically ``__name__``)."""
    return logging.getLogger(name)
