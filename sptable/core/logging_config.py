"""
Centralized logging configuration with structured logging support.
"""
import json
import logging
import logging.config
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sptable.core.config import settings

# Context variable for request ID correlation across async tasks.
# Set by RequestLoggingMiddleware so every log entry emitted while handling
# a request carries the same request_id.
request_id_context: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for production logging.

    Produces structured log entries with consistent fields for log aggregation.
    """

    # Structured fields copied from the record when a caller passes them via extra=
    EXTRA_FIELDS = (
        "method",
        "path",
        "status_code",
        "duration_ms",
        "client_host",
        "error_id",
    )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_entry: Dict[str, Any] = {
            "timestamp": timestamp.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        request_id = request_id_context.get()
        if request_id:
            log_entry["request_id"] = request_id

        for field in self.EXTRA_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        # Add source location for error-level logs
        if record.levelno >= logging.ERROR:
            log_entry["source"] = f"{record.pathname}:{record.lineno}"

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def build_logging_config(
    log_level_name: Optional[str] = None, json_output: Optional[bool] = None
) -> Dict[str, Any]:
    """
    Build the dictConfig for the application.

    Args:
        log_level_name: Level name; defaults to settings.LOG_LEVEL.
        json_output: Use the JSON formatter; defaults to ENV == "production".

    Returns:
        A logging.config.dictConfig dictionary.
    """
    log_level_name = log_level_name or getattr(settings, "LOG_LEVEL", "INFO")
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    if json_output is None:
        json_output = settings.ENV == "production"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "()": JSONFormatter,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "json" if json_output else "default",
                # stderr keeps CLI stdout free for exported documents
                "stream": sys.stderr,
            },
        },
        "root": {
            "level": log_level,
            "handlers": ["console"],
        },
        "loggers": {
            "sptable": {
                "level": log_level,
                "handlers": ["console"],
                "propagate": False,
            },
            "uvicorn.access": {
                "level": logging.WARNING if settings.DEBUG else logging.INFO,
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(
    log_level_name: Optional[str] = None, json_output: Optional[bool] = None
) -> None:
    """
    Configure application-wide logging with structured output.

    Configures:
    - Log level from settings (or the override)
    - JSON formatting for production (structured for log aggregators)
    - Human-readable format for development
    - Request ID correlation via context variables
    """
    logging.config.dictConfig(build_logging_config(log_level_name, json_output))

