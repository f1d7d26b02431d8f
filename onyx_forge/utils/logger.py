"""Structured logging utility with JSON output."""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Set

SERVICE_NAME = "onyx-forge"

# Longest string value emitted for a single extra field
MAX_FIELD_LENGTH = 500

# Names of loggers configured by get_logger
_configured: Set[str] = set()


def _sanitize(value: Any) -> Any:
    """Make a log field JSON-safe without ever dumping raw image bytes."""
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes: {len(value)} bytes>"

    if isinstance(value, (list, tuple)):
        return [_sanitize(item) for item in value]

    if isinstance(value, dict):
        return {str(k): _sanitize(v) for k, v in value.items()}

    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        text = str(value)
        if len(text) > MAX_FIELD_LENGTH:
            return text[:MAX_FIELD_LENGTH] + "...[truncated]"
        return text


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    # Fields that Python's logging adds automatically (exclude these)
    BUILTIN_ATTRS = {
        'name', 'msg', 'args', 'created', 'filename', 'funcName',
        'levelname', 'levelno', 'lineno', 'module', 'msecs',
        'pathname', 'process', 'processName', 'relativeCreated',
        'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
        'taskName', 'message',
    }

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in self.BUILTIN_ATTRS and not key.startswith('_'):
                log_data[key] = _sanitize(value)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        logger.setLevel(getattr(logging, log_level, logging.INFO))

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)

        # Prevent propagation to root logger
        logger.propagate = False
        _configured.add(name)

    return logger


def set_log_level(level: str) -> None:
    """Apply a level name (e.g. "DEBUG") to every logger from get_logger."""
    resolved = getattr(logging, level.upper(), None)
    if not isinstance(resolved, int):
        get_logger(__name__).warning(f"Unknown log level {level!r}, keeping current level")
        return

    for name in _configured:
        logging.getLogger(name).setLevel(resolved)
