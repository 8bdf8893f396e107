"""Logging configuration utilities for calface.

Provides centralized logging configuration with:
- Flexible output (stdout or file)
- Customizable format strings
- Context-aware logging with LoggerAdapter
- Structured logging support (JSON format)
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
import functools
import json
import logging
import sys
import time
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Standard record attributes that never belong in the structured context
_STANDARD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "exc_info",
        "exc_text",
        "stack_info",
    }
)


class StructuredJSONFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per record.

    Format:
    {
        "level": "INFO",
        "message": "...",
        "timestamp": "2026-01-29T12:00:00.000000+00:00",
        "context": {
            "logger_name": "...",
            "module": "...",
            "function": "...",
            "line": 42,
            ...extra fields...
        }
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON.

        Args:
            record: LogRecord to format

        Returns:
            JSON-formatted log string
        """
        context: dict[str, Any] = {
            "logger_name": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread_name": record.threadName,
        }

        if record.exc_info:
            context["error_type"] = record.exc_info[0].__name__ if record.exc_info[0] else None
            context["error_message"] = str(record.exc_info[1]) if record.exc_info[1] else None
            context["stack_trace"] = record.exc_text or self.formatException(record.exc_info)

        # Extra fields from LoggerAdapter or extra kwargs
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                context[key] = value

        log_entry = {
            "level": record.levelname,
            "message": record.getMessage(),
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "context": context,
        }
        return json.dumps(log_entry, default=str)


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    filename: str | None = None,
    structured: bool = False,
) -> None:
    """Configure application-wide logging.

    Can be called multiple times to reconfigure logging (uses force=True).

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Case-insensitive.
        format_string: Custom format string for log messages.
                      Ignored if structured=True.
        filename: Path to log file. If None, logs to stdout.
        structured: If True, use structured JSON logging format.

    Examples:
        >>> configure_logging(level="INFO")
        >>> configure_logging(level="DEBUG", structured=True, filename="calface.jsonl")
    """
    handler: logging.Handler
    if filename:
        handler = logging.FileHandler(filename)
    else:
        handler = logging.StreamHandler(sys.stdout)

    formatter: logging.Formatter
    if structured:
        formatter = StructuredJSONFormatter()
    else:
        formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    handler.setFormatter(formatter)

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[handler],
        force=True,  # Allow reconfiguration
    )


def get_logger(name: str, **kwargs: Any) -> logging.Logger | logging.LoggerAdapter:
    """Get a logger, wrapped in a LoggerAdapter when context is given.

    Args:
        name: Logger name (usually __name__ from the calling module)
        **kwargs: Context to include in every record (e.g., generation)

    Returns:
        Logger instance, or LoggerAdapter if context provided
    """
    base = logging.getLogger(name)
    if kwargs:
        return logging.LoggerAdapter(base, kwargs)
    return base


def log_performance(func: F) -> F:
    """Log the wall time of each call at DEBUG on the function's own logger."""

    @functools.wraps(func)
    def wrapper_timer(*args: Any, **kwargs: Any) -> Any:
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logging.getLogger(func.__module__).debug(
            f"{func.__qualname__} took {elapsed_ms:.3f} ms"
        )
        return result

    return wrapper_timer  # type: ignore[return-value]


__all__ = [
    "DEFAULT_FORMAT",
    "StructuredJSONFormatter",
    "configure_logging",
    "get_logger",
    "log_performance",
]
