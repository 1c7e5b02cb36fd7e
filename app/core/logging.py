"""Structured logging configuration.

Configures the root logger with a structured format including timestamp,
level, module name and, when present, the request id and priority of the
record.  The log level is controlled by ``settings.LOG_LEVEL``.

``log_error`` is the single entry point the service layers use to report a
failure together with the original exception and a priority.
"""

import logging
import sys
from enum import Enum
from typing import Any

from app.core.config import settings


class LogPriority(str, Enum):
    """Priority attached to logged failures."""
    low = "low"
    medium = "medium"
    high = "high"


_PRIORITY_LEVELS: dict[LogPriority, int] = {
    LogPriority.low: logging.INFO,
    LogPriority.medium: logging.WARNING,
    LogPriority.high: logging.ERROR,
}


class _ContextFilter(logging.Filter):
    """Guarantee ``request_id`` and ``priority`` exist on every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        if not hasattr(record, "priority"):
            record.priority = "-"
        return True


def setup_logging() -> None:
    """Configure structured logging for the application.

    Sets the root logger level from ``settings.LOG_LEVEL`` and installs a
    ``StreamHandler`` writing to *stdout* with a structured text format.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt=(
            "%(asctime)s | %(levelname)-8s | %(name)s | "
            "request_id=%(request_id)s priority=%(priority)s | %(message)s"
        ),
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(_ContextFilter())

    root = logging.getLogger()
    root.setLevel(log_level)

    # Avoid adding duplicate handlers on repeated calls
    root.handlers.clear()
    root.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def log_error(
    logger: logging.Logger,
    message: str,
    exc: BaseException | None = None,
    priority: LogPriority = LogPriority.high,
    with_traceback: bool = True,
    **fields: Any,
) -> None:
    """Log *message* with the originating exception and a priority.

    The level is derived from *priority*; the exception text is attached as
    ``error_message`` and, unless *with_traceback* is False, its traceback
    via ``exc_info``.
    """
    extra: dict[str, Any] = {"priority": priority.value, **fields}
    if exc is not None:
        extra["error_message"] = str(exc)
    logger.log(
        _PRIORITY_LEVELS[priority],
        message,
        exc_info=exc if with_traceback else None,
        extra=extra,
    )
