"""
Logging setup for the uppercase function.

structlog renders JSON lines through stdlib logging. The Lambda runtime
installs its own root handler (level WARNING) before the function module is
imported, so setup replaces it; otherwise INFO events such as the request
log would be filtered out.
"""

import logging
import sys
import time
from typing import Literal

import structlog

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def check_log_level(level: str) -> str:
    """Normalize ``level`` to an upper-case stdlib level name.

    Raises:
        ValueError: not one of LOG_LEVELS
    """
    name = str(level).upper()
    if name not in LOG_LEVELS:
        raise ValueError(
            f"Log level must be one of {', '.join(LOG_LEVELS)} (got {level!r})"
        )
    return name


def configure_logging(service_name: str, level: str = "INFO") -> None:
    """
    Configure structured logging for the function.

    Args:
        service_name: Added to every event as ``service``
        level: Minimum stdlib level name
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=check_log_level(level),
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _add_service_name(service_name),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
    )


def _add_service_name(service_name: str):
    def processor(logger, method_name, event_dict):
        event_dict["service"] = service_name
        return event_dict

    return processor


def bind_invocation(request_id: str | None) -> None:
    """Start a fresh log context for one invocation.

    Events logged until the next call carry ``correlation_id``.
    """
    structlog.contextvars.clear_contextvars()
    if request_id:
        structlog.contextvars.bind_contextvars(correlation_id=request_id)


class Timer:
    """Measures the wall time of a ``with`` block."""

    def __init__(self):
        self._start: float = 0
        self._end: float = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *args) -> None:
        self._end = time.perf_counter()

    @property
    def duration_ms(self) -> float:
        return round((self._end - self._start) * 1000, 2)
