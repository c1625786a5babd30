"""Request logging sink.

Every invocation hands the raw event and its serialized JSON form to a sink
before the response is built. Sink failures are reported on the stdlib
logger and never reach the caller.
"""

import json
import logging
from typing import Any, Protocol

import structlog

_fallback_logger = logging.getLogger(__name__)


class RequestSink(Protocol):
    """Receives every inbound request."""

    def record(self, request: dict[str, Any], serialized: str) -> None: ...


class StructlogRequestSink:
    """Writes inbound requests to the structured log."""

    def __init__(self, logger: Any = None) -> None:
        self._logger = logger or structlog.get_logger("uppercase.requests")

    def record(self, request: dict[str, Any], serialized: str) -> None:
        self._logger.info("Request", request=request)
        self._logger.info("Request String", request_string=serialized)


def log_request(sink: RequestSink, request: dict[str, Any]) -> None:
    """Serialize ``request`` and pass it to ``sink``; never raises."""
    try:
        serialized = json.dumps(request, default=str)
        sink.record(request, serialized)
    except Exception:
        _fallback_logger.warning("Request logging failed", exc_info=True)
