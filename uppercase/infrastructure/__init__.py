from .logging import configure_logging
from .request_sink import RequestSink, StructlogRequestSink, log_request

__all__ = [
    "configure_logging",
    "RequestSink",
    "StructlogRequestSink",
    "log_request",
]
