"""Lambda handler for API Gateway proxy events: uppercases the request path."""

import json
from typing import Any

import structlog

from .config import settings
from .domain import (
    InboundRequest,
    InvalidRequestError,
    OutboundResponse,
    ResponseFormat,
    ResponseSerializationError,
)
from .infrastructure import RequestSink, StructlogRequestSink, configure_logging, log_request
from .infrastructure.logging import Timer, bind_invocation

configure_logging(settings.service_name, settings.log_level)

logger = structlog.get_logger()

_default_sink = StructlogRequestSink()


def uppercase(message: str) -> str:
    """Unicode uppercase; locale-independent and idempotent."""
    return message.upper()


def render_body(result: str, response_format: ResponseFormat) -> str:
    """Build the response body for ``result``.

    Raises:
        ResponseSerializationError: the JSON body is not valid UTF-8
    """
    if response_format == ResponseFormat.RAW:
        return result
    try:
        body = json.dumps({"result": result}, indent=2, ensure_ascii=False)
        # Lone surrogates survive json.dumps but cannot go on the wire
        body.encode("utf-8")
    except (TypeError, ValueError) as e:
        raise ResponseSerializationError(
            e, OutboundResponse.internal_server_error()
        ) from e
    return body


def handle(
    request: InboundRequest,
    response_format: ResponseFormat = ResponseFormat.RAW,
    sink: RequestSink | None = None,
) -> OutboundResponse:
    """Uppercase the request path.

    The request is handed to ``sink`` before the response is built; sink
    failures are ignored.

    Raises:
        ResponseSerializationError: JSON format only, body encoding failed.
            The error carries the 500 response to return.
    """
    log_request(sink or _default_sink, request.raw or _describe(request))
    return OutboundResponse.ok(render_body(uppercase(request.message), response_format))


def _describe(request: InboundRequest) -> dict[str, Any]:
    return {
        "path": request.path,
        "httpMethod": request.method,
        "headers": request.headers,
        "queryStringParameters": request.query,
    }


def handler(event: dict, context) -> dict:
    """AWS Lambda handler for API Gateway proxy integration."""
    bind_invocation(getattr(context, "aws_request_id", None))

    with Timer() as t:
        try:
            request = InboundRequest.from_event(event)
        except InvalidRequestError as e:
            logger.warning("Rejected malformed request", error=str(e))
            response = OutboundResponse.bad_request()
        else:
            try:
                response = handle(request, settings.response_format)
            except ResponseSerializationError as e:
                logger.error(
                    "Failed to serialize response",
                    error=str(e.cause),
                    error_type=type(e.cause).__name__,
                    path=request.path,
                    exc_info=True,
                )
                response = e.response

    logger.info(
        "Invocation completed",
        status_code=response.status_code,
        duration_ms=t.duration_ms,
    )
    return response.to_proxy()
