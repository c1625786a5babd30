from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import InvalidRequestError

PATH_SEPARATOR = "/"


class ResponseFormat(str, Enum):
    """Shape of a successful response body."""
    RAW = "raw"
    JSON = "json"


@dataclass(frozen=True)
class InboundRequest:
    """Immutable view of an API Gateway proxy request. Only ``path`` is used."""

    path: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.path, str) or not self.path:
            raise InvalidRequestError("Request path cannot be empty")
        if not self.path.startswith(PATH_SEPARATOR):
            raise InvalidRequestError(
                f"Request path must start with '{PATH_SEPARATOR}'"
            )

    @property
    def message(self) -> str:
        """Path with exactly one leading separator removed."""
        return self.path[len(PATH_SEPARATOR):]

    @classmethod
    def from_event(cls, event: dict[str, Any]) -> "InboundRequest":
        """Build a request from a Lambda proxy integration event."""
        if not isinstance(event, dict):
            raise InvalidRequestError("Event must be a JSON object")
        return cls(
            path=event.get("path"),
            method=event.get("httpMethod") or "GET",
            headers=event.get("headers") or {},
            query=event.get("queryStringParameters") or {},
            raw=event,
        )


@dataclass(frozen=True)
class OutboundResponse:
    """Immutable proxy integration response."""

    status_code: int
    body: str

    @classmethod
    def ok(cls, body: str) -> "OutboundResponse":
        return cls(status_code=200, body=body)

    @classmethod
    def bad_request(cls) -> "OutboundResponse":
        return cls(status_code=400, body="Bad Request")

    @classmethod
    def internal_server_error(cls) -> "OutboundResponse":
        return cls(status_code=500, body="Internal Server Error")

    def to_proxy(self) -> dict[str, Any]:
        """Lambda proxy integration response dict."""
        return {"statusCode": self.status_code, "body": self.body}
