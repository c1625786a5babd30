from .errors import InvalidRequestError, ResponseSerializationError, UppercaseError
from .http import InboundRequest, OutboundResponse, ResponseFormat

__all__ = [
    "InboundRequest",
    "OutboundResponse",
    "ResponseFormat",
    "UppercaseError",
    "InvalidRequestError",
    "ResponseSerializationError",
]
