"""Handler exceptions."""


class UppercaseError(Exception):
    """Base class for handler errors."""


class InvalidRequestError(UppercaseError, ValueError):
    """Inbound event does not carry a usable path."""


class ResponseSerializationError(UppercaseError):
    """The response body could not be encoded.

    Carries the fixed 500 response the caller should return.
    """

    def __init__(self, cause: Exception, response) -> None:
        super().__init__(f"Response serialization failed: {cause}")
        self.cause = cause
        self.response = response
