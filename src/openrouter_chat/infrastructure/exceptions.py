"""
Error types raised by the chat client.

Every stage raises one of these and lets it propagate; the CLI driver is the
only place they are caught and printed.
"""


class ChatClientError(Exception):
    """Base class for all chat client errors."""


class ConfigurationError(ChatClientError):
    """The credential or another setting is missing or invalid."""


class InputError(ChatClientError):
    """Standard input could not be read."""


class SerializationError(ChatClientError):
    """The request could not be encoded."""


class NetworkError(ChatClientError):
    """The connection failed or the response could not be read."""


class ParseError(ChatClientError):
    """The response body is not the expected JSON shape."""


class EmptyResultError(ChatClientError):
    """The response was well formed but carried no choices."""


class ApiError(ChatClientError):
    """The API rejected the request (non-2xx status or an error envelope)."""

    def __init__(self, message: str, status_code: int | None = None, code: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
