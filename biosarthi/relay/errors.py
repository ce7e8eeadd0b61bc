"""Error types raised by the completion relay."""

from fastapi import status


class RelayError(Exception):
    """Base class for relay failures reported to the caller.

    Attributes:
        status_code: HTTP status returned to the caller.
        message: Public message placed in the error payload.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An error occurred while processing the chat"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequestError(RelayError):
    """Raised when the request carries no messages to relay."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "No messages provided"


class UpstreamError(RelayError):
    """Raised when the completion service call fails.

    The public message is always generic; the underlying cause is kept in
    ``detail`` for logging only.
    """

    def __init__(self, detail: str = "") -> None:
        super().__init__()
        self.detail = detail

    def __str__(self) -> str:
        return self.detail or self.message
