"""Errors raised by remote sources."""


class NetworkError(Exception):
    """Base class for failures talking to the news API."""

    message = "Network request failed"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.message)


class InvalidRequest(NetworkError):
    """Request parameters or URL were malformed."""

    message = "Invalid URL"


class Unavailable(NetworkError):
    """No connectivity, or the request could not complete."""

    message = "Network is unavailable"


class ServerError(NetworkError):
    """The API answered with a non-200 status."""

    def __init__(self, code: int, message: str = "") -> None:
        self.code = code
        super().__init__(message or f"Server error with code: {code}")


class DecodeFailure(NetworkError):
    """The response body was not a valid headlines payload."""

    message = "Failed to decode response"
