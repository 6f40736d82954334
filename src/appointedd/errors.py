"""Exception hierarchy for the Appointedd API client.

Every failure is raised to the caller. Request failures carry the HTTP
status code and the parsed response body when they are available.
"""

from typing import Any


class AppointeddError(Exception):
    """Base exception for all Appointedd client errors."""

    def __init__(self, message: str, code: int | None = None, body: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.body = body


class MissingArgumentError(AppointeddError, ValueError):
    """Raised when a required argument is empty, before any network call."""

    def __init__(self, argument: str, message: str):
        super().__init__(message)
        self.argument = argument


class HTTPError(AppointeddError):
    """Raised when a request fails with an error status or at the transport."""


class UnauthorizedError(HTTPError):
    """401: the access token or client credentials were rejected."""


class CardError(HTTPError):
    """402: payment required."""


class NotFoundError(HTTPError):
    """404: the requested resource does not exist."""


class ConflictError(HTTPError):
    """409: the request conflicts with the resource's current state."""


_STATUS_ERRORS: dict[int, type[HTTPError]] = {
    401: UnauthorizedError,
    402: CardError,
    404: NotFoundError,
    409: ConflictError,
}


def error_for_status(code: int, message: str, body: Any = None) -> HTTPError:
    """Build the exception matching an HTTP error status.

    Args:
        code: HTTP status code of the failed response.
        message: Human readable description of the failure.
        body: Parsed response body, or None if it could not be parsed.

    Returns:
        The mapped exception; HTTPError for any unmapped status.
    """
    error_cls = _STATUS_ERRORS.get(code, HTTPError)
    return error_cls(message, code=code, body=body)
