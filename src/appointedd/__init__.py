"""Appointedd API client.

Client library for the Appointedd booking API: OAuth2 authorization URL
construction, token exchange, and authenticated REST requests with HTTP
failures translated into typed exceptions.

Exports:
    AppointeddClient: HTTP client with OAuth helpers and verb methods.
    ClientConfig: Endpoint and transport configuration.
    TokenResponse: Validated OAuth token response.
    errors: Module containing the exception hierarchy.
"""

from . import errors
from .client import AppointeddClient
from .config import ClientConfig
from .errors import (
    AppointeddError,
    CardError,
    ConflictError,
    HTTPError,
    MissingArgumentError,
    NotFoundError,
    UnauthorizedError,
)
from .types import TokenResponse

__version__ = "0.1.0"

__all__ = [
    "AppointeddClient",
    "AppointeddError",
    "CardError",
    "ClientConfig",
    "ConflictError",
    "HTTPError",
    "MissingArgumentError",
    "NotFoundError",
    "TokenResponse",
    "UnauthorizedError",
    "errors",
]
