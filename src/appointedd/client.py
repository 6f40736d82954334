"""Appointedd API client.

Provides OAuth2 authorization URL construction, token exchange, and
authenticated GET/PUT/POST/DELETE requests. All network I/O goes through
an injectable ``httpx.Client`` compatible transport.
"""

import time
from collections.abc import Mapping
from typing import Any, Literal, TypeAlias
from urllib.parse import quote_plus

import httpx
import pydantic
import structlog

from . import errors
from .config import ClientConfig
from .types import TokenResponse

logger = structlog.get_logger(__name__)

ACCESS_TOKEN_HEADER = "Access-Token"

RequestData: TypeAlias = Mapping[str, str] | None
HTTPMethod: TypeAlias = Literal["GET", "PUT", "POST", "DELETE"]


def _require(value: str | None, argument: str, name: str) -> str:
    """Return value, raising MissingArgumentError if it is empty."""
    if not value:
        msg = f"Missing{name}"
        raise errors.MissingArgumentError(argument, msg)
    return value


def _parse_body(response: httpx.Response) -> Any:
    """Decode a JSON response body, or None if it is unreadable or not JSON."""
    try:
        response.read()
        return response.json()
    except (httpx.StreamError, ValueError):
        return None


class AppointeddClient:
    """HTTP client for the Appointedd API.

    Instances are configured once through the constructor or one of the
    ``with_*`` factories and never change afterwards; ``using_token``
    returns a new client instead of updating this one.

    A transport passed in by the caller is borrowed and left open by
    ``close()``. A transport built from ``config.transport_factory`` is
    owned and closed by the client. Can be used as a context manager.
    """

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        access_token: str | None = None,
        *,
        transport: httpx.Client | None = None,
        config: ClientConfig | None = None,
    ):
        """Initialize the API client.

        Args:
            client_id: OAuth client id, merged into every API request.
            client_secret: OAuth client secret, sent on token exchange.
            access_token: Token sent in the Access-Token header.
            transport: HTTP client to borrow; built from config if omitted.
            config: Endpoint configuration; defaults to ClientConfig().
        """
        self._client_id = client_id or None
        self._client_secret = client_secret or None
        self._access_token = access_token or None
        self._config = config or ClientConfig()

        self._owns_transport = transport is None
        if transport is None:
            transport = self._config.transport_factory()
        self._transport = transport

    @classmethod
    def with_access_token(
        cls,
        access_token: str | None,
        *,
        transport: httpx.Client | None = None,
        config: ClientConfig | None = None,
    ) -> "AppointeddClient":
        """Create a client that sends a pre-obtained access token.

        Raises:
            MissingArgumentError: If access_token is empty.
        """
        _require(access_token, "access_token", "AccessToken")
        return cls(access_token=access_token, transport=transport, config=config)

    @classmethod
    def with_client_credentials(
        cls,
        client_id: str | None,
        client_secret: str | None,
        *,
        transport: httpx.Client | None = None,
        config: ClientConfig | None = None,
    ) -> "AppointeddClient":
        """Create a client for the OAuth flows, with no token yet.

        Raises:
            MissingArgumentError: If client_id or client_secret is empty.
        """
        _require(client_id, "client_id", "ClientId")
        _require(client_secret, "client_secret", "ClientSecret")
        return cls(
            client_id=client_id,
            client_secret=client_secret,
            transport=transport,
            config=config,
        )

    @classmethod
    def with_client_id(
        cls,
        client_id: str | None,
        *,
        transport: httpx.Client | None = None,
        config: ClientConfig | None = None,
    ) -> "AppointeddClient":
        """Create a client that can only build authorization URLs.

        Raises:
            MissingArgumentError: If client_id is empty.
        """
        _require(client_id, "client_id", "ClientId")
        return cls(client_id=client_id, transport=transport, config=config)

    def using_token(self, access_token: str | None) -> "AppointeddClient":
        """Return a copy of this client that sends ``access_token``.

        The copy shares credentials, config and transport; it never owns
        the transport, so closing it leaves this client usable.
        """
        _require(access_token, "access_token", "AccessToken")
        return AppointeddClient(
            client_id=self._client_id,
            client_secret=self._client_secret,
            access_token=access_token,
            transport=self._transport,
            config=self._config,
        )

    @property
    def client_id(self) -> str | None:
        return self._client_id

    @property
    def client_secret(self) -> str | None:
        return self._client_secret

    @property
    def access_token(self) -> str | None:
        return self._access_token

    @property
    def config(self) -> ClientConfig:
        return self._config

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and cleanup resources."""
        self.close()

    def close(self):
        """Close the transport if this client created it."""
        if self._owns_transport:
            self._transport.close()

    def build_authorize_url(
        self,
        callback_url: str,
        *,
        include_secret: bool = False,
    ) -> str:
        """Build the URL to send the user to for OAuth authorization.

        Only the callback URL is percent-encoded; the client id and secret
        are inserted as they are.

        Args:
            callback_url: Where the API redirects back to with the code.
            include_secret: Also add client_secret to the query string.

        Returns:
            Full authorization URL ending with the encoded callback.
        """
        url = f"{self._config.authorize_url}?response_type=code"
        url += f"&client_id={self._client_id or ''}"
        if include_secret and self._client_secret:
            url += f"&client_secret={self._client_secret}"
        url += "&state=requested"
        url += f"&redirect_uri={quote_plus(callback_url)}"
        return url

    def exchange_code_for_token(
        self,
        code: str | None,
        callback_url: str,
    ) -> TokenResponse:
        """Exchange an authorization code for an access token.

        The token is returned, not stored; call ``using_token`` to get a
        client that sends it.

        Raises:
            MissingArgumentError: If code is empty.
            HTTPError: If the request fails or returns no access token.
        """
        _require(code, "code", "Code")
        params = {
            "grant_type": "authorization_code",
            "code": code,
            "client_id": self._client_id or "",
            "client_secret": self._client_secret or "",
            "redirect_uri": callback_url,
            "response_type": "token",
        }
        return self._request_token(params)

    def exchange_login_for_token(
        self,
        username: str | None,
        password: str | None,
    ) -> TokenResponse:
        """Exchange a username and password for an access token.

        Raises:
            MissingArgumentError: If username or password is empty
                (username is checked first).
            HTTPError: If the request fails or returns no access token.
        """
        _require(username, "username", "Username")
        _require(password, "password", "Password")
        params = {
            "grant_type": "password",
            "client_id": self._client_id or "",
            "client_secret": self._client_secret or "",
            "username": username,
            "password": password,
        }
        return self._request_token(params)

    def get(self, endpoint: str, data: RequestData = None) -> httpx.Response:
        """GET an API endpoint, sending data as the query string."""
        return self._call("GET", endpoint, data)

    def put(self, endpoint: str, data: RequestData = None) -> httpx.Response:
        """PUT to an API endpoint, sending data as a form body."""
        return self._call("PUT", endpoint, data)

    def post(self, endpoint: str, data: RequestData = None) -> httpx.Response:
        """POST to an API endpoint, sending data as a form body."""
        return self._call("POST", endpoint, data)

    def delete(self, endpoint: str, data: RequestData = None) -> httpx.Response:
        """DELETE an API endpoint, sending data as the query string."""
        return self._call("DELETE", endpoint, data)

    def _call(
        self,
        method: HTTPMethod,
        endpoint: str,
        data: RequestData,
    ) -> httpx.Response:
        url = f"{self._config.api_url}/{endpoint.lstrip('/')}"
        merged = dict(data or {})
        if self._client_id:
            merged["client_id"] = self._client_id
        return self._make_request(method, url, merged)

    def _request_token(self, params: dict[str, str]) -> TokenResponse:
        """POST to the access-token endpoint and validate the token response."""
        response = self._make_request(
            "POST",
            self._config.access_token_url,
            params,
            send_token=False,
        )
        body = _parse_body(response)
        try:
            return TokenResponse.model_validate(body)
        except pydantic.ValidationError as exc:
            msg = "Token response did not contain an access_token"
            raise errors.HTTPError(msg, code=response.status_code, body=body) from exc

    def _make_request(
        self,
        method: HTTPMethod,
        url: str,
        data: dict[str, str],
        *,
        send_token: bool = True,
    ) -> httpx.Response:
        """Send one request through the transport and check its status.

        GET and DELETE send data as the query string; PUT and POST send it
        as a form-encoded body. The access token travels in the
        Access-Token header only.

        Returns:
            The transport's response, unmodified.

        Raises:
            HTTPError: Or one of its subclasses, per the response status.
                Transport failures raise HTTPError without a code.
        """
        headers = {}
        if send_token and self._access_token:
            headers[ACCESS_TOKEN_HEADER] = self._access_token

        start_time = time.time()
        # Parameter values may hold secrets; log names only.
        logger.debug("Making API request", method=method, url=url, params=sorted(data))
        try:
            if method == "GET":
                response = self._transport.get(url, params=data, headers=headers)
            elif method == "DELETE":
                response = self._transport.delete(url, params=data, headers=headers)
            elif method == "PUT":
                response = self._transport.put(url, data=data, headers=headers)
            else:
                response = self._transport.post(url, data=data, headers=headers)
        except httpx.HTTPStatusError as exc:
            # Raised by transports with a raise_for_status response hook.
            raise errors.error_for_status(
                exc.response.status_code,
                str(exc),
                _parse_body(exc.response),
            ) from exc
        except httpx.RequestError as exc:
            raise errors.HTTPError(str(exc) or type(exc).__name__) from exc

        duration = time.time() - start_time
        logger.debug(
            "API request completed",
            status=response.status_code,
            duration_seconds=round(duration, 3),
        )

        if response.is_error:
            code = response.status_code
            msg = f"{method} {url} failed with status {code} {response.reason_phrase}"
            raise errors.error_for_status(code, msg, _parse_body(response))
        return response
