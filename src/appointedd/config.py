"""Client configuration: API domain and HTTP transport."""

import os
from collections.abc import Callable

import httpx
import pydantic

DOMAIN_ENV_VAR = "APPOINTEDD_DOMAIN"
DEFAULT_DOMAIN = "http://api.appointedd.dev"


def default_domain() -> str:
    """Return the domain from the environment, or the compiled-in default."""
    return os.environ.get(DOMAIN_ENV_VAR) or DEFAULT_DOMAIN


def default_transport() -> httpx.Client:
    """Build the HTTP transport used when the caller does not inject one."""
    return httpx.Client(headers={"Accept": "application/json"})


class ClientConfig(pydantic.BaseModel):
    """Configuration for an AppointeddClient.

    The API base URL and both OAuth URLs are derived from ``domain`` so
    they always point at the same host.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    domain: str = pydantic.Field(
        default_factory=default_domain,
        validate_default=True,
        description="Base URL of the Appointedd API",
    )
    transport_factory: Callable[[], httpx.Client] = pydantic.Field(
        default=default_transport,
        description="Builds the HTTP transport when none is injected",
    )

    @pydantic.field_validator("domain")
    @classmethod
    def _strip_domain(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            msg = "domain cannot be empty"
            raise ValueError(msg)
        return value

    @property
    def api_url(self) -> str:
        return self.domain

    @property
    def authorize_url(self) -> str:
        return f"{self.domain}/oauth/authorise"

    @property
    def access_token_url(self) -> str:
        return f"{self.domain}/oauth/access_token"
