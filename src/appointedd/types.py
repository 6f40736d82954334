"""Response types for the Appointedd OAuth endpoints.

Pydantic models validating the JSON returned by the token endpoint.
"""

from pydantic import BaseModel, ConfigDict, Field


class TokenResponse(BaseModel):
    """Token returned by the OAuth access-token endpoint.

    Only ``access_token`` is guaranteed; any other fields the server sends
    are kept as extra attributes.
    """

    model_config = ConfigDict(extra="allow")

    access_token: str = Field(min_length=1)
    token_type: str | None = None
    expires_in: int | None = None
    refresh_token: str | None = None
    scope: str | None = None
