"""Provider extension points for the generic OAuth 2.0 client.

A provider is a strategy object handed to ``OAuth2Client``. It supplies the
endpoints, scopes and request/response customizations for one identity
provider; the client owns the authorization code flow and HTTP plumbing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from oauth2_twitter.client.models.requests import OutboundRequest
from oauth2_twitter.client.models.tokens import AccessToken

if TYPE_CHECKING:
    from oauth2_twitter.client.oauth_client import OAuth2Client


class ResourceOwner(Protocol):
    """Authenticated end user returned by a provider."""

    @property
    def id(self) -> str: ...

    def to_dict(self) -> dict[str, Any]: ...


class OAuth2Provider(Protocol):
    """Capability set an identity provider implements for ``OAuth2Client``."""

    client_id: str
    client_secret: str
    redirect_uri: str

    def base_authorization_url(self) -> str:
        """Authorization page endpoint."""
        ...

    def augment_authorization_parameters(
        self, options: dict[str, Any]
    ) -> dict[str, Any]:
        """Return authorization parameters with provider additions merged in."""
        ...

    def base_access_token_url(self, params: dict[str, str]) -> str:
        """Token endpoint for the given grant parameters."""
        ...

    def augment_access_token_parameters(
        self, params: dict[str, str]
    ) -> dict[str, str]:
        """Return token request parameters with provider additions merged in."""
        ...

    def augment_access_token_request(
        self, request: OutboundRequest
    ) -> OutboundRequest:
        """Return the token request with provider headers applied."""
        ...

    def resource_owner_details_url(self, token: AccessToken) -> str:
        """Endpoint describing the authenticated user."""
        ...

    async def fetch_resource_owner_details(
        self, client: OAuth2Client, token: AccessToken
    ) -> dict[str, Any]:
        """Fetch the raw resource owner payload through the client."""
        ...

    def default_scopes(self) -> list[str]:
        """Scopes requested when the caller passes none."""
        ...

    def scope_separator(self) -> str:
        """Separator used to join scopes into the ``scope`` parameter."""
        ...

    def classify_response(self, status_code: int, data: Any) -> None:
        """Raise a provider error if the response signals failure."""
        ...

    def build_resource_owner(
        self, response: dict[str, Any], token: AccessToken
    ) -> ResourceOwner:
        """Wrap a fetched resource owner payload."""
        ...
