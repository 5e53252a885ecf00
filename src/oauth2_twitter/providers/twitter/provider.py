"""Twitter/X OAuth 2.0 provider.

Configures ``OAuth2Client`` for Twitter's authorization code flow with PKCE:
https://developer.twitter.com/en/docs/authentication/oauth-2-0/authorization-code
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any
from urllib.parse import urlencode

from oauth2_twitter.client.models.errors import InvalidResponseFormatError, PKCEError
from oauth2_twitter.client.models.requests import OutboundRequest
from oauth2_twitter.client.models.tokens import AccessToken
from oauth2_twitter.client.primitives.auth_headers import attach_basic_auth
from oauth2_twitter.client.primitives.pkce import (
    derive_code_challenge,
    generate_code_verifier,
    is_valid_code_verifier,
)
from oauth2_twitter.providers.twitter.errors import TwitterIdentityProviderError
from oauth2_twitter.providers.twitter.resource_owner import TwitterResourceOwner

if TYPE_CHECKING:
    from oauth2_twitter.client.oauth_client import OAuth2Client
    from oauth2_twitter.config import ClientConfig

logger = logging.getLogger(__name__)

AUTHORIZATION_URL = "https://twitter.com/i/oauth2/authorize"
TOKEN_URL = "https://api.twitter.com/2/oauth2/token"
RESOURCE_OWNER_URL = "https://api.twitter.com/2/users/me"
USER_FIELDS = "id,name,profile_image_url,username"


class TwitterProvider:
    """Twitter OAuth 2.0 provider with PKCE support.

    Holds one PKCE verifier per instance. The verifier is generated on first
    use and never changes afterwards, so the challenge sent with the
    authorization request matches the verifier sent with the token request.
    To complete a flow in a different process, pass the stored verifier back
    in through ``pkce_verifier``.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        pkce_verifier: str | None = None,
    ) -> None:
        """Initialize Twitter provider.

        Args:
            client_id: Twitter OAuth 2.0 client ID
            client_secret: Twitter OAuth 2.0 client secret
            redirect_uri: Callback URL registered with Twitter
            pkce_verifier: Previously issued verifier to resume a flow with

        Raises:
            PKCEError: If ``pkce_verifier`` is not a valid RFC 7636 verifier
        """
        if pkce_verifier is not None and not is_valid_code_verifier(pkce_verifier):
            raise PKCEError("pkce_verifier must be 43-128 unreserved characters")

        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

        self._pkce_verifier = pkce_verifier
        self._pkce_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: ClientConfig) -> TwitterProvider:
        return cls(
            client_id=config.client_id,
            client_secret=config.client_secret,
            redirect_uri=config.redirect_uri,
        )

    def get_pkce_verifier(self) -> str:
        """Get the PKCE verifier for this instance, creating it on first use."""
        if self._pkce_verifier is None:
            with self._pkce_lock:
                # Another thread may have created it while we waited
                if self._pkce_verifier is None:
                    self._pkce_verifier = generate_code_verifier()
                    logger.debug("Generated PKCE verifier")
        return self._pkce_verifier

    def generate_pkce_challenge(self, verifier: str | None = None) -> str:
        """Get the S256 challenge for ``verifier`` or this instance's verifier."""
        if verifier is None:
            verifier = self.get_pkce_verifier()
        return derive_code_challenge(verifier)

    def base_authorization_url(self) -> str:
        return AUTHORIZATION_URL

    def augment_authorization_parameters(
        self, options: dict[str, Any]
    ) -> dict[str, Any]:
        """Add the PKCE challenge unless the caller already supplied one."""
        params = dict(options)
        if "code_challenge" not in params:
            params["code_challenge"] = self.generate_pkce_challenge()
            params["code_challenge_method"] = "S256"
            logger.debug("Added PKCE challenge to authorization parameters")
        return params

    def base_access_token_url(self, params: dict[str, str]) -> str:
        return TOKEN_URL

    def augment_access_token_parameters(
        self, params: dict[str, str]
    ) -> dict[str, str]:
        """Send the PKCE verifier with authorization code exchanges."""
        params = dict(params)
        if params.get("grant_type") == "authorization_code":
            params.setdefault("code_verifier", self.get_pkce_verifier())
        return params

    def augment_access_token_request(
        self, request: OutboundRequest
    ) -> OutboundRequest:
        """Authenticate the token request with the client credentials."""
        return attach_basic_auth(request, self.client_id, self.client_secret)

    def resource_owner_details_url(self, token: AccessToken) -> str:
        return RESOURCE_OWNER_URL

    async def fetch_resource_owner_details(
        self, client: OAuth2Client, token: AccessToken
    ) -> dict[str, Any]:
        """Fetch the authenticated user from ``/2/users/me``.

        Raises:
            InvalidResponseFormatError: If the response is not a JSON object
        """
        url = (
            f"{self.resource_owner_details_url(token)}?"
            f"{urlencode({'user.fields': USER_FIELDS})}"
        )
        request = client.get_authenticated_request("GET", url, token)

        response = await client.get_parsed_response(request)

        if not isinstance(response, Mapping):
            raise InvalidResponseFormatError(
                "Invalid response received from Authorization Server. Expected JSON."
            )

        return dict(response)

    def default_scopes(self) -> list[str]:
        return [
            "tweet.read",
            "users.read",
            "offline.access",
        ]

    def scope_separator(self) -> str:
        return " "

    def classify_response(self, status_code: int, data: Any) -> None:
        """Raise ``TwitterIdentityProviderError`` for any non-200 response.

        The body of a 200 response is not inspected.
        """
        if status_code == 200:
            return

        fields = data if isinstance(data, Mapping) else {}
        message = fields.get("error_description") or ""
        code = fields.get("code")
        if code is None:
            code = status_code

        logger.warning(f"Twitter request failed with {status_code}: {code} {message}")
        raise TwitterIdentityProviderError(message, code, data)

    def build_resource_owner(
        self, response: dict[str, Any], token: AccessToken
    ) -> TwitterResourceOwner:
        return TwitterResourceOwner(response)
