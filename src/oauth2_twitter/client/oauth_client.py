"""Generic OAuth 2.0 authorization code client.

Owns the flow plumbing (authorization URL, callback validation, token
exchange, authenticated requests) and delegates everything provider
specific to an injected ``OAuth2Provider``.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import parse_qsl, urlencode

import httpx

from oauth2_twitter.client.models.errors import (
    InvalidResponseFormatError,
    StateValidationError,
    TokenError,
    TransportError,
)
from oauth2_twitter.client.models.flow import AuthorizationResponse
from oauth2_twitter.client.models.requests import OutboundRequest
from oauth2_twitter.client.models.tokens import AccessToken
from oauth2_twitter.client.primitives.auth_headers import attach_bearer_auth
from oauth2_twitter.client.provider import OAuth2Provider, ResourceOwner
from oauth2_twitter.client.services.flow import OAuth2FlowManager
from oauth2_twitter.client.services.security import generate_state
from oauth2_twitter.client.services.tokens import (
    build_token_parameters,
    build_token_request,
    parse_token_response,
)

logger = logging.getLogger(__name__)


class OAuth2Client:
    """OAuth 2.0 authorization code client configured by a provider.

    Typical flow:
    1. ``get_authorization_url()`` and redirect the user
    2. ``handle_authorization_callback()`` on the redirect back
    3. ``get_access_token(code=...)``
    4. ``get_resource_owner(token)``
    """

    def __init__(self, provider: OAuth2Provider, timeout: float = 30.0):
        """Initialize OAuth client.

        Args:
            provider: Identity provider configuration
            timeout: HTTP request timeout in seconds
        """
        self.provider = provider
        self.timeout = timeout
        self._state: str | None = None
        self._flow_manager = OAuth2FlowManager()
        self._http_client = httpx.AsyncClient(timeout=timeout)

    @property
    def state(self) -> str | None:
        """State sent with the most recent authorization request."""
        return self._state

    def get_authorization_parameters(
        self, options: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Build the query parameters for the authorization request.

        Provider additions are applied first, then missing defaults are
        filled in. The caller's mapping is never modified.
        """
        params = self.provider.augment_authorization_parameters(dict(options or {}))

        if not params.get("state"):
            params["state"] = generate_state()

        scopes = params.get("scope") or self.provider.default_scopes()
        if isinstance(scopes, (list, tuple)):
            scopes = self.provider.scope_separator().join(scopes)
        params["scope"] = scopes

        params.setdefault("response_type", "code")
        params.setdefault("redirect_uri", self.provider.redirect_uri)
        params.setdefault("client_id", self.provider.client_id)

        # Stored so the callback can be checked against it
        self._state = params["state"]
        return params

    def get_authorization_url(self, options: dict[str, Any] | None = None) -> str:
        """Build the URL the user visits to grant access."""
        base_url = self.provider.base_authorization_url()
        params = self.get_authorization_parameters(options)
        separator = "&" if "?" in base_url else "?"

        logger.debug(f"Built authorization URL for client {params['client_id']}")
        return f"{base_url}{separator}{urlencode(params)}"

    def handle_authorization_callback(
        self, callback_url: str, expected_state: str | None = None
    ) -> AuthorizationResponse:
        """Validate the redirect back from the authorization server.

        Args:
            callback_url: Full callback URL
            expected_state: State to check against; defaults to the state of
                the last authorization URL built by this client

        Raises:
            StateValidationError: If no state is known or it doesn't match
        """
        expected = expected_state or self._state
        if expected is None:
            raise StateValidationError("No authorization state to validate against")
        return self._flow_manager.handle_authorization_callback(callback_url, expected)

    async def get_access_token(
        self, grant: str = "authorization_code", **options: Any
    ) -> AccessToken:
        """Request an access token from the provider's token endpoint.

        Args:
            grant: ``authorization_code`` or ``refresh_token``
            **options: Grant parameters, e.g. ``code`` or ``refresh_token``

        Raises:
            TokenError: If the grant is invalid or the response is not a token
            IdentityProviderError: If the provider rejects the request
        """
        params = build_token_parameters(
            grant,
            self.provider.client_id,
            self.provider.client_secret,
            self.provider.redirect_uri,
            options,
        )
        params = self.provider.augment_access_token_parameters(params)

        request = build_token_request(
            self.provider.base_access_token_url(params), params
        )
        request = self.provider.augment_access_token_request(request)

        logger.debug(
            f"Token request: grant_type={params['grant_type']}, "
            f"client_id={params['client_id']}"
        )

        response = await self.get_parsed_response(request)
        return parse_token_response(response)

    async def refresh_access_token(self, token: AccessToken | str) -> AccessToken:
        """Exchange a refresh token for a new access token."""
        if isinstance(token, AccessToken):
            if not token.refresh_token:
                raise TokenError("Access token has no refresh_token")
            refresh_token = token.refresh_token
        else:
            refresh_token = token

        return await self.get_access_token("refresh_token", refresh_token=refresh_token)

    def get_authenticated_request(
        self, method: str, url: str, token: AccessToken | str
    ) -> OutboundRequest:
        """Build a request authenticated with the access token."""
        request = OutboundRequest(
            method=method, url=url, headers={"Accept": "application/json"}
        )
        return attach_bearer_auth(request, token)

    async def get_response(self, request: OutboundRequest) -> httpx.Response:
        """Send a request and return the raw HTTP response.

        Raises:
            TransportError: If the request could not be completed
        """
        try:
            return await self._http_client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.HTTPError as e:
            raise TransportError(
                f"HTTP error during {request.method} {request.url}: {e}"
            ) from e

    async def get_parsed_response(self, request: OutboundRequest) -> Any:
        """Send a request, parse the body and let the provider check it.

        Raises:
            InvalidResponseFormatError: If a JSON body cannot be parsed
            IdentityProviderError: If the provider classifies the response
                as a failure
        """
        response = await self.get_response(request)
        parsed = self._parse_response(response)

        self.provider.classify_response(response.status_code, parsed)
        return parsed

    def _parse_response(self, response: httpx.Response) -> Any:
        """Parse a response body as JSON, form data or plain text."""
        content_type = response.headers.get("content-type", "")

        if "urlencoded" in content_type:
            return dict(parse_qsl(response.text))

        try:
            return response.json()
        except ValueError as e:
            if "json" in content_type:
                raise InvalidResponseFormatError(
                    f"Failed to parse JSON response: {e}"
                ) from e
            if response.status_code == 500:
                raise InvalidResponseFormatError(
                    "An OAuth server error was encountered that did not "
                    "contain a JSON body"
                ) from e
            return response.text

    async def get_resource_owner(self, token: AccessToken) -> ResourceOwner:
        """Fetch and wrap the authenticated user."""
        details = await self.provider.fetch_resource_owner_details(self, token)
        return self.provider.build_resource_owner(details, token)

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._http_client.aclose()

    async def __aenter__(self) -> OAuth2Client:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
