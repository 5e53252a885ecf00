"""Authorization callback handling.

Parses the redirect back from the authorization server and checks the
state parameter before the code is exchanged for a token.
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs, urlparse

from oauth2_twitter.client.models.errors import (
    AuthorizationCallbackError,
    AuthorizationError,
    StateValidationError,
)
from oauth2_twitter.client.models.flow import AuthorizationResponse
from oauth2_twitter.client.services.security import validate_state

logger = logging.getLogger(__name__)


def parse_callback_url(callback_url: str) -> AuthorizationResponse:
    """Parse OAuth callback URL into AuthorizationResponse.

    Args:
        callback_url: Full callback URL from authorization server

    Returns:
        AuthorizationResponse: Parsed callback parameters

    Raises:
        AuthorizationCallbackError: If URL is malformed
    """
    try:
        parsed = urlparse(callback_url)
        query_params = parse_qs(parsed.query)
    except ValueError as e:
        raise AuthorizationCallbackError(f"Failed to parse callback URL: {e}") from e

    def get_single_param(key: str) -> str | None:
        values = query_params.get(key, [])
        return values[0] if values else None

    return AuthorizationResponse(
        code=get_single_param("code"),
        state=get_single_param("state"),
        error=get_single_param("error"),
        error_description=get_single_param("error_description"),
        error_uri=get_single_param("error_uri"),
    )


class OAuth2FlowManager:
    """Validates authorization callbacks against the state that was sent."""

    def handle_authorization_callback(
        self,
        callback_url: str,
        expected_state: str,
    ) -> AuthorizationResponse:
        """Handle OAuth authorization callback from the authorization server.

        Args:
            callback_url: Full callback URL received from authorization server
            expected_state: State parameter that was sent in authorization request

        Returns:
            AuthorizationResponse: Parsed callback carrying an authorization code

        Raises:
            AuthorizationCallbackError: If callback URL is malformed or has no code
            StateValidationError: If state parameter is missing or doesn't match
            AuthorizationError: If the server reported an authorization error
        """
        logger.debug("Processing authorization callback")

        auth_response = parse_callback_url(callback_url)

        if auth_response.state is None:
            raise StateValidationError(
                "Authorization server callback missing required state parameter"
            )

        validate_state(expected_state, auth_response.state)

        if auth_response.is_error():
            logger.warning(
                f"Authorization callback contained error: {auth_response.error} - "
                f"{auth_response.error_description}"
            )
            raise AuthorizationError(
                f"Authorization failed: {auth_response.error} "
                f"({auth_response.error_description or ''}) "
                f"{'See: ' + auth_response.error_uri if auth_response.error_uri else ''}"
            )

        if auth_response.code is None:
            raise AuthorizationCallbackError("Missing authorization code")

        logger.info("Authorization callback successful - received authorization code")
        return auth_response
