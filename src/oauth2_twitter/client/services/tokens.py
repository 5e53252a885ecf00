"""Token endpoint request building and response parsing.

Implements RFC 6749 access token requests for the authorization code
(Section 4.1.3) and refresh token (Section 6) grants.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlencode

from pydantic import ValidationError

from oauth2_twitter.client.models.errors import TokenError
from oauth2_twitter.client.models.requests import OutboundRequest
from oauth2_twitter.client.models.tokens import AccessToken

logger = logging.getLogger(__name__)

# Parameters each supported grant must receive from the caller
GRANT_REQUIRED_PARAMETERS: dict[str, tuple[str, ...]] = {
    "authorization_code": ("code",),
    "refresh_token": ("refresh_token",),
}


def build_token_parameters(
    grant: str,
    client_id: str,
    client_secret: str,
    redirect_uri: str,
    options: dict[str, Any],
) -> dict[str, str]:
    """Build form parameters for a token request.

    Args:
        grant: Grant type name
        client_id: OAuth client ID
        client_secret: OAuth client secret
        redirect_uri: Redirect URI registered with the provider
        options: Grant-specific parameters supplied by the caller

    Returns:
        Form parameters, caller options taking precedence over defaults

    Raises:
        TokenError: If the grant is unsupported or a required option is missing
    """
    if grant not in GRANT_REQUIRED_PARAMETERS:
        raise TokenError(f"Grant \"{grant}\" is not supported")

    for name in GRANT_REQUIRED_PARAMETERS[grant]:
        if not options.get(name):
            raise TokenError(f"Required parameter not passed: \"{name}\"")

    params = {
        "client_id": client_id,
        "client_secret": client_secret,
        "redirect_uri": redirect_uri,
        "grant_type": grant,
    }
    params.update({key: str(value) for key, value in options.items()})
    return params


def build_token_request(token_url: str, params: dict[str, str]) -> OutboundRequest:
    """Build a form-encoded POST request for the token endpoint.

    Token requests must use form encoding, not JSON (RFC 6749 Section 4.1.3).
    """
    return OutboundRequest(
        method="POST",
        url=token_url,
        headers={
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        },
        body=urlencode(params),
    )


def parse_token_response(response_data: Any) -> AccessToken:
    """Parse a successful token endpoint response into an AccessToken.

    Raises:
        TokenError: If the response is not a token response
    """
    if not isinstance(response_data, dict):
        raise TokenError("Token response is not a JSON object")

    if "access_token" not in response_data:
        raise TokenError("Token response missing required access_token")

    try:
        token = AccessToken(**response_data)
    except ValidationError as e:
        raise TokenError(f"Invalid token response format: {e}") from e

    logger.info("Token exchange successful")
    return token
