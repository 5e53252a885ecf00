"""Authorization header helpers.

Bearer attachment for authenticated resource requests and HTTP Basic
client authentication for token requests (RFC 6749 Section 2.3.1).
"""

from __future__ import annotations

import base64

from oauth2_twitter.client.models.requests import OutboundRequest
from oauth2_twitter.client.models.tokens import AccessToken


def attach_bearer_auth(
    request: OutboundRequest, token: AccessToken | str
) -> OutboundRequest:
    """Return a copy of the request carrying a bearer Authorization header."""
    return request.with_header("Authorization", f"Bearer {token}")


def basic_credentials(client_id: str, client_secret: str) -> str:
    """Encode client credentials for HTTP Basic authentication."""
    raw = f"{client_id}:{client_secret}".encode("utf-8")
    return base64.b64encode(raw).decode("ascii")


def attach_basic_auth(
    request: OutboundRequest, client_id: str, client_secret: str
) -> OutboundRequest:
    """Return a copy of the request carrying a Basic Authorization header.

    Credentials are not validated; empty values produce a header that the
    server will reject.
    """
    credentials = basic_credentials(client_id, client_secret)
    return request.with_header("Authorization", f"Basic {credentials}")
