"""Twitter provider errors."""

from __future__ import annotations

from oauth2_twitter.client.models.errors import IdentityProviderError


class TwitterIdentityProviderError(IdentityProviderError):
    """Raised when the Twitter API responds with a non-200 status."""

    pass
