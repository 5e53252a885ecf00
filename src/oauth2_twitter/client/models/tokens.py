"""Access token model for OAuth 2.0 token responses."""

from __future__ import annotations

import time
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class AccessToken(BaseModel):
    """OAuth 2.0 access token (RFC 6749 Section 5.1).

    Provider-specific values beyond the standard fields are kept as extra
    attributes and exposed through ``values()``.
    """

    model_config = ConfigDict(extra="allow")

    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None  # Seconds until expiry
    expires_at: float | None = None  # Unix timestamp
    refresh_token: str | None = None
    scope: str | None = None

    @model_validator(mode="after")
    def calculate_expires_at(self) -> AccessToken:
        if self.expires_at is None and self.expires_in is not None:
            self.expires_at = time.time() + self.expires_in
        return self

    def has_expired(self) -> bool:
        """Check if the token is past its expiry time.

        Raises:
            ValueError: If the token carries no expiry information
        """
        if self.expires_at is None:
            raise ValueError('"expires" is not set on the token')
        return time.time() >= self.expires_at

    def values(self) -> dict[str, Any]:
        """Additional values returned by the provider."""
        return dict(self.model_extra or {})

    def __str__(self) -> str:
        return self.access_token
