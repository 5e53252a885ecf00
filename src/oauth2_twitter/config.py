"""Client configuration.

Credentials can be passed directly or read from the environment (and a
``.env`` file) with ``ClientConfig.from_env()``:

    TWITTER_OAUTH_CLIENT_ID=...
    TWITTER_OAUTH_CLIENT_SECRET=...
    TWITTER_OAUTH_REDIRECT_URI=http://localhost:8080/callback
    TWITTER_OAUTH_TIMEOUT=30
"""

from __future__ import annotations

import os
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


class ClientConfig(BaseModel):
    """OAuth 2.0 client registration for one provider."""

    client_id: str = Field(min_length=1)
    client_secret: str = Field(min_length=1)
    redirect_uri: str
    timeout: float = Field(default=30.0, gt=0)

    @field_validator("redirect_uri")
    @classmethod
    def validate_redirect_uri(cls, v: str) -> str:
        """Redirect URI must use HTTPS unless it points at localhost."""
        parsed = urlparse(v)
        if parsed.scheme == "https":
            return v
        if parsed.scheme == "http" and parsed.hostname in ("localhost", "127.0.0.1"):
            return v
        raise ValueError(f"Redirect URI must use HTTPS or localhost: {v}")

    @classmethod
    def from_env(cls, prefix: str = "TWITTER_OAUTH_") -> ClientConfig:
        """Load configuration from environment variables.

        Raises:
            ValueError: If a required variable is not set
        """
        load_dotenv()

        values: dict[str, str] = {}
        for name in ("client_id", "client_secret", "redirect_uri"):
            value = os.getenv(f"{prefix}{name.upper()}")
            if not value:
                raise ValueError(f"{prefix}{name.upper()} must be configured")
            values[name] = value

        timeout = os.getenv(f"{prefix}TIMEOUT")
        if timeout:
            values["timeout"] = timeout

        return cls(**values)
