"""Exception hierarchy for OAuth 2.0 client and provider errors.

Provides specific exception types for different failure modes so callers
can branch on provider-level, format-level and field-level failures.
"""

from __future__ import annotations

from typing import Any


class OAuth2Error(Exception):
    """Base exception for all OAuth 2.0 related errors."""

    pass


class IdentityProviderError(OAuth2Error):
    """Raised when the identity provider rejects a request.

    Carries the provider's error message, an error code (the provider's own
    code when it sends one, otherwise the HTTP status) and the raw parsed
    response body for diagnostics.
    """

    def __init__(
        self, message: str, code: int | str, response_body: Any = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.response_body = response_body

    def __str__(self) -> str:
        if self.message:
            return f"{self.message} (code: {self.code})"
        return f"Identity provider error (code: {self.code})"


class InvalidResponseFormatError(OAuth2Error, ValueError):
    """Raised when the server returns a body that is not the expected JSON shape."""

    pass


class MissingFieldError(OAuth2Error, LookupError):
    """Raised when a required resource owner field is absent."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Resource owner response is missing field '{field}'")
        self.field = field


class TransportError(OAuth2Error):
    """Raised when an HTTP request cannot be completed."""

    pass


class TokenError(OAuth2Error):
    """Raised when token operations fail."""

    pass


class AuthorizationError(OAuth2Error):
    """Raised when user authorization fails."""

    pass


class PKCEError(OAuth2Error):
    """Raised when PKCE parameter generation or validation fails."""

    pass


class AuthorizationCallbackError(OAuth2Error):
    """Raised when authorization server callback data is malformed or invalid.

    This indicates the authorization server sent an invalid callback URL,
    not that our callback handling code failed.
    """

    pass


class StateValidationError(AuthorizationCallbackError):
    """Raised when OAuth state parameter validation fails.

    This indicates either a missing state parameter or a state mismatch,
    which could indicate a CSRF attack or authorization server issue.
    """

    pass
