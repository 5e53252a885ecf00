"""Tests for authorization callback parsing and state validation."""

import pytest

from oauth2_twitter.client.models.errors import (
    AuthorizationCallbackError,
    AuthorizationError,
    StateValidationError,
)
from oauth2_twitter.client.services.flow import OAuth2FlowManager, parse_callback_url
from oauth2_twitter.client.services.security import generate_state, validate_state


class TestParseCallbackUrl:
    def test_parses_code_and_state(self):
        response = parse_callback_url(
            "https://myapp.com/callback?code=auth-code&state=xyz"
        )

        assert response.code == "auth-code"
        assert response.state == "xyz"
        assert response.is_success()
        assert not response.is_error()

    def test_parses_error_fields(self):
        response = parse_callback_url(
            "https://myapp.com/callback?error=access_denied"
            "&error_description=User+denied&state=xyz"
        )

        assert response.is_error()
        assert response.error == "access_denied"
        assert response.error_description == "User denied"
        assert response.code is None


class TestHandleAuthorizationCallback:
    def setup_method(self):
        self.flow_manager = OAuth2FlowManager()

    def test_valid_callback_returns_response(self):
        response = self.flow_manager.handle_authorization_callback(
            "https://myapp.com/callback?code=auth-code&state=expected", "expected"
        )

        assert response.code == "auth-code"

    def test_state_mismatch_raises(self):
        with pytest.raises(StateValidationError):
            self.flow_manager.handle_authorization_callback(
                "https://myapp.com/callback?code=auth-code&state=other", "expected"
            )

    def test_missing_state_raises(self):
        with pytest.raises(StateValidationError):
            self.flow_manager.handle_authorization_callback(
                "https://myapp.com/callback?code=auth-code", "expected"
            )

    def test_error_callback_raises_authorization_error(self):
        with pytest.raises(AuthorizationError) as exc_info:
            self.flow_manager.handle_authorization_callback(
                "https://myapp.com/callback?error=access_denied&state=expected",
                "expected",
            )

        assert "access_denied" in str(exc_info.value)

    def test_missing_code_raises(self):
        with pytest.raises(AuthorizationCallbackError):
            self.flow_manager.handle_authorization_callback(
                "https://myapp.com/callback?state=expected", "expected"
            )


class TestState:
    def test_generate_state_is_random(self):
        first = generate_state()
        second = generate_state()

        assert len(first) == 32
        assert first != second

    def test_validate_state_accepts_match(self):
        validate_state("abc", "abc")

    def test_validate_state_rejects_mismatch(self):
        with pytest.raises(StateValidationError):
            validate_state("abc", "abd")
