import pytest
from pydantic import ValidationError

from oauth2_twitter.config import ClientConfig


class TestClientConfig:
    def test_valid_config(self):
        config = ClientConfig(
            client_id="client",
            client_secret="secret",
            redirect_uri="https://myapp.com/callback",
        )

        assert config.timeout == 30.0

    def test_http_redirect_uri_rejected(self):
        with pytest.raises(ValidationError):
            ClientConfig(
                client_id="client",
                client_secret="secret",
                redirect_uri="http://myapp.com/callback",
            )

    def test_empty_client_id_rejected(self):
        with pytest.raises(ValidationError):
            ClientConfig(
                client_id="",
                client_secret="secret",
                redirect_uri="https://myapp.com/callback",
            )


class TestFromEnv:
    def test_loads_prefixed_variables(self, monkeypatch, tmp_path):
        # Arrange
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("TWITTER_OAUTH_CLIENT_ID", "env-client")
        monkeypatch.setenv("TWITTER_OAUTH_CLIENT_SECRET", "env-secret")
        monkeypatch.setenv("TWITTER_OAUTH_REDIRECT_URI", "http://localhost:8080/cb")
        monkeypatch.setenv("TWITTER_OAUTH_TIMEOUT", "5")

        # Act
        config = ClientConfig.from_env()

        # Assert
        assert config.client_id == "env-client"
        assert config.client_secret == "env-secret"
        assert config.redirect_uri == "http://localhost:8080/cb"
        assert config.timeout == 5.0

    def test_missing_variable_raises(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("APP_CLIENT_ID", "env-client")
        monkeypatch.delenv("APP_CLIENT_SECRET", raising=False)
        monkeypatch.setenv("APP_REDIRECT_URI", "https://myapp.com/cb")

        with pytest.raises(ValueError) as exc_info:
            ClientConfig.from_env(prefix="APP_")

        assert "APP_CLIENT_SECRET" in str(exc_info.value)
