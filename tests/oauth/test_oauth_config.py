"""Tests for OAuth configuration module."""

import pytest

from src.oauth.config import GOOGLE_AUTH_URL, GOOGLE_TOKEN_URL, GoogleOAuthConfig
from src.oauth.exceptions import ConfigurationError


class TestGoogleOAuthConfig:
    """Tests for GoogleOAuthConfig class."""

    def test_config_with_required_params(self):
        """Config can be created with just required parameters."""
        config = GoogleOAuthConfig(
            client_id="test_client_id", client_secret="test_client_secret"
        )

        assert config.client_id == "test_client_id"
        assert config.client_secret == "test_client_secret"
        assert config.token_url == GOOGLE_TOKEN_URL
        assert config.authorization_url == GOOGLE_AUTH_URL
        assert config.timeout_seconds == 30

    def test_config_validates_empty_client_id(self):
        """Config raises error for empty client_id."""
        with pytest.raises(ConfigurationError) as exc_info:
            GoogleOAuthConfig(client_id="", client_secret="secret")

        assert exc_info.value.details == "client_id cannot be empty"
        assert exc_info.value.status_code == 500

    def test_config_validates_empty_client_secret(self):
        """Config raises error for empty client_secret."""
        with pytest.raises(ConfigurationError) as exc_info:
            GoogleOAuthConfig(client_id="id", client_secret="")

        assert exc_info.value.details == "client_secret cannot be empty"

    def test_config_validates_timeout(self):
        with pytest.raises(ConfigurationError):
            GoogleOAuthConfig(client_id="id", client_secret="secret", timeout_seconds=0)


class TestGoogleOAuthConfigFromEnv:
    """Tests for loading configuration from environment variables."""

    def test_from_env_with_credentials(self, monkeypatch):
        """from_env loads credentials and uses the default token URL."""
        monkeypatch.setenv("GOOGLE_CLIENT_ID", "env_client_id")
        monkeypatch.setenv("GOOGLE_CLIENT_SECRET", "env_client_secret")
        monkeypatch.delenv("GOOGLE_TOKEN_URL", raising=False)

        config = GoogleOAuthConfig.from_env()

        assert config.client_id == "env_client_id"
        assert config.client_secret == "env_client_secret"
        assert config.token_url == GOOGLE_TOKEN_URL

    def test_from_env_token_url_override(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_CLIENT_ID", "id")
        monkeypatch.setenv("GOOGLE_CLIENT_SECRET", "secret")
        monkeypatch.setenv("GOOGLE_TOKEN_URL", "http://localhost:9999/token")

        assert GoogleOAuthConfig.from_env().token_url == "http://localhost:9999/token"

    @pytest.mark.parametrize("missing", ["GOOGLE_CLIENT_ID", "GOOGLE_CLIENT_SECRET"])
    def test_from_env_missing_credentials(self, monkeypatch, missing):
        """from_env raises ConfigurationError when either credential is unset."""
        monkeypatch.setenv("GOOGLE_CLIENT_ID", "id")
        monkeypatch.setenv("GOOGLE_CLIENT_SECRET", "secret")
        monkeypatch.delenv(missing)

        with pytest.raises(ConfigurationError) as exc_info:
            GoogleOAuthConfig.from_env()

        assert exc_info.value.to_dict() == {"error": "Server configuration error"}

    def test_from_env_empty_credentials(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_CLIENT_ID", "")
        monkeypatch.setenv("GOOGLE_CLIENT_SECRET", "secret")

        with pytest.raises(ConfigurationError):
            GoogleOAuthConfig.from_env()
