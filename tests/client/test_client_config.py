"""Tests for API client configuration."""

import pytest

from src.client.config import ClientConfig, ConfigurationError


class TestClientConfig:
    """Tests for ClientConfig class."""

    def test_defaults(self):
        config = ClientConfig()

        assert config.api_url == "http://localhost:8000"
        assert config.refresh_url == "http://localhost:8000/refresh-google-token"
        assert config.exchange_url == "http://localhost:8000/exchange-google-token"
        assert config.timeout == 30
        assert config.storage_file == "~/.job_search/storage.json"

    def test_trailing_slash_stripped(self):
        config = ClientConfig(api_url="https://api.example.com/")

        assert config.refresh_url == "https://api.example.com/refresh-google-token"

    def test_invalid_url(self):
        with pytest.raises(ConfigurationError, match="api_url"):
            ClientConfig(api_url="localhost:8000")

    def test_invalid_timeout(self):
        with pytest.raises(ConfigurationError, match="timeout"):
            ClientConfig(timeout=0)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("JOBSEARCH_API_URL", "https://api.example.com")
        monkeypatch.setenv("JOBSEARCH_REFRESH_URL", "https://tokens.example.com/refresh")
        monkeypatch.delenv("JOBSEARCH_EXCHANGE_URL", raising=False)
        monkeypatch.setenv("JOBSEARCH_API_TIMEOUT", "12.5")
        monkeypatch.setenv("JOBSEARCH_STORAGE_FILE", "/tmp/store.json")

        config = ClientConfig.from_env()

        assert config.api_url == "https://api.example.com"
        assert config.refresh_url == "https://tokens.example.com/refresh"
        assert config.exchange_url == "https://api.example.com/exchange-google-token"
        assert config.timeout == 12.5
        assert config.storage_file == "/tmp/store.json"

    def test_from_env_bad_timeout(self, monkeypatch):
        monkeypatch.setenv("JOBSEARCH_API_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError, match="JOBSEARCH_API_TIMEOUT"):
            ClientConfig.from_env()
