"""Configuration for the job search API client.

Settings come from explicit arguments, environment variables, or
defaults, in that order.
"""

import logging
import os
from typing import Optional

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Exception raised for client configuration errors."""

    pass


class ClientConfig:
    """Configuration for the API client and local storage.

    Attributes:
        api_url: Base URL of the job search API
        refresh_url: Token refresh endpoint (absolute URL)
        exchange_url: Credential exchange endpoint (absolute URL)
        timeout: Per-attempt request timeout in seconds
        storage_file: JSON file holding session tokens and progress
    """

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        refresh_url: Optional[str] = None,
        exchange_url: Optional[str] = None,
        timeout: float = 30,
        storage_file: str = "~/.job_search/storage.json",
    ):
        """Initialize configuration.

        Args:
            api_url: Base URL of the job search API
            refresh_url: Refresh endpoint (default: ``<api_url>/refresh-google-token``)
            exchange_url: Exchange endpoint (default: ``<api_url>/exchange-google-token``)
            timeout: Per-attempt request timeout in seconds
            storage_file: JSON storage file path

        Example:
            >>> config = ClientConfig(api_url="https://api.example.com")
            >>> config.refresh_url
            'https://api.example.com/refresh-google-token'
        """
        self.api_url = api_url.rstrip("/")
        self.refresh_url = refresh_url or f"{self.api_url}/refresh-google-token"
        self.exchange_url = exchange_url or f"{self.api_url}/exchange-google-token"
        self.timeout = timeout
        self.storage_file = storage_file

        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ConfigurationError: If any value is invalid
        """
        for name in ("api_url", "refresh_url", "exchange_url"):
            value = getattr(self, name)
            if not value.startswith(("http://", "https://")):
                raise ConfigurationError(
                    f"{name} must start with http:// or https://, got {value!r}"
                )

        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")

        if not self.storage_file:
            raise ConfigurationError("storage_file cannot be empty")

    @classmethod
    def from_env(cls) -> "ClientConfig":
        """Load configuration from environment variables.

        Optional environment variables:
            JOBSEARCH_API_URL: API base URL (default: http://localhost:8000)
            JOBSEARCH_REFRESH_URL: Refresh endpoint override
            JOBSEARCH_EXCHANGE_URL: Exchange endpoint override
            JOBSEARCH_API_TIMEOUT: Timeout in seconds (default: 30)
            JOBSEARCH_STORAGE_FILE: Storage file (default: ~/.job_search/storage.json)

        Returns:
            ClientConfig instance

        Raises:
            ConfigurationError: If a value is invalid
        """
        timeout_raw = os.environ.get("JOBSEARCH_API_TIMEOUT", "30")
        try:
            timeout = float(timeout_raw)
        except ValueError as e:
            raise ConfigurationError(
                f"JOBSEARCH_API_TIMEOUT must be a number, got {timeout_raw!r}"
            ) from e

        return cls(
            api_url=os.environ.get("JOBSEARCH_API_URL", "http://localhost:8000"),
            refresh_url=os.environ.get("JOBSEARCH_REFRESH_URL") or None,
            exchange_url=os.environ.get("JOBSEARCH_EXCHANGE_URL") or None,
            timeout=timeout,
            storage_file=os.environ.get(
                "JOBSEARCH_STORAGE_FILE", "~/.job_search/storage.json"
            ),
        )
