"""
OAuth configuration for the Google token service.

The client secret only ever lives server-side. Configuration is loaded
from environment variables or provided programmatically.
"""

import logging
import os
from dataclasses import dataclass

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"


@dataclass
class GoogleOAuthConfig:
    """
    Configuration for Google OAuth 2.0 token exchange.

    Attributes:
        client_id: OAuth client ID from the Google Cloud console
        client_secret: OAuth client secret (never sent to the browser)
        token_url: Provider token endpoint
        authorization_url: Provider consent screen endpoint
        timeout_seconds: Upper bound for each provider call
    """

    # Required - from Google Cloud console
    client_id: str
    client_secret: str

    # Google OAuth endpoints
    token_url: str = GOOGLE_TOKEN_URL
    authorization_url: str = GOOGLE_AUTH_URL

    timeout_seconds: int = 30

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.client_id:
            raise ConfigurationError(details="client_id cannot be empty")

        if not self.client_secret:
            raise ConfigurationError(details="client_secret cannot be empty")

        if not self.token_url:
            raise ConfigurationError(details="token_url cannot be empty")

        if self.timeout_seconds <= 0:
            raise ConfigurationError(details="timeout_seconds must be positive")

    @classmethod
    def from_env(cls) -> "GoogleOAuthConfig":
        """
        Load configuration from environment variables.

        Required environment variables:
            GOOGLE_CLIENT_ID: OAuth client ID
            GOOGLE_CLIENT_SECRET: OAuth client secret

        Optional environment variables:
            GOOGLE_TOKEN_URL: Token endpoint override (default: Google's)

        Returns:
            GoogleOAuthConfig instance

        Raises:
            ConfigurationError: If required environment variables are missing
        """
        client_id = os.environ.get("GOOGLE_CLIENT_ID")
        client_secret = os.environ.get("GOOGLE_CLIENT_SECRET")

        if not client_id or not client_secret:
            logger.error(
                "Missing Google OAuth credentials. "
                "Set GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET."
            )
            raise ConfigurationError()

        return cls(
            client_id=client_id,
            client_secret=client_secret,
            token_url=os.environ.get("GOOGLE_TOKEN_URL", GOOGLE_TOKEN_URL),
        )
