"""Service layer for Google OAuth token exchange and refresh.

Validates endpoint input, loads server-side client credentials and
delegates the grant to the provider token client. Nothing is persisted:
the endpoints are stateless protocol translators.
"""

import logging
from typing import Callable, Optional

from src.oauth.config import GoogleOAuthConfig
from src.oauth.exceptions import ValidationError
from src.oauth.token_client import GoogleTokenClient
from src.oauth.tokens import TokenPair

logger = logging.getLogger(__name__)


class TokenService:
    """Service for the credential exchange and token refresh endpoints.

    Request fields are validated before credentials are loaded, so a bad
    request is a 400 even on a misconfigured server, and the provider is
    never called for either failure.

    Attributes:
        config_loader: Returns OAuth configuration (raises ConfigurationError)
        client_factory: Builds the provider client from configuration
    """

    def __init__(
        self,
        config_loader: Callable[[], GoogleOAuthConfig] = GoogleOAuthConfig.from_env,
        client_factory: Callable[[GoogleOAuthConfig], GoogleTokenClient] = GoogleTokenClient,
    ):
        self.config_loader = config_loader
        self.client_factory = client_factory

    def _client(self) -> GoogleTokenClient:
        return self.client_factory(self.config_loader())

    def exchange_code(
        self,
        code: Optional[str],
        code_verifier: Optional[str],
        redirect_uri: Optional[str],
    ) -> TokenPair:
        """Exchange an authorization code and PKCE verifier for tokens.

        Raises:
            ValidationError: If any field is missing or empty
            ConfigurationError: If client credentials are unset
            UpstreamError: If the provider rejects the exchange
        """
        if not code or not code_verifier or not redirect_uri:
            missing = [
                name
                for name, value in (
                    ("code", code),
                    ("code_verifier", code_verifier),
                    ("redirect_uri", redirect_uri),
                )
                if not value
            ]
            logger.warning(f"Exchange request missing fields: {', '.join(missing)}")
            raise ValidationError("Missing required parameters")

        return self._client().exchange_code(code, code_verifier, redirect_uri)

    def refresh(self, refresh_token: Optional[str]) -> TokenPair:
        """Exchange a refresh token for a new access token.

        Raises:
            ValidationError: If refresh_token is missing or empty
            ConfigurationError: If client credentials are unset
            UpstreamError: If the provider rejects the refresh
        """
        if not refresh_token:
            logger.warning("Refresh request missing refresh_token")
            raise ValidationError("Missing refresh token")

        return self._client().refresh_access_token(refresh_token)


def get_token_service() -> TokenService:
    """Dependency provider for TokenService."""
    return TokenService()
