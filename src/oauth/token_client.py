"""
Google token endpoint client.

This module performs the two grants the token service needs:
- Authorization code + PKCE verifier -> access/refresh tokens
- Refresh token -> new access token

It is a pure protocol translator: nothing is persisted here, and
provider rejections are surfaced with the provider's own status code.
"""

import logging
from typing import Dict

import requests

from .config import GoogleOAuthConfig
from .exceptions import UpstreamError
from .tokens import TokenPair

logger = logging.getLogger(__name__)


def _response_details(response: requests.Response):
    """Return the provider error body as JSON if possible, else as text."""
    try:
        return response.json()
    except ValueError:
        return response.text


class GoogleTokenClient:
    """
    Client for the provider's OAuth token endpoint.

    Responsibilities:
    - Exchange authorization codes (with PKCE verifier) for tokens
    - Exchange refresh tokens for new access tokens
    - Translate provider failures into UpstreamError
    """

    def __init__(self, config: GoogleOAuthConfig):
        """
        Initialize token client.

        Args:
            config: OAuth configuration with client credentials
        """
        self.config = config

    def exchange_code(self, code: str, code_verifier: str, redirect_uri: str) -> TokenPair:
        """
        Exchange an authorization code for access and refresh tokens.

        Args:
            code: Authorization code received on the OAuth callback
            code_verifier: PKCE verifier the code challenge was derived from
            redirect_uri: Redirect URI used in the authorization request

        Returns:
            TokenPair with access token and (usually) refresh token

        Raises:
            UpstreamError: If the provider rejects the exchange or is unreachable
        """
        logger.info("Exchanging authorization code for tokens")

        return self._request_tokens(
            {
                "code": code,
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
                "code_verifier": code_verifier,
            },
            failure="Token exchange failed",
        )

    def refresh_access_token(self, refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new access token.

        The provider normally does not return a new refresh token; if it
        rotates one, it is passed through on the returned TokenPair.

        Args:
            refresh_token: Stored long-lived refresh token

        Returns:
            TokenPair with a fresh access token

        Raises:
            UpstreamError: If the provider rejects the refresh or is unreachable
        """
        logger.info("Refreshing access token")

        return self._request_tokens(
            {
                "client_id": self.config.client_id,
                "client_secret": self.config.client_secret,
                "refresh_token": refresh_token,
                "grant_type": "refresh_token",
            },
            failure="Token refresh failed",
        )

    def _request_tokens(self, form: Dict[str, str], failure: str) -> TokenPair:
        """
        POST a grant to the token endpoint and parse the response.

        Args:
            form: Form fields for the grant
            failure: Error string used if the grant fails

        Returns:
            Parsed TokenPair

        Raises:
            UpstreamError: On provider rejection, network error or bad body
        """
        try:
            response = requests.post(
                self.config.token_url,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                data=form,
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            logger.error(f"Network error calling token endpoint: {e}")
            raise UpstreamError(failure, details=f"Network error: {e}") from e

        if not 200 <= response.status_code < 300:
            details = _response_details(response)
            logger.error(f"{failure}: {response.status_code} - {details}")
            raise UpstreamError(failure, details=details, status_code=response.status_code)

        try:
            token = TokenPair.from_provider(response.json())
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Invalid response from token endpoint: {e}")
            raise UpstreamError(
                failure, details=f"Invalid response from token endpoint: {e}"
            ) from e

        if form["grant_type"] == "refresh_token" and token.refresh_token:
            logger.info("Provider rotated the refresh token")

        logger.info(f"Token endpoint returned {token.token_type} token ({len(token.scope)} scopes)")
        return token
