"""API Client for the job search backend.

This module provides an HTTP client that attaches the session's bearer
token to every request and recovers from exactly one failure class: an
expired access token. On a 401 it refreshes the session once through
the token refresh endpoint and retries the original request once. Every
other failure is surfaced to the caller unchanged.

Request lifecycle (``RequestState``)::

    ATTEMPT --401--> REFRESH --ok--> RETRY --any--> done
       |                |
       +--other--> done +--fail--> UNAUTHENTICATED (tokens cleared)
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional

import httpx

from .session import SessionContext

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Any = None):
        """Initialize API error.

        Args:
            message: Error message
            status_code: HTTP status code if applicable
            detail: Additional error details
        """
        self.message = message
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.message)


class APIConnectionError(APIError):
    """Exception raised when connection to API fails."""

    pass


class APIValidationError(APIError):
    """Exception raised when API returns validation error (422)."""

    pass


class APIServerError(APIError):
    """Exception raised when API returns server error (5xx)."""

    pass


class AuthenticationError(APIError):
    """Request still rejected with 401 after a successful token refresh."""

    pass


class SessionExpiredError(APIError):
    """Token refresh failed; stored tokens were cleared and the user must sign in again."""

    pass


class RequestState(Enum):
    """States of a single outgoing request."""

    ATTEMPT = "attempt"
    REFRESH = "refresh"
    RETRY = "retry"
    UNAUTHENTICATED = "unauthenticated"


def _error_detail(response: httpx.Response) -> Any:
    try:
        data = response.json()
    except ValueError:
        return response.text
    if isinstance(data, dict):
        for key in ("detail", "message", "error"):
            if data.get(key) is not None:
                return data[key]
    return data


class JobSearchAPIClient:
    """HTTP client for the job search API with bearer-token sessions.

    Attributes:
        session: Token slots read before each request
        base_url: Base URL for API server
        refresh_url: Token refresh endpoint
        timeout: Per-attempt timeout in seconds
        on_session_expired: Called once when the session cannot be renewed
            (e.g. redirect to the login surface)
    """

    def __init__(
        self,
        session: SessionContext,
        base_url: str = "http://localhost:8000",
        refresh_url: Optional[str] = None,
        timeout: float = 30,
        on_session_expired: Optional[Callable[[], None]] = None,
    ):
        """Initialize API client.

        Args:
            session: Session context holding the tokens
            base_url: Base URL for API server (default: http://localhost:8000)
            refresh_url: Refresh endpoint (default: ``<base_url>/refresh-google-token``)
            timeout: Per-attempt timeout in seconds (default: 30)
            on_session_expired: Hook invoked when refresh fails

        Example:
            >>> client = JobSearchAPIClient(SessionContext(MemoryStorage()))
            >>> client.get("/api/v1/applications")
        """
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.refresh_url = refresh_url or f"{self.base_url}/refresh-google-token"
        self.timeout = timeout
        self.on_session_expired = on_session_expired
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            follow_redirects=True,
        )

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def close(self):
        """Close the underlying HTTP client."""
        self._client.close()

    def request(
        self,
        method: str,
        endpoint: str,
        json: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """Send an authenticated request, refreshing the session at most once.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            endpoint: API endpoint path or absolute URL
            json: JSON request body
            params: Query parameters

        Returns:
            Decoded JSON response body (None for empty bodies)

        Raises:
            SessionExpiredError: If the token refresh failed
            AuthenticationError: If the retried request is still unauthorized
            APIConnectionError: If connection fails or times out
            APIValidationError: If validation fails (422)
            APIServerError: If server error occurs (5xx)
            APIError: For other HTTP errors
        """
        state = RequestState.ATTEMPT

        while True:
            if state is RequestState.REFRESH:
                state = (
                    RequestState.RETRY
                    if self._refresh_session()
                    else RequestState.UNAUTHENTICATED
                )
                continue

            if state is RequestState.UNAUTHENTICATED:
                if self.on_session_expired is not None:
                    self.on_session_expired()
                raise SessionExpiredError(
                    message="Session expired. Please sign in again.",
                    status_code=401,
                )

            response = self._send(method, endpoint, json, params)

            if response.status_code == 401 and state is RequestState.ATTEMPT:
                logger.info(f"{method} {endpoint} unauthorized, refreshing session")
                state = RequestState.REFRESH
                continue

            return self._handle_response(response)

    def get(self, endpoint: str, params: Optional[dict] = None) -> Any:
        return self.request("GET", endpoint, params=params)

    def post(self, endpoint: str, json: Optional[dict] = None) -> Any:
        return self.request("POST", endpoint, json=json)

    def put(self, endpoint: str, json: Optional[dict] = None) -> Any:
        return self.request("PUT", endpoint, json=json)

    def patch(self, endpoint: str, json: Optional[dict] = None) -> Any:
        return self.request("PATCH", endpoint, json=json)

    def delete(self, endpoint: str) -> Any:
        return self.request("DELETE", endpoint)

    def exchange_authorization_code(
        self,
        code: str,
        code_verifier: str,
        redirect_uri: str,
        exchange_url: Optional[str] = None,
    ) -> dict:
        """Exchange an OAuth callback code through the token service and start a session.

        Args:
            code: Authorization code from the callback
            code_verifier: PKCE verifier generated when the flow started
            redirect_uri: Redirect URI used in the authorization request
            exchange_url: Exchange endpoint (default: ``<base_url>/exchange-google-token``)

        Returns:
            Token response body

        Raises:
            APIError: If the exchange is rejected
            APIConnectionError: If connection fails
        """
        url = exchange_url or f"{self.base_url}/exchange-google-token"
        try:
            response = self._client.post(
                url,
                json={
                    "code": code,
                    "code_verifier": code_verifier,
                    "redirect_uri": redirect_uri,
                },
            )
        except httpx.HTTPError as e:
            raise APIConnectionError(
                message=f"Failed to reach token service at {url}: {str(e)}"
            ) from e

        data = self._handle_response(response)
        if not isinstance(data, dict) or not data.get("access_token"):
            raise APIError(message="Token service returned no access token", detail=data)

        self.session.store_tokens(data["access_token"], data.get("refresh_token"))
        logger.info("Signed in; session tokens stored")
        return data

    def _send(
        self,
        method: str,
        endpoint: str,
        json: Optional[dict],
        params: Optional[dict],
    ) -> httpx.Response:
        """Send one attempt with the current bearer token."""
        url = endpoint if endpoint.startswith("http") else f"{self.base_url}{endpoint}"
        headers = {}
        token = self.session.access_token
        if token:
            headers["Authorization"] = f"Bearer {token}"

        logger.debug(f"{method} {url}")
        try:
            return self._client.request(
                method=method,
                url=url,
                json=json,
                params=params,
                headers=headers,
            )
        except httpx.ConnectError as e:
            raise APIConnectionError(
                message=f"Failed to connect to API server at {self.base_url}: {str(e)}"
            ) from e
        except httpx.TimeoutException as e:
            raise APIConnectionError(
                message=f"Request timed out after {self.timeout}s: {str(e)}"
            ) from e
        except httpx.HTTPError as e:
            raise APIConnectionError(message=f"HTTP error during API request: {str(e)}") from e

    def _handle_response(self, response: httpx.Response) -> Any:
        """Decode a terminal response or raise the matching APIError."""
        if 200 <= response.status_code < 300:
            if response.status_code == 204 or not response.content:
                return None
            try:
                return response.json()
            except ValueError as e:
                raise APIError(
                    message="Response body is not valid JSON",
                    status_code=response.status_code,
                    detail=response.text,
                ) from e

        error_detail = _error_detail(response)

        if response.status_code == 401:
            raise AuthenticationError(
                message=f"Authentication failed: {error_detail}",
                status_code=401,
                detail=error_detail,
            )

        # Validation errors (422)
        if response.status_code == 422:
            raise APIValidationError(
                message=f"Validation error: {error_detail}",
                status_code=422,
                detail=error_detail,
            )

        # Server errors (5xx)
        if response.status_code >= 500:
            raise APIServerError(
                message=f"Server error: {error_detail}",
                status_code=response.status_code,
                detail=error_detail,
            )

        logger.error(f"API error ({response.status_code}): {error_detail}")
        raise APIError(
            message=f"API error: {error_detail}",
            status_code=response.status_code,
            detail=error_detail,
        )

    def _refresh_session(self) -> bool:
        """Renew the access token through the refresh endpoint.

        On any failure both stored tokens are cleared.

        Returns:
            True if a new access token was stored
        """
        refresh_token = self.session.refresh_token
        if not refresh_token:
            logger.warning("No refresh token stored, cannot renew session")
            self.session.clear()
            return False

        try:
            response = self._client.post(
                self.refresh_url, json={"refresh_token": refresh_token}
            )
        except httpx.HTTPError as e:
            logger.error(f"Token refresh request failed: {e}")
            self.session.clear()
            return False

        if not 200 <= response.status_code < 300:
            logger.error(
                f"Token refresh rejected ({response.status_code}): {_error_detail(response)}"
            )
            self.session.clear()
            return False

        try:
            data = response.json()
            access_token = data["access_token"]
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Invalid token refresh response: {e}")
            self.session.clear()
            return False

        if not access_token:
            logger.error("Token refresh returned an empty access token")
            self.session.clear()
            return False

        self.session.store_tokens(access_token, data.get("refresh_token"))
        logger.info("Session refreshed")
        return True
