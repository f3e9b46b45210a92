"""
Client side of the job search coach.

Public API:
    ClientConfig: Client settings (API URL, timeouts, storage file)
    SessionContext: Access/refresh token slots over a KeyValueStorage
    JobSearchAPIClient: Bearer-token HTTP client with one refresh-and-retry
    RequestState: States of an outgoing request

Exceptions:
    APIError, APIConnectionError, APIValidationError, APIServerError,
    AuthenticationError, SessionExpiredError
"""

from .api_client import (
    APIConnectionError,
    APIError,
    APIServerError,
    APIValidationError,
    AuthenticationError,
    JobSearchAPIClient,
    RequestState,
    SessionExpiredError,
)
from .config import ClientConfig
from .session import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, SessionContext

__all__ = [
    "ClientConfig",
    "SessionContext",
    "ACCESS_TOKEN_KEY",
    "REFRESH_TOKEN_KEY",
    "JobSearchAPIClient",
    "RequestState",
    "APIError",
    "APIConnectionError",
    "APIValidationError",
    "APIServerError",
    "AuthenticationError",
    "SessionExpiredError",
]
