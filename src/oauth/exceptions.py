"""
OAuth exception classes for the Google token service.

Every error carries the HTTP status and JSON body the token endpoints
answer with, so the API layer renders them without further mapping.
"""

from typing import Any, Optional


class OAuthServiceError(Exception):
    """
    Base exception for all token service errors.

    Attributes:
        error: Short error string returned as the ``error`` field
        details: Optional extra payload returned as ``details``
        status_code: HTTP status the endpoint responds with
    """

    status_code: int = 500
    default_error: str = "Internal server error"

    def __init__(
        self,
        error: Optional[str] = None,
        details: Any = None,
        status_code: Optional[int] = None,
    ):
        self.error = error or self.default_error
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.error)

    def to_dict(self) -> dict:
        """
        Build the JSON error body.

        Returns:
            ``{"error": ...}`` plus ``details`` when present
        """
        body: dict = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(OAuthServiceError):
    """Required request field missing or request body malformed."""

    status_code = 400
    default_error = "Invalid request"


class ConfigurationError(OAuthServiceError):
    """Server-side OAuth client credentials are not configured."""

    status_code = 500
    default_error = "Server configuration error"


class UpstreamError(OAuthServiceError):
    """
    The provider token endpoint rejected the request or was unreachable.

    ``status_code`` mirrors the provider's status; 502 is used when no
    provider status exists (network failure, unusable success body).
    """

    status_code = 502
    default_error = "Upstream token request failed"


class UnknownError(OAuthServiceError):
    """Any unexpected exception caught at the endpoint boundary."""

    status_code = 500
    default_error = "Internal server error"

    def __init__(self, message: str = "Unknown error"):
        self.message = message
        super().__init__()

    def to_dict(self) -> dict:
        return {"error": self.error, "message": self.message}
