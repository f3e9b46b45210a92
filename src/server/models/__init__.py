"""Pydantic request and response models."""

from src.server.models.common import ErrorResponse, HealthResponse
from src.server.models.tokens import (
    ExchangeTokenRequest,
    RefreshTokenRequest,
    TokenResponse,
)

__all__ = [
    # Common models
    "HealthResponse",
    "ErrorResponse",
    # Token models
    "ExchangeTokenRequest",
    "RefreshTokenRequest",
    "TokenResponse",
]
