"""Common Pydantic models for API requests and responses.

This module contains shared response models used across the API.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Service health status
        timestamp: Current server timestamp
    """

    status: str = Field(default="healthy", description="Service health status")
    timestamp: datetime = Field(
        default_factory=datetime.utcnow, description="Current server timestamp"
    )


class ErrorResponse(BaseModel):
    """Standard error response model.

    Attributes:
        error: Short error description
        details: Provider error body or validation details
        message: Exception message (unexpected errors only)
    """

    error: str = Field(..., description="Short error description")
    details: Optional[Any] = Field(
        default=None, description="Additional error details"
    )
    message: Optional[str] = Field(
        default=None, description="Exception message for unexpected errors"
    )
