"""API endpoints for Google OAuth token exchange and refresh.

Both endpoints are called directly from the browser, answer any
``OPTIONS`` request with permissive CORS headers, and always respond
with a JSON body: tokens on success, ``{"error", "details"?}`` on failure.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends, Response, status

from src.oauth.exceptions import OAuthServiceError, UnknownError
from src.server.models.common import ErrorResponse
from src.server.models.tokens import (
    ExchangeTokenRequest,
    RefreshTokenRequest,
    TokenResponse,
)
from src.server.services.token_service import TokenService, get_token_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["oauth"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or malformed request field"},
    500: {"model": ErrorResponse, "description": "Server misconfigured or unexpected error"},
    502: {"model": ErrorResponse, "description": "Token endpoint unreachable"},
}


@contextmanager
def endpoint_boundary(operation: str) -> Iterator[None]:
    """Wrap anything that is not already a token service error in UnknownError."""
    try:
        yield
    except OAuthServiceError:
        raise
    except Exception as e:
        logger.error(f"{operation} error: {e}", exc_info=True)
        raise UnknownError(str(e)) from e


@router.options("/exchange-google-token", include_in_schema=False)
@router.options("/refresh-google-token", include_in_schema=False)
def token_preflight() -> Response:
    """Answer CORS preflight for the token endpoints."""
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.post(
    "/exchange-google-token",
    response_model=TokenResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
    summary="Exchange authorization code for tokens",
)
def exchange_google_token(
    request: ExchangeTokenRequest,
    response: Response,
    service: TokenService = Depends(get_token_service),
) -> TokenResponse:
    """Exchange an authorization code plus PKCE verifier for a token pair.

    Example:
        >>> POST /exchange-google-token
        >>> {"code": "abc", "code_verifier": "v", "redirect_uri": "https://app/cb"}
        >>> {"access_token": "tok", "expires_in": 3600,
        >>>  "scope": ["a", "b", "c"], "token_type": "Bearer"}
    """
    with endpoint_boundary("Exchange token"):
        token = service.exchange_code(
            request.code, request.code_verifier, request.redirect_uri
        )

    response.headers["Access-Control-Allow-Origin"] = "*"
    return TokenResponse.from_token_pair(token)


@router.post(
    "/refresh-google-token",
    response_model=TokenResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
    summary="Refresh access token",
)
def refresh_google_token(
    request: RefreshTokenRequest,
    response: Response,
    service: TokenService = Depends(get_token_service),
) -> TokenResponse:
    """Exchange a stored refresh token for a new access token."""
    with endpoint_boundary("Refresh token"):
        token = service.refresh(request.refresh_token)

    response.headers["Access-Control-Allow-Origin"] = "*"
    return TokenResponse.from_token_pair(token)
