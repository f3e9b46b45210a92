"""
OAuth 2.0 module for Google sign-in and calendar access.

This module keeps the OAuth client secret server-side and translates
authorization-code (PKCE) and refresh-token grants against Google's
token endpoint.

Public API:
    GoogleOAuthConfig: OAuth configuration management
    TokenPair: Normalized provider token response
    GoogleTokenClient: Code exchange and token refresh
    generate_pkce_pair, build_authorization_url, validate_callback: PKCE flow helpers

Exceptions:
    OAuthServiceError: Base exception
    ValidationError: Missing or malformed request field (400)
    ConfigurationError: Server credentials unset (500)
    UpstreamError: Provider rejected the grant (provider status)
    UnknownError: Unexpected failure (500)
"""

from .config import GoogleOAuthConfig
from .exceptions import (
    ConfigurationError,
    OAuthServiceError,
    UnknownError,
    UpstreamError,
    ValidationError,
)
from .pkce import (
    build_authorization_url,
    code_challenge,
    generate_code_verifier,
    generate_pkce_pair,
    generate_state,
    validate_callback,
)
from .token_client import GoogleTokenClient
from .tokens import TokenPair, normalize_scope

__all__ = [
    # Configuration
    "GoogleOAuthConfig",
    # Tokens
    "TokenPair",
    "normalize_scope",
    "GoogleTokenClient",
    # PKCE
    "generate_code_verifier",
    "code_challenge",
    "generate_pkce_pair",
    "generate_state",
    "build_authorization_url",
    "validate_callback",
    # Exceptions
    "OAuthServiceError",
    "ValidationError",
    "ConfigurationError",
    "UpstreamError",
    "UnknownError",
]
