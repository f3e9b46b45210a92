"""Pydantic models for the OAuth token exchange and refresh endpoints.

Request fields are optional at the schema level: a missing field is a
``ValidationError`` raised by the token service (400 with an ``error``
body), not a framework-level 422.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from src.oauth.tokens import TokenPair


class ExchangeTokenRequest(BaseModel):
    """Request schema for exchanging an authorization code."""

    code: Optional[str] = Field(None, description="Authorization code from the OAuth callback")
    code_verifier: Optional[str] = Field(None, description="PKCE code verifier")
    redirect_uri: Optional[str] = Field(
        None, description="Redirect URI used in the authorization request"
    )


class RefreshTokenRequest(BaseModel):
    """Request schema for refreshing an access token."""

    refresh_token: Optional[str] = Field(None, description="Stored refresh token")


class TokenResponse(BaseModel):
    """Response schema for issued tokens.

    ``refresh_token`` is omitted from the JSON body when the provider did
    not send one.
    """

    access_token: str = Field(..., description="Short-lived access token")
    refresh_token: Optional[str] = Field(
        None, description="Long-lived refresh token (exchange, or provider rotation)"
    )
    expires_in: int = Field(..., description="Access token lifetime in seconds")
    scope: List[str] = Field(default_factory=list, description="Granted scopes")
    token_type: str = Field("Bearer", description="Token type")

    @classmethod
    def from_token_pair(cls, token: TokenPair) -> "TokenResponse":
        return cls(**token.to_dict())
