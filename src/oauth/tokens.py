"""
Token pair model for Google OAuth responses.

The provider answers with a space-delimited ``scope`` string; callers
of this service always receive it as a list of unique scope names.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple, Union


def normalize_scope(scope: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    """
    Split a provider scope value into unique scope names.

    Args:
        scope: Space-delimited string, an iterable of names, or None

    Returns:
        Tuple of unique non-empty scope names in provider order

    Example:
        >>> normalize_scope("openid email openid")
        ('openid', 'email')
    """
    if scope is None:
        return ()
    parts = scope.split() if isinstance(scope, str) else [str(s) for s in scope]
    return tuple(dict.fromkeys(p for p in parts if p))


@dataclass(frozen=True)
class TokenPair:
    """
    Tokens issued by the provider.

    Attributes:
        access_token: Short-lived access token for API calls
        expires_in: Access token lifetime in seconds from issue
        scope: Granted scopes (unique)
        token_type: Token type (typically "Bearer")
        refresh_token: Long-lived refresh token; None when the provider
            did not issue or rotate one
    """

    access_token: str
    expires_in: int
    scope: Tuple[str, ...] = ()
    token_type: str = "Bearer"
    refresh_token: Optional[str] = None

    @classmethod
    def from_provider(cls, data: Any) -> "TokenPair":
        """
        Build a TokenPair from a provider token response.

        Args:
            data: Decoded JSON body from the token endpoint

        Returns:
            TokenPair instance

        Raises:
            KeyError: If access_token or expires_in is missing
            TypeError: If the body is not a JSON object or a field has the wrong type
            ValueError: If access_token is empty or expires_in is not an integer
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")

        access_token = data["access_token"]
        if not isinstance(access_token, str):
            raise TypeError(f"access_token must be a string, got {type(access_token).__name__}")
        if not access_token:
            raise ValueError("access_token is empty")

        expires_in = data["expires_in"]
        if isinstance(expires_in, bool) or not isinstance(expires_in, (int, str)):
            raise TypeError(f"expires_in must be an integer, got {type(expires_in).__name__}")

        for field in ("token_type", "refresh_token"):
            value = data.get(field)
            if value is not None and not isinstance(value, str):
                raise TypeError(f"{field} must be a string, got {type(value).__name__}")

        scope = data.get("scope")
        if scope is not None and not isinstance(scope, (str, list)):
            raise TypeError(f"scope must be a string, got {type(scope).__name__}")

        return cls(
            access_token=access_token,
            expires_in=int(expires_in),
            scope=normalize_scope(scope),
            token_type=data.get("token_type") or "Bearer",
            refresh_token=data.get("refresh_token") or None,
        )

    def to_dict(self) -> dict:
        """
        Convert to the endpoint response body.

        ``refresh_token`` is left out entirely when absent.

        Returns:
            Dictionary with scope as a list
        """
        body = {
            "access_token": self.access_token,
            "expires_in": self.expires_in,
            "scope": list(self.scope),
            "token_type": self.token_type,
        }
        if self.refresh_token is not None:
            body["refresh_token"] = self.refresh_token
        return body
