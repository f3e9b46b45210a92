"""
PKCE helpers for the browser side of the Google authorization flow.

The code verifier never leaves the client until the code exchange; only
its SHA-256 challenge goes into the authorization URL.
"""

import base64
import hashlib
import hmac
import logging
import secrets
from typing import Iterable, Optional, Tuple
from urllib.parse import urlencode

from .config import GOOGLE_AUTH_URL

logger = logging.getLogger(__name__)

# RFC 7636 section 4.1 unreserved characters
VERIFIER_CHARSET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"
MIN_VERIFIER_LENGTH = 43
MAX_VERIFIER_LENGTH = 128

DEFAULT_SCOPES = (
    "openid",
    "email",
    "profile",
    "https://www.googleapis.com/auth/calendar.events",
)


def _random_string(length: int) -> str:
    return "".join(secrets.choice(VERIFIER_CHARSET) for _ in range(length))


def generate_code_verifier(length: int = MAX_VERIFIER_LENGTH) -> str:
    """
    Generate a random PKCE code verifier.

    Args:
        length: Verifier length, 43 to 128 characters

    Returns:
        Verifier string drawn from the unreserved character set

    Raises:
        ValueError: If length is outside 43..128
    """
    if not MIN_VERIFIER_LENGTH <= length <= MAX_VERIFIER_LENGTH:
        raise ValueError(
            f"verifier length must be between {MIN_VERIFIER_LENGTH} and "
            f"{MAX_VERIFIER_LENGTH}, got {length}"
        )
    return _random_string(length)


def code_challenge(verifier: str) -> str:
    """
    Derive the S256 code challenge for a verifier.

    Args:
        verifier: PKCE code verifier

    Returns:
        Unpadded base64url encoding of SHA-256(verifier)
    """
    digest = hashlib.sha256(verifier.encode("ascii")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def generate_pkce_pair(length: int = MAX_VERIFIER_LENGTH) -> Tuple[str, str]:
    """Return a new ``(verifier, challenge)`` pair."""
    verifier = generate_code_verifier(length)
    return verifier, code_challenge(verifier)


def generate_state(length: int = 32) -> str:
    """Generate an opaque anti-CSRF ``state`` value."""
    return _random_string(length)


def build_authorization_url(
    client_id: str,
    redirect_uri: str,
    challenge: str,
    state: str,
    scopes: Iterable[str] = DEFAULT_SCOPES,
    authorization_url: str = GOOGLE_AUTH_URL,
) -> str:
    """
    Build the provider consent URL for an authorization-code + PKCE flow.

    Offline access and a forced consent prompt are requested so the
    provider issues a refresh token.

    Args:
        client_id: OAuth client ID
        redirect_uri: Callback URL registered with the provider
        challenge: S256 code challenge
        state: Anti-CSRF state value
        scopes: Scopes to request
        authorization_url: Provider authorization endpoint

    Returns:
        Complete authorization URL with query parameters
    """
    params = {
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "scope": " ".join(scopes),
        "state": state,
        "code_challenge": challenge,
        "code_challenge_method": "S256",
        "access_type": "offline",
        "prompt": "consent",
    }
    url = f"{authorization_url}?{urlencode(params)}"
    logger.debug(f"Generated authorization URL for client {client_id}")
    return url


def validate_callback(expected_state: Optional[str], state: Optional[str], code: Optional[str]) -> bool:
    """
    Check an OAuth callback before exchanging its code.

    Args:
        expected_state: State stored when the flow started
        state: State returned on the callback
        code: Authorization code returned on the callback

    Returns:
        True if the state matches and a code is present
    """
    if not expected_state or not state or not hmac.compare_digest(expected_state, state):
        logger.error("State mismatch - possible CSRF attack")
        return False

    if not code:
        logger.error("No authorization code received")
        return False

    return True
