"""Session token slots for the API client.

The session is an explicit object handed to the HTTP client instead of
ambient global state. Tokens live in a key-value storage under the keys
``access_token`` and ``refresh_token``.
"""

import logging
from typing import Optional

from src.storage.base import KeyValueStorage

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"


class SessionContext:
    """Access and refresh token slots backed by a KeyValueStorage.

    Reads go to storage every time, so several clients sharing one
    storage see each other's refreshes.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    @property
    def access_token(self) -> Optional[str]:
        return self.storage.get(ACCESS_TOKEN_KEY) or None

    @property
    def refresh_token(self) -> Optional[str]:
        return self.storage.get(REFRESH_TOKEN_KEY) or None

    @property
    def is_authenticated(self) -> bool:
        return self.access_token is not None

    def store_tokens(self, access_token: str, refresh_token: Optional[str] = None) -> None:
        """Persist a new access token, and the refresh token if one was issued.

        An absent refresh token leaves the stored one untouched.
        """
        self.storage.set(ACCESS_TOKEN_KEY, access_token)
        if refresh_token:
            self.storage.set(REFRESH_TOKEN_KEY, refresh_token)
            logger.debug("Stored access and refresh tokens")
        else:
            logger.debug("Stored access token")

    def clear(self) -> None:
        """Remove both stored tokens."""
        self.storage.remove(ACCESS_TOKEN_KEY)
        self.storage.remove(REFRESH_TOKEN_KEY)
        logger.info("Session tokens cleared")
