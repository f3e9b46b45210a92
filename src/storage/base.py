"""
Key-value storage capability.

Session tokens and day progress are persisted through this small
interface rather than against a concrete backend, so the same code runs
against a JSON file on disk, a server-side session store, or plain
memory in tests.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorage(ABC):
    """
    String key to string value store.

    Mirrors the browser ``localStorage`` surface: values are opaque
    strings, missing keys read as ``None`` and removing a missing key is
    a no-op.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: Storage key

        Returns:
            Stored string, or None if the key is not present
        """

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Args:
            key: Storage key
            value: String value to store
        """

    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Delete a key if present.

        Args:
            key: Storage key
        """
