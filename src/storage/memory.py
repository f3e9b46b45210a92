"""In-memory key-value storage."""

from typing import Dict, Optional

from .base import KeyValueStorage


class MemoryStorage(KeyValueStorage):
    """Dictionary-backed storage, lost when the process exits."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)
