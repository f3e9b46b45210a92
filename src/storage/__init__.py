"""
Key-value storage backends.

Public API:
    KeyValueStorage: get/set/remove capability interface
    MemoryStorage: In-process storage
    JsonFileStorage: JSON file on disk

Exceptions:
    StorageError: Storage write failed
"""

from .base import KeyValueStorage
from .exceptions import StorageError
from .json_file import JsonFileStorage
from .memory import MemoryStorage

__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "JsonFileStorage",
    "StorageError",
]
