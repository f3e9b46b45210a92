"""
File-backed key-value storage.

Keeps every key in a single JSON object on disk. This is the
non-browser stand-in for ``localStorage``: the CLI keeps session tokens
and day progress here between runs.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from .base import KeyValueStorage
from .exceptions import StorageError

logger = logging.getLogger(__name__)


class JsonFileStorage(KeyValueStorage):
    """
    Key-value storage persisted as a plaintext JSON object.

    The file holds session tokens, so it is written with user-only
    permissions (600). Reads never raise: a missing or corrupted file is
    treated as empty and logged. Writes raise StorageError.
    """

    def __init__(self, storage_file: str):
        """
        Initialize file storage.

        Args:
            storage_file: Path to the JSON file (``~`` is expanded)
        """
        self.storage_file = Path(os.path.expanduser(storage_file))
        self._ensure_directory()

    def _ensure_directory(self) -> None:
        """Create parent directory if needed."""
        self.storage_file.parent.mkdir(parents=True, exist_ok=True)

    def _set_secure_permissions(self) -> None:
        """Set file permissions to user-only read/write (600)."""
        try:
            self.storage_file.chmod(0o600)
            logger.debug(f"Set secure permissions (600) on {self.storage_file}")
        except (OSError, PermissionError) as e:
            logger.warning(f"Could not set secure permissions: {e}")

    def _read_all(self) -> Dict[str, str]:
        """
        Load the whole key-value map.

        Returns:
            Stored mapping, or an empty dict if the file is missing or invalid
        """
        if not self.storage_file.exists():
            logger.debug(f"No storage file found at {self.storage_file}")
            return {}

        try:
            with open(self.storage_file, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid storage file at {self.storage_file}, ignoring: {e}")
            return {}
        except (IOError, OSError) as e:
            logger.warning(f"Could not read storage file: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(
                f"Storage file at {self.storage_file} does not hold a JSON object, ignoring"
            )
            return {}

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: Dict[str, str]) -> None:
        """
        Replace the stored key-value map.

        Raises:
            StorageError: If the file cannot be written
        """
        try:
            with open(self.storage_file, "w") as f:
                json.dump(data, f, indent=2, sort_keys=True)

            self._set_secure_permissions()
        except (IOError, OSError) as e:
            logger.error(f"Failed to write storage file: {e}")
            raise StorageError(f"Failed to write storage file: {e}") from e

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
        logger.debug(f"Stored key '{key}' in {self.storage_file}")

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key not in data:
            return
        del data[key]
        self._write_all(data)
        logger.debug(f"Removed key '{key}' from {self.storage_file}")
