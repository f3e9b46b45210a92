"""Exceptions for key-value storage backends."""


class StorageError(Exception):
    """Storage write failed (file I/O error)."""

    pass
