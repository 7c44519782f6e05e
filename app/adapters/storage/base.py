"""Key-value store interface.

The claim limiter depends on this abstraction only, so the backing storage
(memory, a JSON file, something shared later) can be swapped freely.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractKeyValueStore(ABC):
    """Interface for durable string-to-string storage."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the value stored under ``key``.

        Args:
            key: Storage key.

        Returns:
            The stored string, or None when the key was never set.

        Raises:
            StorageReadError: If the backend is unavailable or corrupt.
        """
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, overwriting any previous value.

        Args:
            key: Storage key.
            value: Serialized value.

        Raises:
            StorageWriteError: If the value could not be persisted.
        """
        raise NotImplementedError
