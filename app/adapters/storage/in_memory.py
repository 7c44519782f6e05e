"""In-memory key-value store.

Notes:
- Per-process only: values are lost on restart.
- Thread-safe: uses a lock around shared state.
"""

from __future__ import annotations

import threading

from app.adapters.storage.base import AbstractKeyValueStore


class InMemoryKeyValueStore(AbstractKeyValueStore):
    """Dictionary-backed store, used by default and in tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._lock = threading.RLock()
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value

    def clear(self) -> None:
        """Remove every stored value."""

        with self._lock:
            self._values.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
