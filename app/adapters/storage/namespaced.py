"""Per-client partitioning of a shared key-value store."""

from __future__ import annotations

from app.adapters.storage.base import AbstractKeyValueStore


class NamespacedKeyValueStore(AbstractKeyValueStore):
    """View over another store where every key is prefixed by a namespace.

    Each client gets its own slot (``"<namespace>:<key>"``) so one backend can
    play the role of many independent client-side storages.
    """

    def __init__(self, inner: AbstractKeyValueStore, namespace: str) -> None:
        if not namespace:
            raise ValueError("namespace must be a non-empty string")
        self._inner = inner
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    def get(self, key: str) -> str | None:
        return self._inner.get(self._key(key))

    def set(self, key: str, value: str) -> None:
        self._inner.set(self._key(key), value)
