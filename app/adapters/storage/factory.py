"""Factory pattern for creating key-value store instances."""

from app.adapters.storage.base import AbstractKeyValueStore
from app.adapters.storage.in_memory import InMemoryKeyValueStore
from app.adapters.storage.json_file import JsonFileKeyValueStore
from app.core.config import PROJECT_ROOT, settings
from app.core.errors import ValidationAppError


def create_key_value_store() -> AbstractKeyValueStore:
    """Instantiate the claim history backend configured in settings.

    Relative file paths are resolved against the project root.

    Returns:
        AbstractKeyValueStore: Configured store instance.

    Raises:
        ValidationAppError: If the backend name is unknown.
    """
    backend = settings.claims.storage_backend.lower()

    if backend == "memory":
        return InMemoryKeyValueStore()

    if backend == "file":
        path = PROJECT_ROOT / settings.claims.storage_path
        return JsonFileKeyValueStore(path)

    raise ValidationAppError(
        code="storage_unknown_backend",
        message=f"Unknown storage backend: '{backend}'. Supported backends: memory, file",
        details={"backend": backend},
    )
