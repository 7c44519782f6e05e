"""JSON file key-value store.

All keys live in a single JSON object on disk. Writes go to a temporary file
in the same directory and are moved into place with ``os.replace`` so a crash
never leaves a half-written file behind.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path

from app.adapters.storage.base import AbstractKeyValueStore
from app.core.errors import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(AbstractKeyValueStore):
    """Durable store persisting a ``{key: value}`` mapping as JSON.

    Important:
        The lock only serializes access inside one process. Several processes
        sharing the same file may overwrite each other's updates.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.RLock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_mapping(self) -> dict[str, str]:
        """Load the whole mapping from disk.

        Returns:
            The stored mapping, or an empty dict when the file does not exist.

        Raises:
            StorageReadError: If the file cannot be read or is not a JSON
                object of strings.
        """
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except UnicodeDecodeError as exc:
            raise StorageReadError(
                code="storage_corrupt",
                message="Storage file is not valid UTF-8",
                details={"backend": "file", "path": str(self._path)},
            ) from exc
        except OSError as exc:
            raise StorageReadError(
                code="storage_unavailable",
                message=f"Could not read storage file: {exc.strerror or exc}",
                details={"backend": "file", "path": str(self._path)},
            ) from exc

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            raise StorageReadError(
                code="storage_corrupt",
                message="Storage file does not contain valid JSON",
                details={"backend": "file", "path": str(self._path)},
            ) from exc

        if not isinstance(data, dict) or not all(isinstance(v, str) for v in data.values()):
            raise StorageReadError(
                code="storage_corrupt",
                message="Storage file must contain a JSON object of strings",
                details={"backend": "file", "path": str(self._path)},
            )
        return data

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read_mapping().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            try:
                mapping = self._read_mapping()
            except StorageReadError as exc:
                logger.warning(
                    "storage.file_reset",
                    extra={"path": str(self._path), "reason": exc.code},
                )
                mapping = {}

            mapping[key] = value
            self._write_mapping(mapping)

    def _write_mapping(self, mapping: dict[str, str]) -> None:
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(mapping, fh)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageWriteError(
                code="storage_write_failed",
                message=f"Could not write storage file: {exc.strerror or exc}",
                details={"backend": "file", "path": str(self._path)},
            ) from exc
