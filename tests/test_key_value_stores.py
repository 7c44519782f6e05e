"""Unit tests for key-value storage adapters."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from app.adapters.storage import factory
from app.adapters.storage.in_memory import InMemoryKeyValueStore
from app.adapters.storage.json_file import JsonFileKeyValueStore
from app.adapters.storage.namespaced import NamespacedKeyValueStore
from app.core.errors import StorageReadError, StorageWriteError, ValidationAppError
from app.services.claim_limiter import ClaimLimiter


class TestInMemoryKeyValueStore:
    def test_get_missing_key_returns_none(self) -> None:
        assert InMemoryKeyValueStore().get("nope") is None

    def test_set_overwrites(self) -> None:
        store = InMemoryKeyValueStore()
        store.set("k", "1")
        store.set("k", "2")

        assert store.get("k") == "2"
        assert len(store) == 1

    def test_clear(self) -> None:
        store = InMemoryKeyValueStore({"a": "1", "b": "2"})
        store.clear()

        assert len(store) == 0
        assert store.get("a") is None


class TestJsonFileKeyValueStore:
    def test_missing_file_reads_as_empty(self, tmp_path: Path) -> None:
        store = JsonFileKeyValueStore(tmp_path / "claims.json")

        assert store.get("k") is None

    def test_values_survive_a_new_instance(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "claims.json"
        JsonFileKeyValueStore(path).set("k", "[1, 2]")

        assert JsonFileKeyValueStore(path).get("k") == "[1, 2]"
        assert json.loads(path.read_text()) == {"k": "[1, 2]"}

    def test_set_keeps_other_keys(self, tmp_path: Path) -> None:
        store = JsonFileKeyValueStore(tmp_path / "claims.json")
        store.set("a", "1")
        store.set("b", "2")

        assert store.get("a") == "1"
        assert store.get("b") == "2"

    @pytest.mark.parametrize(
        "content",
        [
            b"{not json",
            b"[1, 2]",
            b'{"k": 5}',
            b"\xff\xfe{garbage",
            pytest.param(b"[" * 100_000 + b"]" * 100_000, id="deeply_nested"),
        ],
    )
    def test_corrupt_file_raises_on_read(self, tmp_path: Path, content: bytes) -> None:
        path = tmp_path / "claims.json"
        path.write_bytes(content)

        with pytest.raises(StorageReadError) as exc_info:
            JsonFileKeyValueStore(path).get("k")

        assert exc_info.value.code == "storage_corrupt"

    def test_corrupt_file_is_replaced_on_write(self, tmp_path: Path) -> None:
        path = tmp_path / "claims.json"
        path.write_text("{not json")
        store = JsonFileKeyValueStore(path)

        store.set("k", "v")

        assert store.get("k") == "v"

    def test_write_failure_raises_storage_write_error(self, tmp_path: Path) -> None:
        store = JsonFileKeyValueStore(tmp_path / "claims.json")

        with patch("app.adapters.storage.json_file.os.replace", side_effect=OSError(28, "No space left")):
            with pytest.raises(StorageWriteError) as exc_info:
                store.set("k", "v")

        assert exc_info.value.code == "storage_write_failed"
        # No temp files left behind
        assert list(tmp_path.iterdir()) == []

    def test_limiter_treats_corrupt_file_as_empty_and_repairs_it(self, tmp_path: Path, clock) -> None:
        path = tmp_path / "claims.json"
        path.write_text("garbage")
        limiter = ClaimLimiter(JsonFileKeyValueStore(path), clock=clock)

        assert limiter.is_claim_allowed() is True

        limiter.record_claim()

        assert limiter.is_claim_allowed() is False
        assert json.loads(json.loads(path.read_text())["user_claim_timestamps"]) == [
            int(clock.return_value * 1000)
        ]

    def test_limiter_repairs_undecodable_file(self, tmp_path: Path, clock) -> None:
        path = tmp_path / "claims.json"
        path.write_bytes(b"\xff\xfe{garbage")
        store = JsonFileKeyValueStore(path)
        limiter = ClaimLimiter(store, clock=clock)

        assert limiter.load_history() == []
        assert limiter.is_claim_allowed() is True

        limiter.record_claim()

        assert limiter.is_claim_allowed() is False
        assert json.loads(store.get("user_claim_timestamps")) == [int(clock.return_value * 1000)]


class TestNamespacedKeyValueStore:
    def test_slots_are_isolated(self) -> None:
        inner = InMemoryKeyValueStore()
        alice = NamespacedKeyValueStore(inner, "client:alice")
        bob = NamespacedKeyValueStore(inner, "client:bob")

        alice.set("k", "a")

        assert alice.get("k") == "a"
        assert bob.get("k") is None
        assert inner.get("client:alice:k") == "a"

    def test_empty_namespace_rejected(self) -> None:
        with pytest.raises(ValueError):
            NamespacedKeyValueStore(InMemoryKeyValueStore(), "")


class TestCreateKeyValueStore:
    @patch("app.adapters.storage.factory.settings")
    def test_memory_backend(self, mock_settings) -> None:
        mock_settings.claims.storage_backend = "memory"

        assert isinstance(factory.create_key_value_store(), InMemoryKeyValueStore)

    @patch("app.adapters.storage.factory.settings")
    def test_file_backend(self, mock_settings, tmp_path: Path) -> None:
        mock_settings.claims.storage_backend = "FILE"
        mock_settings.claims.storage_path = str(tmp_path / "claims.json")

        store = factory.create_key_value_store()

        assert isinstance(store, JsonFileKeyValueStore)
        assert store.path == tmp_path / "claims.json"

    @patch("app.adapters.storage.factory.settings")
    def test_unknown_backend(self, mock_settings) -> None:
        mock_settings.claims.storage_backend = "redis"

        with pytest.raises(ValidationAppError) as exc_info:
            factory.create_key_value_store()

        assert exc_info.value.code == "storage_unknown_backend"
