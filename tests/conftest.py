"""Pytest configuration and fixtures shared across all test modules.

Environment defaults are set before any app import so the settings
singleton is built from them.
"""

import os

os.environ["APP_ENV"] = "testing"
os.environ.setdefault("APP_API_KEY_REQUIRED", "true")
os.environ.setdefault("APP_ADMIN_API_KEYS", "test-admin-key-123,test-admin-key-456")
os.environ.setdefault("APP_SEED_DEMO_DATA", "false")
os.environ.setdefault("CLAIMS_STORAGE_BACKEND", "memory")
os.environ.setdefault("CLAIMS_WINDOW_HOURS", "12")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Iterator  # noqa: E402
from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.adapters.catalog.in_memory import InMemoryCatalogRepository  # noqa: E402
from app.adapters.storage.in_memory import InMemoryKeyValueStore  # noqa: E402
from app.core.app_factory import create_app  # noqa: E402
from app.core.catalog import get_catalog_repository  # noqa: E402
from app.core.claims import get_claim_store  # noqa: E402

START = 1_700_000_000.0


@pytest.fixture
def clock() -> Mock:
    """Controllable UNIX-seconds clock; adjust ``clock.return_value`` to move time."""
    return Mock(return_value=START)


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def app(kv_store: InMemoryKeyValueStore, catalog_repository: InMemoryCatalogRepository) -> Iterator[FastAPI]:
    """App wired to fresh, isolated stores."""
    application = create_app()
    application.dependency_overrides[get_claim_store] = lambda: kv_store
    application.dependency_overrides[get_catalog_repository] = lambda: catalog_repository
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-API-Key": "test-admin-key-123"}
