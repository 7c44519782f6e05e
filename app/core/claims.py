"""Claim limiter wiring for FastAPI routes.

Each HTTP client gets its own slot in the configured key-value store,
standing in for the browser-local storage of a single device:
- ``X-Client-ID`` header (name configurable) when present,
- otherwise the client IP.

The store itself is process-wide; limiters are cheap views built per request.
"""

from __future__ import annotations

import hashlib
import logging
from typing import Annotated

from fastapi import Depends, Request

from app.adapters.catalog.base import AbstractCatalogRepository
from app.adapters.storage.base import AbstractKeyValueStore
from app.adapters.storage.factory import create_key_value_store
from app.adapters.storage.namespaced import NamespacedKeyValueStore
from app.core.catalog import get_catalog_repository
from app.core.config import settings
from app.services.claim_limiter import ClaimLimiter
from app.services.claim_service import ClaimService

logger = logging.getLogger(__name__)


_store: AbstractKeyValueStore | None = None
_store_config: tuple[str, str] | None = None


def get_claim_store() -> AbstractKeyValueStore:
    """Return the process-wide claim history store.

    The instance is cached in-module so histories survive across requests.
    If the backend configuration changes (primarily in tests), it is rebuilt.
    """

    global _store, _store_config

    config = (settings.claims.storage_backend, settings.claims.storage_path)

    if _store is None or _store_config != config:
        _store = create_key_value_store()
        _store_config = config
        logger.info(
            "claim_store.created",
            extra={"backend": settings.claims.storage_backend},
        )

    return _store


def resolve_client_id(request: Request) -> str:
    """Build the namespaced client identifier for the current request."""

    client_id = request.headers.get(settings.claims.client_id_header)
    if client_id and client_id.strip():
        return f"client:{client_id.strip()}"

    client_host = request.client.host if request.client else "unknown"
    return f"ip:{client_host}"


def hash_client_id(client_id: str) -> str:
    """Hash the client identifier for logging without exposing it."""
    return hashlib.sha256(client_id.encode()).hexdigest()[:16]


def get_claim_limiter(
    request: Request,
    store: Annotated[AbstractKeyValueStore, Depends(get_claim_store)],
) -> ClaimLimiter:
    """FastAPI dependency returning the limiter for the calling client."""

    client_store = NamespacedKeyValueStore(store, resolve_client_id(request))
    return ClaimLimiter(
        client_store,
        window_hours=settings.claims.window_hours,
        storage_key=settings.claims.storage_key,
    )


def get_claim_service(
    limiter: Annotated[ClaimLimiter, Depends(get_claim_limiter)],
    repository: Annotated[AbstractCatalogRepository, Depends(get_catalog_repository)],
) -> ClaimService:
    """FastAPI dependency returning the claim service for the calling client."""

    return ClaimService(repository=repository, limiter=limiter)
