"""Catalog wiring for FastAPI routes."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends

from app.adapters.catalog.base import AbstractCatalogRepository
from app.adapters.catalog.in_memory import InMemoryCatalogRepository
from app.adapters.catalog.seed import demo_accounts, demo_cookies, demo_requests
from app.core.config import settings
from app.services.catalog_service import CatalogService
from app.services.request_service import RequestService

logger = logging.getLogger(__name__)


_repository: AbstractCatalogRepository | None = None


def build_catalog_repository() -> AbstractCatalogRepository:
    """Create a catalog repository, seeded when APP_SEED_DEMO_DATA is set."""

    if settings.app.seed_demo_data:
        logger.info("catalog.seeded", extra={"source": "demo"})
        return InMemoryCatalogRepository(
            accounts=demo_accounts(), cookies=demo_cookies(), requests=demo_requests()
        )
    return InMemoryCatalogRepository()


def get_catalog_repository() -> AbstractCatalogRepository:
    """Return the process-wide catalog repository."""

    global _repository

    if _repository is None:
        _repository = build_catalog_repository()
    return _repository


def get_catalog_service(
    repository: Annotated[AbstractCatalogRepository, Depends(get_catalog_repository)],
) -> CatalogService:
    return CatalogService(repository)


def get_request_service(
    repository: Annotated[AbstractCatalogRepository, Depends(get_catalog_repository)],
) -> RequestService:
    return RequestService(repository)
