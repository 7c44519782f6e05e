from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from app.core.catalog import get_catalog_service
from app.schemas.catalog import Cookie
from app.services.catalog_service import CatalogService

router = APIRouter(tags=["Cookies"])


@router.get("/cookies", response_model=list[Cookie])
def list_cookies(
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
) -> list[Cookie]:
    """List cookies that have not expired."""

    return catalog.available_cookies()
