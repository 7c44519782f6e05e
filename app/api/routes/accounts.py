from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.core.catalog import get_catalog_service
from app.core.claims import get_claim_service
from app.schemas.catalog import Account
from app.services.catalog_service import CatalogService
from app.services.claim_service import ClaimService

router = APIRouter(tags=["Accounts"])


@router.get("/accounts", response_model=list[Account])
def list_accounts(
    service: Annotated[str, Query(min_length=1, description="Service slug, e.g. 'netflix'.")],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    game: Annotated[
        str | None,
        Query(description="Only accounts carrying a game whose name contains this text."),
    ] = None,
) -> list[Account]:
    """List the non-expired accounts of one service."""

    return catalog.accounts_for_service(service, game=game)


@router.post("/accounts/{account_id}/claim", response_model=Account)
def claim_account(
    account_id: str,
    claims: Annotated[ClaimService, Depends(get_claim_service)],
) -> Account:
    """Claim an account for the calling client.

    A client may claim one account per rolling window. When the window has
    not elapsed the response is 429 with a ``Retry-After`` header.

    Raises:
        ClaimLimitAppError: 429 when the client claimed too recently.
        NotFoundAppError: 404 when the account does not exist.
    """

    return claims.claim_account(account_id)
