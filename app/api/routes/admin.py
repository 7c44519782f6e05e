"""Catalog and service request management routes, guarded by the admin API key."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from app.core.auth import verify_admin_key
from app.core.catalog import get_catalog_service, get_request_service
from app.schemas.catalog import (
    Account,
    AccountCreate,
    AccountUpdate,
    Cookie,
    CookieCreate,
    Game,
    GameCreate,
    GameUpdate,
)
from app.schemas.requests import RequestStatus, ServiceRequest, ServiceRequestDecision
from app.services.catalog_service import CatalogService
from app.services.request_service import RequestService

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(verify_admin_key)],
)

CatalogDep = Annotated[CatalogService, Depends(get_catalog_service)]
RequestsDep = Annotated[RequestService, Depends(get_request_service)]


@router.get("/accounts", response_model=list[Account])
def list_all_accounts(catalog: CatalogDep) -> list[Account]:
    """List every account, expired ones included."""

    return catalog.all_accounts()


@router.post("/accounts", response_model=Account, status_code=status.HTTP_201_CREATED)
def add_account(payload: AccountCreate, catalog: CatalogDep) -> Account:
    return catalog.add_account(payload)


@router.patch("/accounts/{account_id}", response_model=Account)
def update_account(account_id: str, changes: AccountUpdate, catalog: CatalogDep) -> Account:
    return catalog.update_account(account_id, changes)


@router.delete("/accounts/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_account(account_id: str, catalog: CatalogDep) -> Response:
    catalog.delete_account(account_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/accounts/{account_id}/games", response_model=list[Game])
def list_games(account_id: str, catalog: CatalogDep) -> list[Game]:
    return catalog.games_for_account(account_id)


@router.post(
    "/accounts/{account_id}/games",
    response_model=Game,
    status_code=status.HTTP_201_CREATED,
)
def add_game(account_id: str, payload: GameCreate, catalog: CatalogDep) -> Game:
    return catalog.add_game(account_id, payload)


@router.patch("/accounts/{account_id}/games/{game_id}", response_model=Game)
def update_game(account_id: str, game_id: str, changes: GameUpdate, catalog: CatalogDep) -> Game:
    return catalog.update_game(account_id, game_id, changes)


@router.delete("/accounts/{account_id}/games/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_game(account_id: str, game_id: str, catalog: CatalogDep) -> Response:
    catalog.delete_game(account_id, game_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/cookies", response_model=Cookie, status_code=status.HTTP_201_CREATED)
def add_cookie(payload: CookieCreate, catalog: CatalogDep) -> Cookie:
    return catalog.add_cookie(payload)


@router.delete("/cookies/{cookie_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cookie(cookie_id: str, catalog: CatalogDep) -> Response:
    catalog.delete_cookie(cookie_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/requests", response_model=list[ServiceRequest])
def list_requests(
    requests: RequestsDep,
    request_status: Annotated[RequestStatus | None, Query(alias="status")] = None,
) -> list[ServiceRequest]:
    """List service requests, optionally only those with a given status."""

    return requests.list_requests(request_status)


@router.patch("/requests/{request_id}", response_model=ServiceRequest)
def decide_request(
    request_id: str, decision: ServiceRequestDecision, requests: RequestsDep
) -> ServiceRequest:
    """Approve or deny a pending request (409 once it has been decided)."""

    return requests.decide(request_id, decision)
