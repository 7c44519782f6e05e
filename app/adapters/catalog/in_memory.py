"""In-memory catalog repository.

Notes:
- Per-process only: data is lost on restart.
- Thread-safe: uses a lock around shared state.
- Returns copies so callers cannot mutate stored records.
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from typing import Callable

from app.adapters.catalog.base import AbstractCatalogRepository
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
from app.schemas.requests import RequestStatus, ServiceRequest, ServiceRequestCreate


def _new_id() -> str:
    return uuid.uuid4().hex[:8]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryCatalogRepository(AbstractCatalogRepository):
    """Catalog kept in insertion-ordered dictionaries."""

    def __init__(
        self,
        *,
        accounts: list[Account] | None = None,
        cookies: list[Cookie] | None = None,
        requests: list[ServiceRequest] | None = None,
        id_factory: Callable[[], str] = _new_id,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._lock = threading.RLock()
        self._accounts: dict[str, Account] = {a.id: a for a in accounts or []}
        self._cookies: dict[str, Cookie] = {c.id: c for c in cookies or []}
        self._requests: dict[str, ServiceRequest] = {r.id: r for r in requests or []}
        self._id_factory = id_factory
        self._now = now

    def list_accounts(
        self, *, service: str | None = None, include_expired: bool = True
    ) -> list[Account]:
        with self._lock:
            return [
                account.model_copy(deep=True)
                for account in self._accounts.values()
                if (service is None or account.service == service)
                and (include_expired or account.status != "expired")
            ]

    def get_account(self, account_id: str) -> Account | None:
        with self._lock:
            account = self._accounts.get(account_id)
            return account.model_copy(deep=True) if account else None

    def add_account(self, payload: AccountCreate) -> Account:
        with self._lock:
            account = Account(
                **payload.model_dump(),
                id=self._id_factory(),
                added_on=self._now(),
                last_used=None,
                usage_count=0,
            )
            self._accounts[account.id] = account
            return account.model_copy(deep=True)

    def update_account(self, account_id: str, changes: AccountUpdate) -> Account | None:
        with self._lock:
            current = self._accounts.get(account_id)
            if current is None:
                return None
            update = {
                field: value
                for field, value in changes.model_dump(exclude_unset=True).items()
                # only expires_on may be cleared; null elsewhere means "unchanged"
                if value is not None or field == "expires_on"
            }
            updated = current.model_copy(update=update)
            self._accounts[account_id] = updated
            return updated.model_copy(deep=True)

    def delete_account(self, account_id: str) -> bool:
        with self._lock:
            return self._accounts.pop(account_id, None) is not None

    def mark_account_claimed(self, account_id: str, at: datetime) -> Account | None:
        with self._lock:
            current = self._accounts.get(account_id)
            if current is None:
                return None
            updated = current.model_copy(
                update={"last_used": at, "usage_count": current.usage_count + 1}
            )
            self._accounts[account_id] = updated
            return updated.model_copy(deep=True)

    def add_game(self, account_id: str, payload: GameCreate) -> Game | None:
        with self._lock:
            current = self._accounts.get(account_id)
            if current is None:
                return None
            game = Game(**payload.model_dump(), id=self._id_factory(), account_id=account_id)
            self._accounts[account_id] = current.model_copy(
                update={"games": [*current.games, game]}
            )
            return game.model_copy()

    def update_game(self, account_id: str, game_id: str, changes: GameUpdate) -> Game | None:
        with self._lock:
            current = self._accounts.get(account_id)
            if current is None:
                return None
            update = {
                field: value
                for field, value in changes.model_dump(exclude_unset=True).items()
                if value is not None or field == "description"
            }
            games: list[Game] = []
            updated: Game | None = None
            for game in current.games:
                if game.id == game_id:
                    game = updated = game.model_copy(update=update)
                games.append(game)
            if updated is None:
                return None
            self._accounts[account_id] = current.model_copy(update={"games": games})
            return updated.model_copy()

    def delete_game(self, account_id: str, game_id: str) -> bool:
        with self._lock:
            current = self._accounts.get(account_id)
            if current is None:
                return False
            games = [game for game in current.games if game.id != game_id]
            if len(games) == len(current.games):
                return False
            self._accounts[account_id] = current.model_copy(update={"games": games})
            return True

    def list_cookies(self, *, include_expired: bool = True) -> list[Cookie]:
        with self._lock:
            return [
                cookie.model_copy()
                for cookie in self._cookies.values()
                if include_expired or cookie.status != "expired"
            ]

    def add_cookie(self, payload: CookieCreate) -> Cookie:
        with self._lock:
            cookie = Cookie(
                **payload.model_dump(),
                id=self._id_factory(),
                added_on=self._now(),
            )
            self._cookies[cookie.id] = cookie
            return cookie.model_copy()

    def delete_cookie(self, cookie_id: str) -> bool:
        with self._lock:
            return self._cookies.pop(cookie_id, None) is not None

    def list_requests(self, *, status: RequestStatus | None = None) -> list[ServiceRequest]:
        with self._lock:
            return [
                request.model_copy()
                for request in self._requests.values()
                if status is None or request.status == status
            ]

    def get_request(self, request_id: str) -> ServiceRequest | None:
        with self._lock:
            request = self._requests.get(request_id)
            return request.model_copy() if request else None

    def add_request(self, payload: ServiceRequestCreate) -> ServiceRequest:
        with self._lock:
            request = ServiceRequest(
                **payload.model_dump(),
                id=self._id_factory(),
                requested_on=self._now(),
                status="pending",
            )
            self._requests[request.id] = request
            return request.model_copy()

    def set_request_status(
        self, request_id: str, status: RequestStatus
    ) -> ServiceRequest | None:
        with self._lock:
            current = self._requests.get(request_id)
            if current is None:
                return None
            updated = current.model_copy(update={"status": status})
            self._requests[request_id] = updated
            return updated.model_copy()
