"""Catalog repository interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

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


class AbstractCatalogRepository(ABC):
    """CRUD access to shared accounts, their games, cookies and service requests.

    Lookups of unknown ids return None (or False for deletes); turning that
    into an error is the service layer's job.
    """

    @abstractmethod
    def list_accounts(
        self, *, service: str | None = None, include_expired: bool = True
    ) -> list[Account]:
        raise NotImplementedError

    @abstractmethod
    def get_account(self, account_id: str) -> Account | None:
        raise NotImplementedError

    @abstractmethod
    def add_account(self, payload: AccountCreate) -> Account:
        raise NotImplementedError

    @abstractmethod
    def update_account(self, account_id: str, changes: AccountUpdate) -> Account | None:
        raise NotImplementedError

    @abstractmethod
    def delete_account(self, account_id: str) -> bool:
        """Delete an account together with its games."""
        raise NotImplementedError

    @abstractmethod
    def mark_account_claimed(self, account_id: str, at: datetime) -> Account | None:
        """Set ``last_used`` to ``at`` and bump ``usage_count``.

        Returns:
            The updated account, or None if it does not exist.
        """
        raise NotImplementedError

    @abstractmethod
    def add_game(self, account_id: str, payload: GameCreate) -> Game | None:
        """Attach a game to an account; None if the account does not exist."""
        raise NotImplementedError

    @abstractmethod
    def update_game(self, account_id: str, game_id: str, changes: GameUpdate) -> Game | None:
        raise NotImplementedError

    @abstractmethod
    def delete_game(self, account_id: str, game_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def list_cookies(self, *, include_expired: bool = True) -> list[Cookie]:
        raise NotImplementedError

    @abstractmethod
    def add_cookie(self, payload: CookieCreate) -> Cookie:
        raise NotImplementedError

    @abstractmethod
    def delete_cookie(self, cookie_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def list_requests(self, *, status: RequestStatus | None = None) -> list[ServiceRequest]:
        raise NotImplementedError

    @abstractmethod
    def get_request(self, request_id: str) -> ServiceRequest | None:
        raise NotImplementedError

    @abstractmethod
    def add_request(self, payload: ServiceRequestCreate) -> ServiceRequest:
        raise NotImplementedError

    @abstractmethod
    def set_request_status(
        self, request_id: str, status: RequestStatus
    ) -> ServiceRequest | None:
        raise NotImplementedError
