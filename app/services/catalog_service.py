"""Catalog service exposing the storefront and admin views of the catalog."""

from __future__ import annotations

import logging

from app.adapters.catalog.base import AbstractCatalogRepository
from app.core.errors import NotFoundAppError
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

logger = logging.getLogger(__name__)


class CatalogService:
    """Business rules on top of the catalog repository.

    Storefront listings hide expired records; admin listings show everything.
    Unknown ids raise NotFoundAppError.
    """

    def __init__(self, repository: AbstractCatalogRepository) -> None:
        self._repository = repository

    def accounts_for_service(self, service: str, game: str | None = None) -> list[Account]:
        """List non-expired accounts of a service.

        Args:
            service: Service slug.
            game: Optional case-insensitive fragment of a game name; when
                given, only accounts carrying a matching game are returned.
        """
        accounts = self._repository.list_accounts(service=service, include_expired=False)
        if not game:
            return accounts
        needle = game.lower()
        return [a for a in accounts if any(needle in g.name.lower() for g in a.games)]

    def all_accounts(self) -> list[Account]:
        return self._repository.list_accounts()

    def available_cookies(self) -> list[Cookie]:
        return self._repository.list_cookies(include_expired=False)

    def add_account(self, payload: AccountCreate) -> Account:
        account = self._repository.add_account(payload)
        logger.info(
            "catalog.account_added",
            extra={"account_id": account.id, "service": account.service},
        )
        return account

    def update_account(self, account_id: str, changes: AccountUpdate) -> Account:
        account = self._repository.update_account(account_id, changes)
        if account is None:
            raise _account_not_found(account_id)
        logger.info(
            "catalog.account_updated",
            extra={
                "account_id": account_id,
                "fields": sorted(changes.model_dump(exclude_unset=True)),
            },
        )
        return account

    def delete_account(self, account_id: str) -> None:
        if not self._repository.delete_account(account_id):
            raise _account_not_found(account_id)
        logger.info("catalog.account_deleted", extra={"account_id": account_id})

    def games_for_account(self, account_id: str) -> list[Game]:
        account = self._repository.get_account(account_id)
        if account is None:
            raise _account_not_found(account_id)
        return account.games

    def add_game(self, account_id: str, payload: GameCreate) -> Game:
        game = self._repository.add_game(account_id, payload)
        if game is None:
            raise _account_not_found(account_id)
        logger.info(
            "catalog.game_added",
            extra={"account_id": account_id, "game_id": game.id},
        )
        return game

    def update_game(self, account_id: str, game_id: str, changes: GameUpdate) -> Game:
        game = self._repository.update_game(account_id, game_id, changes)
        if game is None:
            raise _game_not_found(account_id, game_id)
        logger.info(
            "catalog.game_updated",
            extra={
                "account_id": account_id,
                "game_id": game_id,
                "fields": sorted(changes.model_dump(exclude_unset=True)),
            },
        )
        return game

    def delete_game(self, account_id: str, game_id: str) -> None:
        if not self._repository.delete_game(account_id, game_id):
            raise _game_not_found(account_id, game_id)
        logger.info(
            "catalog.game_deleted",
            extra={"account_id": account_id, "game_id": game_id},
        )

    def add_cookie(self, payload: CookieCreate) -> Cookie:
        cookie = self._repository.add_cookie(payload)
        logger.info(
            "catalog.cookie_added",
            extra={"cookie_id": cookie.id, "domain": cookie.domain},
        )
        return cookie

    def delete_cookie(self, cookie_id: str) -> None:
        if not self._repository.delete_cookie(cookie_id):
            raise NotFoundAppError(
                code="cookie_not_found",
                message="Cookie not found",
                details={"cookie_id": cookie_id},
            )
        logger.info("catalog.cookie_deleted", extra={"cookie_id": cookie_id})


def _account_not_found(account_id: str) -> NotFoundAppError:
    return NotFoundAppError(
        code="account_not_found",
        message="Account not found",
        details={"account_id": account_id},
    )


def _game_not_found(account_id: str, game_id: str) -> NotFoundAppError:
    return NotFoundAppError(
        code="game_not_found",
        message="Game not found",
        details={"account_id": account_id, "game_id": game_id},
    )
