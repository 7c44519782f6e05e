"""Claim service: rate-limited hand-out of shared accounts.

Flow for one claim:
1. Ask the client's ClaimLimiter whether a claim is allowed.
2. Mark the account as used in the catalog.
3. Record the claim in the client's history.

The claim is recorded only after the catalog update succeeded, so a claim on
an unknown account does not burn the client's window. A failure to persist
the record is logged and tolerated: the account has already been handed out
and the limiter is advisory.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

from app.adapters.catalog.base import AbstractCatalogRepository
from app.core.errors import ClaimLimitAppError, NotFoundAppError, StorageWriteError
from app.schemas.catalog import Account
from app.services.claim_limiter import ClaimLimiter

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _format_hours(hours: float) -> str:
    return str(int(hours)) if float(hours).is_integer() else str(hours)


class ClaimService:
    """Coordinates the claim limiter and the catalog for one client."""

    def __init__(
        self,
        *,
        repository: AbstractCatalogRepository,
        limiter: ClaimLimiter,
        now: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._limiter = limiter
        self._now = now

    def claim_account(self, account_id: str) -> Account:
        """Claim an account for the current client.

        Args:
            account_id: Identifier of the account to claim.

        Returns:
            The account with updated usage metadata.

        Raises:
            ClaimLimitAppError: If the client already claimed inside the window.
            NotFoundAppError: If the account does not exist.
        """
        status = self._limiter.check()
        if not status.allowed:
            logger.warning(
                "claim.blocked",
                extra={
                    "account_id": account_id,
                    "recent_claims": status.recent_claims,
                    "retry_after_s": status.retry_after_seconds,
                },
            )
            raise ClaimLimitAppError(
                code="claim_limit_reached",
                message=(
                    "You can only claim one account every "
                    f"{_format_hours(status.window_hours)} hours."
                ),
                details={
                    "retry_after": status.retry_after_seconds or 0,
                    "window_hours": status.window_hours,
                },
            )

        account = self._repository.mark_account_claimed(account_id, self._now())
        if account is None:
            raise NotFoundAppError(
                code="account_not_found",
                message="Account not found",
                details={"account_id": account_id},
            )

        try:
            self._limiter.record_claim()
        except StorageWriteError as exc:
            logger.warning(
                "claim.record_failed",
                extra={"account_id": account_id, "error_code": exc.code},
            )

        logger.info(
            "claim.allowed",
            extra={
                "account_id": account_id,
                "service": account.service,
                "usage_count": account.usage_count,
            },
        )
        return account
