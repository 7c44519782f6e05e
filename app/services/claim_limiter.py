"""Rolling-window claim limiter.

A client may claim at most one account per window (12 hours by default).
Every approved claim is recorded as an epoch-millisecond timestamp in a JSON
list kept in the client's key-value slot. A new claim is allowed only when no
recorded timestamp is younger than the window.

Notes:
- Enforcement is per storage slot. Clearing the slot, or presenting another
  client id, resets the limit; this is an advisory limiter, not a quota.
- Old timestamps are never pruned. They simply stop counting.
- Reads are lenient: missing, unreadable or malformed history counts as empty
  so corrupt state can never lock a client out. Writes are strict.
"""

from __future__ import annotations

import json
import logging
import math
import time
from dataclasses import dataclass
from typing import Any, Callable

from app.adapters.storage.base import AbstractKeyValueStore
from app.core.errors import StorageReadError

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "user_claim_timestamps"
DEFAULT_WINDOW_HOURS = 12

_MS_PER_HOUR = 60 * 60 * 1000
# Largest integer a JSON number round-trips exactly (2**53 - 1)
_MAX_TIMESTAMP_MS = 9_007_199_254_740_991


@dataclass(frozen=True)
class ClaimStatus:
    """Outcome of a limiter check.

    Attributes:
        allowed: Whether a new claim may proceed.
        window_hours: Configured window length.
        recent_claims: Number of recorded claims still inside the window.
        last_claim_at: Latest recorded timestamp (ms), in or out of the window.
        retry_after_seconds: Seconds until the youngest in-window claim
            expires; None when allowed.
    """

    allowed: bool
    window_hours: float
    recent_claims: int
    last_claim_at: int | None
    retry_after_seconds: int | None


def parse_claim_history(raw: str | None) -> list[int]:
    """Decode a stored claim history.

    Args:
        raw: Serialized history as returned by the store.

    Returns:
        The list of timestamps, or an empty list when ``raw`` is missing, is
        not a JSON list, or contains anything other than numbers within
        the safe integer range.
    """
    if raw is None:
        return []

    try:
        data: Any = json.loads(raw)
    except (TypeError, ValueError, RecursionError):
        logger.warning("claim_history.unreadable", extra={"reason": "invalid_json"})
        return []

    if not isinstance(data, list):
        logger.warning("claim_history.unreadable", extra={"reason": "not_a_list"})
        return []

    history: list[int] = []
    for item in data:
        # bool is an int subclass; a stored true/false is not a timestamp.
        # The range check also rejects NaN and infinities.
        if (
            isinstance(item, bool)
            or not isinstance(item, (int, float))
            or not -_MAX_TIMESTAMP_MS <= item <= _MAX_TIMESTAMP_MS
        ):
            logger.warning("claim_history.unreadable", extra={"reason": "non_numeric_entry"})
            return []
        history.append(int(item))
    return history


class ClaimLimiter:
    """Gate allowing one claim per rolling window for one client slot."""

    def __init__(
        self,
        store: AbstractKeyValueStore,
        *,
        window_hours: float = DEFAULT_WINDOW_HOURS,
        storage_key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the limiter.

        Args:
            store: Key-value slot holding this client's history.
            window_hours: Rolling window length in hours.
            storage_key: Key under which the history is stored.
            clock: Time source returning UNIX time in seconds.

        Raises:
            ValueError: If window_hours is not positive or storage_key is empty.
        """
        if window_hours <= 0:
            raise ValueError("window_hours must be > 0")
        if not storage_key:
            raise ValueError("storage_key must be a non-empty string")

        self._store = store
        self._window_hours = window_hours
        self._window_ms = int(window_hours * _MS_PER_HOUR)
        self._storage_key = storage_key
        self._clock = clock

    @property
    def window_hours(self) -> float:
        return self._window_hours

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def load_history(self) -> list[int]:
        """Read the stored history, treating any read problem as empty."""

        try:
            raw = self._store.get(self._storage_key)
        except StorageReadError as exc:
            logger.warning(
                "claim_history.unreadable",
                extra={"reason": exc.code},
            )
            return []
        return parse_claim_history(raw)

    def check(self) -> ClaimStatus:
        """Evaluate the window without recording anything.

        An entry counts while ``now - t < window``; an entry exactly one
        window old has expired.
        """
        history = self.load_history()
        now = self._now_ms()

        recent = [t for t in history if now - t < self._window_ms]
        last_claim_at = max(history) if history else None

        if not recent:
            return ClaimStatus(
                allowed=True,
                window_hours=self._window_hours,
                recent_claims=0,
                last_claim_at=last_claim_at,
                retry_after_seconds=None,
            )

        expires_at = max(recent) + self._window_ms
        retry_after = max(1, math.ceil((expires_at - now) / 1000))
        return ClaimStatus(
            allowed=False,
            window_hours=self._window_hours,
            recent_claims=len(recent),
            last_claim_at=last_claim_at,
            retry_after_seconds=retry_after,
        )

    def is_claim_allowed(self) -> bool:
        """Return True when no recorded claim falls inside the window."""

        return self.check().allowed

    def record_claim(self) -> None:
        """Append the current time to the history and persist it.

        Not idempotent: each call records one more claim.

        Raises:
            StorageWriteError: If the store rejects the write.
        """
        history = self.load_history()
        now = self._now_ms()
        history.append(now)
        self._store.set(self._storage_key, json.dumps(history))
        logger.info(
            "claim.recorded",
            extra={"claimed_at_ms": now, "history_size": len(history)},
        )
