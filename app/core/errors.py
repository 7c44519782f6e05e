"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    hint: str
    account_id: str
    cookie_id: str
    game_id: str
    service_request_id: str
    status: str
    retry_after: int
    window_hours: float
    backend: str
    path: str
    key: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when input/config validation fails."""


class AuthenticationAppError(AppError):
    """Raised when authentication/authorization fails."""


class NotFoundAppError(AppError):
    """Raised when a catalog record does not exist."""


class ConflictAppError(AppError):
    """Raised when a record is not in a state that allows the change."""


class ClaimLimitAppError(AppError):
    """Raised when a client claims again inside the rolling window."""


class StorageAppError(AppError):
    """Raised when a key-value store cannot be read or written."""


class StorageReadError(StorageAppError):
    """Stored data is unavailable or corrupt."""


class StorageWriteError(StorageAppError):
    """Stored data could not be persisted."""
