"""Pydantic schemas for shared accounts, their games, and cookies."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RecordStatus = Literal["active", "expiring", "expired"]


class AccountCreate(BaseModel):
    """Fields an administrator supplies when adding an account."""

    service: str = Field(
        ...,
        min_length=1,
        description="Service slug the credentials belong to (e.g., 'netflix', 'steam').",
    )
    email: str = Field(..., min_length=1, description="Login email or username.")
    password: str = Field(..., min_length=1, description="Login password.")
    status: RecordStatus = Field("active", description="Lifecycle status of the credentials.")
    expires_on: datetime | None = Field(
        default=None,
        description="When the credentials stop working, if known.",
    )


class AccountUpdate(BaseModel):
    """Partial update of an account; omitted fields are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    service: str | None = Field(default=None, min_length=1)
    email: str | None = Field(default=None, min_length=1)
    password: str | None = Field(default=None, min_length=1)
    status: RecordStatus | None = None
    expires_on: datetime | None = None


class GameCreate(BaseModel):
    """Fields an administrator supplies when attaching a game to an account."""

    name: str = Field(..., min_length=1, description="Game title.")
    description: str | None = Field(default=None, description="Optional free-text description.")


class GameUpdate(BaseModel):
    """Partial update of a game; omitted fields are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None


class Game(GameCreate):
    """A game available on a (typically Steam) account."""

    id: str = Field(..., description="Server-assigned identifier.")
    account_id: str = Field(..., description="Account the game belongs to.")


class Account(AccountCreate):
    """A shared login credential record."""

    id: str = Field(..., description="Server-assigned identifier.")
    added_on: datetime = Field(..., description="When the account was added.")
    last_used: datetime | None = Field(
        default=None,
        description="When the account was last claimed.",
    )
    usage_count: int = Field(0, ge=0, description="How many times the account was claimed.")
    games: list[Game] = Field(default_factory=list, description="Games available on the account.")


class CookieCreate(BaseModel):
    """Fields an administrator supplies when adding a cookie."""

    name: str = Field(..., min_length=1, description="Cookie name.")
    value: str = Field(..., min_length=1, description="Cookie value.")
    domain: str = Field(..., min_length=1, description="Cookie domain (e.g., '.netflix.com').")
    status: RecordStatus = Field("active", description="Lifecycle status of the cookie.")
    expires_on: datetime | None = Field(
        default=None,
        description="When the cookie expires, if known.",
    )


class Cookie(CookieCreate):
    """A shared session cookie record."""

    id: str = Field(..., description="Server-assigned identifier.")
    added_on: datetime = Field(..., description="When the cookie was added.")
