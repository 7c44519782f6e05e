"""Pydantic schemas for claim limiter responses."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ClaimStatusResponse(BaseModel):
    """Claim eligibility of the calling client."""

    allowed: bool = Field(..., description="Whether the client may claim an account now.")
    window_hours: float = Field(..., description="Length of the rolling claim window.")
    recent_claims: int = Field(
        ..., ge=0, description="Recorded claims still inside the window."
    )
    last_claim_at: int | None = Field(
        default=None,
        description="Epoch milliseconds of the latest recorded claim.",
    )
    retry_after_seconds: int | None = Field(
        default=None,
        description="Seconds until the next claim is allowed (null when allowed).",
    )
