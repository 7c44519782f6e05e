from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from app.core.claims import get_claim_limiter
from app.schemas.claims import ClaimStatusResponse
from app.services.claim_limiter import ClaimLimiter

router = APIRouter(tags=["Claims"])


@router.get("/claims/status", response_model=ClaimStatusResponse)
def claim_status(
    limiter: Annotated[ClaimLimiter, Depends(get_claim_limiter)],
) -> ClaimStatusResponse:
    """Report whether the calling client may claim an account right now."""

    status = limiter.check()
    return ClaimStatusResponse(
        allowed=status.allowed,
        window_hours=status.window_hours,
        recent_claims=status.recent_claims,
        last_claim_at=status.last_claim_at,
        retry_after_seconds=status.retry_after_seconds,
    )
