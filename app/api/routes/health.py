from __future__ import annotations

from fastapi import APIRouter

from app.core.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness check reporting the active claim configuration."""

    return {
        "status": "ok",
        "env": settings.app_env,
        "claim_window_hours": settings.claims.window_hours,
        "claim_storage": settings.claims.storage_backend,
    }
