from __future__ import annotations

from app.api.routes.accounts import router as accounts_router
from app.api.routes.admin import router as admin_router
from app.api.routes.claims import router as claims_router
from app.api.routes.cookies import router as cookies_router
from app.api.routes.health import router as health_router
from app.api.routes.requests import router as requests_router

__all__ = [
    "accounts_router",
    "admin_router",
    "claims_router",
    "cookies_router",
    "health_router",
    "requests_router",
]
