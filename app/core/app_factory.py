"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers) so
tests can build fresh instances.
"""

from __future__ import annotations

from fastapi import FastAPI

from app.api.routes import (
    accounts_router,
    admin_router,
    claims_router,
    cookies_router,
    health_router,
    requests_router,
)
from app.core.config import settings
from app.core.exception_handlers import setup_exception_handlers
from app.core.logging import configure_logging
from app.core.middleware import request_id_middleware
from app.core.openapi import apply_openapi_customizations


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Account Vault API",
        description=(
            "Storefront and admin API for shared streaming and gaming accounts "
            "and cookies. Each client may claim one account per rolling window "
            "(12 hours by default)."
        ),
        version="0.1.0",
        debug=settings.app.debug,
    )

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(accounts_router, prefix="/v1")
    app.include_router(claims_router, prefix="/v1")
    app.include_router(cookies_router, prefix="/v1")
    app.include_router(requests_router, prefix="/v1")
    app.include_router(admin_router, prefix="/v1")
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
