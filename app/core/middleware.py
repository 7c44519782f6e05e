"""HTTP middleware for request correlation.

The middleware:
- Accepts incoming X-Request-ID header or generates a UUID
- Stores request_id and a hash of the client id in contextvars for logging
- Injects request_id and total duration into response headers
- Clears context after request completion to prevent context leaks

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import logging
import time
import uuid

from fastapi import Request, Response

from app.core.claims import hash_client_id, resolve_client_id
from app.core.config import settings
from app.core.logging import clear_request_id, set_client_hash, set_request_id

logger = logging.getLogger(__name__)


async def request_id_middleware(request: Request, call_next) -> Response:
    """Propagate a correlation id and log one line per request.

    Response headers:
        X-Request-ID (name configurable): incoming or generated id.
        X-Request-Duration-ms: wall time spent handling the request.
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    set_client_hash(hash_client_id(resolve_client_id(request)))
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "request.completed",
            extra={
                "method": request.method,
                "route": request.url.path,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )
    finally:
        clear_request_id()
        set_client_hash(None)

    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response
