"""OpenAPI metadata and customization utilities.

Enriches the generated OpenAPI schema with:
- Tags metadata
- The admin API key security scheme (``X-API-Key``), applied to admin paths only
- The optional client id header on claim operations
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

from app.core.config import settings

_TAGS = [
    {"name": "Accounts", "description": "Browse and claim shared accounts."},
    {"name": "Cookies", "description": "Browse shared session cookies."},
    {"name": "Claims", "description": "Claim eligibility of the calling client."},
    {"name": "Requests", "description": "Ask for new services or plans."},
    {"name": "Admin", "description": "Catalog and request management (requires X-API-Key)."},
    {"name": "Health", "description": "Liveness checks."},
]


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add metadata and security."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        components = schema.setdefault("components", {})
        security_schemes = components.setdefault("securitySchemes", {})
        security_schemes.setdefault(
            "AdminApiKey",
            {
                "type": "apiKey",
                "in": "header",
                "name": "X-API-Key",
                "description": "Admin API key (APP_ADMIN_API_KEYS).",
            },
        )

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        tags.extend(t for t in _TAGS if t["name"] not in existing_tag_names)

        client_header = {
            "name": settings.claims.client_id_header,
            "in": "header",
            "required": False,
            "description": "Identifies the client whose claim history applies (defaults to client IP).",
            "schema": {"type": "string"},
        }

        for path, methods in schema.get("paths", {}).items():
            for method_obj in methods.values():
                if not isinstance(method_obj, dict):
                    continue
                if path.startswith("/v1/admin"):
                    method_obj["security"] = [{"AdminApiKey": []}]
                if "/claim" in path:
                    method_obj.setdefault("parameters", []).append(client_header)

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
