"""OpenAPI metadata and customization utilities.

Enriches the generated OpenAPI schema with:
- Tags metadata
- The shared error envelope schema
- Rate limit response headers on throttled operations

This keeps documentation concerns decoupled from the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

ERROR_ENVELOPE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "error": {
            "type": "object",
            "properties": {
                "code": {"type": "string"},
                "message": {"type": "string"},
                "request_id": {"type": "string", "nullable": True},
                "details": {"type": "object"},
            },
            "required": ["code", "message"],
        }
    },
}

RATE_LIMIT_HEADERS: Dict[str, Any] = {
    name: {"description": description, "schema": {"type": "integer"}}
    for name, description in (
        ("Retry-After", "Seconds until the oldest counted request leaves the window."),
        ("X-RateLimit-Limit", "Requests allowed per window."),
        ("X-RateLimit-Remaining", "Requests left in the current window."),
        ("X-RateLimit-Reset", "UNIX epoch seconds when a slot frees up."),
    )
}


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add metadata and error docs.

    - Registers ``ErrorEnvelope`` under components.schemas
    - Points every documented 4xx/5xx response at the envelope
    - Documents throttling headers on 429 responses
    - Adds tags metadata if not present
    """

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        components = schema.setdefault("components", {})
        components.setdefault("schemas", {}).setdefault("ErrorEnvelope", ERROR_ENVELOPE_SCHEMA)
        envelope_ref = {"$ref": "#/components/schemas/ErrorEnvelope"}

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        desired_tags = [
            {
                "name": "Analysis",
                "description": "SEO gap analysis and content generation (rate limited).",
            },
            {
                "name": "Health",
                "description": "Liveness checks.",
            },
        ]
        for tag in desired_tags:
            if tag["name"] not in existing_tag_names:
                tags.append(tag)

        for methods in schema.get("paths", {}).values():
            for method_obj in methods.values():
                if not isinstance(method_obj, dict):
                    continue
                for status_code, response in method_obj.get("responses", {}).items():
                    if status_code in {"400", "429", "500"}:
                        media = response.setdefault("content", {}).setdefault("application/json", {})
                        if not media.get("schema"):
                            media["schema"] = envelope_ref
                    if status_code == "429":
                        response.setdefault("headers", RATE_LIMIT_HEADERS)

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
