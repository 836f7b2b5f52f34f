from __future__ import annotations

from fastapi import APIRouter

from app.core.config import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness probe for load balancers and uptime monitors.

    Does not touch the LLM provider or the rate limiter, and is never
    rate limited.

    Returns:
        dict: ``status`` ("ok") and the active ``environment``.
    """

    return {"status": "ok", "environment": settings.app_env}
