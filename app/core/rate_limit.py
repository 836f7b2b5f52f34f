"""Rate limiting dependency for FastAPI routes.

This module wires the rate limiting adapter into the HTTP layer.

Rate limiting strategy:
- Sliding window per caller identity (default 20 requests per hour).
- Identity is the client address: first hop of X-Forwarded-For when trusted,
  otherwise the socket peer, otherwise the "unknown" sentinel.
- Runs before any other route work; a rejected call never reaches validation
  or the LLM.
"""

from __future__ import annotations

import logging
import math
import time

from fastapi import Request

from app.adapters.rate_limit.base import AbstractRateLimiter
from app.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter
from app.core.config import settings
from app.core.errors import RateLimitAppError
from app.core.logging import hash_identifier

logger = logging.getLogger(__name__)

UNKNOWN_IDENTITY = "unknown"

_limiter: AbstractRateLimiter | None = None
_limiter_config: tuple[int, int] | None = None


def get_rate_limiter() -> AbstractRateLimiter:
    """Return a process-wide rate limiter instance.

    The instance is cached in-module to preserve state across requests.
    If configuration changes (primarily in tests), the limiter is rebuilt.

    Returns:
        AbstractRateLimiter: Configured limiter instance.
    """

    global _limiter, _limiter_config

    config = (
        settings.app.rate_limit_requests,
        settings.app.rate_limit_window_ms,
    )

    if _limiter is None or _limiter_config != config:
        _limiter = InMemorySlidingWindowRateLimiter(
            limit=settings.app.rate_limit_requests,
            window_ms=settings.app.rate_limit_window_ms,
        )
        _limiter_config = config

    return _limiter


def reset_rate_limiter() -> None:
    """Drop the cached limiter so the next request starts with empty history."""

    global _limiter, _limiter_config
    _limiter = None
    _limiter_config = None


def resolve_client_identity(request: Request) -> str:
    """Derive the caller identity used as the rate limit key.

    Args:
        request: FastAPI request.

    Returns:
        Client address string, or "unknown" when none is available.
    """

    if settings.app.trust_forwarded_for:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            first_hop = forwarded_for.split(",")[0].strip()
            if first_hop:
                return first_hop

    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN_IDENTITY


async def enforce_rate_limit(request: Request) -> None:
    """FastAPI dependency enforcing the sliding-window limit.

    Consumes one slot from the caller's quota when admitted; otherwise raises
    without touching limiter state.

    Args:
        request: FastAPI request.

    Raises:
        RateLimitAppError: 429 when the caller exhausted its quota.
    """

    if not settings.app.rate_limit_enabled:
        return

    limiter = get_rate_limiter()
    identity = resolve_client_identity(request)
    identity_hash = hash_identifier(identity)

    if limiter.check_rate_limit(identity):
        logger.info(
            "rate_limit.allowed",
            extra={
                "identity_hash": identity_hash,
                "limit": limiter.limit,
                "remaining": limiter.remaining(identity),
                "window_ms": limiter.window_ms,
            },
        )
        return

    retry_after_ms = limiter.retry_after_ms(identity)
    retry_after_s = max(1, math.ceil(retry_after_ms / 1000))
    logger.warning(
        "rate_limit.exceeded",
        extra={
            "identity_hash": identity_hash,
            "limit": limiter.limit,
            "window_ms": limiter.window_ms,
            "retry_after_s": retry_after_s,
        },
    )

    headers: dict[str, str] | None = None
    if settings.app.rate_limit_include_headers:
        headers = {
            "Retry-After": str(retry_after_s),
            "X-RateLimit-Limit": str(limiter.limit),
            "X-RateLimit-Remaining": "0",
            "X-RateLimit-Reset": str(int(time.time()) + retry_after_s),
        }

    raise RateLimitAppError(
        code="rate_limit_exceeded",
        message="Rate limit exceeded. Try again later.",
        details={"limit": limiter.limit, "retry_after": retry_after_s},
        headers=headers,
    )
