"""Rate limiting adapters.

Callers are admitted through :class:`AbstractRateLimiter`; the in-memory
sliding-window log is the only backend today and keeps its state per process.
"""

from app.adapters.rate_limit.base import AbstractRateLimiter
from app.adapters.rate_limit.in_memory import InMemorySlidingWindowRateLimiter

__all__ = ["AbstractRateLimiter", "InMemorySlidingWindowRateLimiter"]
