"""Rate limiter interfaces.

The HTTP layer depends on this abstraction (not the concrete implementation)
so the storage backend can be swapped later (e.g., Redis) with minimal changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractRateLimiter(ABC):
    """Interface for per-identity admission control.

    Implementations decide, for a caller identity and a point in time, whether
    one more request may proceed. Timestamps are milliseconds since epoch.
    """

    limit: int
    window_ms: int

    @abstractmethod
    def check_rate_limit(self, identity: str, now: int | None = None) -> bool:
        """Admit or reject one request for ``identity``.

        Admission records the request; rejection leaves state untouched.

        Args:
            identity: Opaque caller key. Any string is valid, including "".
            now: Current time in ms; the limiter's own clock is used if omitted.

        Returns:
            True if the request is admitted, False if it must be rejected.
        """
        raise NotImplementedError

    @abstractmethod
    def remaining(self, identity: str, now: int | None = None) -> int:
        """Return how many more requests ``identity`` may make right now."""
        raise NotImplementedError

    @abstractmethod
    def retry_after_ms(self, identity: str, now: int | None = None) -> int:
        """Return ms until ``identity`` gets a free slot (0 if it has one)."""
        raise NotImplementedError
