"""In-memory sliding-window rate limiter.

Notes:
- Per-process only: running multiple workers multiplies the effective limit.
- Thread-safe: uses a lock around the per-identity read-modify-write.
"""

from __future__ import annotations

import threading
import time
from typing import Callable

from app.adapters.rate_limit.base import AbstractRateLimiter

DEFAULT_LIMIT = 20
DEFAULT_WINDOW_MS = 60 * 60 * 1000


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


class InMemorySlidingWindowRateLimiter(AbstractRateLimiter):
    """Rate limiter keeping a pruned log of admitted timestamps per identity.

    A request at ``now`` is admitted when fewer than ``limit`` admissions of
    the same identity happened in ``(now - window_ms, now]``. Unlike a fixed
    window there is no reset boundary to burst across.

    Only admissions are recorded. A rejected attempt neither counts against
    future quota nor extends the history. Entries are never deleted, but each
    one holds at most ``limit`` timestamps after its next check.

    Important:
        This limiter is per-process only. If the API runs with multiple workers
        each worker enforces its own independent limits.
    """

    def __init__(
        self,
        *,
        limit: int = DEFAULT_LIMIT,
        window_ms: int = DEFAULT_WINDOW_MS,
        clock: Callable[[], int] = _wall_clock_ms,
    ) -> None:
        """Initialize the limiter.

        Args:
            limit: Maximum admitted requests per identity within the window.
            window_ms: Length of the sliding window in milliseconds.
            clock: Time source returning milliseconds since epoch.

        Raises:
            ValueError: If limit or window_ms are invalid.
        """
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_ms < 1:
            raise ValueError("window_ms must be >= 1")

        self.limit = limit
        self.window_ms = window_ms
        self._clock = clock
        self._lock = threading.RLock()
        self._log_by_identity: dict[str, list[int]] = {}

    def _now(self, now: int | None) -> int:
        return self._clock() if now is None else now

    def _retained(self, identity: str, now: int) -> list[int]:
        """Return the identity's timestamps still inside the window at ``now``."""
        cutoff = now - self.window_ms
        return [ts for ts in self._log_by_identity.get(identity, ()) if ts > cutoff]

    def check_rate_limit(self, identity: str, now: int | None = None) -> bool:
        with self._lock:
            now = self._now(now)
            retained = self._retained(identity, now)
            if len(retained) >= self.limit:
                return False

            retained.append(now)
            self._log_by_identity[identity] = retained
            return True

    def remaining(self, identity: str, now: int | None = None) -> int:
        with self._lock:
            now = self._now(now)
            return max(0, self.limit - len(self._retained(identity, now)))

    def retry_after_ms(self, identity: str, now: int | None = None) -> int:
        with self._lock:
            now = self._now(now)
            retained = self._retained(identity, now)
            if len(retained) < self.limit:
                return 0
            # The slot frees once the oldest counted timestamp is <= cutoff.
            return max(0, retained[-self.limit] + self.window_ms - now)

    def tracked_identities(self) -> int:
        """Number of identities with stored history (for diagnostics)."""
        with self._lock:
            return len(self._log_by_identity)
