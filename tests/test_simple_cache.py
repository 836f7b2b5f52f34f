"""Unit tests for the in-memory SimpleTTLCache."""

import threading

from app.utils.simple_cache import SimpleTTLCache


class FakeTime:
    """Deterministic clock used to test expiration logic."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.current = start

    def __call__(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


def test_set_and_get_updates_hit_miss_counters() -> None:
    cache = SimpleTTLCache(ttl_seconds=10)

    assert cache.get("missing") is None

    cache.set("key", "## A) analysis text")

    assert cache.get("key") == "## A) analysis text"

    stats = cache.stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1


def test_expired_entry_is_evicted() -> None:
    fake_time = FakeTime()
    cache = SimpleTTLCache(ttl_seconds=5, clock=fake_time)
    cache.set("key", "value")

    fake_time.advance(6)

    assert cache.get("key") is None
    stats = cache.stats()
    assert stats["evictions"] == 1
    assert stats["entries"] == 0


def test_expired_entries_are_purged_on_set() -> None:
    fake_time = FakeTime()
    cache = SimpleTTLCache(ttl_seconds=5, clock=fake_time)
    cache.set("old", "value")

    fake_time.advance(5)
    cache.set("new", "value")

    assert cache.stats()["entries"] == 1
    assert cache.get("new") == "value"


def test_lru_eviction_removes_least_recently_used() -> None:
    cache = SimpleTTLCache(ttl_seconds=100, max_entries=2)
    cache.set("a", "1")
    cache.set("b", "2")

    # Access "a" so that "b" becomes least recently used
    assert cache.get("a") == "1"

    cache.set("c", "3")

    assert cache.get("a") == "1"
    assert cache.get("c") == "3"
    assert cache.get("b") is None


def test_thread_safety_under_concurrent_sets() -> None:
    cache = SimpleTTLCache(ttl_seconds=30, max_entries=None)
    total_keys = 50

    def _writer(idx: int) -> None:
        cache.set(f"k-{idx}", f"v-{idx}")

    threads = [threading.Thread(target=_writer, args=(i,)) for i in range(total_keys)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert cache.stats()["entries"] == total_keys
    assert cache.get("k-0") == "v-0"
    assert cache.get("k-49") == "v-49"
