from __future__ import annotations

import asyncio

import pytest

from albumlink.adapters.cache import InMemoryTTLCache
from albumlink.config.cache import CacheTTLConfig
from albumlink.domain.ports import ReadThroughCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1_000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingProducer:
    def __init__(self, value: object = "value") -> None:
        self.value = value
        self.calls = 0

    async def __call__(self) -> object:
        self.calls += 1
        return self.value


def test_cache_satisfies_port() -> None:
    assert isinstance(InMemoryTTLCache(), ReadThroughCache)


def test_second_lookup_is_served_from_cache() -> None:
    cache = InMemoryTTLCache()
    producer = CountingProducer({"id": "rg-1"})

    async def scenario() -> tuple[object, object]:
        first = await cache.cached("mb:release-group:rg-1", producer, "long")
        second = await cache.cached("mb:release-group:rg-1", producer, "long")
        return first, second

    first, second = asyncio.run(scenario())

    assert first == second == {"id": "rg-1"}
    assert producer.calls == 1
    assert (cache.hits, cache.misses) == (1, 1)


def test_entries_expire_after_their_tier() -> None:
    clock = FakeClock()
    cache = InMemoryTTLCache(CacheTTLConfig(short=10.0, medium=100.0), clock=clock)
    short = CountingProducer()
    medium = CountingProducer()

    async def lookup() -> None:
        await cache.cached("short", short, "short")
        await cache.cached("medium", medium, "medium")

    asyncio.run(lookup())
    clock.advance(50)
    asyncio.run(lookup())

    assert short.calls == 2
    assert medium.calls == 1


def test_producer_failure_is_not_cached() -> None:
    cache = InMemoryTTLCache()
    attempts = 0

    async def flaky() -> str:
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            raise RuntimeError("transient")
        return "recovered"

    with pytest.raises(RuntimeError):
        asyncio.run(cache.cached("spotify:album:sp-1", flaky, "medium"))
    assert "spotify:album:sp-1" not in cache

    assert asyncio.run(cache.cached("spotify:album:sp-1", flaky, "medium")) == "recovered"
    assert attempts == 2


def test_least_recently_used_entry_is_evicted() -> None:
    cache = InMemoryTTLCache(CacheTTLConfig(max_entries=2))
    cache.set("a", 1, "short")
    cache.set("b", 2, "short")
    assert "a" in cache  # refreshes "a"

    cache.set("c", 3, "short")

    assert "a" in cache
    assert "b" not in cache
    assert len(cache) == 2


def test_invalidation() -> None:
    cache = InMemoryTTLCache()
    cache.set("mb:release-group:1", 1, "long")
    cache.set("mb:release-group:2", 2, "long")
    cache.set("spotify:album:1", 3, "medium")

    cache.invalidate("spotify:album:1")
    removed = cache.invalidate_prefix("mb:")

    assert removed == 2
    assert len(cache) == 0


def test_cleanup_expired_removes_only_stale_entries() -> None:
    clock = FakeClock()
    cache = InMemoryTTLCache(CacheTTLConfig(short=5.0, week=500.0), clock=clock)
    cache.set("stale", 1, "short")
    cache.set("fresh", 2, "week")

    clock.advance(10)

    assert cache.cleanup_expired() == 1
    assert "fresh" in cache
