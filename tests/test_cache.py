"""Tests for the TTL result cache."""

import asyncio

from core.cache import ResultCache, cache_key
from core.result import Result


class Counter:
    def __init__(self, *results: Result):
        self.results = list(results)
        self.calls = 0

    async def __call__(self) -> Result:
        self.calls += 1
        if len(self.results) > 1:
            return self.results.pop(0)
        return self.results[0]


def test_cache_key_isolates_users():
    assert cache_key("tasks", "Someone@Example.com") == "tasks:someone@example.com"
    assert cache_key("tasks", "a@x.com") != cache_key("bis", "a@x.com")


def test_hit_within_ttl_skips_compute(clock):
    cache = ResultCache(ttl_ms=30_000, clock=clock)
    compute = Counter(Result.success([1]), Result.success([2]))

    first = asyncio.run(cache.get_or_compute("tasks:a", compute))
    clock.advance(29_999)
    second = asyncio.run(cache.get_or_compute("tasks:a", compute))

    assert compute.calls == 1
    assert second is first


def test_expired_entry_recomputes(clock):
    cache = ResultCache(ttl_ms=30_000, clock=clock)
    compute = Counter(Result.success([1]), Result.success([2]))

    asyncio.run(cache.get_or_compute("tasks:a", compute))
    clock.advance(30_000)
    res = asyncio.run(cache.get_or_compute("tasks:a", compute))

    assert compute.calls == 2
    assert res.data == [2]


def test_expired_entry_discarded_lazily(clock):
    cache = ResultCache(ttl_ms=1_000, clock=clock)
    asyncio.run(cache.get_or_compute("a", Counter(Result.success(1))))
    asyncio.run(cache.get_or_compute("b", Counter(Result.success(2))))
    clock.advance(5_000)

    assert cache.get("a") is None
    assert "a" not in cache
    assert "b" in cache


def test_failure_is_never_stored(clock):
    cache = ResultCache(clock=clock)
    compute = Counter(Result.failure("TIMEOUT"), Result.success(["fresh"]))

    first = asyncio.run(cache.get_or_compute("bis:a", compute))
    second = asyncio.run(cache.get_or_compute("bis:a", compute))

    assert not first.ok
    assert second.data == ["fresh"]
    assert compute.calls == 2


def test_invalidate_and_clear(clock):
    cache = ResultCache(clock=clock)
    compute = Counter(Result.success(1))
    asyncio.run(cache.get_or_compute("a", compute))
    asyncio.run(cache.get_or_compute("b", compute))

    cache.invalidate("a")
    cache.invalidate("missing")
    assert "a" not in cache
    assert len(cache) == 1

    cache.clear()
    assert len(cache) == 0


def test_concurrent_misses_are_not_coalesced(clock):
    cache = ResultCache(clock=clock)

    async def slow_compute():
        await asyncio.sleep(0)
        return Result.success("x")

    calls = []

    async def compute():
        calls.append(1)
        return await slow_compute()

    async def run():
        return await asyncio.gather(
            cache.get_or_compute("k", compute), cache.get_or_compute("k", compute)
        )

    results = asyncio.run(run())
    assert len(calls) == 2
    assert all(r.ok for r in results)
