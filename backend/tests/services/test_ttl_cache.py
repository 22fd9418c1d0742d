"""TtlCache tests — TTL expiry, single-flight deduplication, failure handling.

Tests cover:
    - Fresh entry served without recomputation
    - Expired entry recomputed on next access (exactly two computes)
    - Concurrent callers share one in-flight computation
    - Buckets are independent per (name, args)
    - Failed computation stores nothing and is retried on the next call
    - Failure during single-flight reaches every waiter
    - Cancelling one waiter does not cancel the shared computation
    - invalidate() by name and globally
    - Expired buckets evicted on the next store
    - In-flight computations never store after invalidate()

Design Decisions:
    - FakeClock instead of sleeping: expiry is deterministic
    - asyncio.Event gates hold a computation in flight while callers pile up
"""

import asyncio

import pytest

from project_catalog.services.ttl_cache import TtlCache

from tests.fakes import FakeClock


class _Counter:
    def __init__(self, gate: asyncio.Event | None = None):
        self.calls = 0
        self.gate = gate
        self.fail_with: Exception | None = None

    async def __call__(self):
        self.calls += 1
        generation = self.calls
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        return {"generation": generation}


async def test_fresh_entry_is_served_without_recompute():
    clock = FakeClock()
    cache = TtlCache(600, clock=clock)
    compute = _Counter()

    first = await cache.get_or_compute("k", (), compute)
    clock.advance(599)
    second = await cache.get_or_compute("k", (), compute)

    assert compute.calls == 1
    assert second is first


async def test_expired_entry_is_recomputed():
    clock = FakeClock()
    cache = TtlCache(600, clock=clock)
    compute = _Counter()

    await cache.get_or_compute("k", (), compute)
    clock.advance(600)
    result = await cache.get_or_compute("k", (), compute)

    assert compute.calls == 2
    assert result == {"generation": 2}


async def test_concurrent_callers_share_one_computation():
    gate = asyncio.Event()
    cache = TtlCache(600, clock=FakeClock())
    compute = _Counter(gate)

    tasks = [
        asyncio.create_task(cache.get_or_compute("k", ("a",), compute))
        for _ in range(10)
    ]
    await asyncio.sleep(0)
    gate.set()
    results = await asyncio.gather(*tasks)

    assert compute.calls == 1
    assert all(r is results[0] for r in results)


async def test_buckets_are_independent():
    cache = TtlCache(600, clock=FakeClock())
    compute = _Counter()

    await cache.get_or_compute("k", ("a",), compute)
    await cache.get_or_compute("k", ("b",), compute)
    await cache.get_or_compute("other", ("a",), compute)

    assert compute.calls == 3


async def test_failure_is_not_cached():
    cache = TtlCache(600, clock=FakeClock())
    compute = _Counter()
    compute.fail_with = ConnectionError("down")

    with pytest.raises(ConnectionError):
        await cache.get_or_compute("k", (), compute)

    compute.fail_with = None
    result = await cache.get_or_compute("k", (), compute)
    assert compute.calls == 2
    assert result == {"generation": 2}


async def test_failure_reaches_every_concurrent_waiter():
    gate = asyncio.Event()
    cache = TtlCache(600, clock=FakeClock())
    compute = _Counter(gate)
    compute.fail_with = ConnectionError("down")

    tasks = [asyncio.create_task(cache.get_or_compute("k", (), compute)) for _ in range(3)]
    await asyncio.sleep(0)
    gate.set()
    results = await asyncio.gather(*tasks, return_exceptions=True)

    assert compute.calls == 1
    assert all(isinstance(r, ConnectionError) for r in results)


async def test_cancelled_waiter_does_not_cancel_computation():
    gate = asyncio.Event()
    cache = TtlCache(600, clock=FakeClock())
    compute = _Counter(gate)

    first = asyncio.create_task(cache.get_or_compute("k", (), compute))
    second = asyncio.create_task(cache.get_or_compute("k", (), compute))
    await asyncio.sleep(0)
    first.cancel()
    gate.set()

    assert await second == {"generation": 1}
    with pytest.raises(asyncio.CancelledError):
        await first
    assert compute.calls == 1


async def test_invalidate_by_name():
    cache = TtlCache(600, clock=FakeClock())
    compute = _Counter()

    await cache.get_or_compute("a", (), compute)
    await cache.get_or_compute("b", (), compute)
    cache.invalidate("a")
    await cache.get_or_compute("a", (), compute)
    await cache.get_or_compute("b", (), compute)

    assert compute.calls == 3


async def test_invalidate_all():
    cache = TtlCache(600, clock=FakeClock())
    compute = _Counter()

    await cache.get_or_compute("a", (), compute)
    cache.invalidate()
    await cache.get_or_compute("a", (), compute)

    assert compute.calls == 2


async def test_expired_buckets_evicted_when_new_entry_stored():
    clock = FakeClock()
    cache = TtlCache(600, clock=clock)
    compute = _Counter()

    for i in range(50):
        await cache.get_or_compute("k", (str(i),), compute)
    assert len(cache) == 50

    clock.advance(600)
    await cache.get_or_compute("k", ("fresh",), compute)

    assert len(cache) == 1


async def test_in_flight_result_not_stored_after_invalidate():
    gate = asyncio.Event()
    cache = TtlCache(600, clock=FakeClock())
    compute = _Counter(gate)

    stale = asyncio.create_task(cache.get_or_compute("k", (), compute))
    await asyncio.sleep(0)
    cache.invalidate("k")
    gate.set()

    assert await stale == {"generation": 1}
    assert len(cache) == 0
    assert await cache.get_or_compute("k", (), compute) == {"generation": 2}


async def test_caller_after_invalidate_does_not_join_stale_computation():
    gate = asyncio.Event()
    cache = TtlCache(600, clock=FakeClock())
    compute = _Counter(gate)

    stale = asyncio.create_task(cache.get_or_compute("k", (), compute))
    await asyncio.sleep(0)
    cache.invalidate()
    fresh = asyncio.create_task(cache.get_or_compute("k", (), compute))
    await asyncio.sleep(0)
    gate.set()

    assert await stale == {"generation": 1}
    assert await fresh == {"generation": 2}
    assert await cache.get_or_compute("k", (), compute) == {"generation": 2}
    assert compute.calls == 2
