"""TTL Cache — time-bounded memoization with single-flight deduplication.

Invariants:
    - At most one in-flight computation per bucket (name, args)
    - Concurrent callers of a bucket await the same task and see the same result
    - A fresh entry is returned without calling compute
    - An expired entry is never served stale or refreshed in the background
    - Expired entries of every bucket are evicted whenever a new entry is stored,
      so the store holds at most the buckets filled within one TTL window
    - A failed computation stores nothing: the next call computes again
    - The entry is stored by the computing task itself, once per generation
    - A computation started before invalidate() still answers its waiters but
      never stores its result

Design Decisions:
    - Pending work kept as an asyncio.Task, not just the resolved value: late arrivals
      attach to the running computation (ADR: promise memoization)
    - Waiters go through asyncio.shield: one caller's cancellation never cancels the
      shared computation
    - Check-and-set on the pending slot has no await in between, so it is atomic on
      the event loop without a lock
    - Invalidation bumps a generation counter instead of cancelling in-flight tasks
    - Clock injected (time.monotonic by default) so expiry is testable without sleeping
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Hashable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
CacheKey = tuple[str, Hashable]


@dataclass(frozen=True)
class _Entry:
    value: Any
    expires_at: float


class TtlCache:
    """Bucketed TTL cache shared by all services of one CatalogContext."""

    def __init__(
        self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[CacheKey, _Entry] = {}
        self._pending: dict[CacheKey, asyncio.Task] = {}
        self._generation = 0

    def __len__(self) -> int:
        return len(self._entries)

    async def get_or_compute(
        self,
        name: str,
        args: Hashable,
        compute: Callable[[], Awaitable[T]],
    ) -> T:
        """Return the cached value for (name, args), computing it on miss."""
        key = (name, args)
        entry = self._entries.get(key)
        if entry is not None:
            if self._clock() < entry.expires_at:
                return entry.value
            del self._entries[key]

        task = self._pending.get(key)
        if task is None:
            logger.debug("Cache miss", extra={"cache_key": name})
            task = asyncio.ensure_future(self._fill(key, compute, self._generation))
            self._pending[key] = task
        return await asyncio.shield(task)

    async def _fill(
        self, key: CacheKey, compute: Callable[[], Awaitable[T]], generation: int,
    ) -> T:
        try:
            value = await compute()
            if generation == self._generation:
                now = self._clock()
                self._evict_expired(now)
                self._entries[key] = _Entry(value, now + self.ttl_seconds)
            return value
        finally:
            if self._pending.get(key) is asyncio.current_task():
                del self._pending[key]

    def _evict_expired(self, now: float) -> None:
        for key in [k for k, e in self._entries.items() if e.expires_at <= now]:
            del self._entries[key]

    def invalidate(self, name: str | None = None) -> None:
        """Drop stored entries, for one name or all.

        In-flight computations keep running for their current waiters, but new
        callers start a fresh computation and the stale result is not stored.
        """
        self._generation += 1
        for store in (self._entries, self._pending):
            for key in [k for k in store if name is None or k[0] == name]:
                del store[key]
