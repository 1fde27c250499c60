"""
Short-lived memoization of successful results, keyed per user and domain.
"""

import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from core.config import CACHE_TTL_MS
from core.result import Result

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def wall_clock_ms() -> float:
    """Current time in milliseconds."""
    return time.time() * 1000


def cache_key(domain: str, email: str) -> str:
    """Build the ``<domain>:<email>`` key that isolates users from each other."""
    return f"{domain}:{email.lower()}"


@dataclass(frozen=True)
class CacheEntry:
    value: Result
    stored_at_ms: float


class ResultCache:
    """
    TTL cache of successful ``Result`` values.

    Expired entries are discarded lazily on the next lookup of the same key.
    Failed results are never stored. Concurrent misses for one key are not
    coalesced: each runs its own compute and the last success wins.
    """

    def __init__(self, ttl_ms: float = CACHE_TTL_MS, clock: Clock = wall_clock_ms):
        self.ttl_ms = ttl_ms
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Result | None:
        """Fresh cached result for key, or None."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at_ms < self.ttl_ms:
            return entry.value
        del self._entries[key]
        return None

    async def get_or_compute(
        self, key: str, compute: Callable[[], Awaitable[Result]]
    ) -> Result:
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Cache hit: {key}")
            return cached

        logger.debug(f"Cache miss: {key}")
        result = await compute()
        if result.ok:
            self._entries[key] = CacheEntry(value=result, stored_at_ms=self._clock())
        return result

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
