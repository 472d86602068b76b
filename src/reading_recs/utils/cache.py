"""In-memory result cache with lazy expiry."""

import asyncio
import time
from collections.abc import Callable
from dataclasses import dataclass

from reading_recs.models.recommendations import RecommendationResult
from reading_recs.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Entry:
    value: RecommendationResult
    expires_at: float


class ResultCache:
    """Short-lived memoization of search results keyed by request signature.

    All reads and writes go through one ``asyncio.Lock``. Expired entries are
    evicted only when they are read; there is no background sweep.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """
        Initialize the cache.

        Args:
            clock: Monotonic time source in seconds (injectable for tests)
        """
        self._clock = clock
        self._storage: dict[str, _Entry] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> RecommendationResult | None:
        """
        Return the cached result for ``key``.

        Args:
            key: Request cache key

        Returns:
            Cached result, or None on a miss or an expired entry (which is evicted)
        """
        async with self._lock:
            entry = self._storage.get(key)
            if entry is None:
                logger.debug("Cache miss", key=key)
                return None

            if entry.expires_at < self._clock():
                del self._storage[key]
                logger.debug("Cache entry expired", key=key)
                return None

            logger.debug("Cache hit", key=key)
            return entry.value

    async def put(self, key: str, value: RecommendationResult, ttl: float) -> None:
        """
        Store ``value`` under ``key`` for ``ttl`` seconds, replacing any entry.

        Args:
            key: Request cache key
            value: Result to cache
            ttl: Time-to-live in seconds
        """
        async with self._lock:
            self._storage[key] = _Entry(value=value, expires_at=self._clock() + ttl)
            logger.debug("Cache saved", key=key, ttl=ttl)

    async def clear(self) -> None:
        async with self._lock:
            self._storage.clear()

    def __len__(self) -> int:
        return len(self._storage)
