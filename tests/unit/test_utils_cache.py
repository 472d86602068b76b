"""Unit tests for the in-memory result cache."""

import asyncio

import pytest

from reading_recs.models.recommendations import RecommendationResult
from reading_recs.utils.cache import ResultCache


class FakeClock:
    """Manually advanced clock."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> ResultCache:
    return ResultCache(clock=clock)


@pytest.fixture
def result(sample_candidates) -> RecommendationResult:
    return RecommendationResult(top_three=tuple(sample_candidates[:2]))


class TestResultCache:
    """Test ResultCache."""

    @pytest.mark.asyncio
    async def test_miss(self, cache: ResultCache) -> None:
        """Test unknown keys return None."""
        assert await cache.get("missing") is None

    @pytest.mark.asyncio
    async def test_put_then_get(self, cache: ResultCache, result: RecommendationResult) -> None:
        """Test a stored value is returned before expiry."""
        await cache.put("key", result, ttl=60)

        assert await cache.get("key") == result
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_entry_valid_until_expiry(
        self, cache: ResultCache, clock: FakeClock, result: RecommendationResult
    ) -> None:
        """Test an entry is still served exactly at its expiry instant."""
        await cache.put("key", result, ttl=60)
        clock.now += 60

        assert await cache.get("key") == result

    @pytest.mark.asyncio
    async def test_expired_entry_evicted_on_read(
        self, cache: ResultCache, clock: FakeClock, result: RecommendationResult
    ) -> None:
        """Test expired entries are dropped when read."""
        await cache.put("key", result, ttl=60)
        clock.now += 61

        assert await cache.get("key") is None
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_put_overwrites(
        self, cache: ResultCache, clock: FakeClock, result: RecommendationResult
    ) -> None:
        """Test a second put replaces value and expiry."""
        await cache.put("key", result, ttl=10)
        clock.now += 5
        await cache.put("key", RecommendationResult.empty(), ttl=60)
        clock.now += 30

        cached = await cache.get("key")

        assert cached is not None
        assert cached.is_empty

    @pytest.mark.asyncio
    async def test_clear(self, cache: ResultCache, result: RecommendationResult) -> None:
        """Test clear drops every entry."""
        await cache.put("a", result, ttl=60)
        await cache.put("b", result, ttl=60)

        await cache.clear()

        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_concurrent_access_same_key(self, cache: ResultCache, sample_candidates) -> None:
        """Test interleaved puts and gets on one key see whole values and the last put wins."""
        results = [RecommendationResult(top_three=(candidate,)) for candidate in sample_candidates]

        operations = []
        for value in results:
            operations.append(cache.put("key", value, ttl=60))
            operations.append(cache.get("key"))
        outcomes = await asyncio.gather(*operations)

        reads = outcomes[1::2]
        assert reads == results
        assert await cache.get("key") == results[-1]
        assert len(cache) == 1
