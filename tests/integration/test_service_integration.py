"""Integration tests for the full recommendation pipeline."""

import re
from datetime import datetime

import pytest
from aioresponses import aioresponses
from fakes import FailingConnector, FakeConnector, SlowConnector, make_candidate

from reading_recs.models.articles import LicenseFilter, LicenseType, RecommendationSource
from reading_recs.models.config import ServiceConfig
from reading_recs.models.recommendations import RecommendationRequest
from reading_recs.service import RecommendationsService
from reading_recs.utils.cache import ResultCache

PAGE = "<html><body><article><p>" + "word " * 1500 + "</p></article></body></html>"


def space_candidates() -> list:
    return [make_candidate(i, title=f"Space story {i}") for i in range(1, 6)]


class TestMockMode:
    """Test the offline mock mode."""

    @pytest.mark.asyncio
    async def test_mock_scenario(self, service_config: ServiceConfig) -> None:
        """Test six synthetic candidates become three picks and three backups."""
        connector = FakeConnector([])
        service = RecommendationsService(connectors=[connector], config=service_config)
        request = RecommendationRequest(topic="space", minutes=10, wpm=200, mock_mode=True)

        result = await service.search(request)

        assert [c.id for c in result.top_three] == ["mock-1", "mock-2", "mock-3"]
        assert [c.id for c in result.backups] == ["mock-4", "mock-5", "mock-6"]
        assert connector.calls == []
        assert len(service.cache) == 0

    def test_mock_candidates_shape(self) -> None:
        """Test mock candidates alternate sources and fit the word budget."""
        request = RecommendationRequest(topic="space", minutes=10, wpm=200, mock_mode=True)
        now = datetime(2024, 6, 1)

        candidates = RecommendationsService.mock_candidates(request, now=now)

        assert len(candidates) == 6
        assert [c.word_count for c in candidates] == [1920, 1840, 1760, 1680, 1600, 1520]
        assert candidates[0].source == RecommendationSource.WIKISOURCE
        assert candidates[0].license_type == LicenseType.PUBLIC_DOMAIN
        assert candidates[1].source == RecommendationSource.WIKIPEDIA
        assert candidates[1].license_type == LicenseType.CREATIVE_COMMONS
        assert candidates[0].title == "Space primer 1"
        assert candidates[0].url == "https://example.com/mock/1"
        assert candidates[2].date == datetime(2024, 5, 29)

    def test_mock_titles_capitalize_each_word(self) -> None:
        """Test mock titles capitalize words without touching letters after apostrophes."""
        request = RecommendationRequest(topic="stoic's  guide", minutes=10, wpm=200, mock_mode=True)

        candidates = RecommendationsService.mock_candidates(request, now=datetime(2024, 6, 1))

        assert candidates[0].title == "Stoic's Guide primer 1"

    def test_mock_short_budget_uses_minimum(self) -> None:
        """Test tiny budgets still produce minimum-length candidates."""
        request = RecommendationRequest(topic="space", minutes=1, wpm=200, mock_mode=True)

        candidates = RecommendationsService.mock_candidates(request)

        assert all(c.word_count == 120 for c in candidates)

    @pytest.mark.asyncio
    async def test_mock_respects_license_filter(self, service_config: ServiceConfig) -> None:
        """Test mock results still go through filtering."""
        service = RecommendationsService(connectors=[], config=service_config)
        request = RecommendationRequest(
            topic="space",
            minutes=10,
            wpm=200,
            mock_mode=True,
            license_filter=LicenseFilter.CREATIVE_COMMONS,
        )

        result = await service.search(request)

        assert [c.id for c in result.all_candidates] == ["mock-2", "mock-4", "mock-6"]


class TestLiveSearch:
    """Test searches through connectors."""

    @pytest.mark.asyncio
    async def test_idempotent_within_ttl(self, service_config: ServiceConfig) -> None:
        """Test a repeated request is answered from cache."""
        connector = FakeConnector(space_candidates())
        service = RecommendationsService(connectors=[connector], config=service_config)
        request = RecommendationRequest(topic="space", minutes=10, wpm=200)

        first = await service.search(request)
        calls_after_first = len(connector.calls)
        second = await service.search(request)

        assert first == second
        assert len(connector.calls) == calls_after_first
        assert calls_after_first == 3

    @pytest.mark.asyncio
    async def test_equivalent_request_hits_cache(self, service_config: ServiceConfig) -> None:
        """Test case differences in topic share the cached result."""
        connector = FakeConnector(space_candidates())
        service = RecommendationsService(connectors=[connector], config=service_config)

        await service.search(RecommendationRequest(topic="space", minutes=10, wpm=200))
        await service.search(RecommendationRequest(topic="SPACE", minutes=10, wpm=200))

        assert len(connector.calls) == 3

    @pytest.mark.asyncio
    async def test_expired_cache_refetches(self, service_config: ServiceConfig) -> None:
        """Test a result is refetched after the TTL passes."""
        now = [0.0]
        connector = FakeConnector(space_candidates())
        cache = ResultCache(clock=lambda: now[0])
        service = RecommendationsService(connectors=[connector], config=service_config, cache=cache)
        request = RecommendationRequest(topic="space", minutes=10, wpm=200)

        await service.search(request)
        now[0] += service_config.cache.ttl_seconds + 1
        await service.search(request)

        assert len(connector.calls) == 6

    @pytest.mark.asyncio
    async def test_injected_empty_cache_is_used(self, service_config: ServiceConfig) -> None:
        """Test an empty injected cache is kept and filled by the service."""
        cache = ResultCache()
        service = RecommendationsService(
            connectors=[FakeConnector(space_candidates())], config=service_config, cache=cache
        )

        await service.search(RecommendationRequest(topic="space", minutes=10, wpm=200))

        assert service.cache is cache
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_failing_connector_isolated(self, service_config: ServiceConfig) -> None:
        """Test failing and slow connectors do not sink the search."""
        service_config.fetch.timeout_seconds = 0.05
        healthy = FakeConnector(space_candidates())
        service = RecommendationsService(
            connectors=[FailingConnector(), healthy, SlowConnector(delay=5.0)],
            config=service_config,
        )

        result = await service.search(RecommendationRequest(topic="space", minutes=10, wpm=200))

        assert [c.id for c in result.top_three] == ["test-1", "test-2", "test-3"]
        assert [c.id for c in result.backups] == ["test-4", "test-5"]

    @pytest.mark.asyncio
    async def test_all_connectors_fail(self, service_config: ServiceConfig) -> None:
        """Test an all-failure run yields an empty result."""
        service = RecommendationsService(connectors=[FailingConnector()], config=service_config)

        result = await service.search(RecommendationRequest(topic="space", minutes=10))

        assert result.is_empty

    @pytest.mark.asyncio
    async def test_blank_topic(self, service_config: ServiceConfig) -> None:
        """Test a blank topic returns empty without calling connectors."""
        connector = FakeConnector(space_candidates())
        service = RecommendationsService(connectors=[connector], config=service_config)

        result = await service.search(RecommendationRequest(topic="  ", minutes=10))

        assert result.is_empty
        assert connector.calls == []

    @pytest.mark.asyncio
    async def test_excluded_urls_never_returned(self, service_config: ServiceConfig) -> None:
        """Test excluded URLs are absent from both lists."""
        connector = FakeConnector(space_candidates())
        service = RecommendationsService(connectors=[connector], config=service_config)
        request = RecommendationRequest(
            topic="space",
            minutes=10,
            wpm=200,
            excluded_urls=("https://EXAMPLE.com/articles/1", "https://example.com/articles/3"),
        )

        result = await service.search(request)

        urls = {c.url for c in result.all_candidates}
        assert "https://example.com/articles/1" not in urls
        assert "https://example.com/articles/3" not in urls
        assert len(urls) == 3


class TestEndToEndWithHTTP:
    """Test the real connectors against mocked endpoints."""

    @pytest.mark.asyncio
    async def test_all_sources(self) -> None:
        """Test candidates from every source are merged, enriched and ranked."""
        config = ServiceConfig()
        config.logging.file_path = None
        service = RecommendationsService(config=config)

        with aioresponses() as m:
            m.get(
                re.compile(r"^https://en\.wikipedia\.org/w/api\.php.*$"),
                status=200,
                payload={"query": {"search": [{"pageid": 1, "title": "Comet", "snippet": "x"}]}},
                repeat=True,
            )
            m.get(
                re.compile(r"^https://en\.wikisource\.org/w/api\.php.*$"),
                status=200,
                payload={"query": {"search": [{"pageid": 2, "title": "On Comets"}]}},
                repeat=True,
            )
            m.get(
                re.compile(r"^https://archive\.org/advancedsearch\.php.*$"),
                status=500,
                repeat=True,
            )
            m.get(
                re.compile(r"^https://chroniclingamerica\.loc\.gov/search/pages/results/.*$"),
                status=200,
                payload={"items": [{"id": "/lccn/sn1/1910-05-18/ed-1/seq-1/", "title": "Comet!"}]},
                repeat=True,
            )
            m.get(
                re.compile(r"^https://en\.(wikipedia|wikisource)\.org/wiki\?curid=\d+$"),
                status=200,
                body=PAGE,
                repeat=True,
            )

            result = await service.search(
                RecommendationRequest(topic="comet", minutes=10, wpm=200)
            )

        # The Chronicling America hit duplicates the Wikipedia title
        by_id = {c.id: c for c in result.all_candidates}
        assert set(by_id) == {"wikisource-2", "wikipedia-1"}
        assert by_id["wikisource-2"].word_count == 1500
        assert by_id["wikisource-2"].snippet.startswith("word word")
        assert result.top_three[0].id == "wikipedia-1"
