"""Recommendation aggregation service.

Runs the pipeline for one request:
- Cache lookup (live searches only)
- Step 1: Query expansion
- Step 2: Concurrent connector fan-out with per-branch timeout
- Step 3: Deduplication
- Step 4: Word-count enrichment
- Step 5: Filtering
- Step 6: Scoring, ranking, slicing
- Cache store

Mock mode skips the network and the cache and ranks synthetic candidates.
"""

import string
from datetime import datetime, timedelta

from reading_recs.connectors import Connector, ConnectorHTTPClient, build_connectors
from reading_recs.constants import MOCK_CANDIDATE_COUNT, MOCK_MIN_WORDS, MOCK_WORD_STEP
from reading_recs.models.articles import (
    ArticleCandidate,
    LicenseType,
    RecommendationSource,
)
from reading_recs.models.config import ServiceConfig
from reading_recs.models.recommendations import RecommendationRequest, RecommendationResult
from reading_recs.steps.step1_expansion import expand_queries
from reading_recs.steps.step2_fetch import fetch_all
from reading_recs.steps.step3_dedup import deduplicate
from reading_recs.steps.step4_enrichment import enrich_candidates
from reading_recs.steps.step5_filter import filter_candidates
from reading_recs.steps.step6_ranking import rank_candidates, slice_results
from reading_recs.utils.cache import ResultCache
from reading_recs.utils.extraction import TextExtractor
from reading_recs.utils.logging import get_logger
from reading_recs.utils.reading import max_words

logger = get_logger(__name__)


class RecommendationsService:
    """Aggregates, filters, and ranks candidates from every connector."""

    def __init__(
        self,
        connectors: list[Connector] | None = None,
        cache: ResultCache | None = None,
        config: ServiceConfig | None = None,
        http_client: ConnectorHTTPClient | None = None,
        extractor: TextExtractor | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            connectors: Connectors to query (built from ``config.fetch`` if omitted)
            cache: Result cache (a fresh in-memory cache if omitted)
            config: Service configuration
            http_client: Client used for enrichment fetches
            extractor: Text extractor used for enrichment
        """
        self.config = config or ServiceConfig()
        self.http = http_client or ConnectorHTTPClient(
            user_agent=self.config.fetch.user_agent,
            timeout_seconds=self.config.fetch.request_timeout_seconds,
        )
        self.connectors = (
            connectors if connectors is not None else build_connectors(self.config.fetch, self.http)
        )
        self.cache = cache if cache is not None else ResultCache()
        self.extractor = extractor or TextExtractor()

    async def search(self, request: RecommendationRequest) -> RecommendationResult:
        """
        Produce ranked recommendations for a request.

        Never raises for connector or enrichment failures; a run in which
        every branch fails returns an empty result.

        Args:
            request: Search request

        Returns:
            Top picks and backups
        """
        if request.mock_mode:
            return self.mock_result(request)

        if not request.topic.strip():
            logger.warning("Rejected search with blank topic")
            return RecommendationResult.empty()

        if self.config.cache.enabled:
            cached = await self.cache.get(request.cache_key)
            if cached is not None:
                logger.info("Cache hit", topic=request.topic)
                return cached

        logger.info(
            "Starting search",
            topic=request.topic,
            minutes=request.minutes,
            license=request.license_filter.value,
            language=request.language,
            excluded=len(request.excluded_urls),
        )

        queries = expand_queries(request.topic, self.config.expansion.synonyms)
        fetched = await fetch_all(
            self.connectors,
            queries,
            request.language,
            self.config.fetch.timeout_seconds,
        )
        unique = deduplicate(fetched.candidates)
        enriched = await enrich_candidates(
            unique, self.http, self.extractor, self.config.enrichment
        )
        output = self._filter_and_rank(enriched, request)

        if self.config.cache.enabled:
            await self.cache.put(request.cache_key, output, self.config.cache.ttl_seconds)

        logger.info(
            "Search completed",
            topic=request.topic,
            top=len(output.top_three),
            backups=len(output.backups),
            branches_failed=fetched.branches_failed,
        )
        return output

    def mock_result(self, request: RecommendationRequest) -> RecommendationResult:
        """Rank deterministic synthetic candidates without any I/O."""
        candidates = self.mock_candidates(request)
        logger.debug("Mock search", topic=request.topic, candidates=len(candidates))
        return self._filter_and_rank(candidates, request)

    @staticmethod
    def mock_candidates(
        request: RecommendationRequest, now: datetime | None = None
    ) -> list[ArticleCandidate]:
        """
        Synthesize candidates sized just under the request's word budget.

        Odd indices are Wikisource/public domain, even indices Wikipedia/Creative Commons.
        """
        now = now or datetime.now()
        words = max_words(request.minutes, request.wpm)
        topic = request.topic.strip() or "reading"

        candidates: list[ArticleCandidate] = []
        for index in range(1, MOCK_CANDIDATE_COUNT + 1):
            even = index % 2 == 0
            candidates.append(
                ArticleCandidate(
                    id=f"mock-{index}",
                    title=f"{string.capwords(topic)} primer {index}",
                    url=f"https://example.com/mock/{index}",
                    source=(
                        RecommendationSource.WIKIPEDIA if even else RecommendationSource.WIKISOURCE
                    ),
                    date=now - timedelta(days=index),
                    snippet=f"Deterministic mock result #{index} for UI testing.",
                    license_type=(
                        LicenseType.CREATIVE_COMMONS if even else LicenseType.PUBLIC_DOMAIN
                    ),
                    language=request.language,
                    word_count=max(MOCK_MIN_WORDS, words - index * MOCK_WORD_STEP),
                )
            )
        return candidates

    def _filter_and_rank(
        self, candidates: list[ArticleCandidate], request: RecommendationRequest
    ) -> RecommendationResult:
        filtered = filter_candidates(candidates, request)
        ranked = rank_candidates(filtered, request, config=self.config.ranking)
        return slice_results(
            [candidate for candidate, _ in ranked],
            self.config.ranking.top_count,
            self.config.ranking.backup_count,
        )
