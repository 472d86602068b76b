"""Step 4: Word-count enrichment via content extraction."""

import asyncio

from reading_recs.connectors.base import ConnectorHTTPClient
from reading_recs.models.articles import ArticleCandidate
from reading_recs.models.config import EnrichmentConfig
from reading_recs.utils.extraction import TextExtractor
from reading_recs.utils.links import is_http_url
from reading_recs.utils.logging import get_logger

logger = get_logger(__name__)


def _mark_failed(candidate: ArticleCandidate) -> ArticleCandidate:
    return candidate.model_copy(update={"extraction_failed": True, "word_count": None})


async def enrich_candidate(
    candidate: ArticleCandidate,
    http_client: ConnectorHTTPClient,
    extractor: TextExtractor,
    config: EnrichmentConfig,
) -> ArticleCandidate:
    """
    Learn a candidate's word count by fetching and extracting its page.

    Candidates that already have a word count are returned unchanged.

    Args:
        candidate: Candidate to enrich
        http_client: Client used to fetch the page
        extractor: Text extractor
        config: Enrichment configuration

    Returns:
        Updated copy: word count set and snippet backfilled on success,
        ``extraction_failed`` set on any failure
    """
    if candidate.word_count is not None:
        return candidate

    if not is_http_url(candidate.url):
        logger.debug("Cannot enrich candidate with bad URL", id=candidate.id, url=candidate.url)
        return _mark_failed(candidate)

    try:
        html = await http_client.get_text(candidate.url, timeout_seconds=config.timeout_seconds)
    except Exception as e:
        logger.debug(
            "Enrichment fetch failed",
            id=candidate.id,
            error_type=type(e).__name__,
            error=str(e),
        )
        return _mark_failed(candidate)

    text, words = extractor.extract_with_word_count(html)
    if words <= 0:
        logger.debug("No words extracted", id=candidate.id)
        return _mark_failed(candidate)

    update: dict[str, object] = {"word_count": words, "extraction_failed": False}
    if not candidate.snippet:
        update["snippet"] = text[: config.snippet_chars]

    return candidate.model_copy(update=update)


async def enrich_candidates(
    candidates: list[ArticleCandidate],
    http_client: ConnectorHTTPClient,
    extractor: TextExtractor | None = None,
    config: EnrichmentConfig | None = None,
) -> list[ArticleCandidate]:
    """
    Enrich every candidate missing a word count, concurrently.

    Concurrency is bounded by ``config.max_concurrent``. Output order matches
    input order. This step never raises for a single candidate's failure.

    Args:
        candidates: Deduplicated candidates from Step 3
        http_client: Client used to fetch pages
        extractor: Text extractor (default instance if omitted)
        config: Enrichment configuration

    Returns:
        Candidates with word counts filled in where possible
    """
    config = config or EnrichmentConfig()
    extractor = extractor or TextExtractor()

    if not config.enabled:
        logger.info("Enrichment disabled, skipping")
        return list(candidates)

    pending = sum(1 for candidate in candidates if candidate.word_count is None)
    if pending == 0:
        return list(candidates)

    logger.info("Enriching candidates", pending=pending, total=len(candidates))

    semaphore = asyncio.Semaphore(config.max_concurrent)

    async def enrich_with_semaphore(candidate: ArticleCandidate) -> ArticleCandidate:
        if candidate.word_count is not None:
            return candidate
        async with semaphore:
            return await enrich_candidate(candidate, http_client, extractor, config)

    enriched = list(await asyncio.gather(*(enrich_with_semaphore(c) for c in candidates)))

    failures = sum(1 for candidate in enriched if candidate.extraction_failed)
    logger.info(
        "Enrichment completed",
        enriched=pending - failures,
        failed=failures,
    )
    return enriched
