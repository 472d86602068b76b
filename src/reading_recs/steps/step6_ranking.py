"""Step 6: Multi-factor scoring, ranking, and slicing.

score = 0.45 * topic + 0.35 * fit + quality + source boost + recency boost

- topic: share of topic tokens found in title + snippet
- fit: closeness of estimated minutes to the budget (fixed low value when unknown)
- quality: snippet, date, known license, successful extraction
- source boost: fixed per source
- recency boost: only when the request prefers recent items
"""

from datetime import datetime

from reading_recs.constants import (
    DEFAULT_BACKUP_COUNT,
    DEFAULT_TOP_COUNT,
    DEFAULT_UNKNOWN_LENGTH_FIT,
    FIT_WEIGHT,
    RECENCY_HORIZON_DAYS,
    RECENCY_MAX_BOOST,
    TOPIC_WEIGHT,
)
from reading_recs.models.articles import ArticleCandidate, LicenseType
from reading_recs.models.config import RankingConfig
from reading_recs.models.recommendations import RecommendationRequest, RecommendationResult
from reading_recs.utils.logging import get_logger
from reading_recs.utils.reading import estimated_minutes
from reading_recs.utils.text import token_set

logger = get_logger(__name__)


def topic_score(topic_tokens: set[str], candidate: ArticleCandidate) -> float:
    if not topic_tokens:
        return 0.0
    text_tokens = token_set(f"{candidate.title} {candidate.snippet}")
    return len(topic_tokens & text_tokens) / len(topic_tokens)


def fit_score(
    candidate: ArticleCandidate,
    request: RecommendationRequest,
    unknown_length_fit: float = DEFAULT_UNKNOWN_LENGTH_FIT,
) -> float:
    if candidate.word_count is None:
        return unknown_length_fit
    minutes = estimated_minutes(candidate.word_count, request.wpm)
    delta = abs(request.minutes - minutes)
    return max(0.0, 1.0 - delta / max(request.minutes, 1))


def quality_score(candidate: ArticleCandidate) -> float:
    quality = 0.0
    if candidate.snippet:
        quality += 0.2
    if candidate.date is not None:
        quality += 0.1
    if candidate.license_type != LicenseType.UNKNOWN:
        quality += 0.1
    if not candidate.extraction_failed:
        quality += 0.1
    return quality


def recency_boost(
    candidate: ArticleCandidate,
    request: RecommendationRequest,
    now: datetime,
) -> float:
    if not request.prefer_recent or candidate.date is None:
        return 0.0
    reference = now if candidate.date.tzinfo is None else now.astimezone(candidate.date.tzinfo)
    if candidate.date.tzinfo is None and reference.tzinfo is not None:
        reference = reference.replace(tzinfo=None)
    age_days = (reference - candidate.date).total_seconds() / 86_400
    return max(0.0, RECENCY_MAX_BOOST - min(age_days / RECENCY_HORIZON_DAYS, RECENCY_MAX_BOOST))


def score_candidate(
    candidate: ArticleCandidate,
    request: RecommendationRequest,
    topic_tokens: set[str] | None = None,
    now: datetime | None = None,
    config: RankingConfig | None = None,
) -> float:
    """
    Score one candidate against a request. Higher is better.

    Args:
        candidate: Candidate to score
        request: Search request
        topic_tokens: Pre-computed ``token_set(request.topic)``
        now: Reference time for recency (defaults to now)
        config: Ranking configuration (source boosts, unknown-length fit)
    """
    config = config or RankingConfig()
    if topic_tokens is None:
        topic_tokens = token_set(request.topic)
    now = now or datetime.now()

    source_boost = config.source_boosts.get(candidate.source, 0.0)

    return (
        TOPIC_WEIGHT * topic_score(topic_tokens, candidate)
        + FIT_WEIGHT * fit_score(candidate, request, config.unknown_length_fit)
        + quality_score(candidate)
        + source_boost
        + recency_boost(candidate, request, now)
    )


def rank_candidates(
    candidates: list[ArticleCandidate],
    request: RecommendationRequest,
    now: datetime | None = None,
    config: RankingConfig | None = None,
) -> list[tuple[ArticleCandidate, float]]:
    """
    Sort candidates by descending score.

    The sort is stable, so equal scores keep their input order.

    Returns:
        (candidate, score) pairs, best first
    """
    topic_tokens = token_set(request.topic)
    now = now or datetime.now()

    scored = [
        (candidate, score_candidate(candidate, request, topic_tokens, now, config))
        for candidate in candidates
    ]
    scored.sort(key=lambda pair: pair[1], reverse=True)

    if scored:
        logger.debug(
            "Ranking completed",
            candidates=len(scored),
            best_score=round(scored[0][1], 3),
            best_id=scored[0][0].id,
        )
    return scored


def slice_results(
    ranked: list[ArticleCandidate],
    top_count: int = DEFAULT_TOP_COUNT,
    backup_count: int = DEFAULT_BACKUP_COUNT,
) -> RecommendationResult:
    """Split ranked candidates into the top picks and the following backups."""
    return RecommendationResult(
        top_three=tuple(ranked[:top_count]),
        backups=tuple(ranked[top_count : top_count + backup_count]),
    )
