"""Step 5: Exclusion, license, and reading-time filtering."""

from reading_recs.models.articles import ArticleCandidate
from reading_recs.models.recommendations import RecommendationRequest
from reading_recs.utils.logging import get_logger
from reading_recs.utils.reading import estimated_minutes

logger = get_logger(__name__)


def filter_candidate(
    candidate: ArticleCandidate,
    request: RecommendationRequest,
    excluded: set[str],
) -> tuple[bool, str | None]:
    """
    Decide whether one candidate survives the request's constraints.

    Candidates with unknown word count pass the time check.

    Returns:
        (passed, rejection_reason)
    """
    if candidate.url.lower() in excluded:
        return False, "Excluded URL"

    if not request.license_filter.allows(candidate.license_type):
        return False, "License not allowed"

    if candidate.word_count is not None:
        minutes = estimated_minutes(candidate.word_count, request.wpm)
        if minutes > request.time_allowance:
            return False, "Too long for time budget"

    return True, None


def filter_candidates(
    candidates: list[ArticleCandidate],
    request: RecommendationRequest,
) -> list[ArticleCandidate]:
    """
    Keep candidates that fit the request's exclusions, license, and time budget.

    Args:
        candidates: Enriched candidates from Step 4
        request: Search request

    Returns:
        Surviving candidates in input order
    """
    excluded = {url.lower() for url in request.excluded_urls}
    kept: list[ArticleCandidate] = []

    for candidate in candidates:
        passed, reason = filter_candidate(candidate, request, excluded)
        if passed:
            kept.append(candidate)
        else:
            logger.debug("Filtered out candidate", id=candidate.id, reason=reason)

    logger.info(
        "Filtering completed",
        input_candidates=len(candidates),
        kept=len(kept),
        time_allowance=request.time_allowance,
    )
    return kept
