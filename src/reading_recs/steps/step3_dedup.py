"""Step 3: Cross-source deduplication by URL and normalized title."""

from reading_recs.models.articles import ArticleCandidate
from reading_recs.utils.logging import get_logger
from reading_recs.utils.text import normalize_title

logger = get_logger(__name__)


def deduplicate(candidates: list[ArticleCandidate]) -> list[ArticleCandidate]:
    """
    Drop candidates whose URL or title was already seen.

    URLs compare case-insensitively; titles compare after ``normalize_title``.
    The first occurrence wins, so input order decides which duplicate survives.

    Args:
        candidates: Merged candidates from Step 2

    Returns:
        Unique candidates in input order
    """
    seen_urls: set[str] = set()
    seen_titles: set[str] = set()
    unique: list[ArticleCandidate] = []

    for candidate in candidates:
        url_key = candidate.url.lower()
        title_key = normalize_title(candidate.title)

        if url_key in seen_urls or title_key in seen_titles:
            logger.debug("Duplicate candidate", id=candidate.id, title=candidate.title[:50])
            continue

        seen_urls.add(url_key)
        seen_titles.add(title_key)
        unique.append(candidate)

    logger.info(
        "Deduplication completed",
        input_candidates=len(candidates),
        duplicates_found=len(candidates) - len(unique),
        unique_candidates=len(unique),
    )
    return unique
