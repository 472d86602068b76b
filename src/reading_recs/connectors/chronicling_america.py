"""Connector for the Library of Congress Chronicling America newspaper archive."""

from datetime import datetime
from urllib.parse import urljoin

from reading_recs.connectors.base import Connector
from reading_recs.models.articles import ArticleCandidate, LicenseType, RecommendationSource
from reading_recs.utils.logging import get_logger

logger = get_logger(__name__)

BASE_URL = "https://chroniclingamerica.loc.gov/"
SEARCH_URL = "https://chroniclingamerica.loc.gov/search/pages/results/"
DEFAULT_SNIPPET = "Historic newspaper page from the Library of Congress."
SNIPPET_CHARS = 220


def parse_page_date(raw: object) -> datetime | None:
    """
    Parse the ``date`` field of a search hit.

    Examples:
        >>> parse_page_date("19120415")
        datetime.datetime(1912, 4, 15, 0, 0)
        >>> parse_page_date("not a date") is None
        True
    """
    if not isinstance(raw, str) or not raw:
        return None

    for fmt in ("%Y%m%d", "%Y-%m-%d"):
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue

    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed.replace(tzinfo=None)


class ChroniclingAmericaConnector(Connector):
    """Full-text OCR search of digitized US newspaper pages (public domain)."""

    source = RecommendationSource.CHRONICLING_AMERICA

    async def fetch_candidates(self, query: str, language: str) -> list[ArticleCandidate]:
        params = [
            ("andtext", query),
            ("format", "json"),
            ("rows", str(self.max_results)),
        ]

        payload = await self.http.get_json(SEARCH_URL, params=params)
        items = payload.get("items") if isinstance(payload, dict) else None

        candidates: list[ArticleCandidate] = []
        for item in items or []:
            page_id = item.get("id")
            if not isinstance(page_id, str) or not page_id:
                continue

            title = item.get("title") or page_id or "LOC Article"
            ocr_text = item.get("ocr_eng")
            snippet = ocr_text if isinstance(ocr_text, str) and ocr_text else DEFAULT_SNIPPET

            candidates.append(
                ArticleCandidate(
                    id=f"loc-{page_id}",
                    title=str(title),
                    url=urljoin(BASE_URL, page_id),
                    source=self.source,
                    date=parse_page_date(item.get("date")),
                    snippet=snippet[:SNIPPET_CHARS],
                    license_type=LicenseType.PUBLIC_DOMAIN,
                    language=language,
                    raw_length_fields={"license_note": "Public Domain / LOC"},
                )
            )

        logger.debug("Chronicling America search parsed", query=query, hits=len(candidates))
        return candidates
