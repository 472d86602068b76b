"""Connector for the Internet Archive advanced search API."""

from typing import Any

from reading_recs.connectors.base import Connector
from reading_recs.models.articles import ArticleCandidate, LicenseType, RecommendationSource
from reading_recs.utils.logging import get_logger

logger = get_logger(__name__)

ADVANCED_SEARCH_URL = "https://archive.org/advancedsearch.php"


def _parse_description(raw: Any) -> str:
    """Descriptions come back either as a string or a list of strings."""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, list) and raw and isinstance(raw[0], str):
        return raw[0]
    return ""


class InternetArchiveConnector(Connector):
    """Keyword search over archive.org items. Licensing varies per item."""

    source = RecommendationSource.INTERNET_ARCHIVE

    async def fetch_candidates(self, query: str, language: str) -> list[ArticleCandidate]:
        params = [
            ("q", query),
            ("fl[]", "identifier"),
            ("fl[]", "title"),
            ("fl[]", "description"),
            ("rows", str(self.max_results)),
            ("page", "1"),
            ("output", "json"),
        ]

        payload = await self.http.get_json(ADVANCED_SEARCH_URL, params=params)
        response = payload.get("response") if isinstance(payload, dict) else None
        docs = response.get("docs") if isinstance(response, dict) else None

        candidates: list[ArticleCandidate] = []
        for doc in docs or []:
            identifier = doc.get("identifier")
            title = doc.get("title")
            if not isinstance(identifier, str) or not isinstance(title, str):
                logger.debug("Skipping archive doc without identifier/title", doc=str(doc)[:80])
                continue

            candidates.append(
                ArticleCandidate(
                    id=f"archive-{identifier}",
                    title=title,
                    url=f"https://archive.org/details/{identifier}",
                    source=self.source,
                    snippet=_parse_description(doc.get("description")),
                    license_type=LicenseType.VARIES,
                    language=language,
                )
            )

        return candidates
