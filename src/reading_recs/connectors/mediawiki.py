"""Connectors for MediaWiki search APIs (Wikipedia, Wikisource)."""

from typing import Any

from pydantic import BaseModel, Field

from reading_recs.connectors.base import Connector, normalize_language
from reading_recs.models.articles import ArticleCandidate, LicenseType, RecommendationSource
from reading_recs.utils.logging import get_logger
from reading_recs.utils.text import strip_html_tags

logger = get_logger(__name__)


class MediaWikiSearchItem(BaseModel):
    """One hit of ``list=search``."""

    pageid: int
    title: str
    snippet: str = ""


class MediaWikiQuery(BaseModel):
    search: list[MediaWikiSearchItem] = Field(default_factory=list)


class MediaWikiSearchResponse(BaseModel):
    """Subset of the MediaWiki ``action=query`` response we rely on."""

    query: MediaWikiQuery = Field(default_factory=MediaWikiQuery)


class MediaWikiConnector(Connector):
    """Full-text search on a language-specific MediaWiki site."""

    site: str
    id_prefix: str
    license_type: LicenseType
    raw_length_fields: dict[str, str] = {}

    def endpoint(self, lang: str) -> str:
        return f"https://{lang}.{self.site}/w/api.php"

    def article_url(self, lang: str, pageid: int) -> str:
        return f"https://{lang}.{self.site}/wiki?curid={pageid}"

    async def fetch_candidates(self, query: str, language: str) -> list[ArticleCandidate]:
        lang = normalize_language(language, self.source)
        params = [
            ("action", "query"),
            ("list", "search"),
            ("srsearch", query),
            ("srlimit", str(self.max_results)),
            ("format", "json"),
            ("utf8", "1"),
        ]

        payload: Any = await self.http.get_json(self.endpoint(lang), params=params)
        decoded = MediaWikiSearchResponse.model_validate(payload or {})

        candidates = [
            ArticleCandidate(
                id=f"{self.id_prefix}-{item.pageid}",
                title=item.title,
                url=self.article_url(lang, item.pageid),
                source=self.source,
                snippet=strip_html_tags(item.snippet),
                license_type=self.license_type,
                language=lang,
                raw_length_fields=dict(self.raw_length_fields),
            )
            for item in decoded.query.search
        ]
        logger.debug("MediaWiki search parsed", site=self.site, query=query, hits=len(candidates))
        return candidates


class WikipediaConnector(MediaWikiConnector):
    """Encyclopedic articles; text is CC BY-SA."""

    source = RecommendationSource.WIKIPEDIA
    site = "wikipedia.org"
    id_prefix = "wikipedia"
    license_type = LicenseType.CREATIVE_COMMONS


class WikisourceConnector(MediaWikiConnector):
    """Source texts; mostly public domain."""

    source = RecommendationSource.WIKISOURCE
    site = "wikisource.org"
    id_prefix = "wikisource"
    license_type = LicenseType.PUBLIC_DOMAIN
    raw_length_fields = {"license_note": "Public Domain / varies"}
