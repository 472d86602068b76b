"""Request and result models for a recommendation search."""

from pydantic import BaseModel, ConfigDict, Field

from reading_recs.constants import DEFAULT_WPM
from reading_recs.models.articles import ArticleCandidate, LicenseFilter


class RecommendationRequest(BaseModel):
    """Immutable description of one recommendation search."""

    model_config = ConfigDict(frozen=True)

    topic: str = Field(description="Free-text topic")
    minutes: int = Field(ge=0, description="Reading time budget in minutes")
    license_filter: LicenseFilter = Field(default=LicenseFilter.ANY)
    language: str = Field(default="en", description="Language tag, e.g. 'en'")
    wpm: int = Field(default=DEFAULT_WPM, ge=1, description="Reading speed in words per minute")
    allow_slightly_over: bool = Field(
        default=True, description="Accept candidates one minute over the budget"
    )
    prefer_recent: bool = Field(default=False)
    mock_mode: bool = Field(default=False, description="Synthesize results offline")
    excluded_urls: tuple[str, ...] = Field(
        default=(), description="URLs that must not appear in the result"
    )

    @property
    def time_allowance(self) -> int:
        """Maximum estimated minutes a candidate may take."""
        return self.minutes + (1 if self.allow_slightly_over else 0)

    @property
    def cache_key(self) -> str:
        """Canonical signature of the request.

        Case of topic, language and excluded URLs and the order of excluded URLs
        do not affect the key.
        """
        excluded_key = ",".join(sorted(url.lower() for url in self.excluded_urls))
        return "|".join(
            [
                self.topic.lower(),
                str(self.minutes),
                self.license_filter.value,
                self.language.lower(),
                str(self.wpm),
                str(self.allow_slightly_over).lower(),
                str(self.prefer_recent).lower(),
                str(self.mock_mode).lower(),
                excluded_key,
            ]
        )


class RecommendationResult(BaseModel):
    """Ranked output of a search: a short list plus backups."""

    model_config = ConfigDict(frozen=True)

    top_three: tuple[ArticleCandidate, ...] = Field(default=())
    backups: tuple[ArticleCandidate, ...] = Field(default=())

    @classmethod
    def empty(cls) -> "RecommendationResult":
        return cls(top_three=(), backups=())

    @property
    def is_empty(self) -> bool:
        return not self.top_three and not self.backups

    @property
    def all_candidates(self) -> list[ArticleCandidate]:
        """Top picks followed by backups, in rank order."""
        return [*self.top_three, *self.backups]
