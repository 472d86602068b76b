"""Article candidate data models for the recommendation pipeline."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class RecommendationSource(str, Enum):
    """External content sources a candidate can come from."""

    WIKISOURCE = "Wikisource"
    WIKIPEDIA = "Wikipedia"
    INTERNET_ARCHIVE = "Internet Archive"
    CHRONICLING_AMERICA = "Chronicling America"


class LicenseType(str, Enum):
    """License a candidate is published under."""

    PUBLIC_DOMAIN = "Public Domain"
    CREATIVE_COMMONS = "Creative Commons"
    FREE_TO_READ = "Free-to-read"
    VARIES = "Varies"
    UNKNOWN = "Unknown"


class LicenseFilter(str, Enum):
    """License restriction requested by the caller."""

    ANY = "Any"
    PUBLIC_DOMAIN = "Public Domain"
    CREATIVE_COMMONS = "Creative Commons"
    FREE_TO_READ = "Free-to-read"

    def allows(self, license_type: LicenseType) -> bool:
        """Return True if a candidate with ``license_type`` passes this filter."""
        if self is LicenseFilter.ANY:
            return True
        return license_type.value == self.value


class ArticleCandidate(BaseModel):
    """An unranked article found by a connector (or filled in by enrichment)."""

    id: str = Field(description="Source-prefixed identifier, unique within one search")
    title: str = Field(description="Article title")
    url: str = Field(description="Article URL")
    source: RecommendationSource = Field(description="Connector that produced the candidate")
    date: datetime | None = Field(default=None, description="Publication date if known")
    snippet: str = Field(default="", description="Short excerpt, possibly empty")
    license_type: LicenseType = Field(default=LicenseType.UNKNOWN, description="License")
    language: str = Field(default="en", description="Language tag")
    word_count: int | None = Field(
        default=None, ge=0, description="Word count, None until known or unknowable"
    )
    raw_length_fields: dict[str, str] = Field(
        default_factory=dict, description="Diagnostic key-values from the source"
    )
    extraction_failed: bool = Field(
        default=False, description="True when content enrichment could not count words"
    )
