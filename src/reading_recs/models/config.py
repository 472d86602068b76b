"""Configuration models for the recommendation service."""

from typing import Literal

from pydantic import BaseModel, Field

from reading_recs.constants import (
    DEFAULT_BACKUP_COUNT,
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_FETCH_TIMEOUT_SECONDS,
    DEFAULT_LINK_CHECK_TIMEOUT_SECONDS,
    DEFAULT_RESULTS_PER_SOURCE,
    DEFAULT_SNIPPET_CHARS,
    DEFAULT_TOP_COUNT,
    DEFAULT_UNKNOWN_LENGTH_FIT,
    DEFAULT_USER_AGENT,
    DEFAULT_WPM,
)
from reading_recs.models.articles import RecommendationSource


def _default_source_boosts() -> dict[RecommendationSource, float]:
    return {
        RecommendationSource.WIKISOURCE: 0.08,
        RecommendationSource.WIKIPEDIA: 0.06,
        RecommendationSource.INTERNET_ARCHIVE: 0.05,
        RecommendationSource.CHRONICLING_AMERICA: 0.04,
    }


class FetchConfig(BaseModel):
    """Connector fan-out configuration."""

    timeout_seconds: float = Field(
        default=DEFAULT_FETCH_TIMEOUT_SECONDS,
        gt=0,
        description="Ceiling for one (connector, query) branch",
    )
    request_timeout_seconds: float = Field(
        default=DEFAULT_FETCH_TIMEOUT_SECONDS, gt=0, description="HTTP client timeout"
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT)
    results_per_source: int = Field(default=DEFAULT_RESULTS_PER_SOURCE, ge=1, le=50)
    enabled_sources: list[RecommendationSource] = Field(
        default_factory=lambda: list(RecommendationSource)
    )


class EnrichmentConfig(BaseModel):
    """Word-count enrichment configuration."""

    enabled: bool = Field(default=True)
    timeout_seconds: float = Field(default=DEFAULT_FETCH_TIMEOUT_SECONDS, gt=0)
    max_concurrent: int = Field(default=8, ge=1)
    snippet_chars: int = Field(
        default=DEFAULT_SNIPPET_CHARS, ge=0, description="Characters used to backfill snippets"
    )


class ExpansionConfig(BaseModel):
    """Query expansion configuration."""

    synonyms: dict[str, str] = Field(
        default_factory=lambda: {
            "stoicism": "stoic philosophy",
            "ai": "artificial intelligence",
            "history": "historical",
            "fitness": "exercise",
            "space": "astronomy",
        },
        description="Lower-cased topic -> broader phrase",
    )


class RankingConfig(BaseModel):
    """Scoring and slicing configuration."""

    top_count: int = Field(default=DEFAULT_TOP_COUNT, ge=1)
    backup_count: int = Field(default=DEFAULT_BACKUP_COUNT, ge=0)
    source_boosts: dict[RecommendationSource, float] = Field(
        default_factory=_default_source_boosts
    )
    unknown_length_fit: float = Field(
        default=DEFAULT_UNKNOWN_LENGTH_FIT,
        ge=0.0,
        le=1.0,
        description="Fit score given to candidates without a word count",
    )


class CacheConfig(BaseModel):
    """Result cache configuration."""

    enabled: bool = Field(default=True)
    ttl_seconds: float = Field(default=DEFAULT_CACHE_TTL_SECONDS, gt=0)


class LinkCheckConfig(BaseModel):
    """Reachability probe configuration."""

    timeout_seconds: float = Field(default=DEFAULT_LINK_CHECK_TIMEOUT_SECONDS, gt=0)


class LoggingConfig(BaseModel):
    """Logging configuration for loguru."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    serialize: bool = Field(default=False, description="Serialize file logs to JSON")
    colorize: bool = Field(default=True, description="Colorize console output")
    file_path: str | None = Field(default="logs/reading-recs.log")
    rotation: str = Field(default="50 MB", description="Log rotation size/time")
    retention: str = Field(default="14 days", description="Log retention period")
    compression: str = Field(default="zip", description="Compression format for rotated logs")


class ServiceConfig(BaseModel):
    """Complete service configuration."""

    default_wpm: int = Field(default=DEFAULT_WPM, ge=1)
    default_language: str = Field(default="en")
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    enrichment: EnrichmentConfig = Field(default_factory=EnrichmentConfig)
    expansion: ExpansionConfig = Field(default_factory=ExpansionConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    link_check: LinkCheckConfig = Field(default_factory=LinkCheckConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
