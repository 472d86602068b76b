"""Pydantic data models for the recommendation service."""

from reading_recs.models.articles import (
    ArticleCandidate,
    LicenseFilter,
    LicenseType,
    RecommendationSource,
)
from reading_recs.models.config import (
    CacheConfig,
    EnrichmentConfig,
    ExpansionConfig,
    FetchConfig,
    LinkCheckConfig,
    LoggingConfig,
    RankingConfig,
    ServiceConfig,
)
from reading_recs.models.recommendations import RecommendationRequest, RecommendationResult

__all__ = [
    # Articles
    "ArticleCandidate",
    "LicenseFilter",
    "LicenseType",
    "RecommendationSource",
    # Recommendations
    "RecommendationRequest",
    "RecommendationResult",
    # Config
    "CacheConfig",
    "EnrichmentConfig",
    "ExpansionConfig",
    "FetchConfig",
    "LinkCheckConfig",
    "LoggingConfig",
    "RankingConfig",
    "ServiceConfig",
]
