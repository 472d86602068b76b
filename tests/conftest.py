"""Shared pytest fixtures and configuration."""

from collections.abc import Callable
from datetime import datetime

import pytest
from fakes import make_candidate

from reading_recs.models.articles import (
    ArticleCandidate,
    LicenseType,
    RecommendationSource,
)
from reading_recs.models.config import ServiceConfig
from reading_recs.models.recommendations import RecommendationRequest


@pytest.fixture
def candidate_factory() -> Callable[..., ArticleCandidate]:
    """Factory for article candidates."""
    return make_candidate


@pytest.fixture
def sample_candidates() -> list[ArticleCandidate]:
    """A small mixed set of candidates about space."""
    return [
        make_candidate(
            1,
            title="Space exploration",
            source=RecommendationSource.WIKIPEDIA,
            word_count=2200,
            snippet="A history of space exploration.",
        ),
        make_candidate(
            2,
            title="A Voyage to the Moon",
            source=RecommendationSource.WIKISOURCE,
            license_type=LicenseType.PUBLIC_DOMAIN,
            word_count=1800,
            snippet="Classic space fiction.",
        ),
        make_candidate(
            3,
            title="Astronomy lectures",
            source=RecommendationSource.INTERNET_ARCHIVE,
            license_type=LicenseType.VARIES,
            word_count=None,
            snippet="",
        ),
        make_candidate(
            4,
            title="The Evening Star, 1912",
            source=RecommendationSource.CHRONICLING_AMERICA,
            license_type=LicenseType.PUBLIC_DOMAIN,
            word_count=9000,
            snippet="Comet sighted over the city.",
            date=datetime(1912, 4, 15),
        ),
    ]


@pytest.fixture
def request_factory() -> Callable[..., RecommendationRequest]:
    """Factory for recommendation requests with overridable fields."""

    def factory(**overrides: object) -> RecommendationRequest:
        fields: dict[str, object] = {"topic": "space", "minutes": 10, "wpm": 200}
        fields.update(overrides)
        return RecommendationRequest(**fields)

    return factory


@pytest.fixture
def service_config() -> ServiceConfig:
    """Service configuration with file logging and enrichment disabled."""
    config = ServiceConfig()
    config.logging.file_path = None
    config.enrichment.enabled = False
    return config
