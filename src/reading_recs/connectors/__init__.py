"""Source connectors and the registry used to build them from configuration."""

from reading_recs.connectors.base import (
    BadURLError,
    Connector,
    ConnectorError,
    ConnectorHTTPClient,
    InvalidResponseError,
)
from reading_recs.connectors.chronicling_america import ChroniclingAmericaConnector
from reading_recs.connectors.internet_archive import InternetArchiveConnector
from reading_recs.connectors.mediawiki import WikipediaConnector, WikisourceConnector
from reading_recs.models.articles import RecommendationSource
from reading_recs.models.config import FetchConfig

CONNECTOR_REGISTRY: dict[RecommendationSource, type[Connector]] = {
    RecommendationSource.WIKISOURCE: WikisourceConnector,
    RecommendationSource.WIKIPEDIA: WikipediaConnector,
    RecommendationSource.INTERNET_ARCHIVE: InternetArchiveConnector,
    RecommendationSource.CHRONICLING_AMERICA: ChroniclingAmericaConnector,
}


def build_connectors(
    config: FetchConfig | None = None,
    http_client: ConnectorHTTPClient | None = None,
) -> list[Connector]:
    """
    Instantiate the enabled connectors in registry order.

    Args:
        config: Fetch configuration (defaults enable every source)
        http_client: Shared HTTP client; one is built from ``config`` if omitted

    Returns:
        Connectors for every enabled source
    """
    config = config or FetchConfig()
    http_client = http_client or ConnectorHTTPClient(
        user_agent=config.user_agent,
        timeout_seconds=config.request_timeout_seconds,
    )
    enabled = set(config.enabled_sources)

    return [
        connector_class(http_client=http_client, max_results=config.results_per_source)
        for source, connector_class in CONNECTOR_REGISTRY.items()
        if source in enabled
    ]


__all__ = [
    "BadURLError",
    "CONNECTOR_REGISTRY",
    "ChroniclingAmericaConnector",
    "Connector",
    "ConnectorError",
    "ConnectorHTTPClient",
    "InternetArchiveConnector",
    "InvalidResponseError",
    "WikipediaConnector",
    "WikisourceConnector",
    "build_connectors",
]
