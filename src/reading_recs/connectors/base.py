"""Connector contract, errors, and the shared HTTP client."""

import re
from abc import ABC, abstractmethod
from typing import Any

import aiohttp

from reading_recs.constants import DEFAULT_FETCH_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from reading_recs.models.articles import ArticleCandidate, RecommendationSource

_LANGUAGE_TAG = re.compile(r"^[a-z]+(-[a-z]+)*$")


class ConnectorError(Exception):
    """Base exception for connector failures."""

    def __init__(self, message: str, source: RecommendationSource | None = None):
        self.source = source
        super().__init__(message)


class BadURLError(ConnectorError):
    """The endpoint URL could not be built from the query parameters."""


class InvalidResponseError(ConnectorError):
    """The endpoint answered with a non-2xx status."""

    def __init__(self, status: int, url: str, source: RecommendationSource | None = None):
        self.status = status
        self.url = url
        super().__init__(f"HTTP {status} from {url}", source)


class ConnectorHTTPClient:
    """Thin aiohttp wrapper with a fixed User-Agent and a bounded timeout."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
    ) -> None:
        self.user_agent = user_agent
        self.timeout_seconds = timeout_seconds

    async def get_text(
        self,
        url: str,
        params: list[tuple[str, str]] | None = None,
        timeout_seconds: float | None = None,
    ) -> str:
        """
        GET ``url`` and return the decoded body.

        Undecodable bytes are replaced rather than raising.

        Raises:
            InvalidResponseError: For non-2xx status
            aiohttp.ClientError: For transport errors
            TimeoutError: For timeout
        """
        headers = {"User-Agent": self.user_agent}
        timeout = aiohttp.ClientTimeout(total=timeout_seconds or self.timeout_seconds)

        async with (
            aiohttp.ClientSession(timeout=timeout) as session,
            session.get(url, params=params, headers=headers) as response,
        ):
            if not 200 <= response.status <= 299:
                raise InvalidResponseError(response.status, str(response.url))
            return await response.text(errors="replace")

    async def get_json(
        self,
        url: str,
        params: list[tuple[str, str]] | None = None,
        timeout_seconds: float | None = None,
    ) -> Any:
        """
        GET ``url`` and parse the body as JSON regardless of content type.

        Raises:
            InvalidResponseError: For non-2xx status
            ValueError: For a body that is not JSON
        """
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        timeout = aiohttp.ClientTimeout(total=timeout_seconds or self.timeout_seconds)

        async with (
            aiohttp.ClientSession(timeout=timeout) as session,
            session.get(url, params=params, headers=headers) as response,
        ):
            if not 200 <= response.status <= 299:
                raise InvalidResponseError(response.status, str(response.url))
            return await response.json(content_type=None)


class Connector(ABC):
    """Adapter over one external search endpoint.

    Subclasses differ only in endpoint, query parameters, and how the
    endpoint's JSON maps onto ``ArticleCandidate``. Zero hits is an empty
    list, never an error.
    """

    source: RecommendationSource

    def __init__(
        self,
        http_client: ConnectorHTTPClient | None = None,
        max_results: int = 10,
    ) -> None:
        self.http = http_client or ConnectorHTTPClient()
        self.max_results = max_results

    @abstractmethod
    async def fetch_candidates(self, query: str, language: str) -> list[ArticleCandidate]:
        """Search the endpoint for ``query`` and map hits to candidates."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(source={self.source.value!r})"


def normalize_language(language: str, source: RecommendationSource | None = None) -> str:
    """
    Lower-case a language tag for use as a wiki subdomain ("" -> "en").

    Raises:
        BadURLError: If the tag cannot form a hostname label
    """
    lang = language.strip().lower() or "en"
    if not _LANGUAGE_TAG.match(lang):
        raise BadURLError(f"Invalid language tag: {language!r}", source)
    return lang
