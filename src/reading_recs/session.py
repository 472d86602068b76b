"""Caller-side search session: input validation, "try again", and link opening."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from reading_recs.constants import DEFAULT_WPM
from reading_recs.models.articles import ArticleCandidate, LicenseFilter
from reading_recs.models.recommendations import RecommendationRequest, RecommendationResult
from reading_recs.service import RecommendationsService
from reading_recs.utils.links import is_reachable
from reading_recs.utils.logging import get_logger
from reading_recs.utils.reading import estimated_minutes

logger = get_logger(__name__)

EMPTY_TOPIC_MESSAGE = "Enter a subject to search."
BACKUP_OPENED_NOTICE = "Primary link was unavailable, opened a backup source."
OPEN_FAILED_MESSAGE = "Could not open this article right now."

ReachabilityCheck = Callable[[str], Awaitable[bool]]


@dataclass
class SearchOutcome:
    """Result of one session search plus any user-facing message."""

    result: RecommendationResult
    request: RecommendationRequest | None = None
    error_message: str | None = None

    @property
    def has_no_results(self) -> bool:
        return not self.result.top_three


@dataclass
class LinkResolution:
    """Which URL to open for a chosen candidate."""

    url: str | None
    used_backup: bool = False
    notice: str | None = None
    error_message: str | None = None


@dataclass
class SearchPreferences:
    """Form state the session searches with."""

    minutes: int = 10
    license_filter: LicenseFilter = LicenseFilter.ANY
    language: str = "en"
    wpm: int = DEFAULT_WPM
    allow_slightly_over: bool = True
    prefer_recent: bool = False
    mock_mode: bool = False


@dataclass
class RecommendationsSession:
    """Drives repeated searches for one user.

    Keeps an exclusion set so "try again" never shows the same top picks.
    The set is cleared whenever the topic or any preference changes.
    """

    service: RecommendationsService
    preferences: SearchPreferences = field(default_factory=SearchPreferences)
    reachability_check: ReachabilityCheck | None = None
    result: RecommendationResult = field(default_factory=RecommendationResult.empty)
    excluded_urls: set[str] = field(default_factory=set)
    last_topic: str = ""
    _last_signature: str | None = None

    def __post_init__(self) -> None:
        if self.reachability_check is None:
            timeout = self.service.config.link_check.timeout_seconds
            user_agent = self.service.config.fetch.user_agent

            async def check(url: str) -> bool:
                return await is_reachable(url, timeout, user_agent)

            self.reachability_check = check

    def _signature(self, topic: str) -> str:
        prefs = self.preferences
        return "|".join(
            [
                topic.lower(),
                str(prefs.minutes),
                prefs.license_filter.value,
                prefs.language.strip().lower(),
                str(prefs.allow_slightly_over),
                str(prefs.prefer_recent),
                str(prefs.mock_mode),
            ]
        )

    def build_request(self, topic: str) -> RecommendationRequest:
        prefs = self.preferences
        language = prefs.language.strip() or "en"
        return RecommendationRequest(
            topic=topic,
            minutes=prefs.minutes,
            license_filter=prefs.license_filter,
            language=language,
            wpm=prefs.wpm,
            allow_slightly_over=prefs.allow_slightly_over,
            prefer_recent=prefs.prefer_recent,
            mock_mode=prefs.mock_mode,
            excluded_urls=tuple(sorted(self.excluded_urls)),
        )

    async def search(self, topic: str) -> SearchOutcome:
        """
        Search for ``topic`` with the current preferences.

        A blank topic is rejected without calling the service.
        """
        trimmed = topic.strip()
        if not trimmed:
            self.result = RecommendationResult.empty()
            return SearchOutcome(result=self.result, error_message=EMPTY_TOPIC_MESSAGE)

        signature = self._signature(trimmed)
        if signature != self._last_signature:
            self.excluded_urls.clear()
            self._last_signature = signature

        request = self.build_request(trimmed)
        self.last_topic = trimmed
        self.result = await self.service.search(request)
        return SearchOutcome(result=self.result, request=request)

    async def try_again(self) -> SearchOutcome:
        """Exclude the current top picks and search the same topic again."""
        for candidate in self.result.top_three:
            self.excluded_urls.add(candidate.url.lower())
        logger.info("Trying again", topic=self.last_topic, excluded=len(self.excluded_urls))
        return await self.search(self.last_topic)

    def estimated_minutes(self, candidate: ArticleCandidate) -> int | None:
        if not candidate.word_count:
            return None
        return estimated_minutes(candidate.word_count, self.preferences.wpm)

    async def open_candidate(self, candidate: ArticleCandidate) -> LinkResolution:
        """
        Pick a URL to open, falling back to backups when the candidate is down.

        The candidate is probed first, then every backup other than itself, in rank order.
        """
        fallbacks = [backup for backup in self.result.backups if backup.id != candidate.id]

        for index, item in enumerate([candidate, *fallbacks]):
            if await self.reachability_check(item.url):
                if index > 0:
                    logger.info("Opened backup link", requested=candidate.id, opened=item.id)
                    return LinkResolution(
                        url=item.url, used_backup=True, notice=BACKUP_OPENED_NOTICE
                    )
                return LinkResolution(url=item.url)

        logger.warning("No reachable link", requested=candidate.id, tried=len(fallbacks) + 1)
        return LinkResolution(url=None, error_message=OPEN_FAILED_MESSAGE)
