"""Step 2: Concurrent connector fan-out with per-branch timeout."""

import asyncio
from dataclasses import dataclass, field

from reading_recs.connectors.base import Connector
from reading_recs.constants import DEFAULT_FETCH_TIMEOUT_SECONDS
from reading_recs.models.articles import ArticleCandidate
from reading_recs.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class BranchOutcome:
    """What one (connector, query) branch contributed."""

    source: str
    query: str
    candidates: list[ArticleCandidate] = field(default_factory=list)
    timed_out: bool = False
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.timed_out or self.error is not None


@dataclass
class FetchResult:
    """Merged output of every branch, in submission order."""

    candidates: list[ArticleCandidate]
    branches: list[BranchOutcome]

    @property
    def branches_failed(self) -> int:
        return sum(1 for branch in self.branches if branch.failed)


async def fetch_with_timeout(
    connector: Connector,
    query: str,
    language: str,
    timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
) -> BranchOutcome:
    """
    Run one connector search, bounded by a timeout.

    The connector call races the timeout; whichever finishes first decides the
    outcome and the connector call is cancelled if it loses. Errors never
    propagate: they become an empty contribution.

    Args:
        connector: Connector to query
        query: Query variant
        language: Language hint
        timeout_seconds: Ceiling for this branch

    Returns:
        BranchOutcome with candidates, or empty with timeout/error recorded
    """
    source = connector.source.value

    try:
        candidates = await asyncio.wait_for(
            connector.fetch_candidates(query, language), timeout=timeout_seconds
        )
    except TimeoutError:
        logger.warning(
            "Connector timed out", source=source, query=query, timeout=timeout_seconds
        )
        return BranchOutcome(source=source, query=query, timed_out=True)
    except Exception as e:
        logger.warning(
            "Connector failed",
            source=source,
            query=query,
            error_type=type(e).__name__,
            error=str(e),
        )
        return BranchOutcome(source=source, query=query, error=str(e) or type(e).__name__)

    logger.info("Connector succeeded", source=source, query=query, count=len(candidates))
    return BranchOutcome(source=source, query=query, candidates=list(candidates))


async def fetch_all(
    connectors: list[Connector],
    queries: list[str],
    language: str,
    timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
) -> FetchResult:
    """
    Query every connector with every query variant concurrently.

    Args:
        connectors: Connectors to fan out to
        queries: Query variants from Step 1
        language: Language hint
        timeout_seconds: Ceiling per (connector, query) branch

    Returns:
        FetchResult with all candidates concatenated in (connector, query) order
    """
    tasks = [
        fetch_with_timeout(connector, query, language, timeout_seconds)
        for connector in connectors
        for query in queries
    ]

    logger.info(
        "Fetching candidates",
        connectors=len(connectors),
        queries=len(queries),
        branches=len(tasks),
    )

    branches = list(await asyncio.gather(*tasks))
    candidates = [candidate for branch in branches for candidate in branch.candidates]

    result = FetchResult(candidates=candidates, branches=branches)
    logger.info(
        "Fetch completed",
        candidates=len(candidates),
        branches_failed=result.branches_failed,
        branches_total=len(branches),
    )
    return result
