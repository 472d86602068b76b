"""Reachability probe used before opening a recommended link."""

import aiohttp
from yarl import URL

from reading_recs.constants import DEFAULT_LINK_CHECK_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from reading_recs.utils.logging import get_logger

logger = get_logger(__name__)


def _is_ok(status: int) -> bool:
    return 200 <= status <= 399


def is_http_url(url: str) -> bool:
    """True if ``url`` parses as an absolute http(s) URL with a host."""
    try:
        parsed = URL(url)
    except (ValueError, TypeError):
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.host)


async def is_reachable(
    url: str,
    timeout_seconds: float = DEFAULT_LINK_CHECK_TIMEOUT_SECONDS,
    user_agent: str = DEFAULT_USER_AGENT,
) -> bool:
    """
    Check whether a URL currently answers with a 2xx/3xx status.

    Tries HEAD first and falls back to GET, since some servers reject HEAD.

    Args:
        url: URL to probe
        timeout_seconds: Timeout for each request
        user_agent: User-Agent header value

    Returns:
        True if either request returned a status in 200-399
    """
    if not is_http_url(url):
        logger.debug("Not an http(s) URL", url=url)
        return False

    headers = {"User-Agent": user_agent}
    timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    async with aiohttp.ClientSession(timeout=timeout, headers=headers) as session:
        try:
            async with session.head(url, allow_redirects=True) as response:
                if _is_ok(response.status):
                    return True
                logger.debug("HEAD not ok, trying GET", url=url, status=response.status)
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.debug("HEAD failed, trying GET", url=url, error=str(e))

        try:
            async with session.get(url) as response:
                reachable = _is_ok(response.status)
                if not reachable:
                    logger.info("Link unreachable", url=url, status=response.status)
                return reachable
        except (aiohttp.ClientError, TimeoutError) as e:
            logger.info("Link unreachable", url=url, error=str(e))
            return False
