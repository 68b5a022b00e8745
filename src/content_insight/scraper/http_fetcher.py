"""Async HTTP fetcher for source pages.

Uses ``httpx`` for all HTTP requests.  Never raises for transport problems:
every outcome is described by a :class:`FetchResult`, and the pipeline
decides whether a failed fetch aborts the request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from content_insight.scraper.config import DEFAULT_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result dataclass
# ---------------------------------------------------------------------------


@dataclass
class FetchResult:
    """Result of a single HTTP fetch attempt.

    Attributes:
        html: Decoded response body, or ``None`` if the fetch failed.
        status_code: HTTP status code, or ``None`` on network error.
        final_url: URL after following redirects, or the requested URL on error.
        error: Human-readable error description, or ``None`` on success.
    """

    html: str | None
    status_code: int | None
    final_url: str | None
    error: str | None

    @property
    def ok(self) -> bool:
        return self.error is None and self.html is not None


# ---------------------------------------------------------------------------
# Public fetch function
# ---------------------------------------------------------------------------


async def fetch_url(
    url: str,
    *,
    client: httpx.AsyncClient,
    timeout: float = DEFAULT_TIMEOUT,
    headers: dict[str, str] | None = None,
) -> FetchResult:
    """Fetch a single page with a browser user-agent.

    Redirects are followed (short links on both platforms redirect to the
    canonical article URL).  Any status >= 400 is reported as an error.

    Args:
        url: Target URL to fetch.
        client: Shared :class:`httpx.AsyncClient` instance.
        timeout: Request timeout in seconds.
        headers: Extra request headers, merged over the default user-agent.

    Returns:
        A :class:`FetchResult` instance.
    """
    request_headers = {"User-Agent": USER_AGENT}
    if headers:
        request_headers.update(headers)

    try:
        response = await client.get(
            url,
            timeout=timeout,
            follow_redirects=True,
            headers=request_headers,
        )
    except httpx.TimeoutException:
        logger.warning("scraper: timeout fetching %s", url)
        return FetchResult(html=None, status_code=None, final_url=url, error="timeout")
    except httpx.TooManyRedirects:
        logger.warning("scraper: too many redirects for %s", url)
        return FetchResult(
            html=None, status_code=None, final_url=url, error="too many redirects"
        )
    except httpx.RequestError as exc:
        logger.warning("scraper: request error for %s: %s", url, exc)
        return FetchResult(
            html=None, status_code=None, final_url=url, error=f"request error: {exc}"
        )

    final_url = str(response.url)

    if response.status_code >= 400:
        logger.info("scraper: HTTP %d for %s", response.status_code, url)
        return FetchResult(
            html=None,
            status_code=response.status_code,
            final_url=final_url,
            error=f"HTTP {response.status_code}",
        )

    try:
        html = response.text
    except (UnicodeDecodeError, LookupError) as exc:
        logger.warning("scraper: decode error for %s: %s", url, exc)
        return FetchResult(
            html=None,
            status_code=response.status_code,
            final_url=final_url,
            error=f"decode error: {exc}",
        )

    logger.debug("scraper: fetched %s (%d chars)", final_url, len(html))
    return FetchResult(
        html=html,
        status_code=response.status_code,
        final_url=final_url,
        error=None,
    )
