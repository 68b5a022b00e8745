"""End-to-end analysis of one URL: classify, fetch, extract, analyse.

Only input and crawl problems abort the pipeline (as
:class:`~content_insight.core.exceptions.InputError` and
:class:`~content_insight.core.exceptions.CrawlError`).  Once content has
been extracted the request succeeds, whatever individual providers return.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from content_insight.analysis.config import build_providers
from content_insight.analysis.orchestrator import run_all
from content_insight.analysis.outcomes import serialize_analysis_map
from content_insight.config.settings import Settings
from content_insight.core.credentials import Credentials
from content_insight.core.exceptions import CrawlError, MissingUrlError
from content_insight.scraper.content_extractor import extract
from content_insight.scraper.http_fetcher import fetch_url
from content_insight.scraper.url_classifier import classify

logger = logging.getLogger(__name__)


async def analyze_url(
    url: str | None,
    *,
    client: httpx.AsyncClient,
    credentials: Credentials,
    settings: Settings,
) -> dict[str, Any]:
    """Run the full pipeline for *url* and return the envelope ``data`` object.

    Args:
        url: Client-supplied URL.
        client: HTTP client used for the page fetch and all provider calls.
        credentials: Provider keys available to this request.
        settings: Timeouts and provider model names.

    Returns:
        ``{"title", "author", "readCount", "commentCount", "aiResults"}``.

    Raises:
        MissingUrlError: If *url* is empty.
        InvalidUrlError: If *url* is not an absolute URL.
        UnsupportedPlatformError: If *url* is not on a supported platform.
        CrawlError: If the page cannot be fetched.
    """
    if not url or not str(url).strip():
        raise MissingUrlError()
    url = str(url).strip()

    platform = classify(url)

    fetched = await fetch_url(url, client=client, timeout=settings.fetch_timeout_seconds)
    if not fetched.ok:
        raise CrawlError(
            f"Failed to crawl content: {fetched.error}",
            status_code=fetched.status_code,
        )

    record = extract(platform, fetched.html or "")
    logger.info(
        "pipeline: extracted %s page (title_len=%d, text_len=%d)",
        platform.value,
        len(record.title),
        len(record.raw_text),
    )

    results = await run_all(
        credentials,
        record,
        client=client,
        providers=build_providers(settings),
        timeout=settings.provider_timeout_seconds,
    )

    return {
        "title": record.title,
        "author": record.author,
        "readCount": record.read_count,
        "commentCount": record.comment_count,
        "aiResults": serialize_analysis_map(results),
    }
