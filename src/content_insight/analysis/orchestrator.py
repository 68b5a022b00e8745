"""Concurrent fan-out of one content record to every configured provider.

Each configured provider gets its own coroutine, bounded by a per-provider
timeout, that always resolves to a ``(name, outcome)`` pair.  The pairs are
collected with ``asyncio.gather`` (wait-for-all), so one slow or failing
provider neither blocks nor erases another provider's entry, and no two
coroutines ever write to the same object.

When no provider has a credential nothing is dispatched and a single
placeholder entry (``"demo"``) is returned instead.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Sequence

import httpx
import structlog

from content_insight.analysis import providers as provider_adapter
from content_insight.analysis.config import (
    DEFAULT_PROVIDER_TIMEOUT_SECONDS,
    PLACEHOLDER_KEYWORDS,
    PLACEHOLDER_PROVIDER_NAME,
    PLACEHOLDER_SUMMARY,
    PROVIDERS,
    ProviderConfig,
)
from content_insight.analysis.outcomes import (
    AnalysisFailure,
    AnalysisMap,
    AnalysisOutcome,
    AnalysisSuccess,
)
from content_insight.core.credentials import Credentials
from content_insight.scraper.content_extractor import ContentRecord

logger = structlog.get_logger(__name__)


def placeholder_results() -> AnalysisMap:
    """Return the single demo entry used when no provider is configured."""
    return {
        PLACEHOLDER_PROVIDER_NAME: AnalysisSuccess(
            keywords=list(PLACEHOLDER_KEYWORDS),
            summary=PLACEHOLDER_SUMMARY,
        )
    }


async def _run_one(
    provider: ProviderConfig,
    api_key: str,
    record: ContentRecord,
    client: httpx.AsyncClient,
    timeout: float,
) -> tuple[str, AnalysisOutcome]:
    """Run one provider adapter; always returns instead of raising."""
    start = time.perf_counter()
    try:
        outcome = await asyncio.wait_for(
            provider_adapter.analyze(provider, api_key, record, client=client),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        logger.warning("provider_timeout", provider=provider.name, timeout=timeout)
        outcome = AnalysisFailure(reason="timeout")
    except Exception as exc:  # noqa: BLE001
        logger.exception("provider_crashed", provider=provider.name)
        outcome = AnalysisFailure(reason=f"{provider.name}: {exc}")

    logger.debug(
        "provider_finished",
        provider=provider.name,
        ok=isinstance(outcome, AnalysisSuccess),
        elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
    )
    return provider.name, outcome


async def run_all(
    credentials: Credentials,
    record: ContentRecord,
    *,
    client: httpx.AsyncClient,
    providers: Sequence[ProviderConfig] = PROVIDERS,
    timeout: float = DEFAULT_PROVIDER_TIMEOUT_SECONDS,
) -> AnalysisMap:
    """Analyse *record* with every provider that has a credential.

    Args:
        credentials: Provider key lookup for this request.
        record: Extracted page content, shared read-only by all providers.
        client: HTTP client shared by all provider calls.
        providers: Candidate providers; those without a key are skipped.
        timeout: Seconds allowed per provider before it is reported as
            ``{"error": "timeout"}``.

    Returns:
        One entry per configured provider, or only the placeholder entry
        when none is configured.
    """
    configured = [p for p in providers if credentials.has_key(p.name)]
    if not configured:
        logger.info("analysis_skipped_no_providers")
        return placeholder_results()

    pairs = await asyncio.gather(
        *(
            _run_one(p, credentials.get_key(p.name), record, client, timeout)
            for p in configured
        )
    )
    results: AnalysisMap = dict(pairs)

    failures = sorted(
        name for name, outcome in results.items() if isinstance(outcome, AnalysisFailure)
    )
    logger.info(
        "analysis_complete",
        providers=len(results),
        failed=failures,
    )
    return results
