"""Provider adapter: one content record in, one analysis outcome out.

:func:`analyze` is the boundary where provider errors stop.  Whatever goes
wrong inside a provider call (auth, rate limit, HTTP error, network error,
missing choices, timeout) is logged and returned as an :class:`AnalysisFailure`;
it never propagates to the orchestrator.
"""

from __future__ import annotations

import logging

import httpx

from content_insight.analysis import _chat_completion, _generative
from content_insight.analysis._parsing import parse_analysis
from content_insight.analysis.config import (
    CHAT_SYSTEM_PROMPT_TEMPLATE,
    GENERATIVE_PROMPT_TEMPLATE,
    PROVIDER_TEXT_LIMIT,
    USER_CONTENT_TEMPLATE,
    ProviderConfig,
    ProviderFamily,
    summary_instruction,
)
from content_insight.analysis.outcomes import AnalysisFailure, AnalysisOutcome
from content_insight.core.exceptions import ProviderError, ProviderTimeoutError
from content_insight.scraper.content_extractor import ContentRecord

logger = logging.getLogger(__name__)


def build_user_content(record: ContentRecord) -> str:
    """Return the title plus the first :data:`PROVIDER_TEXT_LIMIT` characters of text."""
    return USER_CONTENT_TEMPLATE.format(
        title=record.title,
        text=record.raw_text[:PROVIDER_TEXT_LIMIT],
    )


async def _request_text(
    provider: ProviderConfig,
    api_key: str,
    record: ContentRecord,
    client: httpx.AsyncClient,
) -> str:
    instruction = summary_instruction(provider.summary_style)
    content = build_user_content(record)

    if provider.family is ProviderFamily.CHAT:
        return await _chat_completion.chat_completion(
            client,
            endpoint=provider.endpoint,
            model=provider.model,
            system_prompt=CHAT_SYSTEM_PROMPT_TEMPLATE.format(
                summary_instruction=instruction
            ),
            user_message=content,
            api_key=api_key,
            provider=provider.name,
            json_mode=provider.json_mode,
        )
    if provider.family is ProviderFamily.GENERATIVE:
        return await _generative.generate_content(
            client,
            endpoint=provider.endpoint,
            model=provider.model,
            prompt=GENERATIVE_PROMPT_TEMPLATE.format(
                summary_instruction=instruction, content=content
            ),
            api_key=api_key,
            provider=provider.name,
        )
    raise ProviderError(
        f"{provider.name}: unsupported provider family '{provider.family}'",
        provider=provider.name,
    )


async def analyze(
    provider: ProviderConfig,
    api_key: str,
    record: ContentRecord,
    *,
    client: httpx.AsyncClient,
) -> AnalysisOutcome:
    """Ask *provider* for keywords and a summary of *record*.

    Args:
        provider: Provider description from
            :data:`~content_insight.analysis.config.PROVIDERS`.
        api_key: The provider's API key.
        record: Extracted page content (read-only).
        client: Shared HTTP client for the current request.

    Returns:
        :class:`AnalysisSuccess` when the provider answered with text (even
        if that text is not the requested JSON), otherwise
        :class:`AnalysisFailure` carrying a diagnostic reason.
    """
    try:
        text = await _request_text(provider, api_key, record, client)
    except ProviderTimeoutError:
        logger.warning("analysis: provider %s timed out", provider.name)
        return AnalysisFailure(reason="timeout")
    except ProviderError as exc:
        logger.warning("analysis: provider %s failed: %s", provider.name, exc)
        return AnalysisFailure(reason=str(exc))
    except Exception as exc:  # noqa: BLE001
        logger.exception("analysis: unexpected error from provider %s", provider.name)
        return AnalysisFailure(reason=f"{provider.name}: unexpected error — {exc}")

    return parse_analysis(text, provider.name)
