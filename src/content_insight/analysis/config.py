"""Provider table, prompt templates and limits for content analysis.

Key design decisions:
- Providers form a closed table (:data:`PROVIDERS`).  Whether a provider
  takes part in a request depends only on its credential being present.
- Two request families exist.  ``chat`` providers speak the
  OpenAI-compatible ``/chat/completions`` protocol; ``generative`` providers
  speak Gemini's ``:generateContent`` protocol with the JSON contract
  embedded in a single prompt.
- Each provider declares whether its summary is free text or exactly three
  numbered points.
- Temperature is always ``0``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from content_insight.config.settings import Settings

# ---------------------------------------------------------------------------
# Provider description
# ---------------------------------------------------------------------------


class ProviderFamily(str, Enum):
    CHAT = "chat"
    GENERATIVE = "generative"


class SummaryStyle(str, Enum):
    TEXT = "text"
    THREE_POINTS = "three_points"


@dataclass(frozen=True)
class ProviderConfig:
    """Static description of one text-analysis provider.

    Attributes:
        name: Key used for credentials and in the ``aiResults`` map.
        family: Request/response protocol spoken by the endpoint.
        endpoint: Full chat-completions URL (``chat``) or the models base
            URL (``generative``; ``/{model}:generateContent`` is appended).
        model: Model identifier sent to the provider.
        summary_style: Shape of the summary requested in the prompt.
        json_mode: For ``chat`` providers, request
            ``response_format={"type": "json_object"}``.
    """

    name: str
    family: ProviderFamily
    endpoint: str
    model: str
    summary_style: SummaryStyle = SummaryStyle.TEXT
    json_mode: bool = False


DEEPSEEK = ProviderConfig(
    name="deepseek",
    family=ProviderFamily.CHAT,
    endpoint="https://api.deepseek.com/v1/chat/completions",
    model="deepseek-chat",
    summary_style=SummaryStyle.TEXT,
    json_mode=True,
)

DOUBAO = ProviderConfig(
    name="doubao",
    family=ProviderFamily.CHAT,
    endpoint="https://ark.cn-beijing.volces.com/api/v3/chat/completions",
    model="doubao-pro-32k",
    summary_style=SummaryStyle.THREE_POINTS,
    json_mode=False,
)

GEMINI = ProviderConfig(
    name="gemini",
    family=ProviderFamily.GENERATIVE,
    endpoint="https://generativelanguage.googleapis.com/v1beta/models",
    model="gemini-1.5-flash",
    summary_style=SummaryStyle.THREE_POINTS,
)

PROVIDERS: tuple[ProviderConfig, ...] = (DEEPSEEK, DOUBAO, GEMINI)
"""Every provider the service knows about, in display order."""


def build_providers(settings: Settings) -> tuple[ProviderConfig, ...]:
    """Return :data:`PROVIDERS` with model names taken from *settings*."""
    models = {
        DOUBAO.name: settings.doubao_model,
        GEMINI.name: settings.gemini_model,
    }
    return tuple(
        replace(provider, model=models[provider.name]) if provider.name in models else provider
        for provider in PROVIDERS
    )


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

PROVIDER_TEXT_LIMIT: int = 2000
"""Characters of ``raw_text`` sent to a provider."""

DEFAULT_PROVIDER_TIMEOUT_SECONDS: float = 45.0
"""Orchestrator-level bound on one provider's analysis."""

ERROR_BODY_PREVIEW_CHARS: int = 200
"""Characters of an upstream error body kept in failure reasons."""

# ---------------------------------------------------------------------------
# Placeholder result
# ---------------------------------------------------------------------------

PLACEHOLDER_PROVIDER_NAME: str = "demo"
"""Reserved ``aiResults`` key used when no provider credential is configured."""

PLACEHOLDER_KEYWORDS: tuple[str, ...] = ("Demo", "Analysis", "No API Key", "Test")

PLACEHOLDER_SUMMARY: str = (
    "No AI provider is configured. Set DEEPSEEK_API_KEY, DOUBAO_API_KEY or "
    "GEMINI_API_KEY to get real keywords and summaries."
)

# ---------------------------------------------------------------------------
# Prompt templates
# ---------------------------------------------------------------------------

_SUMMARY_INSTRUCTIONS: dict[SummaryStyle, str] = {
    SummaryStyle.TEXT: "a concise summary of the content in one short paragraph",
    SummaryStyle.THREE_POINTS: (
        "a summary made of exactly three numbered points "
        '("1. ...\\n2. ...\\n3. ...")'
    ),
}

CHAT_SYSTEM_PROMPT_TEMPLATE: str = (
    "You are a content analyst. Extract 5-8 keywords from the provided text "
    "and write {summary_instruction}. Answer in the language of the text. "
    'Respond with a JSON object only: {{"keywords": ["..."], "summary": "..."}}'
)
"""System prompt for ``chat`` providers.  ``{summary_instruction}`` is filled per style."""

GENERATIVE_PROMPT_TEMPLATE: str = (
    "You are a content analyst. Extract 5-8 keywords from the text below "
    "and write {summary_instruction}. Answer in the language of the text.\n"
    "Return ONLY a JSON object of the form "
    '{{"keywords": ["keyword1", "keyword2"], "summary": "..."}} '
    "with no other text.\n\n"
    "{content}"
)
"""Single prompt for ``generative`` providers; embeds the JSON contract."""

USER_CONTENT_TEMPLATE: str = "Title: {title}\nContent: {text}"


def summary_instruction(style: SummaryStyle) -> str:
    return _SUMMARY_INSTRUCTIONS[style]
