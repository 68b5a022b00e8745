"""Low-level client for Gemini-style ``generateContent`` providers.

Private to the ``analysis`` package.  The request is a single user prompt;
the answer is the concatenated text parts of the first candidate.  Status
codes are mapped to exceptions exactly as in :mod:`._chat_completion`.
"""

from __future__ import annotations

from typing import Any

import httpx

from content_insight.analysis._chat_completion import _post_json
from content_insight.core.exceptions import ProviderResponseError


async def generate_content(
    client: httpx.AsyncClient,
    *,
    endpoint: str,
    model: str,
    prompt: str,
    api_key: str,
    provider: str,
) -> str:
    """Call ``{endpoint}/{model}:generateContent`` and return the answer text.

    The key travels in the ``x-goog-api-key`` header rather than the query
    string so it never shows up in logged URLs.

    Args:
        client: Shared :class:`httpx.AsyncClient` instance.
        endpoint: Models base URL.
        model: Model name, e.g. ``"gemini-1.5-flash"``.
        prompt: Full prompt, JSON contract included.
        api_key: Provider API key.
        provider: Provider name used in error messages.

    Returns:
        The text of the first candidate.

    Raises:
        ProviderRateLimitError: On HTTP 429.
        ProviderAuthError: On HTTP 401 or 403.
        ProviderTimeoutError: When the client timeout expires.
        ProviderResponseError: On other failures, or when there is no
            candidate or it holds no text (e.g. blocked by safety filters).
    """
    url = f"{endpoint.rstrip('/')}/{model}:generateContent"
    payload: dict[str, Any] = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {"temperature": 0},
    }
    headers: dict[str, str] = {
        "x-goog-api-key": api_key,
        "Content-Type": "application/json",
    }

    data = await _post_json(client, url, payload, headers, provider)
    return _first_candidate_text(data, provider)


def _first_candidate_text(data: dict[str, Any], provider: str) -> str:
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        feedback = data.get("promptFeedback")
        reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
        suffix = f" (blocked: {reason})" if reason else ""
        raise ProviderResponseError(
            f"{provider}: no candidates in response{suffix}", provider=provider
        )

    first = candidates[0] if isinstance(candidates[0], dict) else {}
    content = first.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    text = "".join(
        part.get("text") or "" for part in parts or [] if isinstance(part, dict)
    )
    if not text.strip():
        raise ProviderResponseError(f"{provider}: empty response", provider=provider)
    return text
