"""Low-level client for OpenAI-compatible chat-completion providers.

This module is private to the ``analysis`` package.  External code should
go through :func:`~content_insight.analysis.providers.analyze` instead.

Responsibilities:
- ``chat_completion()``: POST a system/user message pair and return the
  assistant's text from ``choices[0].message.content``.

Error handling maps HTTP status codes to typed exceptions:
- HTTP 429 -> :class:`~content_insight.core.exceptions.ProviderRateLimitError`
- HTTP 401/403 -> :class:`~content_insight.core.exceptions.ProviderAuthError`
- Client timeout -> :class:`~content_insight.core.exceptions.ProviderTimeoutError`
- Other non-2xx, network errors, bad JSON, no choices ->
  :class:`~content_insight.core.exceptions.ProviderResponseError`
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from content_insight.analysis.config import ERROR_BODY_PREVIEW_CHARS
from content_insight.core.exceptions import (
    ProviderAuthError,
    ProviderRateLimitError,
    ProviderResponseError,
    ProviderTimeoutError,
)

logger = logging.getLogger(__name__)


async def chat_completion(
    client: httpx.AsyncClient,
    *,
    endpoint: str,
    model: str,
    system_prompt: str,
    user_message: str,
    api_key: str,
    provider: str,
    json_mode: bool = False,
) -> str:
    """Call a chat-completions endpoint and return the assistant text.

    Args:
        client: Shared :class:`httpx.AsyncClient` instance.
        endpoint: Full ``/chat/completions`` URL.
        model: Model identifier.
        system_prompt: System message.
        user_message: User message carrying the content to analyse.
        api_key: Provider API key (``Bearer`` token).
        provider: Provider name used in error messages.
        json_mode: Add ``response_format={"type": "json_object"}``.

    Returns:
        The text of the first choice.

    Raises:
        ProviderRateLimitError: On HTTP 429.
        ProviderAuthError: On HTTP 401 or 403.
        ProviderTimeoutError: When the client timeout expires.
        ProviderResponseError: On other failures, or when the response has no
            choices or an empty message.
    """
    payload: dict[str, Any] = {
        "model": model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_message},
        ],
        "temperature": 0,
    }
    if json_mode:
        payload["response_format"] = {"type": "json_object"}

    headers: dict[str, str] = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }

    data = await _post_json(client, endpoint, payload, headers, provider)
    return _first_choice_text(data, provider)


async def _post_json(
    client: httpx.AsyncClient,
    url: str,
    payload: dict[str, Any],
    headers: dict[str, str],
    provider: str,
) -> dict[str, Any]:
    """POST *payload* and return the decoded JSON body.

    Shared with :mod:`._generative`, whose endpoints use the same status
    code conventions.

    Raises:
        ProviderRateLimitError: On HTTP 429.
        ProviderAuthError: On HTTP 401 or 403.
        ProviderTimeoutError: When the client timeout expires.
        ProviderResponseError: On other HTTP errors, network failures, or a
            body that is not a JSON object.
    """
    try:
        response = await client.post(url, json=payload, headers=headers)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        code = exc.response.status_code
        if code == 429:
            raise ProviderRateLimitError(
                f"{provider}: HTTP 429 — rate limited",
                provider=provider,
            ) from exc
        if code in (401, 403):
            raise ProviderAuthError(
                f"{provider}: HTTP {code} — invalid API key",
                provider=provider,
            ) from exc
        raise ProviderResponseError(
            f"{provider}: HTTP {code} — {exc.response.text[:ERROR_BODY_PREVIEW_CHARS]}",
            provider=provider,
        ) from exc
    except httpx.TimeoutException as exc:
        raise ProviderTimeoutError(f"{provider}: timeout", provider=provider) from exc
    except httpx.RequestError as exc:
        raise ProviderResponseError(
            f"{provider}: network error — {exc}",
            provider=provider,
        ) from exc

    try:
        data = response.json()
    except ValueError as exc:
        raise ProviderResponseError(
            f"{provider}: JSON parse error — {exc}",
            provider=provider,
        ) from exc

    if not isinstance(data, dict):
        raise ProviderResponseError(
            f"{provider}: unexpected response body", provider=provider
        )
    return data


def _first_choice_text(data: dict[str, Any], provider: str) -> str:
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        raise ProviderResponseError(f"{provider}: no choices in response", provider=provider)

    first = choices[0] if isinstance(choices[0], dict) else {}
    message = first.get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str) or not content.strip():
        raise ProviderResponseError(f"{provider}: empty response", provider=provider)
    return content
