"""Normalization of provider answer text into an :class:`AnalysisSuccess`.

Providers are asked for ``{"keywords": [...], "summary": "..."}`` but do not
always comply.  The rules:

- Markdown code fences (```` ```json ... ``` ````) around the payload are
  stripped first.
- A JSON object is normalized: ``keywords`` may arrive as a list or as a
  delimited string; ``summary`` may arrive as a string or as a list of
  points.
- Anything else (invalid JSON, a JSON array, a bare string) is kept as
  prose: no keywords, and the raw text becomes the summary.

Parsing never produces a failure.  A provider that answered with text has
answered; only transport-level problems count as failures.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from content_insight.analysis.outcomes import AnalysisSuccess

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^\s*```[a-zA-Z0-9_-]*\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL)

# ASCII comma, full-width comma, ideographic enumeration comma, semicolons.
_KEYWORD_SPLIT_RE = re.compile(r"[,，、;；\n]")

_LEADING_ENUM_RE = re.compile(r"^\s*(?:\d+[.、)）]|[-*•])\s*")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence, if any."""
    match = _FENCE_RE.match(text)
    if match:
        return match.group(1).strip()
    return text.strip()


def _normalize_keywords(value: Any) -> list[str]:
    if isinstance(value, str):
        items: list[Any] = _KEYWORD_SPLIT_RE.split(value)
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        return []

    keywords: list[str] = []
    for item in items:
        if item is None or isinstance(item, (dict, list)):
            continue
        keyword = _LEADING_ENUM_RE.sub("", str(item)).strip()
        if keyword and keyword not in keywords:
            keywords.append(keyword)
    return keywords


def _normalize_summary(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, tuple)):
        points = [
            _LEADING_ENUM_RE.sub("", str(point)).strip()
            for point in value
            if point is not None
        ]
        return "\n".join(
            f"{index}. {point}" for index, point in enumerate((p for p in points if p), 1)
        )
    if value is None:
        return ""
    return str(value)


def parse_analysis(text: str, provider: str = "") -> AnalysisSuccess:
    """Turn a provider's answer text into an :class:`AnalysisSuccess`.

    Args:
        text: Raw answer text from the provider.
        provider: Provider name, for log messages only.

    Returns:
        Normalized keywords and summary, or empty keywords with *text* as
        the summary when *text* is not a JSON object.
    """
    candidate = strip_code_fences(text)
    try:
        data = json.loads(candidate)
    except ValueError:
        logger.info("analysis: %s returned non-JSON text, keeping it as summary", provider)
        return AnalysisSuccess(keywords=[], summary=text)

    if not isinstance(data, dict):
        logger.info("analysis: %s returned JSON that is not an object", provider)
        return AnalysisSuccess(keywords=[], summary=text)

    return AnalysisSuccess(
        keywords=_normalize_keywords(data.get("keywords")),
        summary=_normalize_summary(data.get("summary")),
    )
