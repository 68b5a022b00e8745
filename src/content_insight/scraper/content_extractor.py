"""Platform-specific content extraction from raw HTML.

Each field is resolved through an ordered fallback chain where the first
non-empty value wins:

- ``title``:  ``og:title`` meta tag, then the platform's title selectors.
- ``author``: ``author`` meta tag, then the platform's author selectors,
  then ``"Unknown"``.
- ``raw_text``: the platform's body selectors, then the title.

The per-platform selectors live in :data:`PLATFORM_RULES`, a flat table with
one row per :class:`~content_insight.scraper.config.Platform`.  Supporting a
new platform means adding a row (and a host marker), not new control flow.

Extraction is total: any input, including an empty string, yields a
:class:`ContentRecord`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from content_insight.scraper.config import (
    MAX_CONTENT_CHARS,
    UNAVAILABLE_COUNT,
    UNKNOWN_AUTHOR,
    Platform,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Output dataclass
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ContentRecord:
    """Normalized content of one fetched page.

    Attributes:
        title: Page title, or ``""`` if none was found.
        author: Author name, or ``"Unknown"``.
        raw_text: Body text; equals ``title`` when no body text was found.
        read_count: Always ``"N/A"``; the platforms render it client-side.
        comment_count: Always ``"N/A"``; see ``read_count``.
    """

    title: str
    author: str
    raw_text: str
    read_count: str = UNAVAILABLE_COUNT
    comment_count: str = UNAVAILABLE_COUNT


# ---------------------------------------------------------------------------
# Selector table
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlatformRules:
    """CSS selectors tried in order for each field of one platform."""

    title: tuple[str, ...]
    author: tuple[str, ...]
    body: tuple[str, ...]


PLATFORM_RULES: dict[Platform, PlatformRules] = {
    # Note pages are mostly hydrated client-side; the static HTML usually
    # carries only the meta tags and sometimes the description block.
    Platform.XIAOHONGSHU: PlatformRules(
        title=("#detail-title", "title"),
        author=(".author-name", ".username"),
        body=("#detail-desc", "div.desc", "div.content"),
    ),
    Platform.WECHAT: PlatformRules(
        title=("#activity-name",),
        author=("#js_name",),
        body=("#js_content",),
    ),
}

_TITLE_META: tuple[str, str] = ("property", "og:title")
_AUTHOR_META: tuple[str, str] = ("name", "author")

_NON_CONTENT_TAGS: tuple[str, ...] = ("script", "style", "noscript", "template")

_INLINE_WS = re.compile(r"[ \t\r\f\v\u00a0\u3000]+")
_BLANK_LINES = re.compile(r"\n{2,}")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse(html: str) -> BeautifulSoup:
    """Parse *html*, dropping elements that never hold visible text."""
    try:
        soup = BeautifulSoup(html or "", "html.parser")
    except Exception as exc:  # noqa: BLE001
        logger.warning("extractor: HTML parse failed, treating page as empty: %s", exc)
        return BeautifulSoup("", "html.parser")
    for tag in soup.find_all(_NON_CONTENT_TAGS):
        tag.decompose()
    return soup


def _clean(text: str, *, multiline: bool = False) -> str:
    text = text.replace("\x00", "")
    if multiline:
        lines = (_INLINE_WS.sub(" ", line).strip() for line in text.split("\n"))
        text = _BLANK_LINES.sub("\n", "\n".join(line for line in lines if line))
    else:
        text = _INLINE_WS.sub(" ", text.replace("\n", " ")).strip()
    return text[:MAX_CONTENT_CHARS]


def _meta_content(soup: BeautifulSoup, attr: str, value: str) -> str:
    tag = soup.find("meta", attrs={attr: value})
    if isinstance(tag, Tag):
        content = tag.get("content")
        if isinstance(content, str):
            return _clean(content)
    return ""


def _first_text(
    soup: BeautifulSoup, selectors: tuple[str, ...], *, multiline: bool = False
) -> str:
    """Return the text of the first selector that yields non-empty text."""
    separator = "\n" if multiline else " "
    for selector in selectors:
        element = soup.select_one(selector)
        if element is None:
            continue
        text = _clean(element.get_text(separator), multiline=multiline)
        if text:
            return text
    return ""


# ---------------------------------------------------------------------------
# Public extraction function
# ---------------------------------------------------------------------------


def extract(platform: Platform, html: str) -> ContentRecord:
    """Extract a :class:`ContentRecord` from a page of *platform*.

    Args:
        platform: Platform returned by
            :func:`~content_insight.scraper.url_classifier.classify`.
        html: Raw HTML string (may be empty, partial, or malformed).

    Returns:
        A record whose fields are never ``None``; ``raw_text`` is non-empty
        whenever ``title`` is.
    """
    rules = PLATFORM_RULES[platform]
    soup = _parse(html)

    title = _meta_content(soup, *_TITLE_META) or _first_text(soup, rules.title)
    author = (
        _meta_content(soup, *_AUTHOR_META)
        or _first_text(soup, rules.author)
        or UNKNOWN_AUTHOR
    )
    raw_text = _first_text(soup, rules.body, multiline=True)

    if not raw_text:
        logger.info(
            "extractor: no body text for %s page, falling back to title", platform.value
        )
        raw_text = title

    return ContentRecord(title=title, author=author, raw_text=raw_text)
