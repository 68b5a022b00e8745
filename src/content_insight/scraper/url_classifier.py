"""URL validation and platform classification.

Pure function, no I/O: a URL is rejected here before any network call is
made.
"""

from __future__ import annotations

import httpx

from content_insight.core.exceptions import InvalidUrlError, UnsupportedPlatformError
from content_insight.scraper.config import (
    PLATFORM_DISPLAY_NAMES,
    PLATFORM_HOST_MARKERS,
    Platform,
)


def supported_platforms_label() -> str:
    """Return e.g. ``"Xiaohongshu and WeChat Official Account"``."""
    names = [PLATFORM_DISPLAY_NAMES[p] for p in PLATFORM_HOST_MARKERS]
    if len(names) == 1:
        return names[0]
    return ", ".join(names[:-1]) + " and " + names[-1]


def classify(url: str) -> Platform:
    """Validate *url* and return the platform whose extractor applies.

    The hostname only has to *contain* a platform marker
    (``"xiaohongshu.com"`` or ``"weixin.qq.com"``), so ``mp.weixin.qq.com``
    and ``www.xiaohongshu.com`` both match, as does any other host that
    embeds a marker.

    Args:
        url: Client-supplied URL string.

    Returns:
        The matching :class:`Platform`.

    Raises:
        InvalidUrlError: If *url* is not an absolute URL with a hostname.
        UnsupportedPlatformError: If no platform marker occurs in the hostname.
    """
    try:
        parsed = httpx.URL(url.strip())
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise InvalidUrlError(url) from exc

    if not parsed.scheme or not parsed.host:
        raise InvalidUrlError(url)

    hostname = parsed.host.lower()
    for platform, marker in PLATFORM_HOST_MARKERS.items():
        if marker in hostname:
            return platform

    raise UnsupportedPlatformError(hostname, supported_platforms_label())
