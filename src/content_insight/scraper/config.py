"""Constants for source-page scraping."""

from __future__ import annotations

from enum import Enum

# ---------------------------------------------------------------------------
# Supported platforms
# ---------------------------------------------------------------------------


class Platform(str, Enum):
    """Publishing platforms with a dedicated extraction rule set."""

    XIAOHONGSHU = "xiaohongshu"
    WECHAT = "wechat"


#: Hostname substring that identifies each platform.  Matching is by
#: substring, not domain suffix.
PLATFORM_HOST_MARKERS: dict[Platform, str] = {
    Platform.XIAOHONGSHU: "xiaohongshu.com",
    Platform.WECHAT: "weixin.qq.com",
}

#: Display names used in the "unsupported platform" error message.
PLATFORM_DISPLAY_NAMES: dict[Platform, str] = {
    Platform.XIAOHONGSHU: "Xiaohongshu",
    Platform.WECHAT: "WeChat Official Account",
}

# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

#: Both platforms serve a stripped or blocked page to non-browser agents.
USER_AGENT: str = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

#: Default HTTP request timeout in seconds.
DEFAULT_TIMEOUT: float = 20.0

# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

#: Maximum characters kept per extracted field.
MAX_CONTENT_CHARS: int = 200_000

#: Placeholder for engagement counts that only client-side script renders.
UNAVAILABLE_COUNT: str = "N/A"

#: Author value when neither metadata nor markup names one.
UNKNOWN_AUTHOR: str = "Unknown"
