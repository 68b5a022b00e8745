"""Configuration package for Content Insight.

Re-exports the settings entry points so that callers can write::

    from content_insight.config import get_settings
"""

from __future__ import annotations

from content_insight.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
