"""Per-request view of provider API keys.

The orchestrator only needs two questions answered (*is there a key for
this provider?* and *what is it?*), so credentials are exposed through a
small read-only object rather than the full :class:`Settings`.

Usage::

    credentials = Credentials.from_settings(get_settings())
    if credentials.has_key("deepseek"):
        key = credentials.get_key("deepseek")

Tests build one directly from a mapping::

    Credentials({"deepseek": "sk-test"})
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from content_insight.config.settings import Settings

# Provider name -> Settings attribute holding its key.
_SETTINGS_KEY_MAP: dict[str, str] = {
    "deepseek": "deepseek_api_key",
    "doubao": "doubao_api_key",
    "gemini": "gemini_api_key",
}


class Credentials:
    """Read-only provider-name -> API-key lookup.

    Blank and whitespace-only keys are treated as absent.

    Args:
        keys: Mapping of provider name to API key.
    """

    def __init__(self, keys: Mapping[str, str | None] | None = None) -> None:
        cleaned = {
            name: value.strip()
            for name, value in (keys or {}).items()
            if value and value.strip()
        }
        self._keys: Mapping[str, str] = MappingProxyType(cleaned)

    @classmethod
    def from_settings(cls, settings: Settings) -> Credentials:
        """Build credentials from the ``*_api_key`` fields of *settings*."""
        return cls(
            {
                provider: getattr(settings, attr, None)
                for provider, attr in _SETTINGS_KEY_MAP.items()
            }
        )

    def has_key(self, provider: str) -> bool:
        return provider in self._keys

    def get_key(self, provider: str) -> str:
        """Return the API key for *provider*.

        Raises:
            KeyError: If no key is configured; check :meth:`has_key` first.
        """
        return self._keys[provider]

    def configured(self) -> list[str]:
        """Return the names of all providers with a key, sorted."""
        return sorted(self._keys)

    def __repr__(self) -> str:
        # Never render the key values.
        return f"Credentials(configured={self.configured()!r})"
