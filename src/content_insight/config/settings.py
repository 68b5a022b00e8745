"""Application settings loaded from environment variables.

Uses Pydantic Settings v2 for validated, type-safe configuration.
Provider API keys are accessed exclusively through this module (and the
:class:`~content_insight.core.credentials.Credentials` view built from it).
Never call ``os.getenv`` directly elsewhere in the codebase.

Usage::

    from content_insight.config.settings import get_settings

    settings = get_settings()
    timeout = settings.provider_timeout_seconds
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide configuration backed by environment variables and an optional .env file.

    Every field has a default, so the service starts with no environment at
    all.  In that case no provider credential is present and every analysis
    returns the placeholder ``demo`` entry.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Provider credentials
    # ------------------------------------------------------------------

    deepseek_api_key: Optional[str] = None
    """DeepSeek API key (``DEEPSEEK_API_KEY``).  Unset or empty disables the provider."""

    doubao_api_key: Optional[str] = None
    """Volcengine Ark API key for Doubao (``DOUBAO_API_KEY``)."""

    gemini_api_key: Optional[str] = None
    """Google Generative Language API key (``GEMINI_API_KEY``)."""

    # ------------------------------------------------------------------
    # Provider models
    # ------------------------------------------------------------------

    doubao_model: str = "doubao-pro-32k"
    """Ark model or endpoint identifier sent as ``model`` to the Doubao API."""

    gemini_model: str = "gemini-1.5-flash"
    """Gemini model name used in the ``:generateContent`` path."""

    # ------------------------------------------------------------------
    # Timeouts (seconds)
    # ------------------------------------------------------------------

    fetch_timeout_seconds: float = 20.0
    """HTTP timeout when fetching the source page."""

    provider_timeout_seconds: float = 45.0
    """Upper bound on a single provider's analysis, enforced by the orchestrator."""

    # ------------------------------------------------------------------
    # Application behaviour
    # ------------------------------------------------------------------

    app_name: str = "Content Insight"
    """Human-readable application name shown in the OpenAPI docs."""

    debug: bool = False
    """Enable FastAPI debug mode.  Never True in production."""

    log_level: str = "INFO"
    """Logging verbosity.  One of: DEBUG, INFO, WARNING, ERROR, CRITICAL."""

    allowed_origins: list[str] = ["*"]
    """Origins permitted by the CORS middleware."""


@lru_cache
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    In tests, call ``get_settings.cache_clear()`` after patching environment
    variables.

    Returns:
        Settings: The validated settings object.
    """
    return Settings()
