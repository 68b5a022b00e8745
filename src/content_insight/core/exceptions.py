"""Application-wide exception hierarchy for Content Insight.

All custom exceptions subclass ``ContentInsightError``, enabling
consistent error handling and structured logging across the application.

Hierarchy::

    ContentInsightError
    ├── InputError
    │   ├── MissingUrlError
    │   ├── InvalidUrlError
    │   └── UnsupportedPlatformError
    ├── CrawlError               (status_code: int | None)
    └── ProviderError            (provider: str | None)
        ├── ProviderAuthError
        ├── ProviderRateLimitError
        ├── ProviderTimeoutError
        └── ProviderResponseError

Only ``InputError`` and ``CrawlError`` ever reach the HTTP layer.
``ProviderError`` is caught at the provider adapter boundary and reported as
data inside the analysis map.
"""

from __future__ import annotations


class ContentInsightError(Exception):
    """Base class for all Content Insight exceptions."""


# ---------------------------------------------------------------------------
# Input exceptions (HTTP 400)
# ---------------------------------------------------------------------------


class InputError(ContentInsightError):
    """Raised when the client-supplied URL cannot be processed.

    The exception message is returned verbatim as the envelope ``message``.
    """


class MissingUrlError(InputError):
    """Raised when the request body carries no URL."""

    def __init__(self) -> None:
        super().__init__("URL is required")


class InvalidUrlError(InputError):
    """Raised when the URL does not parse as an absolute URL.

    Args:
        url: The offending input string (kept for logging).
    """

    def __init__(self, url: str | None = None) -> None:
        super().__init__("Invalid URL format")
        self.url = url


class UnsupportedPlatformError(InputError):
    """Raised when the URL's hostname matches no supported platform.

    Args:
        hostname: Hostname extracted from the URL.
        supported: Human-readable list of supported platforms.
    """

    def __init__(self, hostname: str, supported: str) -> None:
        super().__init__(f"Only {supported} links are supported")
        self.hostname = hostname


# ---------------------------------------------------------------------------
# Crawl exceptions (HTTP 500)
# ---------------------------------------------------------------------------


class CrawlError(ContentInsightError):
    """Raised when the source page cannot be fetched.

    Args:
        message: Human-readable reason (e.g. ``"HTTP 404"`` or ``"timeout"``).
        status_code: Upstream HTTP status, or ``None`` on network failure.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# ---------------------------------------------------------------------------
# Provider exceptions (contained in the analysis map)
# ---------------------------------------------------------------------------


class ProviderError(ContentInsightError):
    """Raised when a text-analysis provider call fails.

    Args:
        message: Human-readable description of the failure.
        provider: Provider name (e.g. ``"deepseek"``).
    """

    def __init__(self, message: str, provider: str | None = None) -> None:
        super().__init__(message)
        self.provider = provider


class ProviderAuthError(ProviderError):
    """Raised when the provider rejects the API key (HTTP 401/403)."""


class ProviderRateLimitError(ProviderError):
    """Raised when the provider answers HTTP 429."""


class ProviderTimeoutError(ProviderError):
    """Raised when the provider does not answer within the client timeout.

    Reported to clients with the same ``"timeout"`` reason as the
    orchestrator's per-provider budget.
    """


class ProviderResponseError(ProviderError):
    """Raised on any other unusable provider response.

    Covers non-2xx statuses other than auth/rate-limit, undecodable bodies,
    network errors, and responses without choices or candidates.
    """
