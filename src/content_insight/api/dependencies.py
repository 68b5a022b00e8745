"""FastAPI dependency injection providers.

Dependency hierarchy::

    get_app_settings   — the cached :class:`Settings`
    get_credentials    — provider keys, resolved per request from settings
    get_http_client    — an ``httpx.AsyncClient`` scoped to one request

Tests override ``get_credentials`` (and, if needed, ``get_http_client``)
through ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Annotated, AsyncGenerator

import httpx
from fastapi import Depends

from content_insight.config.settings import Settings, get_settings
from content_insight.core.credentials import Credentials


def get_app_settings() -> Settings:
    return get_settings()


def get_credentials(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Credentials:
    """Return the provider credentials visible to the current request."""
    return Credentials.from_settings(settings)


async def get_http_client(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Yield an HTTP client that lives exactly as long as the request.

    The page fetch and every provider call of the request share it; it is
    closed once the response has been produced.  Its default timeout is the
    provider budget (the page fetch passes its own, shorter timeout).
    """
    async with httpx.AsyncClient(timeout=settings.provider_timeout_seconds) as client:
        yield client


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
CredentialsDep = Annotated[Credentials, Depends(get_credentials)]
HttpClientDep = Annotated[httpx.AsyncClient, Depends(get_http_client)]
