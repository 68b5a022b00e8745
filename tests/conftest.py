"""Shared pytest fixtures for Content Insight tests.

Fixture summary
---------------
make_client     — factory yielding an httpx.AsyncClient against the app with
                  a given set of provider credentials.
client          — the factory applied to "no credentials" (demo mode).
sample_record   — a small ContentRecord for adapter / orchestrator tests.

No test touches the network: outbound httpx traffic is mocked with respx.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ---------------------------------------------------------------------------
# Test environment bootstrap
# ---------------------------------------------------------------------------
# Provider keys from a developer's shell or .env must not leak into tests.

for _key in ("DEEPSEEK_API_KEY", "DOUBAO_API_KEY", "GEMINI_API_KEY"):
    os.environ[_key] = ""
os.environ.setdefault("LOG_LEVEL", "WARNING")

from content_insight.api.dependencies import get_credentials  # noqa: E402
from content_insight.api.main import app  # noqa: E402
from content_insight.config.settings import get_settings  # noqa: E402
from content_insight.core.credentials import Credentials  # noqa: E402
from content_insight.scraper.content_extractor import ContentRecord  # noqa: E402

get_settings.cache_clear()


@pytest.fixture
def make_client() -> Callable[..., Any]:
    """Return an async context manager factory for API test clients.

    Usage::

        async with make_client({"deepseek": "sk-test"}) as client:
            response = await client.post("/api/analyze", json={...})
    """

    @asynccontextmanager
    async def _factory(
        keys: dict[str, str] | None = None,
    ) -> AsyncGenerator[AsyncClient, None]:
        app.dependency_overrides[get_credentials] = lambda: Credentials(keys or {})
        transport = ASGITransport(app=app)
        try:
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            app.dependency_overrides.clear()

    return _factory


@pytest_asyncio.fixture
async def client(make_client: Callable[..., Any]) -> AsyncGenerator[AsyncClient, None]:
    """API client with no provider credentials configured."""
    async with make_client() as ac:
        yield ac


@pytest.fixture
def sample_record() -> ContentRecord:
    return ContentRecord(
        title="周末去哪儿：杭州三日游攻略",
        author="旅行小王",
        raw_text="第一天去西湖，第二天去灵隐寺，第三天逛河坊街。" * 10,
    )
