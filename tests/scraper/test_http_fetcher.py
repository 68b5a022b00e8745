"""Unit tests for the HTTP fetcher module.

Tests successful fetches, redirects, HTTP error handling and network
failures using mocked httpx responses.
"""

from __future__ import annotations

import httpx
import pytest
import respx

from content_insight.scraper.config import USER_AGENT
from content_insight.scraper.http_fetcher import FetchResult, fetch_url


class TestFetchResult:
    def test_ok_requires_html_and_no_error(self) -> None:
        assert FetchResult(html="<p/>", status_code=200, final_url="u", error=None).ok
        assert not FetchResult(html=None, status_code=404, final_url="u", error="HTTP 404").ok


@pytest.mark.asyncio
class TestFetchUrl:
    async def test_successful_fetch_sends_browser_user_agent(self) -> None:
        html_body = "<html><body><div id='js_content'>正文</div></body></html>"
        with respx.mock(base_url="https://mp.weixin.qq.com") as mock:
            route = mock.get("/s/abc").mock(
                return_value=httpx.Response(
                    200,
                    text=html_body,
                    headers={"content-type": "text/html; charset=utf-8"},
                )
            )
            async with httpx.AsyncClient() as client:
                result = await fetch_url("https://mp.weixin.qq.com/s/abc", client=client)

        assert result.error is None
        assert result.html == html_body
        assert result.status_code == 200
        assert route.calls.last.request.headers["User-Agent"] == USER_AGENT

    async def test_extra_headers_are_merged(self) -> None:
        with respx.mock(base_url="https://www.xiaohongshu.com") as mock:
            route = mock.get("/explore/1").mock(return_value=httpx.Response(200, text="ok"))
            async with httpx.AsyncClient() as client:
                await fetch_url(
                    "https://www.xiaohongshu.com/explore/1",
                    client=client,
                    headers={"Referer": "https://www.xiaohongshu.com/"},
                )

        sent = route.calls.last.request.headers
        assert sent["Referer"] == "https://www.xiaohongshu.com/"
        assert sent["User-Agent"] == USER_AGENT

    async def test_redirect_is_followed(self) -> None:
        with respx.mock(base_url="https://xhslink.xiaohongshu.com") as mock:
            mock.get("/a").mock(
                return_value=httpx.Response(
                    302, headers={"Location": "https://xhslink.xiaohongshu.com/b"}
                )
            )
            mock.get("/b").mock(return_value=httpx.Response(200, text="final"))
            async with httpx.AsyncClient() as client:
                result = await fetch_url("https://xhslink.xiaohongshu.com/a", client=client)

        assert result.html == "final"
        assert result.final_url == "https://xhslink.xiaohongshu.com/b"

    async def test_http_404_returns_error(self) -> None:
        with respx.mock(base_url="https://mp.weixin.qq.com") as mock:
            mock.get("/missing").mock(return_value=httpx.Response(404))
            async with httpx.AsyncClient() as client:
                result = await fetch_url("https://mp.weixin.qq.com/missing", client=client)

        assert result.html is None
        assert result.status_code == 404
        assert result.error == "HTTP 404"
        assert not result.ok

    async def test_timeout_returns_error(self) -> None:
        with respx.mock(base_url="https://mp.weixin.qq.com") as mock:
            mock.get("/slow").mock(side_effect=httpx.ReadTimeout("slow"))
            async with httpx.AsyncClient() as client:
                result = await fetch_url("https://mp.weixin.qq.com/slow", client=client)

        assert result.error == "timeout"
        assert result.status_code is None

    async def test_connection_error_returns_error(self) -> None:
        with respx.mock(base_url="https://mp.weixin.qq.com") as mock:
            mock.get("/down").mock(side_effect=httpx.ConnectError("refused"))
            async with httpx.AsyncClient() as client:
                result = await fetch_url("https://mp.weixin.qq.com/down", client=client)

        assert result.html is None
        assert result.error is not None
        assert result.error.startswith("request error")
