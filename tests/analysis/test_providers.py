"""Tests for the provider adapter (``providers.analyze``).

The adapter must always resolve: transport problems become
``AnalysisFailure`` while any text answer, well-formed or not, becomes
``AnalysisSuccess``.
"""

from __future__ import annotations

import json
from dataclasses import replace

import httpx
import pytest
import respx

from content_insight.analysis.config import (
    DEEPSEEK,
    DOUBAO,
    GEMINI,
    PROVIDER_TEXT_LIMIT,
    PROVIDERS,
    build_providers,
)
from content_insight.analysis.outcomes import AnalysisFailure, AnalysisSuccess
from content_insight.analysis.providers import analyze, build_user_content
from content_insight.config.settings import Settings
from content_insight.scraper.content_extractor import ContentRecord

_GEMINI_URL = f"{GEMINI.endpoint}/{GEMINI.model}:generateContent"


def _chat_ok(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


class TestBuildUserContent:
    def test_text_is_capped(self) -> None:
        record = ContentRecord(title="T", author="a", raw_text="x" * (PROVIDER_TEXT_LIMIT + 100))
        content = build_user_content(record)
        assert content.startswith("Title: T\nContent: ")
        assert content.count("x") == PROVIDER_TEXT_LIMIT


class TestBuildProviders:
    def test_models_come_from_settings(self) -> None:
        settings = Settings(doubao_model="ep-2024-abc", gemini_model="gemini-2.0-flash")
        by_name = {p.name: p for p in build_providers(settings)}
        assert by_name["doubao"].model == "ep-2024-abc"
        assert by_name["gemini"].model == "gemini-2.0-flash"
        assert by_name["deepseek"] == DEEPSEEK

    def test_provider_names_are_unique(self) -> None:
        names = [p.name for p in PROVIDERS]
        assert len(names) == len(set(names))


@pytest.mark.asyncio
class TestAnalyze:
    async def test_chat_provider_success(self, sample_record: ContentRecord) -> None:
        answer = json.dumps({"keywords": ["杭州", "西湖"], "summary": "三日游"}, ensure_ascii=False)
        with respx.mock:
            route = respx.post(DEEPSEEK.endpoint).mock(return_value=_chat_ok(answer))
            async with httpx.AsyncClient() as client:
                outcome = await analyze(DEEPSEEK, "sk-test", sample_record, client=client)

        assert outcome == AnalysisSuccess(keywords=["杭州", "西湖"], summary="三日游")
        payload = json.loads(route.calls.last.request.content)
        assert payload["response_format"] == {"type": "json_object"}
        assert sample_record.title in payload["messages"][1]["content"]

    async def test_three_point_providers_ask_for_three_points(
        self, sample_record: ContentRecord
    ) -> None:
        with respx.mock:
            route = respx.post(DOUBAO.endpoint).mock(return_value=_chat_ok("{}"))
            async with httpx.AsyncClient() as client:
                await analyze(DOUBAO, "ark-test", sample_record, client=client)

        payload = json.loads(route.calls.last.request.content)
        assert "exactly three numbered points" in payload["messages"][0]["content"]
        assert "response_format" not in payload

    async def test_generative_provider_strips_fences(self, sample_record: ContentRecord) -> None:
        text = '```json\n{"keywords": ["travel"], "summary": "1. a\\n2. b\\n3. c"}\n```'
        body = {"candidates": [{"content": {"parts": [{"text": text}]}}]}
        with respx.mock:
            route = respx.post(_GEMINI_URL).mock(return_value=httpx.Response(200, json=body))
            async with httpx.AsyncClient() as client:
                outcome = await analyze(GEMINI, "g-test", sample_record, client=client)

        assert outcome == AnalysisSuccess(keywords=["travel"], summary="1. a\n2. b\n3. c")
        prompt = json.loads(route.calls.last.request.content)["contents"][0]["parts"][0]["text"]
        assert '"keywords"' in prompt
        assert sample_record.title in prompt

    async def test_malformed_json_degrades_to_prose(self, sample_record: ContentRecord) -> None:
        with respx.mock:
            respx.post(DEEPSEEK.endpoint).mock(return_value=_chat_ok("关键词：杭州，西湖"))
            async with httpx.AsyncClient() as client:
                outcome = await analyze(DEEPSEEK, "sk-test", sample_record, client=client)

        assert outcome == AnalysisSuccess(keywords=[], summary="关键词：杭州，西湖")

    async def test_http_401_is_failure(self, sample_record: ContentRecord) -> None:
        with respx.mock:
            respx.post(DEEPSEEK.endpoint).mock(return_value=httpx.Response(401))
            async with httpx.AsyncClient() as client:
                outcome = await analyze(DEEPSEEK, "bad-key", sample_record, client=client)

        assert isinstance(outcome, AnalysisFailure)
        assert "401" in outcome.reason
        assert "bad-key" not in outcome.reason

    async def test_empty_choices_is_failure(self, sample_record: ContentRecord) -> None:
        with respx.mock:
            respx.post(DEEPSEEK.endpoint).mock(
                return_value=httpx.Response(200, json={"choices": []})
            )
            async with httpx.AsyncClient() as client:
                outcome = await analyze(DEEPSEEK, "sk-test", sample_record, client=client)

        assert isinstance(outcome, AnalysisFailure)

    @pytest.mark.parametrize("error", [httpx.ReadTimeout("slow"), httpx.ConnectTimeout("slow")])
    async def test_transport_timeout_is_reported_as_timeout(
        self, sample_record: ContentRecord, error: httpx.TimeoutException
    ) -> None:
        with respx.mock:
            respx.post(_GEMINI_URL).mock(side_effect=error)
            async with httpx.AsyncClient() as client:
                outcome = await analyze(GEMINI, "g-test", sample_record, client=client)

        assert outcome == AnalysisFailure(reason="timeout")

    async def test_network_error_is_failure(self, sample_record: ContentRecord) -> None:
        with respx.mock:
            respx.post(DEEPSEEK.endpoint).mock(side_effect=httpx.ConnectError("refused"))
            async with httpx.AsyncClient() as client:
                outcome = await analyze(DEEPSEEK, "sk-test", sample_record, client=client)

        assert isinstance(outcome, AnalysisFailure)
        assert "network error" in outcome.reason

    async def test_invalid_endpoint_is_failure(self, sample_record: ContentRecord) -> None:
        broken = replace(DEEPSEEK, endpoint="not a url at all")
        async with httpx.AsyncClient() as client:
            outcome = await analyze(broken, "sk-test", sample_record, client=client)

        assert isinstance(outcome, AnalysisFailure)
