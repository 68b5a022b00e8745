"""Analysis route handler.

``POST /api/analyze``
    Body ``{"url": "..."}``.  Classifies, fetches and extracts the page,
    then asks every configured AI provider for keywords and a summary.

Every response uses the same envelope::

    {"code": 200, "message": "Success", "data": {...}}
    {"code": 400, "message": "Invalid URL format", "data": null}
    {"code": 500, "message": "Failed to crawl content: HTTP 404", "data": null}

Per-provider failures appear inside ``data.aiResults`` and never change the
HTTP status.
"""

from __future__ import annotations

import logging
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Body, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from content_insight.api.dependencies import CredentialsDep, HttpClientDep, SettingsDep
from content_insight.core.exceptions import (
    CrawlError,
    InputError,
    InvalidUrlError,
    MissingUrlError,
)
from content_insight.pipeline import analyze_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------


class AnalyzeRequest(BaseModel):
    """Request body for ``POST /api/analyze``."""

    url: Optional[str] = Field(default=None, description="Xiaohongshu or WeChat article URL.")


class AnalysisEntry(BaseModel):
    """One ``aiResults`` value: either keywords + summary, or an error."""

    keywords: Optional[list[str]] = None
    summary: Optional[str] = None
    error: Optional[str] = None


class AnalyzeData(BaseModel):
    title: str
    author: str
    readCount: str
    commentCount: str
    aiResults: dict[str, AnalysisEntry]


class Envelope(BaseModel):
    """Response envelope shared by every outcome of the endpoint."""

    code: int
    message: str
    data: Optional[AnalyzeData] = None


def envelope(code: int, message: str, data: Any = None) -> JSONResponse:
    return JSONResponse(
        status_code=code,
        content={"code": code, "message": message, "data": data},
    )


# ---------------------------------------------------------------------------
# Body validation errors
# ---------------------------------------------------------------------------


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render body validation errors in the analysis envelope.

    A ``url`` of the wrong type is an invalid URL; an unreadable or
    non-object body carries no URL at all.
    """
    url_errors = [err for err in exc.errors() if tuple(err.get("loc", ()))[-1:] == ("url",)]
    error: InputError = InvalidUrlError() if url_errors else MissingUrlError()
    logger.info("analyze: invalid request body on %s: %s", request.url.path, error)
    return envelope(400, str(error))


# ---------------------------------------------------------------------------
# POST /api/analyze
# ---------------------------------------------------------------------------


@router.post(
    "/api/analyze",
    response_model=Envelope,
    responses={400: {"model": Envelope}, 500: {"model": Envelope}},
)
async def analyze(
    client: HttpClientDep,
    credentials: CredentialsDep,
    settings: SettingsDep,
    payload: Annotated[Optional[AnalyzeRequest], Body()] = None,
) -> JSONResponse:
    """Extract the page behind ``url`` and analyse it with all configured providers.

    Returns:
        HTTP 200 with the analysis envelope, HTTP 400 for input problems, or
        HTTP 500 when the page cannot be crawled or something unexpected
        fails.
    """
    url = payload.url if payload is not None else None

    try:
        data = await analyze_url(
            url,
            client=client,
            credentials=credentials,
            settings=settings,
        )
    except InputError as exc:
        logger.info("analyze: rejected input %r: %s", url, exc)
        return envelope(400, str(exc))
    except CrawlError as exc:
        logger.warning("analyze: crawl failed for %s: %s", url, exc)
        return envelope(500, str(exc))
    except Exception as exc:  # noqa: BLE001
        logger.exception("analyze: unexpected failure for %s", url)
        return envelope(500, str(exc) or exc.__class__.__name__)

    return envelope(200, "Success", data)
