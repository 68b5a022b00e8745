"""FastAPI application factory and entry point.

Creates the application instance, registers middleware and mounts the route
routers.

Usage::

    # Development server (from project root)
    uvicorn content_insight.api.main:app --reload

    # Or via the console script declared in pyproject.toml
    content-insight
"""

from __future__ import annotations

import time
import uuid
from typing import Callable

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from content_insight import __version__
from content_insight.config.settings import get_settings
from content_insight.core.logging_config import configure_logging, request_id_var

# Applied at import time so records emitted during app construction are
# captured; create_app() re-applies it with the configured level.
configure_logging("INFO")

logger = structlog.get_logger(__name__)

LIVENESS_TEXT: str = "Content Analysis AI Backend is running!"


def create_app() -> FastAPI:
    """Build and configure the FastAPI application.

    Separated from the module-level ``app`` singleton so that tests can
    call ``create_app()`` with a patched settings environment.

    Returns:
        A fully configured ``FastAPI`` instance.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(
        title=settings.app_name,
        description=(
            "Extracts Xiaohongshu and WeChat Official Account content and "
            "analyses it with several AI providers concurrently."
        ),
        version=__version__,
        debug=settings.debug,
    )

    # ---- Middleware --------------------------------------------------------

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def request_logging_middleware(
        request: Request, call_next: Callable
    ) -> Response:
        """Log every request with its status and duration under one ``request_id``."""
        request_id = str(uuid.uuid4())
        request_id_var.set(request_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error("unhandled_exception", exc_info=exc)
            raise
        finally:
            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = getattr(response, "status_code", 500)
            log_fn = logger.warning if status_code >= 400 else logger.info
            log_fn(
                "request_complete",
                status_code=status_code,
                elapsed_ms=elapsed_ms,
            )

        response.headers["X-Request-ID"] = request_id
        return response

    # ---- Routers -----------------------------------------------------------

    from content_insight.api.routes import analyze  # noqa: PLC0415

    application.include_router(analyze.router)
    application.add_exception_handler(
        RequestValidationError, analyze.request_validation_handler  # type: ignore[arg-type]
    )

    # ---- System endpoints --------------------------------------------------

    @application.get("/", response_class=PlainTextResponse, tags=["system"])
    async def root() -> str:
        """Return a fixed liveness string."""
        return LIVENESS_TEXT

    @application.get("/health", tags=["system"])
    async def health() -> JSONResponse:
        """Return a minimal process-level liveness status."""
        return JSONResponse({"status": "ok"})

    logger.info(
        "application_created",
        app_name=settings.app_name,
        debug=settings.debug,
        log_level=settings.log_level,
    )
    return application


def run() -> None:
    """Console-script entry point: serve the app with uvicorn."""
    import uvicorn  # noqa: PLC0415

    uvicorn.run("content_insight.api.main:app", host="0.0.0.0", port=8000)


app = create_app()
"""The FastAPI application instance passed to Uvicorn."""
