"""Structured logging configuration using structlog.

Call ``configure_logging()`` once at application startup (``api/main.py``
does this).  Modules then log through the stdlib API::

    import logging
    logger = logging.getLogger(__name__)
    logger.warning("analysis: provider %s failed: %s", name, reason)

or through structlog when binding context is useful::

    import structlog
    logger = structlog.get_logger(__name__)
    logger.info("analysis_complete", providers=3, failures=1)

The request-logging middleware sets ``request_id_var`` and binds it to the
structlog context, so every record emitted while serving a request carries
the same ``request_id`` as the ``X-Request-ID`` response header.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar

import structlog
from structlog.types import EventDict, WrappedLogger

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
"""Per-request ID propagated from the HTTP middleware to log processors."""


# ---------------------------------------------------------------------------
# Custom processors
# ---------------------------------------------------------------------------


_SECRET_SUBSTRINGS: frozenset[str] = frozenset({
    "api_key",
    "apikey",
    "secret",
    "token",
    "credential",
    "bearer",
    "authorization",
    "x-goog-api-key",
})
"""Lower-cased substrings of event-dict keys whose values are redacted."""


def _redact_secrets(
    logger: WrappedLogger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Replace values of secret-bearing keys with ``"[REDACTED]"``.

    Top-level keys and the keys of nested dicts one level deep (for example
    ``headers={...}``) are matched case-insensitively.
    """
    redacted = "[REDACTED]"
    for key in list(event_dict.keys()):
        if _is_secret_key(key):
            event_dict[key] = redacted
            continue
        val = event_dict[key]
        if isinstance(val, dict):
            event_dict[key] = {
                k: (redacted if _is_secret_key(str(k)) else v) for k, v in val.items()
            }
    return event_dict


def _is_secret_key(key: str) -> bool:
    key_lower = key.lower()
    return any(secret in key_lower for secret in _SECRET_SUBSTRINGS)


def _inject_request_id(
    logger: WrappedLogger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Add the current ``request_id`` when the record does not carry one yet."""
    rid = request_id_var.get()
    if rid is not None and "request_id" not in event_dict:
        event_dict["request_id"] = rid
    return event_dict


# ---------------------------------------------------------------------------
# Public configuration entry-point
# ---------------------------------------------------------------------------


def configure_logging(log_level: str = "INFO") -> None:
    """Configure structlog and route stdlib logging through it.

    At ``DEBUG`` the output is structlog's coloured ``ConsoleRenderer``;
    at any other level it is newline-delimited JSON with ``timestamp``,
    ``level``, ``logger``, ``event`` and, inside a request, ``request_id``.

    Calling it again replaces the previous configuration, so tests may call
    it freely.

    Args:
        log_level: Logging verbosity string, case-insensitive.
    """
    level_upper = log_level.upper()
    numeric_level = getattr(logging, level_upper, logging.INFO)
    is_development = level_upper == "DEBUG"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _inject_request_id,
        _redact_secrets,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if is_development:
        final_renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer(
            colors=True,
        )
    else:
        final_renderer = structlog.processors.JSONRenderer(ensure_ascii=False)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            final_renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    # Avoid duplicate output when called more than once.
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    # httpx logs every outbound request at INFO.
    if not is_development:
        for noisy_logger in ("uvicorn.access", "httpx", "httpcore"):
            logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
