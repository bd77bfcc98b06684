"""Application middleware: rate limiting, CORS, request logging, shutdown."""

from __future__ import annotations

import logging
import signal
import threading
import time
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from climate_readiness.config import Settings

logger = structlog.get_logger()


def get_limiter(settings: Settings) -> Limiter:
    """Create a rate limiter with the configured default limit."""
    return Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit_default],
    )


def configure_cors(app: FastAPI, settings: Settings) -> None:
    """Allow the questionnaire front end to call the API."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-RateLimit-Remaining"],
    )


async def rate_limit_middleware(request: Request, call_next) -> Response:
    """Check the default limit for the request path before routing.

    Limits are keyed on the URL path, so the check does not need to resolve
    the endpoint from the app's route table.
    """
    limiter: Limiter = request.app.state.limiter
    try:
        limiter._check_request_limit(request, None, True)
    except RateLimitExceeded as exc:
        logger.warning("rate_limit_exceeded", path=request.url.path, limit=str(exc.detail))
        return _rate_limit_exceeded_handler(request, exc)

    response = await call_next(request)
    return limiter._inject_headers(response, getattr(request.state, "view_rate_limit", None))


def configure_rate_limiting(app: FastAPI, settings: Settings) -> None:
    """Apply the default rate limit to every route."""
    app.state.limiter = get_limiter(settings)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.middleware("http")(rate_limit_middleware)


async def logging_middleware(request: Request, call_next) -> Response:
    """Log one structured event per request."""
    start_time = time.monotonic()
    response = await call_next(request)
    duration_ms = round((time.monotonic() - start_time) * 1000, 2)

    logger.info(
        "http_request",
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=duration_ms,
        client_ip=request.client.host if request.client else "unknown",
    )

    return response


def configure_request_logging(app: FastAPI) -> None:
    app.middleware("http")(logging_middleware)


def configure_structured_logging(settings: Settings) -> None:
    """Configure structlog for JSON or console output."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelNamesMapping().get(settings.log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


_shutdown_requested = False


def is_shutdown_requested() -> bool:
    """Check if graceful shutdown has been requested."""
    return _shutdown_requested


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown handlers."""
    global _shutdown_requested

    settings = app.state.settings
    configure_structured_logging(settings)

    logger.info(
        "application_starting",
        version=settings.app_version,
        environment=settings.environment,
        questions=len(app.state.catalog.questions),
        renderer_url=settings.renderer_url,
    )

    def _handle_signal(signum, frame):
        global _shutdown_requested
        _shutdown_requested = True
        logger.info("shutdown_signal_received", signal=signum)

    # Signal handlers can only be installed from the main thread
    if threading.current_thread() is threading.main_thread():
        signal.signal(signal.SIGTERM, _handle_signal)
        signal.signal(signal.SIGINT, _handle_signal)

    yield

    logger.info("application_shutting_down")
    _shutdown_requested = True
