"""AASB S2 Readiness: FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from climate_readiness.config import Settings, get_settings
from climate_readiness.middleware import (
    configure_cors,
    configure_rate_limiting,
    configure_request_logging,
    lifespan,
)
from climate_readiness.routers import assessments, catalog, health
from climate_readiness.services.catalog import get_catalog
from climate_readiness.services.renderer_client import RendererClient


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Climate-reporting readiness assessment against AASB S2",
        version=settings.app_version,
        lifespan=lifespan,
    )

    # Shared state
    app.state.settings = settings
    app.state.catalog = get_catalog()
    app.state.renderer = RendererClient(
        settings.renderer_url,
        timeout=settings.renderer_timeout_seconds,
    )

    # Middleware
    configure_cors(app, settings)
    configure_rate_limiting(app, settings)
    configure_request_logging(app)

    # Routers
    app.include_router(health.router)
    app.include_router(catalog.router, prefix=settings.api_prefix)
    app.include_router(assessments.router, prefix=settings.api_prefix)

    return app


# Default app instance for uvicorn
app = create_app()
