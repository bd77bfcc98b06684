"""Health probes for the readiness service."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable

from fastapi import APIRouter, Request

from climate_readiness.schemas.health import DependencyHealth, HealthReport

router = APIRouter(tags=["health"])

# A failing optional dependency degrades the service instead of taking it down
OPTIONAL_DEPENDENCIES = {"renderer"}


async def _probe(name: str, check_fn: Callable[[], Awaitable[None]]) -> DependencyHealth:
    """Time a check function and turn its outcome into a DependencyHealth."""
    start = time.monotonic()
    try:
        await check_fn()
    except Exception as exc:
        return DependencyHealth(
            name=name,
            status="unhealthy",
            latency_ms=round((time.monotonic() - start) * 1000, 2),
            detail=str(exc)[:200],
        )
    return DependencyHealth(
        name=name,
        status="healthy",
        latency_ms=round((time.monotonic() - start) * 1000, 2),
    )


def _overall(dependencies: list[DependencyHealth]) -> str:
    failed = {d.name for d in dependencies if d.status != "healthy"}
    if not failed:
        return "healthy"
    if failed <= OPTIONAL_DEPENDENCIES:
        return "degraded"
    return "unhealthy"


def _report(request: Request, dependencies: list[DependencyHealth]) -> HealthReport:
    settings = request.app.state.settings
    catalog = getattr(request.app.state, "catalog", None)
    return HealthReport(
        status=_overall(dependencies),
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
        catalog_version=catalog.version if catalog is not None else None,
        dependencies=dependencies,
    )


@router.get("/health", response_model=HealthReport)
async def health_check(request: Request) -> HealthReport:
    """Is the application running?"""

    async def check_app() -> None:
        return None

    return _report(request, [await _probe("app", check_app)])


@router.get("/health/ready", response_model=HealthReport)
async def readiness_check(request: Request) -> HealthReport:
    """Are the catalog and the PDF renderer available?

    The renderer only backs PDF export, so its absence reports 'degraded'.
    """

    async def check_app() -> None:
        return None

    async def check_catalog() -> None:
        catalog = request.app.state.catalog
        if not catalog.questions:
            raise RuntimeError("Catalog has no questions")

    async def check_renderer() -> None:
        await request.app.state.renderer.health()

    dependencies = [
        await _probe("app", check_app),
        await _probe("catalog", check_catalog),
        await _probe("renderer", check_renderer),
    ]
    return _report(request, dependencies)


@router.get("/health/live")
async def liveness_check() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "alive"}
