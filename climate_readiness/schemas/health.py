"""Schemas for the health probes."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

ServiceStatus = Literal["healthy", "unhealthy"]


class DependencyHealth(BaseModel):
    """Result of probing one dependency (the app, the catalog, the PDF renderer)."""

    name: str
    status: ServiceStatus
    latency_ms: float | None = None
    detail: str | None = None


class HealthReport(BaseModel):
    """Overall service health; 'degraded' means PDF export is unavailable."""

    status: Literal["healthy", "degraded", "unhealthy"]
    app_name: str
    version: str
    environment: str
    catalog_version: str | None = None
    dependencies: list[DependencyHealth]
