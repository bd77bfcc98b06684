"""Questionnaire catalog endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Request

from climate_readiness.schemas.questionnaire import Catalog

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=Catalog)
async def get_catalog(request: Request) -> Catalog:
    """Sections and questions of the loaded catalog, in display order."""
    return request.app.state.catalog
