"""Request and response schemas for the assessment endpoints."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from climate_readiness.schemas.eligibility import ApplicabilityProfile, EligibilityResult

REPORT_SECTIONS = ["company-profile", "responses", "gaps-analysis"]


class ClassificationResponse(BaseModel):
    """Eligibility outcome and the applicability profile derived from it."""

    assessment_id: str
    eligibility: EligibilityResult
    applicability: ApplicabilityProfile


class AnswersResponse(BaseModel):
    """The current answer snapshot for an assessment."""

    assessment_id: str
    answered_count: int
    answers: dict[str, dict[str, Any]]


class ExportRequest(BaseModel):
    """Sections to include in the rendered PDF."""

    sections: list[str] = Field(
        default_factory=lambda: list(REPORT_SECTIONS),
        description="Report section ids, e.g. 'company-profile', 'responses', 'gaps-analysis'",
    )
    origin: str | None = Field(default=None, description="Origin of the print view the renderer should load")
