"""Schemas for readiness scoring results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from climate_readiness.schemas.questionnaire import UrgencyLevel

ReadinessLevel = Literal["High", "Moderate", "Low"]


class UrgencyTally(BaseModel):
    """Count of questions per urgency level."""

    High: int = 0
    Medium: int = 0
    Low: int = 0


class GapRecord(BaseModel):
    """A visible, applicable question that has not reached best practice."""

    model_config = ConfigDict(frozen=True)

    id: str
    clause: str
    section: str
    question: str
    severity: int | None
    not_applicable: bool = False
    weight: int
    weighted_score: int = Field(..., description="severity x weight, 0 when not applicable")
    adjusted_weight: float = Field(..., description="weight x entity group multiplier, reporting only")
    urgency: UrgencyLevel
    priority: UrgencyLevel
    description: str
    gap_description: str | None = None
    recommendation: str | None = None
    relevant_clause: str | None = None


class GapGroups(BaseModel):
    """Gap records partitioned by priority."""

    High: list[GapRecord] = Field(default_factory=list)
    Medium: list[GapRecord] = Field(default_factory=list)
    Low: list[GapRecord] = Field(default_factory=list)


class SectionScore(BaseModel):
    """Subtotal and urgency rollup for one catalog section."""

    section_id: str
    section_title: str
    section_score: float
    critical_count: int = 0
    urgency_level: UrgencyLevel
    urgency_counts: UrgencyTally


class ScoringResult(BaseModel):
    """Everything derived from one scoring pass."""

    section_scores: list[SectionScore]
    total_score: float
    readiness: ReadinessLevel
    visible_question_ids: list[str]
    weighted_per_question: dict[str, int]
    urgency_breakdown: UrgencyTally
    gaps_detailed: list[GapRecord]
    gap_groups: GapGroups


class ProgressSummary(BaseModel):
    """How far through the visible questionnaire the respondent is."""

    total_visible: int
    answered_visible: int
    progress_pct: int = Field(..., ge=0, le=100)
    gaps_count: int


class ScoreResponse(BaseModel):
    """Scoring envelope; result is absent until the entity has been classified."""

    assessment_id: str
    status: Literal["computable", "not_computable"]
    reason: str | None = None
    result: ScoringResult | None = None


class ProgressResponse(BaseModel):
    """Progress envelope; progress is absent until the entity has been classified."""

    assessment_id: str
    status: Literal["computable", "not_computable"]
    reason: str | None = None
    progress: ProgressSummary | None = None
