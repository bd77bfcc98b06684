"""Schemas for entity eligibility and applicability."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

EntityGroup = Literal[1, 2, 3, "voluntary"]
AssuranceLevel = Literal["limited", "none"]


class EntityProfile(BaseModel):
    """Attributes describing an organisation, as entered by the respondent.

    Every field is optional and free-form; values outside the known bracket
    scales are kept as entered and simply count as "threshold not met".
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    company_name: str | None = None
    industry: str | None = None
    entity_type: str | None = Field(
        default=None,
        description="'for-profit', 'not-for-profit', 'super-or-financial' or 'other'",
    )
    chapter_2m: str | None = Field(
        default=None,
        description="Prepares annual financial reports under Chapter 2M: 'yes', 'no' or 'unsure'",
    )
    revenue: str | None = Field(default=None, description="Consolidated revenue bracket key")
    gross_assets: str | None = Field(default=None, description="Consolidated gross assets bracket key")
    employees: str | None = Field(default=None, description="Employee (FTE) bracket key")
    nger_reporter: str | None = Field(default=None, description="'yes' or 'no'")
    aum_over_5b: str | None = Field(default=None, description="'yes' or 'no'")


class EligibilityResult(BaseModel):
    """Outcome of classifying an entity against the mandatory regime."""

    model_config = ConfigDict(frozen=True)

    in_scope: bool
    tier: EntityGroup
    mandatory_start_date: str = ""
    size_thresholds_met: int = Field(default=0, ge=0, le=3)
    reasoning: list[str] = Field(default_factory=list)


class ApplicabilityProfile(BaseModel):
    """Derived applicability consumed by the scoring engine."""

    model_config = ConfigDict(frozen=True)

    entity_group: EntityGroup
    first_reporting_period: str = ""
    assurance_profile: dict[str, AssuranceLevel] | None = None
