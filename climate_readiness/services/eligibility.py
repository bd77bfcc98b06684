"""AASB S2 applicability classification.

Decides whether an entity falls within the mandatory climate-reporting regime,
which group it belongs to and when mandatory reporting starts. The decision
follows the Corporations Act size tests:

- Entities that do not report under Chapter 2M are out of mandatory scope.
- Otherwise an entity is in scope if it meets at least two of the three size
  thresholds, is an NGER reporter, or is a super fund / financial institution
  with more than $5B of assets under management. An affirmative Chapter 2M
  answer on its own also places the entity in scope.
- The group follows the largest size bracket reached on any dimension. NGER
  reporters and large asset owners are always Group 1.
"""

from __future__ import annotations

from collections.abc import Mapping

from climate_readiness.schemas.eligibility import (
    ApplicabilityProfile,
    EligibilityResult,
    EntityGroup,
    EntityProfile,
)
from climate_readiness.schemas.questionnaire import QuestionDefinition

# Ordered bracket scales; the index is the bracket intensity.
REVENUE_BRACKETS = ["lt-50m", "50m-199999999", "200m-499999999", "gte-500m"]
ASSETS_BRACKETS = ["lt-25m", "25m-99999999", "500m-999999999", "gte-1b"]
EMPLOYEE_BRACKETS = ["lt-100", "100-249", "250-499", "gte-500"]

TOP_INTENSITY = 3
MIDDLE_INTENSITY = 2

DEFAULT_START_DATES = {
    1: "2025-01-01",
    2: "2026-07-01",
    3: "2027-07-01",
}

GROUP_MULTIPLIERS: dict[EntityGroup, float] = {
    1: 1.5,
    2: 1.2,
    3: 1.0,
    "voluntary": 0.6,
}

ASSURANCE_TOPICS = ["governance", "strategy", "risk", "metrics"]

# Topics subject to limited assurance when assurance is required.
LIMITED_ASSURANCE_TOPICS = {"governance", "metrics"}


def _is_yes(value: str | None) -> bool:
    return (value or "").strip().lower() == "yes"


def _is_no(value: str | None) -> bool:
    return (value or "").strip().lower() == "no"


def bracket_index(value: str | None, brackets: list[str]) -> int:
    """Position of a bracket in its scale; unknown or missing values rank lowest."""
    if value in brackets:
        return brackets.index(value)
    return 0


def threshold_met(value: str | None, brackets: list[str]) -> bool:
    """A size threshold is met when the bracket is a known one above the lowest."""
    return value in brackets[1:]


def _group_for_intensity(intensity: int) -> int:
    if intensity >= TOP_INTENSITY:
        return 1
    if intensity == MIDDLE_INTENSITY:
        return 2
    return 3


def classify_entity(
    entity: EntityProfile,
    start_dates: Mapping[int, str] | None = None,
) -> EligibilityResult:
    """Classify an entity against the mandatory reporting regime.

    Never raises; missing or unrecognised attributes count as thresholds not
    met. The reasoning trail holds one sentence per decision point, in the
    order the decisions are made.
    """
    dates = dict(DEFAULT_START_DATES)
    if start_dates:
        dates.update(start_dates)
    reasoning: list[str] = []

    # Hard gate: Chapter 2M financial reporting
    if _is_no(entity.chapter_2m):
        reasoning.append(
            "Does not prepare annual financial reports under Chapter 2M of the "
            "Corporations Act, so it is outside mandatory scope (voluntary reporting only)."
        )
        return EligibilityResult(
            in_scope=False,
            tier="voluntary",
            mandatory_start_date="",
            size_thresholds_met=0,
            reasoning=reasoning,
        )

    chapter_2m_reporter = _is_yes(entity.chapter_2m)
    if chapter_2m_reporter:
        reasoning.append("Prepares annual financial reports under Chapter 2M of the Corporations Act.")
    else:
        reasoning.append(
            "Chapter 2M reporting status is not confirmed; applying the size and reporter tests."
        )

    # Size gate: two of three thresholds
    met = {
        "revenue": threshold_met(entity.revenue, REVENUE_BRACKETS),
        "gross assets": threshold_met(entity.gross_assets, ASSETS_BRACKETS),
        "employees": threshold_met(entity.employees, EMPLOYEE_BRACKETS),
    }
    size_thresholds_met = sum(1 for v in met.values() if v)
    met_names = [name for name, ok in met.items() if ok]
    reasoning.append(
        f"{size_thresholds_met} of 3 size thresholds met"
        + (f" ({', '.join(met_names)})." if met_names else ".")
    )

    nger_reporter = _is_yes(entity.nger_reporter)
    large_asset_owner = _is_yes(entity.aum_over_5b)

    in_scope = (
        size_thresholds_met >= 2
        or nger_reporter
        or large_asset_owner
        or chapter_2m_reporter
    )

    if not in_scope:
        reasoning.append(
            "Does not meet any in-scope condition (two size thresholds, NGER reporting, "
            "or assets under management above $5B); voluntary reporting only."
        )
        return EligibilityResult(
            in_scope=False,
            tier="voluntary",
            mandatory_start_date="",
            size_thresholds_met=size_thresholds_met,
            reasoning=reasoning,
        )

    # Group by size bracket intensity
    intensity = max(
        bracket_index(entity.revenue, REVENUE_BRACKETS),
        bracket_index(entity.gross_assets, ASSETS_BRACKETS),
        bracket_index(entity.employees, EMPLOYEE_BRACKETS),
    )

    if nger_reporter:
        reasoning.append("Registered NGER reporter; classified at the highest group.")
    if large_asset_owner:
        reasoning.append(
            "Superannuation fund or financial institution with assets under management "
            "above $5B; classified at the highest group."
        )
    if nger_reporter or large_asset_owner:
        intensity = max(intensity, TOP_INTENSITY)

    basis = []
    if size_thresholds_met >= 2:
        basis.append(f"{size_thresholds_met} size thresholds met")
    if nger_reporter:
        basis.append("NGER reporter")
    if large_asset_owner:
        basis.append("AUM above $5B")
    if not basis:
        basis.append("Chapter 2M reporting alone")
    reasoning.append(f"Meets in-scope conditions ({', '.join(basis)}).")

    tier = _group_for_intensity(intensity)
    start_date = dates[tier]
    reasoning.append(f"Assigned Group {tier}; mandatory reporting starts {start_date}.")

    return EligibilityResult(
        in_scope=True,
        tier=tier,
        mandatory_start_date=start_date,
        size_thresholds_met=size_thresholds_met,
        reasoning=reasoning,
    )


def derive_applicability_profile(
    result: EligibilityResult,
    assurance_required: bool = False,
) -> ApplicabilityProfile:
    """Build the applicability profile consumed by the scoring engine."""
    assurance_profile = {
        topic: ("limited" if assurance_required and topic in LIMITED_ASSURANCE_TOPICS else "none")
        for topic in ASSURANCE_TOPICS
    }
    return ApplicabilityProfile(
        entity_group=result.tier if result.in_scope else "voluntary",
        first_reporting_period=result.mandatory_start_date,
        assurance_profile=assurance_profile,
    )


def group_multiplier(group: EntityGroup) -> float:
    """Relative reporting pressure for an entity group."""
    return GROUP_MULTIPLIERS.get(group, GROUP_MULTIPLIERS["voluntary"])


def adjusted_weight(question: QuestionDefinition, profile: ApplicabilityProfile) -> float:
    """Question weight scaled by the entity group; used for reporting only."""
    return round(question.weight * group_multiplier(profile.entity_group), 2)
