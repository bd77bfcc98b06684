"""Flat data bundle handed to the PDF export service."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from climate_readiness.schemas.answers import AnswerSet
from climate_readiness.schemas.assessment import REPORT_SECTIONS
from climate_readiness.schemas.eligibility import (
    ApplicabilityProfile,
    EligibilityResult,
    EntityProfile,
)
from climate_readiness.schemas.scoring import ScoringResult

PLACEHOLDER = "N/A"

ELIGIBILITY_LABELS: dict[str, dict[str, str]] = {
    "entity_type": {
        "for-profit": "For-profit",
        "not-for-profit": "Not-for-profit",
        "super-or-financial": "Superannuation fund / Financial institution",
        "other": "Other",
    },
    "chapter_2m": {"yes": "Yes", "no": "No", "unsure": "Unsure"},
    "revenue": {
        "lt-50m": "Less than $50,000,000",
        "50m-199999999": "$50,000,000 to $199,999,999",
        "200m-499999999": "$200,000,000 to $499,999,999",
        "gte-500m": "$500,000,000 or more",
    },
    "gross_assets": {
        "lt-25m": "Less than $25,000,000",
        "25m-99999999": "$25,000,000 to $99,999,999",
        "500m-999999999": "$500,000,000 to $999,999,999",
        "gte-1b": "$1,000,000,000 or more",
    },
    "employees": {
        "lt-100": "Less than 100",
        "100-249": "100 to 249",
        "250-499": "250 to 499",
        "gte-500": "500 or more",
    },
    "nger_reporter": {"yes": "Yes", "no": "No"},
    "aum_over_5b": {"yes": "Yes", "no": "No"},
}


def format_eligibility(field: str, value: str | None) -> str:
    """Human-readable label for an entity attribute; unknown values pass through."""
    if not value:
        return PLACEHOLDER
    return ELIGIBILITY_LABELS.get(field, {}).get(value, value)


def format_group(eligibility: EligibilityResult | None) -> str:
    if eligibility is None:
        return PLACEHOLDER
    if not eligibility.in_scope or eligibility.tier == "voluntary":
        return "Voluntary only"
    return f"Group {eligibility.tier}"


def build_report_bundle(
    entity: EntityProfile | None,
    eligibility: EligibilityResult | None,
    profile: ApplicabilityProfile | None,
    result: ScoringResult | None,
    answers: AnswerSet | None = None,
    sections: list[str] | None = None,
    generated_at: datetime | None = None,
) -> dict[str, Any]:
    """Assemble everything the renderer needs as plain JSON-safe data.

    Missing profile fields are replaced by a placeholder so the renderer never
    has to handle absent values.
    """
    entity = entity or EntityProfile()
    generated_at = generated_at or datetime.now(timezone.utc)

    company = {
        "company_name": entity.company_name or PLACEHOLDER,
        "industry": entity.industry or PLACEHOLDER,
    }
    eligibility_labels = {
        field: format_eligibility(field, getattr(entity, field))
        for field in ELIGIBILITY_LABELS
    }

    classification = {
        "in_scope": eligibility.in_scope if eligibility else False,
        "group": format_group(eligibility),
        "mandatory_start_date": (eligibility.mandatory_start_date if eligibility else "") or PLACEHOLDER,
        "reasoning": list(eligibility.reasoning) if eligibility else [],
    }

    return {
        "generated": generated_at.date().isoformat(),
        "sections": list(sections) if sections is not None else list(REPORT_SECTIONS),
        "company": company,
        "eligibility": eligibility_labels,
        "classification": classification,
        "applicability": profile.model_dump(mode="json") if profile else None,
        "scoring": result.model_dump(mode="json") if result else None,
        "answers": answers.to_dict() if answers is not None else {},
    }
