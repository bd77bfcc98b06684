"""Readiness Scoring Engine: weighted gap scores and prioritised gaps."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from climate_readiness.schemas.answers import AnswerRecord, AnswerSet
from climate_readiness.schemas.eligibility import ApplicabilityProfile
from climate_readiness.schemas.questionnaire import Catalog, QuestionDefinition, UrgencyLevel
from climate_readiness.schemas.scoring import (
    GapGroups,
    GapRecord,
    ProgressSummary,
    ReadinessLevel,
    ScoringResult,
    SectionScore,
    UrgencyTally,
)
from climate_readiness.services.eligibility import adjusted_weight
from climate_readiness.services.urgency import evaluate_urgency, rollup_urgency
from climate_readiness.services.visibility import is_question_visible

# Severity assumed for visible questions that have not been answered yet
NEUTRAL_SEVERITY = 2

# Total weighted score boundaries for the readiness label
READINESS_LOW_THRESHOLD = 20.0
READINESS_MID_THRESHOLD = 40.0

# Weighted contribution above which a question counts as critical
CRITICAL_CONTRIBUTION = 3

URGENCY_SCORES: dict[str, int] = {"High": 3, "Medium": 2, "Low": 1}


def _as_answer_set(answers: Mapping[str, Any] | None) -> AnswerSet:
    if isinstance(answers, AnswerSet):
        return answers
    return AnswerSet.from_dict(answers)


def weight_bucket(weight: int) -> int:
    """Bucket a question weight into 3 (>= 8), 2 (>= 5) or 1."""
    if weight >= 8:
        return 3
    if weight >= 5:
        return 2
    return 1


def compute_priority(weight: int, urgency: UrgencyLevel) -> UrgencyLevel:
    """Priority of a gap: the stronger of its weight bucket and its urgency."""
    priority_score = max(weight_bucket(weight), URGENCY_SCORES.get(urgency, 2))
    if priority_score >= 3:
        return "High"
    if priority_score == 2:
        return "Medium"
    return "Low"


def classify_readiness(
    total_score: float,
    low_threshold: float = READINESS_LOW_THRESHOLD,
    mid_threshold: float = READINESS_MID_THRESHOLD,
) -> ReadinessLevel:
    """Map a total weighted score to a readiness label.

    The scale is inverted: a low accumulated score means high readiness.
    """
    if total_score <= low_threshold:
        return "High"
    if total_score <= mid_threshold:
        return "Moderate"
    return "Low"


def _build_gap(
    question: QuestionDefinition,
    severity: int,
    not_applicable: bool,
    weighted: int,
    urgency: UrgencyLevel,
    profile: ApplicabilityProfile,
) -> GapRecord:
    return GapRecord(
        id=question.id,
        clause=question.id,
        section=question.section,
        question=question.question,
        severity=severity,
        not_applicable=not_applicable,
        weight=question.weight,
        weighted_score=weighted,
        adjusted_weight=adjusted_weight(question, profile),
        urgency=urgency,
        priority=compute_priority(question.weight, urgency),
        description=question.gap_description or f"Clause {question.id} - {question.question}",
        gap_description=question.gap_description,
        recommendation=question.recommendation,
        relevant_clause=question.relevant_clause,
    )


def score_answers(
    answers: Mapping[str, Any] | None,
    profile: ApplicabilityProfile,
    catalog: Catalog,
    neutral_severity: int = NEUTRAL_SEVERITY,
    low_threshold: float = READINESS_LOW_THRESHOLD,
    mid_threshold: float = READINESS_MID_THRESHOLD,
) -> ScoringResult:
    """Score an answer snapshot against the catalog.

    For every visible question, in catalog order:

    1. Resolve the severity, falling back to ``neutral_severity`` when unanswered.
    2. Weighted contribution is severity x weight, or 0 when not applicable.
    3. Tally urgency per section and overall.
    4. Record a gap when the answer is applicable and below the catalog's
       maximum maturity, prioritised by weight bucket and urgency.

    Pure and deterministic: the same inputs always produce an identical result.
    Answer entries that cannot be decoded are treated as unanswered.
    """
    snapshot = _as_answer_set(answers)
    max_severity = catalog.max_severity

    visible_question_ids: list[str] = []
    weighted_per_question: dict[str, int] = {}
    section_scores: list[SectionScore] = []
    urgency_breakdown = {"High": 0, "Medium": 0, "Low": 0}
    gaps_detailed: list[GapRecord] = []
    gap_groups: dict[str, list[GapRecord]] = {"High": [], "Medium": [], "Low": []}
    total_score = 0

    for section in catalog.sections:
        section_sum = 0
        critical_count = 0
        section_urgency = {"High": 0, "Medium": 0, "Low": 0}

        for question in section.questions:
            if not is_question_visible(question, snapshot, profile)["visible"]:
                continue
            visible_question_ids.append(question.id)

            answer: AnswerRecord | None = snapshot.get(question.id)
            severity = answer.severity if answer and answer.severity is not None else neutral_severity
            not_applicable = bool(answer and answer.not_applicable)

            weighted = 0 if not_applicable else severity * question.weight
            section_sum += weighted
            total_score += weighted
            weighted_per_question[question.id] = weighted
            if weighted > CRITICAL_CONTRIBUTION:
                critical_count += 1

            urgency = evaluate_urgency(question, answer)
            section_urgency[urgency] += 1
            urgency_breakdown[urgency] += 1

            if not not_applicable and severity < max_severity:
                gap = _build_gap(question, severity, not_applicable, weighted, urgency, profile)
                gaps_detailed.append(gap)
                gap_groups[gap.priority].append(gap)

        section_scores.append(SectionScore(
            section_id=section.id,
            section_title=section.title,
            section_score=round(float(section_sum), 2),
            critical_count=critical_count,
            urgency_level=rollup_urgency(section_urgency),
            urgency_counts=UrgencyTally(**section_urgency),
        ))

    total = round(float(total_score), 2)

    return ScoringResult(
        section_scores=section_scores,
        total_score=total,
        readiness=classify_readiness(total, low_threshold, mid_threshold),
        visible_question_ids=visible_question_ids,
        weighted_per_question=weighted_per_question,
        urgency_breakdown=UrgencyTally(**urgency_breakdown),
        gaps_detailed=gaps_detailed,
        gap_groups=GapGroups(**gap_groups),
    )


def summarise_progress(
    answers: Mapping[str, Any] | None,
    profile: ApplicabilityProfile,
    catalog: Catalog,
    result: ScoringResult | None = None,
) -> ProgressSummary:
    """Count visible questions and how many of them carry a recorded severity."""
    snapshot = _as_answer_set(answers)
    if result is None:
        result = score_answers(snapshot, profile, catalog)

    total_visible = len(result.visible_question_ids)
    answered_visible = sum(
        1
        for qid in result.visible_question_ids
        if qid in snapshot and snapshot[qid].severity is not None
    )
    progress_pct = round(answered_visible / total_visible * 100) if total_visible else 0

    return ProgressSummary(
        total_visible=total_visible,
        answered_visible=answered_visible,
        progress_pct=progress_pct,
        gaps_count=len(result.gaps_detailed),
    )
