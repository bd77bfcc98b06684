"""Urgency evaluation for a single answered question."""

from __future__ import annotations

from climate_readiness.schemas.answers import AnswerRecord
from climate_readiness.schemas.questionnaire import QuestionDefinition, UrgencyLevel

DEFAULT_URGENCY: UrgencyLevel = "Medium"

URGENCY_LEVELS: tuple[UrgencyLevel, ...] = ("High", "Medium", "Low")


def evaluate_urgency(question: QuestionDefinition, answer: AnswerRecord | None) -> UrgencyLevel:
    """Return the urgency implied by an answer.

    Rules are tried in declared order and the first match wins. Unanswered
    questions, and answers no rule matches, default to Medium.
    """
    if answer is None or answer.severity is None:
        return DEFAULT_URGENCY

    for rule in question.urgency_rules:
        if rule.condition.matches(answer.severity, question.weight):
            return rule.urgency

    return DEFAULT_URGENCY


def rollup_urgency(levels: dict[str, int]) -> UrgencyLevel:
    """Highest urgency present in a tally; Low when the tally is empty."""
    if levels.get("High", 0) > 0:
        return "High"
    if levels.get("Medium", 0) > 0:
        return "Medium"
    return "Low"
