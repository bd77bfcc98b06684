"""Skip-condition handling for questionnaire questions."""

from __future__ import annotations

from collections.abc import Mapping

from climate_readiness.schemas.answers import AnswerRecord
from climate_readiness.schemas.eligibility import ApplicabilityProfile
from climate_readiness.schemas.questionnaire import QuestionDefinition


def is_question_visible(
    question: QuestionDefinition,
    answers: Mapping[str, AnswerRecord],
    profile: ApplicabilityProfile | None = None,
) -> dict[str, bool]:
    """Decide whether a question is shown for the current answers.

    A question is hidden only when its prerequisite has a recorded severity
    strictly below the skip condition's minimum score. An unanswered
    prerequisite leaves the question visible.

    The applicability profile is accepted for interface stability; no skip
    condition currently depends on it.
    """
    condition = question.skip_condition
    if condition is None:
        return {"visible": True}

    prerequisite = answers.get(condition.question_id)
    if prerequisite is None or prerequisite.severity is None:
        return {"visible": True}

    if prerequisite.severity < condition.min_score:
        return {"visible": False}

    return {"visible": True}
