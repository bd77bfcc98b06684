"""Schemas for the readiness questionnaire catalog."""

from __future__ import annotations

import re
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UrgencyLevel = Literal["High", "Medium", "Low"]

_WHITESPACE = re.compile(r"\s+")


class UrgencyCondition(str, Enum):
    """The closed set of predicates an urgency rule may test.

    Values are the canonical catalog spellings. Any other spelling decodes to
    UNRECOGNIZED, which never matches.
    """

    LOW_SEVERITY_HIGH_WEIGHT = "score<2 && weight>=8"
    LOW_SEVERITY_LOW_WEIGHT = "score<2 && weight<8"
    PARTIAL = "score==2"
    MATURE = "score>=3"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def _missing_(cls, value: object) -> UrgencyCondition:
        if not isinstance(value, str):
            return cls.UNRECOGNIZED
        normalised = (
            _WHITESPACE.sub("", value)
            .replace("severity", "score")
            .replace("≥", ">=")
            .replace("≤", "<=")
        )
        clauses = frozenset(c for c in normalised.split("&&") if c)
        return _CONDITION_CLAUSES.get(clauses, cls.UNRECOGNIZED)

    def matches(self, severity: int, weight: int) -> bool:
        """Evaluate this predicate for a recorded severity and question weight."""
        if self is UrgencyCondition.LOW_SEVERITY_HIGH_WEIGHT:
            return severity < 2 and weight >= 8
        if self is UrgencyCondition.LOW_SEVERITY_LOW_WEIGHT:
            return severity < 2 and weight < 8
        if self is UrgencyCondition.PARTIAL:
            return severity == 2
        if self is UrgencyCondition.MATURE:
            return severity >= 3
        return False


_CONDITION_CLAUSES = {
    frozenset({"score<2", "weight>=8"}): UrgencyCondition.LOW_SEVERITY_HIGH_WEIGHT,
    frozenset({"score<2", "weight<8"}): UrgencyCondition.LOW_SEVERITY_LOW_WEIGHT,
    frozenset({"score==2"}): UrgencyCondition.PARTIAL,
    frozenset({"score>=3"}): UrgencyCondition.MATURE,
}


class CatalogModel(BaseModel):
    """Base for catalog entries; accepts both camelCase and snake_case keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class AnswerChoice(CatalogModel):
    """A selectable answer and the severity it records."""

    label: str
    score: int = Field(..., ge=0)


class SkipCondition(CatalogModel):
    """Hide a question unless a prerequisite question reached a minimum score."""

    question_id: str
    min_score: int = Field(..., ge=0)


class UrgencyRule(CatalogModel):
    """Maps a condition on (severity, weight) to an urgency level."""

    condition: UrgencyCondition
    urgency: UrgencyLevel

    @field_validator("condition", mode="before")
    @classmethod
    def _decode_condition(cls, value: object) -> UrgencyCondition:
        if isinstance(value, UrgencyCondition):
            return value
        return UrgencyCondition(value)


class QuestionDefinition(CatalogModel):
    """A single scored question."""

    id: str
    section: str
    question: str
    answers: list[AnswerChoice] = Field(default_factory=list)
    weight: int = Field(..., gt=0)
    skip_condition: SkipCondition | None = None
    urgency_rules: list[UrgencyRule] = Field(default_factory=list)
    gap_description: str | None = None
    recommendation: str | None = None
    relevant_clause: str | None = None


class SectionDefinition(CatalogModel):
    """An ordered group of questions, e.g. Governance."""

    id: str
    title: str
    description: str = ""
    questions: list[QuestionDefinition] = Field(default_factory=list)


class Catalog(CatalogModel):
    """The full questionnaire in catalog order."""

    title: str
    version: str
    description: str = ""
    max_severity: int = Field(default=4, ge=1)
    sections: list[SectionDefinition] = Field(default_factory=list)

    @property
    def questions(self) -> list[QuestionDefinition]:
        return [q for section in self.sections for q in section.questions]

    def get_question(self, question_id: str) -> QuestionDefinition | None:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None
