"""Schemas for questionnaire answers."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictInt, ValidationError


class AnswerRecord(BaseModel):
    """The respondent's answer to one question.

    A record marked not applicable never contributes to the weighted score,
    whatever its severity.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    severity: StrictInt | None = Field(default=None, ge=0)
    not_applicable: bool = Field(
        default=False,
        validation_alias=AliasChoices("not_applicable", "na"),
    )

    @property
    def is_answered(self) -> bool:
        return self.severity is not None


class AnswerSet(Mapping[str, AnswerRecord]):
    """Immutable snapshot of answers keyed by question id.

    Updates return a new snapshot; existing snapshots never change.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Mapping[str, AnswerRecord] | None = None) -> None:
        self._records = MappingProxyType(dict(records or {}))

    def __getitem__(self, question_id: str) -> AnswerRecord:
        return self._records[question_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"<AnswerSet {len(self)} answer(s)>"

    def with_answer(self, question_id: str, record: AnswerRecord) -> AnswerSet:
        """Return a new snapshot with one answer added or replaced."""
        updated = dict(self._records)
        updated[question_id] = record
        return AnswerSet(updated)

    def without_answer(self, question_id: str) -> AnswerSet:
        """Return a new snapshot with one answer removed."""
        updated = {k: v for k, v in self._records.items() if k != question_id}
        return AnswerSet(updated)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Plain nested-dict form suitable for storage or JSON."""
        return {qid: record.model_dump(mode="json") for qid, record in self._records.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> AnswerSet:
        """Decode a stored answer map.

        Entries that cannot be decoded are dropped, so the question reads as
        unanswered.
        """
        records: dict[str, AnswerRecord] = {}
        if not isinstance(data, Mapping):
            return cls()
        for question_id, raw in data.items():
            if isinstance(raw, AnswerRecord):
                records[str(question_id)] = raw
                continue
            if not isinstance(raw, Mapping):
                continue
            try:
                records[str(question_id)] = AnswerRecord.model_validate(raw)
            except ValidationError:
                continue
        return cls(records)
