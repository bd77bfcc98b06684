"""In-memory data store for assessment documents.

Each assessment keeps a handful of logical documents (company profile,
classification, applicability profile, answers) as plain JSON-safe dicts, so
they can be moved to any key-value backend unchanged. Observers are told
which document changed; they re-read and re-score on their own.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

from climate_readiness.schemas.answers import AnswerRecord, AnswerSet
from climate_readiness.schemas.eligibility import (
    ApplicabilityProfile,
    EligibilityResult,
    EntityProfile,
)

logger = structlog.get_logger()

COMPANY_PROFILE = "company_profile"
CLASSIFICATION = "classification"
APPLICABILITY = "applicability"
ANSWERS = "answers"

DOCUMENTS = (COMPANY_PROFILE, CLASSIFICATION, APPLICABILITY, ANSWERS)

Observer = Callable[[str, str], None]


@dataclass(frozen=True)
class AssessmentSnapshot:
    """Every document of one assessment, read in a single swap."""

    entity: EntityProfile | None
    eligibility: EligibilityResult | None
    applicability: ApplicabilityProfile | None
    answers: AnswerSet

    @property
    def is_classified(self) -> bool:
        return self.applicability is not None


class DataStore:
    """Thread-safe in-memory document store with change notification."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.documents: dict[str, dict[str, Any]] = {}  # assessment_id -> document -> data
        self._observers: list[Observer] = []

    def reset(self) -> None:
        """Clear all data and observers; used in tests."""
        self.__init__()

    # --- Observers ------------------------------------------------------------

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """Register a change callback; returns a function that unregisters it."""
        with self._lock:
            self._observers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._observers:
                    self._observers.remove(callback)

        return unsubscribe

    def _notify(self, assessment_id: str, document: str) -> None:
        with self._lock:
            observers = list(self._observers)
        for callback in observers:
            try:
                callback(assessment_id, document)
            except Exception:
                logger.exception(
                    "store_observer_failed",
                    assessment_id=assessment_id,
                    document=document,
                )

    # --- Raw documents --------------------------------------------------------

    def get_document(self, assessment_id: str, document: str) -> Any:
        """Return a stored document, or None if it has not been written."""
        return self.documents.get(assessment_id, {}).get(document)

    def put_document(self, assessment_id: str, document: str, data: Any) -> None:
        """Replace a document and notify observers."""
        self.put_documents(assessment_id, {document: data})

    def put_documents(self, assessment_id: str, documents: dict[str, Any]) -> None:
        """Replace several documents in one swap, then notify once per document.

        Observers never see some of the documents written and others stale.
        """
        with self._lock:
            current = self.documents.get(assessment_id, {})
            self.documents[assessment_id] = {**current, **documents}
        for document in documents:
            self._notify(assessment_id, document)

    def snapshot(self, assessment_id: str) -> AssessmentSnapshot:
        """Decode all documents of an assessment from one consistent view."""
        with self._lock:
            documents = self.documents.get(assessment_id, {})
        entity = documents.get(COMPANY_PROFILE)
        eligibility = documents.get(CLASSIFICATION)
        applicability = documents.get(APPLICABILITY)
        return AssessmentSnapshot(
            entity=EntityProfile.model_validate(entity) if entity is not None else None,
            eligibility=EligibilityResult.model_validate(eligibility) if eligibility is not None else None,
            applicability=(
                ApplicabilityProfile.model_validate(applicability) if applicability is not None else None
            ),
            answers=AnswerSet.from_dict(documents.get(ANSWERS)),
        )

    def has_data(self, assessment_id: str) -> bool:
        """True when any document exists for the assessment."""
        return bool(self.documents.get(assessment_id))

    def clear(self, assessment_id: str) -> bool:
        """Remove every document for an assessment. Returns False if none existed."""
        with self._lock:
            existed = self.documents.pop(assessment_id, None) is not None
        if existed:
            for document in DOCUMENTS:
                self._notify(assessment_id, document)
        return existed

    # --- Company profile ------------------------------------------------------

    def save_entity_profile(self, assessment_id: str, entity: EntityProfile) -> None:
        self.put_document(assessment_id, COMPANY_PROFILE, entity.model_dump(mode="json"))

    def get_entity_profile(self, assessment_id: str) -> EntityProfile | None:
        data = self.get_document(assessment_id, COMPANY_PROFILE)
        return EntityProfile.model_validate(data) if data is not None else None

    # --- Classification -------------------------------------------------------

    def save_classification(
        self,
        assessment_id: str,
        eligibility: EligibilityResult,
        profile: ApplicabilityProfile,
        entity: EntityProfile | None = None,
    ) -> None:
        """Store an eligibility result together with its applicability profile.

        When the entity profile it was derived from is given, it is written in
        the same swap.
        """
        documents = {
            CLASSIFICATION: eligibility.model_dump(mode="json"),
            APPLICABILITY: profile.model_dump(mode="json"),
        }
        if entity is not None:
            documents = {COMPANY_PROFILE: entity.model_dump(mode="json"), **documents}
        self.put_documents(assessment_id, documents)

    def get_classification(self, assessment_id: str) -> EligibilityResult | None:
        data = self.get_document(assessment_id, CLASSIFICATION)
        return EligibilityResult.model_validate(data) if data is not None else None

    def get_applicability_profile(self, assessment_id: str) -> ApplicabilityProfile | None:
        data = self.get_document(assessment_id, APPLICABILITY)
        return ApplicabilityProfile.model_validate(data) if data is not None else None

    # --- Answers --------------------------------------------------------------

    def get_answers(self, assessment_id: str) -> AnswerSet:
        """Return an immutable snapshot of the current answers."""
        return AnswerSet.from_dict(self.get_document(assessment_id, ANSWERS))

    def replace_answers(self, assessment_id: str, answers: AnswerSet) -> None:
        self.put_document(assessment_id, ANSWERS, answers.to_dict())

    def record_answer(self, assessment_id: str, question_id: str, record: AnswerRecord) -> AnswerSet:
        """Add or overwrite one answer; returns the new snapshot."""
        with self._lock:
            current = AnswerSet.from_dict(self.documents.get(assessment_id, {}).get(ANSWERS))
            updated = current.with_answer(question_id, record)
            documents = self.documents.get(assessment_id, {})
            self.documents[assessment_id] = {**documents, ANSWERS: updated.to_dict()}
        self._notify(assessment_id, ANSWERS)
        return updated


# Global singleton, replaced in tests
data_store = DataStore()
