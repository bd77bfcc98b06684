"""Questionnaire catalog decoding."""

from __future__ import annotations

from typing import Any

import structlog

from climate_readiness.catalog_data import AASB_S2_QUESTIONNAIRE
from climate_readiness.schemas.questionnaire import Catalog, UrgencyCondition

logger = structlog.get_logger()

DEFAULT_MAX_SEVERITY = 4

_default_catalog: Catalog | None = None


def _slug(s: str) -> str:
    return "-".join("".join(ch.lower() if ch.isalnum() else " " for ch in s).split())


def _max_severity(metadata: dict[str, Any], questions: list[dict[str, Any]]) -> int:
    """Highest maturity level, from the scoring levels or else the answer scores."""
    levels = metadata.get("scoring", {}).get("levels", [])
    scores = [lvl.get("score") for lvl in levels if isinstance(lvl.get("score"), int)]
    if not scores:
        scores = [
            a.get("score")
            for q in questions
            for a in q.get("answers", [])
            if isinstance(a.get("score"), int)
        ]
    return max(scores) if scores else DEFAULT_MAX_SEVERITY


def _log_unrecognized_conditions(questions: list[dict[str, Any]]) -> None:
    for question in questions:
        for rule in question.get("urgencyRules", question.get("urgency_rules", [])):
            raw = rule.get("condition")
            if UrgencyCondition(raw) is UrgencyCondition.UNRECOGNIZED:
                logger.warning(
                    "urgency_condition_unrecognized",
                    question_id=question.get("id"),
                    condition=raw,
                )


def parse_catalog(data: dict[str, Any]) -> Catalog:
    """Decode an exported questionnaire into a Catalog.

    The input has a flat ``questionnaire`` list and ``metadata.sections``.
    Questions are attached to sections by title, in the order they appear.
    Questions naming a section missing from the metadata get a section of
    their own, appended after the declared ones.
    """
    metadata = data.get("metadata", {})
    questions = data.get("questionnaire", [])

    _log_unrecognized_conditions(questions)

    sections: dict[str, dict[str, Any]] = {}
    for section in metadata.get("sections", []):
        sections[section["title"]] = {**section, "questions": []}

    for question in questions:
        title = question.get("section", "")
        if title not in sections:
            sections[title] = {"id": _slug(title), "title": title, "description": "", "questions": []}
        sections[title]["questions"].append(question)

    catalog = Catalog.model_validate({
        "title": metadata.get("title", "Questionnaire"),
        "version": metadata.get("version", "0"),
        "description": metadata.get("description", ""),
        "max_severity": _max_severity(metadata, questions),
        "sections": list(sections.values()),
    })

    logger.debug(
        "catalog_loaded",
        title=catalog.title,
        version=catalog.version,
        sections=len(catalog.sections),
        questions=len(catalog.questions),
    )
    return catalog


def get_catalog() -> Catalog:
    """Return the built-in AASB S2 catalog, decoding it on first use."""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = parse_catalog(AASB_S2_QUESTIONNAIRE)
    return _default_catalog
