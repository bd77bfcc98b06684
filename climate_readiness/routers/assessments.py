"""Assessment endpoints: classification, answers, scoring and report export."""

from __future__ import annotations

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, HTTPException, Query, Request, Response

from climate_readiness.schemas.answers import AnswerRecord, AnswerSet
from climate_readiness.schemas.assessment import (
    AnswersResponse,
    ClassificationResponse,
    ExportRequest,
)
from climate_readiness.schemas.eligibility import EntityProfile
from climate_readiness.schemas.questionnaire import Catalog
from climate_readiness.schemas.scoring import ProgressResponse, ScoreResponse, ScoringResult
from climate_readiness.services.eligibility import classify_entity, derive_applicability_profile
from climate_readiness.services.renderer_client import RendererClientError
from climate_readiness.services.report_bundle import build_report_bundle
from climate_readiness.services.scoring_engine import score_answers, summarise_progress
from climate_readiness.store import AssessmentSnapshot, data_store

logger = structlog.get_logger()

router = APIRouter(prefix="/assessments", tags=["assessments"])

NOT_CLASSIFIED = "Entity has not been classified; submit the entity profile first."


def _require_question(catalog: Catalog, question_id: str) -> None:
    if catalog.get_question(question_id) is None:
        raise HTTPException(status_code=404, detail=f"Question '{question_id}' not found")


def _validate_answer(catalog: Catalog, question_id: str, record: AnswerRecord) -> None:
    if record.severity is not None and record.severity > catalog.max_severity:
        raise HTTPException(
            status_code=422,
            detail=(
                f"Severity {record.severity} for '{question_id}' is outside "
                f"0..{catalog.max_severity}"
            ),
        )


def _score(request: Request, snapshot: AssessmentSnapshot) -> ScoringResult | None:
    """Score a stored snapshot, or return None when it has not been classified."""
    if not snapshot.is_classified:
        return None
    settings = request.app.state.settings
    return score_answers(
        snapshot.answers,
        snapshot.applicability,
        request.app.state.catalog,
        neutral_severity=settings.neutral_severity,
        low_threshold=settings.readiness_low_threshold,
        mid_threshold=settings.readiness_mid_threshold,
    )


# --- Entity classification ----------------------------------------------------


@router.put("/{assessment_id}/entity", response_model=ClassificationResponse)
async def classify_assessment_entity(
    assessment_id: str,
    entity: EntityProfile,
    request: Request,
    assurance_required: bool = Query(default=False),
) -> ClassificationResponse:
    """Save the entity profile, classify it and store the outcome."""
    settings = request.app.state.settings
    eligibility = classify_entity(entity, start_dates=settings.tier_start_dates)
    applicability = derive_applicability_profile(eligibility, assurance_required=assurance_required)

    data_store.save_classification(assessment_id, eligibility, applicability, entity=entity)

    logger.info(
        "entity_classified",
        assessment_id=assessment_id,
        in_scope=eligibility.in_scope,
        tier=eligibility.tier,
        size_thresholds_met=eligibility.size_thresholds_met,
    )

    return ClassificationResponse(
        assessment_id=assessment_id,
        eligibility=eligibility,
        applicability=applicability,
    )


@router.get("/{assessment_id}/eligibility", response_model=ClassificationResponse)
async def get_eligibility(assessment_id: str) -> ClassificationResponse:
    """Stored eligibility and applicability for an assessment."""
    snapshot = data_store.snapshot(assessment_id)
    if snapshot.eligibility is None or snapshot.applicability is None:
        raise HTTPException(status_code=404, detail=f"Assessment '{assessment_id}' has not been classified")
    return ClassificationResponse(
        assessment_id=assessment_id,
        eligibility=snapshot.eligibility,
        applicability=snapshot.applicability,
    )


# --- Answers ------------------------------------------------------------------


def _answers_response(assessment_id: str, answers: AnswerSet) -> AnswersResponse:
    return AnswersResponse(
        assessment_id=assessment_id,
        answered_count=sum(1 for record in answers.values() if record.is_answered),
        answers=answers.to_dict(),
    )


@router.get("/{assessment_id}/answers", response_model=AnswersResponse)
async def get_answers(assessment_id: str) -> AnswersResponse:
    return _answers_response(assessment_id, data_store.get_answers(assessment_id))


@router.put("/{assessment_id}/answers", response_model=AnswersResponse)
async def replace_answers(
    assessment_id: str,
    answers: dict[str, AnswerRecord],
    request: Request,
) -> AnswersResponse:
    """Replace the whole answer map."""
    catalog: Catalog = request.app.state.catalog
    for question_id, record in answers.items():
        _require_question(catalog, question_id)
        _validate_answer(catalog, question_id, record)

    snapshot = AnswerSet(answers)
    data_store.replace_answers(assessment_id, snapshot)
    return _answers_response(assessment_id, snapshot)


@router.put("/{assessment_id}/answers/{question_id}", response_model=AnswersResponse)
async def record_answer(
    assessment_id: str,
    question_id: str,
    record: AnswerRecord,
    request: Request,
) -> AnswersResponse:
    """Record a single answer."""
    catalog: Catalog = request.app.state.catalog
    _require_question(catalog, question_id)
    _validate_answer(catalog, question_id, record)

    snapshot = data_store.record_answer(assessment_id, question_id, record)
    return _answers_response(assessment_id, snapshot)


# --- Scoring ------------------------------------------------------------------


@router.get("/{assessment_id}/score", response_model=ScoreResponse)
async def get_score(assessment_id: str, request: Request) -> ScoreResponse:
    """Score the current answers; not computable until the entity is classified."""
    result = _score(request, data_store.snapshot(assessment_id))
    if result is None:
        return ScoreResponse(assessment_id=assessment_id, status="not_computable", reason=NOT_CLASSIFIED)
    return ScoreResponse(assessment_id=assessment_id, status="computable", result=result)


@router.get("/{assessment_id}/progress", response_model=ProgressResponse)
async def get_progress(assessment_id: str, request: Request) -> ProgressResponse:
    snapshot = data_store.snapshot(assessment_id)
    result = _score(request, snapshot)
    if result is None:
        return ProgressResponse(assessment_id=assessment_id, status="not_computable", reason=NOT_CLASSIFIED)
    progress = summarise_progress(
        snapshot.answers,
        snapshot.applicability,
        request.app.state.catalog,
        result=result,
    )
    return ProgressResponse(assessment_id=assessment_id, status="computable", progress=progress)


# --- Report -------------------------------------------------------------------


def _bundle(request: Request, assessment_id: str, sections: list[str] | None = None) -> dict:
    snapshot = data_store.snapshot(assessment_id)
    result = _score(request, snapshot)
    if result is None:
        raise HTTPException(status_code=409, detail=NOT_CLASSIFIED)
    return build_report_bundle(
        snapshot.entity,
        snapshot.eligibility,
        snapshot.applicability,
        result,
        answers=snapshot.answers,
        sections=sections,
    )


@router.get("/{assessment_id}/report")
async def get_report(assessment_id: str, request: Request) -> dict:
    """Flat report bundle as sent to the PDF renderer."""
    return _bundle(request, assessment_id)


@router.post("/{assessment_id}/export")
async def export_report(
    assessment_id: str,
    request: Request,
    export: ExportRequest | None = None,
) -> Response:
    """Render the report bundle to PDF via the export service."""
    if export is None:
        export = ExportRequest()
    bundle = _bundle(request, assessment_id, sections=export.sections)

    try:
        pdf = await request.app.state.renderer.render_pdf(bundle, origin=export.origin)
    except RendererClientError as exc:
        logger.error("report_export_failed", assessment_id=assessment_id, error=str(exc))
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    filename = f"AASB_S2_Readiness_Report_{datetime.now(timezone.utc).date().isoformat()}.pdf"
    logger.info("report_exported", assessment_id=assessment_id, size_bytes=len(pdf))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# --- Lifecycle ----------------------------------------------------------------


@router.delete("/{assessment_id}")
async def delete_assessment(assessment_id: str) -> dict[str, str]:
    """Clear every stored document for the assessment."""
    if not data_store.clear(assessment_id):
        raise HTTPException(status_code=404, detail=f"Assessment '{assessment_id}' not found")
    return {"status": "deleted", "assessment_id": assessment_id}
