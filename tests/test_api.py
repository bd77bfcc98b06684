"""API tests for the catalog and assessment endpoints."""

from __future__ import annotations

import httpx
import pytest
from structlog.testing import capture_logs

from climate_readiness.services.renderer_client import RendererClient
from climate_readiness.store import data_store


# ─── Test 1: Catalog ─────────────────────────────────────────────────────────

class TestCatalogEndpoint:
    """GET /api/catalog"""

    def test_catalog_uses_camel_case(self, client):
        response = client.get("/api/catalog")
        assert response.status_code == 200
        data = response.json()
        assert data["maxSeverity"] == 4
        assert [s["id"] for s in data["sections"]] == [
            "governance", "strategy", "risk-management", "metrics-targets",
        ]
        g2 = data["sections"][0]["questions"][1]
        assert g2["skipCondition"] == {"questionId": "G1", "minScore": 2}


# ─── Test 2: Entity classification ───────────────────────────────────────────

class TestEntityEndpoint:
    """PUT /api/assessments/{id}/entity and GET .../eligibility"""

    def test_classify_large_entity(self, client, large_entity):
        response = client.put("/api/assessments/a1/entity", json=large_entity.model_dump(exclude_none=True))
        assert response.status_code == 200
        data = response.json()
        assert data["eligibility"]["in_scope"] is True
        assert data["eligibility"]["tier"] == 1
        assert data["eligibility"]["mandatory_start_date"] == "2025-01-01"
        assert data["applicability"]["entity_group"] == 1

    def test_classification_is_stored(self, client, classified_assessment, large_entity):
        assert data_store.get_entity_profile(classified_assessment) == large_entity
        response = client.get(f"/api/assessments/{classified_assessment}/eligibility")
        assert response.status_code == 200
        assert response.json()["eligibility"]["tier"] == 1

    def test_eligibility_not_found(self, client):
        assert client.get("/api/assessments/unknown/eligibility").status_code == 404

    def test_voluntary_entity(self, client):
        response = client.put("/api/assessments/a2/entity", json={"chapter_2m": "no", "revenue": "gte-500m"})
        data = response.json()
        assert data["eligibility"]["tier"] == "voluntary"
        assert data["applicability"]["entity_group"] == "voluntary"

    def test_assurance_required_flag(self, client, large_entity):
        response = client.put(
            "/api/assessments/a1/entity?assurance_required=true",
            json=large_entity.model_dump(exclude_none=True),
        )
        assert response.json()["applicability"]["assurance_profile"]["governance"] == "limited"

    def test_classification_is_logged(self, client):
        with capture_logs() as logs:
            client.put("/api/assessments/a3/entity", json={"chapter_2m": "yes"})
        event = next(e for e in logs if e["event"] == "entity_classified")
        assert event["assessment_id"] == "a3"
        assert event["tier"] == 3


# ─── Test 3: Answers ─────────────────────────────────────────────────────────

class TestAnswerEndpoints:
    """Answer recording and replacement."""

    def test_record_single_answer(self, client):
        response = client.put("/api/assessments/a1/answers/G1", json={"severity": 3})
        assert response.status_code == 200
        data = response.json()
        assert data["answered_count"] == 1
        assert data["answers"]["G1"] == {"severity": 3, "not_applicable": False}

    def test_na_alias(self, client):
        client.put("/api/assessments/a1/answers/S3", json={"severity": 1, "na": True})
        assert data_store.get_answers("a1")["S3"].not_applicable is True

    def test_unknown_question(self, client):
        response = client.put("/api/assessments/a1/answers/Z9", json={"severity": 1})
        assert response.status_code == 404

    def test_severity_above_scale_rejected(self, client):
        response = client.put("/api/assessments/a1/answers/G1", json={"severity": 5})
        assert response.status_code == 422

    def test_negative_severity_rejected(self, client):
        response = client.put("/api/assessments/a1/answers/G1", json={"severity": -1})
        assert response.status_code == 422

    def test_replace_answers(self, client):
        client.put("/api/assessments/a1/answers/M1", json={"severity": 2})
        response = client.put("/api/assessments/a1/answers", json={
            "G1": {"severity": 1},
            "G3": {"severity": None, "not_applicable": True},
        })
        assert response.status_code == 200
        data = response.json()
        assert set(data["answers"]) == {"G1", "G3"}
        assert data["answered_count"] == 1

    def test_replace_answers_validates_scale(self, client):
        response = client.put("/api/assessments/a1/answers", json={"G1": {"severity": 9}})
        assert response.status_code == 422
        assert len(data_store.get_answers("a1")) == 0

    def test_boolean_severity_rejected(self, client):
        response = client.put("/api/assessments/a1/answers/G1", json={"severity": True})
        assert response.status_code == 422
        assert len(data_store.get_answers("a1")) == 0

    def test_replace_answers_rejects_unknown_question(self, client):
        """One unknown id rejects the whole map."""
        response = client.put("/api/assessments/a1/answers", json={
            "G1": {"severity": 1},
            "Z9": {"severity": 1},
        })
        assert response.status_code == 404
        assert "Z9" in response.json()["detail"]
        assert len(data_store.get_answers("a1")) == 0

    def test_get_answers_empty(self, client):
        data = client.get("/api/assessments/new/answers").json()
        assert data == {"assessment_id": "new", "answered_count": 0, "answers": {}}


# ─── Test 4: Scoring and progress ────────────────────────────────────────────

class TestScoringEndpoints:
    """Score and progress envelopes."""

    def test_score_not_computable_before_classification(self, client):
        client.put("/api/assessments/a1/answers/G1", json={"severity": 1})
        data = client.get("/api/assessments/a1/score").json()
        assert data["status"] == "not_computable"
        assert data["reason"]
        assert data["result"] is None

    def test_progress_not_computable_before_classification(self, client):
        data = client.get("/api/assessments/a1/progress").json()
        assert data["status"] == "not_computable"
        assert data["progress"] is None

    def test_score_after_classification(self, client, classified_assessment):
        client.put(f"/api/assessments/{classified_assessment}/answers/G1", json={"severity": 1})
        data = client.get(f"/api/assessments/{classified_assessment}/score").json()

        assert data["status"] == "computable"
        result = data["result"]
        assert "G2" not in result["visible_question_ids"]
        assert result["weighted_per_question"]["G1"] == 10
        g1 = next(g for g in result["gaps_detailed"] if g["id"] == "G1")
        assert g1["priority"] == "High"
        assert g1["adjusted_weight"] == 15.0

    def test_score_reflects_latest_answers(self, client, classified_assessment):
        url = f"/api/assessments/{classified_assessment}"
        client.put(f"{url}/answers/G1", json={"severity": 1})
        first = client.get(f"{url}/score").json()["result"]["total_score"]
        client.put(f"{url}/answers/G1", json={"severity": 4})
        second = client.get(f"{url}/score").json()["result"]["total_score"]
        assert first != second

    def test_progress_after_classification(self, client, classified_assessment):
        url = f"/api/assessments/{classified_assessment}"
        client.put(f"{url}/answers/G1", json={"severity": 4})
        data = client.get(f"{url}/progress").json()
        assert data["status"] == "computable"
        assert data["progress"]["answered_visible"] == 1
        assert data["progress"]["total_visible"] == 17


# ─── Test 5: Report and export ───────────────────────────────────────────────

class TestReportEndpoints:
    """Report bundle and PDF export."""

    def test_report_requires_classification(self, client):
        assert client.get("/api/assessments/a1/report").status_code == 409
        assert client.post("/api/assessments/a1/export").status_code == 409

    def test_report_bundle(self, client, classified_assessment):
        data = client.get(f"/api/assessments/{classified_assessment}/report").json()
        assert data["company"]["company_name"] == "Southern Cross Minerals Ltd"
        assert data["classification"]["group"] == "Group 1"
        assert data["scoring"]["readiness"] in ("High", "Moderate", "Low")

    def test_report_reads_the_store_once(self, monkeypatch, client, classified_assessment):
        """Every part of the bundle comes from a single read of the store."""
        client.put(f"/api/assessments/{classified_assessment}/answers/G1", json={"severity": 1})
        reads = []
        snapshot = data_store.snapshot

        def counting_snapshot(assessment_id):
            reads.append(assessment_id)
            return snapshot(assessment_id)

        monkeypatch.setattr(data_store, "snapshot", counting_snapshot)
        monkeypatch.setattr(data_store, "get_document", lambda *args: pytest.fail("read outside snapshot"))

        assert client.get(f"/api/assessments/{classified_assessment}/report").status_code == 200
        assert client.get(f"/api/assessments/{classified_assessment}/progress").status_code == 200
        assert client.get(f"/api/assessments/{classified_assessment}/score").status_code == 200
        assert reads == [classified_assessment] * 3

    def test_export_returns_pdf(self, client, classified_assessment):
        response = client.post(
            f"/api/assessments/{classified_assessment}/export",
            json={"sections": ["gaps-analysis"]},
        )
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "AASB_S2_Readiness_Report_" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_export_renderer_failure_is_502(self, app, client, classified_assessment):
        app.state.renderer = RendererClient(
            "http://renderer.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(500, json={"error": "boom"})),
        )
        response = client.post(f"/api/assessments/{classified_assessment}/export")
        assert response.status_code == 502


# ─── Test 6: Lifecycle ───────────────────────────────────────────────────────

class TestDeleteAssessment:
    """DELETE /api/assessments/{id}"""

    def test_delete_clears_everything(self, client, classified_assessment):
        response = client.delete(f"/api/assessments/{classified_assessment}")
        assert response.status_code == 200
        assert data_store.has_data(classified_assessment) is False
        assert client.get(f"/api/assessments/{classified_assessment}/eligibility").status_code == 404

    def test_delete_unknown(self, client):
        assert client.delete("/api/assessments/nothing-here").status_code == 404
