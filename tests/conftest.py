"""Shared test fixtures for the AASB S2 readiness test suite."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient

from climate_readiness.app import create_app
from climate_readiness.config import Settings
from climate_readiness.schemas.answers import AnswerRecord, AnswerSet
from climate_readiness.schemas.eligibility import ApplicabilityProfile, EntityProfile
from climate_readiness.services.catalog import get_catalog, parse_catalog
from climate_readiness.services.renderer_client import RendererClient
from climate_readiness.store import data_store

FAKE_PDF = b"%PDF-1.4\n% readiness report\n%%EOF\n"


def _test_settings() -> Settings:
    """Return settings suitable for testing."""
    return Settings(
        environment="development",
        debug=True,
        log_format="console",
        rate_limit_default="1000/minute",
        rate_limit_burst="2000/minute",
        allowed_origins="http://localhost:8080,http://localhost:5173",
        renderer_url="http://renderer.test",
    )


def _renderer_handler(request: httpx.Request) -> httpx.Response:
    """Stand-in for the PDF export service."""
    if request.url.path == "/api/health":
        return httpx.Response(200, json={"ok": True})
    if request.url.path == "/api/export/pdf":
        return httpx.Response(200, content=FAKE_PDF, headers={"content-type": "application/pdf"})
    return httpx.Response(404, json={"error": "not found"})


@pytest.fixture
def settings():
    """Test settings."""
    return _test_settings()


@pytest.fixture
def app(settings):
    """A fresh FastAPI app whose renderer talks to an in-process mock."""
    application = create_app(settings)
    application.state.renderer = RendererClient(
        settings.renderer_url,
        transport=httpx.MockTransport(_renderer_handler),
    )
    return application


@pytest.fixture
def client(app):
    """HTTP test client."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_store():
    """Reset the global data store before each test."""
    data_store.reset()
    yield
    data_store.reset()


@pytest.fixture
def catalog():
    """The built-in AASB S2 catalog."""
    return get_catalog()


@pytest.fixture
def governance_catalog():
    """One Governance section: Q1 (weight 10) gates Q2 (weight 4) at score 3."""
    rules = [
        {"condition": "severity<2 && weight>=8", "urgency": "High"},
        {"condition": "severity<2 && weight<8", "urgency": "Medium"},
        {"condition": "severity==2", "urgency": "Medium"},
        {"condition": "severity>=3", "urgency": "Low"},
    ]
    return parse_catalog({
        "questionnaire": [
            {
                "id": "Q1",
                "section": "Governance",
                "question": "Is climate oversight assigned to the board?",
                "weight": 10,
                "urgencyRules": rules,
            },
            {
                "id": "Q2",
                "section": "Governance",
                "question": "Does the board review climate risks each meeting?",
                "weight": 4,
                "skipCondition": {"questionId": "Q1", "minScore": 3},
                "urgencyRules": rules,
            },
        ],
        "metadata": {
            "title": "Governance check",
            "version": "test",
            "sections": [{"id": "governance", "title": "Governance"}],
            "scoring": {"levels": [{"score": s} for s in range(5)]},
        },
    })


@pytest.fixture
def group1_profile():
    """Applicability profile for a Group 1 entity."""
    return ApplicabilityProfile(entity_group=1, first_reporting_period="2025-01-01")


@pytest.fixture
def large_entity():
    """A Chapter 2M reporter in the top bracket on every size dimension."""
    return EntityProfile(
        company_name="Southern Cross Minerals Ltd",
        industry="Mining",
        entity_type="for-profit",
        chapter_2m="yes",
        revenue="gte-500m",
        gross_assets="gte-1b",
        employees="gte-500",
        nger_reporter="no",
        aum_over_5b="no",
    )


@pytest.fixture
def sample_answers():
    """A partially completed governance and strategy response set."""
    return AnswerSet({
        "G1": AnswerRecord(severity=1),
        "G2": AnswerRecord(severity=3),
        "G3": AnswerRecord(severity=4),
        "S1": AnswerRecord(severity=0),
        "S3": AnswerRecord(severity=2, not_applicable=True),
    })


@pytest.fixture
def classified_assessment(client, large_entity):
    """An assessment whose entity has been classified through the API."""
    assessment_id = "southern-cross"
    response = client.put(
        f"/api/assessments/{assessment_id}/entity",
        json=large_entity.model_dump(exclude_none=True),
    )
    assert response.status_code == 200
    return assessment_id
