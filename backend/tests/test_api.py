import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_provider, get_store
from api.router import limiter
from main import app
from services import gemini_client

LABEL_JSON = {
    "job_title": "Backend Engineer",
    "industry": "technology",
    "role_level": "mid",
    "required_skills": ["Python"],
    "candidate_experience_years": 6,
    "notable_patterns": [
        {"pattern_type": "quantification", "description": "Metrics everywhere", "is_positive": True}
    ],
}


@pytest.fixture
def client(monkeypatch, fake_provider, example_store):
    async def no_llm(prompt, temperature=0.3):
        return None

    monkeypatch.setattr(gemini_client, "generate_json", no_llm)
    monkeypatch.setattr(limiter, "enabled", False)
    app.dependency_overrides[get_provider] = lambda: fake_provider
    app.dependency_overrides[get_store] = lambda: example_store
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert isinstance(data["llm_configured"], bool)


def test_ats_score(client, sample_resume, sample_jd):
    response = client.post(
        "/ats-score", json={"resume_text": sample_resume, "job_description": sample_jd}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["ats"]["job_type"] == "tech"
    assert data["ats"]["passed"] == (data["ats"]["overall"] >= 75)
    assert "terraform" in data["ats"]["missing_keywords"]
    assert data["supplementary"] is None


def test_ats_score_validates_input(client, sample_jd):
    response = client.post("/ats-score", json={"resume_text": "", "job_description": sample_jd})
    assert response.status_code == 422


def test_upload_rejects_non_pdf(client):
    response = client.post(
        "/ats-score/upload",
        files={"resume_file": ("resume.txt", b"not a pdf", "text/plain")},
        data={"job_description": "Python developer"},
    )
    assert response.status_code == 400


def test_upload_rejects_unparseable_pdf(client):
    response = client.post(
        "/ats-score/upload",
        files={"resume_file": ("resume.pdf", b"garbage bytes", "application/pdf")},
        data={"job_description": "Python developer"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Could not parse PDF file"


def test_upload_rejects_pdf_without_text(client, pdf_factory):
    response = client.post(
        "/ats-score/upload",
        files={"resume_file": ("resume.pdf", pdf_factory([""]), "application/pdf")},
        data={"job_description": "Python developer"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "No text could be extracted from PDF"


def test_upload_requires_job_description(client, pdf_factory):
    response = client.post(
        "/ats-score/upload",
        files={"resume_file": ("resume.pdf", pdf_factory(["Python engineer"]), "application/pdf")},
        data={"job_description": "   "},
    )
    assert response.status_code == 400


def test_upload_scores_pdf(client, pdf_factory):
    pdf = pdf_factory(["Python engineer building Docker services"] + ["More work"] * 2)
    response = client.post(
        "/ats-score/upload",
        files={"resume_file": ("resume.pdf", pdf, "application/pdf")},
        data={"job_description": "Python developer with Docker"},
    )
    assert response.status_code == 200
    ats = response.json()["ats"]
    assert "python" in ats["matched_keywords"]
    messages = " ".join(i["message"] for i in ats["issues"])
    assert "3 pages" in messages


def test_semantic_score(client, sample_resume, sample_jd):
    response = client.post(
        "/semantic-score", json={"resume_text": sample_resume, "job_description": sample_jd}
    )
    assert response.status_code == 200
    assert response.json()["overall_score"] == 100


def test_semantic_score_without_sections(client, sample_jd):
    response = client.post("/semantic-score", json={"resume_text": "Hi", "job_description": sample_jd})
    assert response.status_code == 422


def test_semantic_score_rejects_blank_job_description(client, sample_resume):
    response = client.post(
        "/semantic-score", json={"resume_text": sample_resume, "job_description": "   "}
    )
    assert response.status_code == 422


def test_semantic_score_provider_outage(client, failing_provider, sample_resume, sample_jd):
    app.dependency_overrides[get_provider] = lambda: failing_provider
    response = client.post(
        "/semantic-score", json={"resume_text": sample_resume, "job_description": sample_jd}
    )
    assert response.status_code == 503


def test_analyze(client, sample_resume, sample_jd):
    response = client.post(
        "/analyze", json={"resume_text": sample_resume, "job_description": sample_jd}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["degraded"] is True
    assert data["semantic"]["overall_score"] == 100
    assert data["learned"]["similar_jobs_found"] == 2
    assert len(data["section_feedback"]) == 6
    assert "keyword_density" not in data


def test_contrastive(client):
    body = {
        "positive": [{"quantification": {"metrics_count": 10}}],
        "negative": [{"quantification": {"metrics_count": 2}}],
        "user_patterns": {"quantification": {"metrics_count": 1}},
    }
    response = client.post("/contrastive", json=body)
    assert response.status_code == 200
    data = response.json()
    assert data["result"]["has_contrastive_data"] is True
    assert data["result"]["insights"][0]["metric"] == "total_metrics"
    assert len(data["suggestions"]) == 1


def test_contrastive_without_negatives(client):
    response = client.post("/contrastive", json={"positive": [{}], "negative": []})
    assert response.status_code == 200
    assert response.json()["result"]["has_contrastive_data"] is False
    assert response.json()["suggestions"] == []


def test_create_example(client, monkeypatch, example_store, sample_resume, sample_jd):
    async def labels(prompt, temperature=0.3):
        return LABEL_JSON

    monkeypatch.setattr(gemini_client, "generate_json", labels)
    before = len(example_store)
    response = client.post("/examples", json={
        "resume_text": sample_resume, "job_description": sample_jd, "outcome_type": "positive",
    })
    assert response.status_code == 201
    data = response.json()
    assert data["industry"] == "technology"
    assert data["validation"]["valid"] is True
    assert len(example_store) == before + 1


def test_create_example_without_llm(client, sample_resume, sample_jd):
    response = client.post("/examples", json={
        "resume_text": sample_resume, "job_description": sample_jd, "outcome_type": "negative",
    })
    assert response.status_code == 502


def test_create_example_rejects_blank_job_description(client, monkeypatch, example_store, sample_resume):
    async def labels(prompt, temperature=0.3):
        return LABEL_JSON

    monkeypatch.setattr(gemini_client, "generate_json", labels)
    before = len(example_store)
    response = client.post("/examples", json={
        "resume_text": sample_resume, "job_description": "   ", "outcome_type": "positive",
    })
    assert response.status_code == 422
    assert len(example_store) == before


def test_create_example_rejects_unknown_outcome(client, sample_resume, sample_jd):
    response = client.post("/examples", json={
        "resume_text": sample_resume, "job_description": sample_jd, "outcome_type": "maybe",
    })
    assert response.status_code == 422


def test_rate_limit(client, monkeypatch):
    monkeypatch.setattr(limiter, "enabled", True)
    limiter.reset()
    statuses = [
        client.post("/contrastive", json={}).status_code for _ in range(11)
    ]
    limiter.reset()
    assert statuses[:10] == [200] * 10
    assert statuses[10] == 429
