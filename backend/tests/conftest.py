"""Shared test configuration, fixtures and pytest markers."""

import pytest

from services.errors import EmbeddingUnavailableError
from services.example_store import InMemoryExampleStore

SAMPLE_RESUME = """Jane Smith
jane.smith@example.com | (555) 123-4567
linkedin.com/in/janesmith

Summary
Backend engineer with six years of experience building Python services and data platforms for high-traffic consumer products.

Experience
Senior Software Engineer, Acme Corp
January 2021 - Present
- Led migration of 40 services to Kubernetes, reducing deploy time by 60%
- Built REST APIs in Python and FastAPI serving 2,000,000 requests per day
- Mentored 5 engineers on testing and code review practices
- Increased test coverage to 90% across the payments platform

Software Engineer, Beta Labs
March 2018 - December 2020
- Developed data pipelines with PostgreSQL and Airflow for 300 clients
- Helped maintain the CI/CD pipeline and Docker images
- Reduced cloud spend by $120K per year through query optimization

Education
B.S. Computer Science, State University

Skills
Python, FastAPI, Django, PostgreSQL, Docker, Kubernetes, AWS, Git, CI/CD
"""

SAMPLE_JD = """Backend Software Engineer
We are looking for a backend engineer to build Python APIs on Kubernetes.
You will design microservices, own our PostgreSQL data model and run Terraform.
Experience with Docker, Kafka and CI/CD pipelines is required."""


class FakeEmbeddingProvider:
    """Deterministic embeddings: texts containing a marker get that marker's vector."""

    def __init__(self, default=None, overrides=None):
        self.default = list(default or [1.0, 0.0, 0.0])
        self.overrides = overrides or {}
        self.calls: list[str] = []

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        for marker, vector in self.overrides.items():
            if marker in text:
                return list(vector)
        return list(self.default)


class FailingEmbeddingProvider:
    async def embed(self, text: str) -> list[float]:
        raise EmbeddingUnavailableError("embedding service down")


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls the real Gemini API (needs GEMINI_API_KEY)"
    )


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def sample_jd() -> str:
    return SAMPLE_JD


@pytest.fixture
def fake_provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest.fixture
def provider_factory():
    return FakeEmbeddingProvider


@pytest.fixture
def failing_provider() -> FailingEmbeddingProvider:
    return FailingEmbeddingProvider()


@pytest.fixture
def example_rows() -> list[dict]:
    """Stored examples around the fake provider's default query vector [1, 0, 0]."""
    return [
        {
            "id": "pos-1",
            "job_title": "Backend Engineer",
            "industry": "technology",
            "role_level": "mid",
            "outcome_type": "positive",
            "content_patterns": {
                "action_verbs": {"verbs": ["Led", "Built", "Reduced", "Designed", "Launched"],
                                 "strong_verb_count": 8, "weak_verb_count": 0, "verb_diversity": 0.9},
                "quantification": {"metrics_count": 10, "avg_metrics_per_bullet": 1.2},
                "achievements": {"results_first_count": 5},
                "structure": {"bullet_count": 12, "section_order": ["Summary", "Experience", "Skills"]},
            },
            "required_skills": ["Python", "Kubernetes", "PostgreSQL"],
            "job_description_embedding": [1.0, 0.0, 0.0],
        },
        {
            "id": "neg-1",
            "job_title": "Backend Engineer",
            "industry": "technology",
            "role_level": "mid",
            "outcome_type": "negative",
            "content_patterns": {
                "action_verbs": {"verbs": ["Helped"], "strong_verb_count": 1,
                                 "weak_verb_count": 5, "verb_diversity": 0.4},
                "quantification": {"metrics_count": 2, "avg_metrics_per_bullet": 0.2},
                "keywords": {"jd_keywords_found": ["python"], "jd_keywords_missing": ["Kafka", "Terraform"]},
                "structure": {"bullet_count": 5},
            },
            "required_skills": ["Python"],
            "job_description_embedding": [0.9, 0.1, 0.0],
        },
        {
            "id": "far-1",
            "outcome_type": "positive",
            "job_description_embedding": [0.0, 1.0, 0.0],
        },
        {
            "id": "no-embedding",
            "outcome_type": "positive",
            "job_description_embedding": None,
        },
        {
            "id": "wrong-dims",
            "outcome_type": "positive",
            "job_description_embedding": [1.0, 0.0],
        },
    ]


@pytest.fixture
def example_store(example_rows) -> InMemoryExampleStore:
    return InMemoryExampleStore(example_rows)


def build_pdf(pages: list[str]) -> bytes:
    """Minimal Helvetica PDF with one line of text per page."""
    objects: dict[int, str] = {
        1: "<< /Type /Catalog /Pages 2 0 R >>",
        3: "<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    }
    kids = []
    for i, text in enumerate(pages):
        page_id, content_id = 4 + 2 * i, 5 + 2 * i
        kids.append(f"{page_id} 0 R")
        stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET"
        objects[page_id] = (
            "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {content_id} 0 R >>"
        )
        objects[content_id] = f"<< /Length {len(stream)} >>\nstream\n{stream}\nendstream"
    objects[2] = f"<< /Type /Pages /Kids [{' '.join(kids)}] /Count {len(pages)} >>"

    out = b"%PDF-1.4\n"
    offsets = {}
    for obj_id in sorted(objects):
        offsets[obj_id] = len(out)
        out += f"{obj_id} 0 obj\n{objects[obj_id]}\nendobj\n".encode("latin-1")

    xref_at = len(out)
    size = max(objects) + 1
    xref = [f"xref\n0 {size}\n", "0000000000 65535 f \n"]
    xref += [f"{offsets[i]:010d} 00000 n \n" for i in range(1, size)]
    out += "".join(xref).encode("latin-1")
    out += f"trailer\n<< /Size {size} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode("latin-1")
    return out


@pytest.fixture
def pdf_factory():
    return build_pdf
