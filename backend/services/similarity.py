"""Embedding-based semantic scoring of resume sections against a JD."""

import asyncio
import logging

import numpy as np

from models.schemas.semantic import SectionEmbedding, SemanticAnalysis, SemanticScore, SemanticSectionScore
from services.embeddings import EmbeddingProvider, generate_embedding, generate_section_embeddings
from services.errors import VectorDimensionError
from services.scoring_math import round_half_up

logger = logging.getLogger(__name__)

# Experience and skills dominate job matching; the header is mostly contact info
SECTION_WEIGHTS: dict[str, float] = {
    "experience": 3.0,
    "skills": 2.5,
    "summary": 2.0,
    "projects": 1.5,
    "education": 1.0,
    "certifications": 1.0,
    "header": 0.5,
    "full": 1.0,
}
DEFAULT_SECTION_WEIGHT = 1.0


def cosine_similarity(vec_a: list[float], vec_b: list[float]) -> float:
    """Cosine similarity of two equal-length vectors.

    Raises VectorDimensionError for empty or mismatched vectors. A zero-magnitude
    vector has no direction, so the similarity is 0.0.
    """
    if len(vec_a) == 0 or len(vec_b) == 0 or len(vec_a) != len(vec_b):
        raise VectorDimensionError(len(vec_a), len(vec_b))

    a = np.asarray(vec_a, dtype=float)
    b = np.asarray(vec_b, dtype=float)
    magnitude = float(np.linalg.norm(a) * np.linalg.norm(b))
    if magnitude == 0:
        return 0.0
    return float(np.dot(a, b) / magnitude)


def similarity_to_score(similarity: float) -> int:
    """Map a cosine similarity (-1..1) onto 0-100, negatives clamped to 0."""
    return round_half_up(max(0.0, min(100.0, similarity * 100)))


def compute_semantic_score(
    resume_embeddings: list[SectionEmbedding], jd_embedding: list[float]
) -> SemanticScore:
    """Per-section scores plus their section-weighted average."""
    if not resume_embeddings or not jd_embedding:
        return SemanticScore(overall_score=0, section_scores=[])

    section_scores: list[SemanticSectionScore] = []
    weighted_sum = 0.0
    total_weight = 0.0

    for emb in resume_embeddings:
        score = similarity_to_score(cosine_similarity(emb.embedding, jd_embedding))
        section_scores.append(SemanticSectionScore(section=emb.section, score=score))

        weight = SECTION_WEIGHTS.get(emb.section, DEFAULT_SECTION_WEIGHT)
        weighted_sum += score * weight
        total_weight += weight

    overall = round_half_up(weighted_sum / total_weight) if total_weight > 0 else 0
    return SemanticScore(overall_score=overall, section_scores=section_scores)


async def run_semantic_analysis(
    resume_text: str,
    job_description: str,
    provider: EmbeddingProvider | None = None,
) -> SemanticAnalysis:
    """Embed every resume section and the JD concurrently, then score them.

    Any failed embedding fails the whole analysis; these are required inputs.
    """
    resume_embeddings, jd_embedding = await asyncio.gather(
        generate_section_embeddings(resume_text, provider),
        generate_embedding(job_description, provider),
    )

    score = compute_semantic_score(resume_embeddings, jd_embedding)
    logger.info(
        "Semantic score %d across %d sections",
        score.overall_score, len(score.section_scores),
    )
    return SemanticAnalysis(
        score=score,
        resume_embeddings=resume_embeddings,
        jd_embedding=jd_embedding,
    )
