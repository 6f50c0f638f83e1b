"""Embedding-based section scoring contracts."""

from pydantic import BaseModel


class SectionSplit(BaseModel):
    name: str  # summary, experience, education, skills, projects, certifications, header, full
    content: str


class SectionEmbedding(BaseModel):
    section: str
    embedding: list[float]
    content: str


class SemanticSectionScore(BaseModel):
    section: str
    score: int  # round(clamp(cosine * 100, 0, 100))


class SemanticScore(BaseModel):
    overall_score: int = 0
    section_scores: list[SemanticSectionScore] = []


class SemanticAnalysis(BaseModel):
    score: SemanticScore
    resume_embeddings: list[SectionEmbedding] = []
    jd_embedding: list[float] = []
