"""Retrieval, aggregation and contrastive-analysis contracts.

Everything here is derived per request from the retrieved examples and never persisted.
"""

from typing import Literal

from pydantic import BaseModel

from models.schemas.content_patterns import ContentPatterns

Importance = Literal["high", "medium", "low"]
OutcomeType = Literal["positive", "negative"]


class SimilarJob(BaseModel):
    id: str
    job_title: str | None = None
    company_name: str | None = None
    industry: str | None = None
    role_level: str | None = None
    outcome_type: OutcomeType
    similarity: float  # 0.0-1.0 cosine similarity to the query JD
    content_patterns: ContentPatterns | None = None
    required_skills: list[str] | None = None


class LearnedInsight(BaseModel):
    type: Literal["quantification", "verbs", "skills", "structure", "formatting"]
    message: str
    importance: Importance
    source: Literal["contrastive", "positive_only", "aggregate"]


class MetricsComparison(BaseModel):
    positive: float
    negative: float
    recommendation: str


class BulletCountComparison(BaseModel):
    positive: int
    negative: int


class LearnedPatterns(BaseModel):
    avg_metrics_per_bullet: MetricsComparison
    common_strong_verbs: list[str] = []
    weak_verbs_to_avoid: list[str] = []
    must_have_skills: list[str] = []
    nice_to_have_skills: list[str] = []
    missing_skills_in_rejected: list[str] = []
    avg_bullet_count: BulletCountComparison
    recommended_section_order: list[str] = []
    insights: list[LearnedInsight] = []


class ContrastiveInsight(BaseModel):
    pattern: str  # quantification, action_verbs, achievement_framing, structure
    metric: str
    positive_avg: float
    negative_avg: float
    delta: float  # positive - negative
    percent_diff: float
    insight: str
    importance: Importance
    confidence: float  # 0-1, driven by min(positive_count, negative_count)


class ContrastiveAnalysisResult(BaseModel):
    has_contrastive_data: bool
    positive_count: int
    negative_count: int
    insights: list[ContrastiveInsight] = []
    summary: str


class LearnedSuggestion(BaseModel):
    message: str
    importance: Importance
    type: str
    source: Literal["learned"] = "learned"


class LearnedInsightsResult(BaseModel):
    similar_jobs_found: int = 0
    positive_examples: int = 0
    negative_examples: int = 0
    patterns: LearnedPatterns | None = None
    insights: list[LearnedInsight] = []
    contrastive: ContrastiveAnalysisResult | None = None
    suggestions: list[LearnedSuggestion] = []
