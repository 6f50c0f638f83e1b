"""Pydantic contracts shared by the scoring and learning services."""

from models.schemas.ats import ATSAnalysis, ATSIssue, ATSScore, JobType, WeightProfile
from models.schemas.content_patterns import ContentPatterns
from models.schemas.feedback import SectionFeedback
from models.schemas.labeling import AutoLabelResult, ResumeExample
from models.schemas.learning import (
    ContrastiveAnalysisResult,
    ContrastiveInsight,
    LearnedInsight,
    LearnedPatterns,
    SimilarJob,
)
from models.schemas.semantic import SectionEmbedding, SemanticScore

__all__ = [
    "ATSAnalysis",
    "ATSIssue",
    "ATSScore",
    "JobType",
    "WeightProfile",
    "ContentPatterns",
    "SectionFeedback",
    "AutoLabelResult",
    "ResumeExample",
    "ContrastiveAnalysisResult",
    "ContrastiveInsight",
    "LearnedInsight",
    "LearnedPatterns",
    "SimilarJob",
    "SectionEmbedding",
    "SemanticScore",
]
