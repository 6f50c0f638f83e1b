from pydantic import BaseModel

from models.schemas.ats import ATSAnalysis, SupplementaryATSAnalysis
from models.schemas.content_patterns import ContentPatterns
from models.schemas.feedback import SectionFeedback
from models.schemas.labeling import LabelValidation
from models.schemas.learning import (
    ContrastiveAnalysisResult,
    LearnedInsightsResult,
    LearnedSuggestion,
    OutcomeType,
)
from models.schemas.semantic import SemanticScore


class HealthResponse(BaseModel):
    status: str = "ok"
    llm_configured: bool = False


class ATSScoreResponse(BaseModel):
    ats: ATSAnalysis
    supplementary: SupplementaryATSAnalysis | None = None


class AnalysisResponse(BaseModel):
    ats: ATSAnalysis
    supplementary: SupplementaryATSAnalysis | None = None
    semantic: SemanticScore | None = None
    content_patterns: ContentPatterns
    learned: LearnedInsightsResult | None = None
    section_feedback: list[SectionFeedback] = []
    degraded: bool = False


class ContrastiveResponse(BaseModel):
    result: ContrastiveAnalysisResult
    suggestions: list[LearnedSuggestion] = []


class ExampleCreatedResponse(BaseModel):
    id: str
    outcome_type: OutcomeType
    industry: str | None = None
    role_level: str | None = None
    validation: LabelValidation
