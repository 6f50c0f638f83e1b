"""LLM auto-labeling output and the stored example row built from it."""

from pydantic import BaseModel

from models.schemas.content_patterns import ContentPatterns
from models.schemas.learning import OutcomeType

INDUSTRIES: tuple[str, ...] = (
    "technology",
    "finance",
    "healthcare",
    "retail",
    "manufacturing",
    "consulting",
    "other",
)

ROLE_LEVELS: tuple[str, ...] = ("entry", "mid", "senior", "executive")


class NotablePattern(BaseModel):
    pattern_type: str  # quantification, action_verbs, structure, keyword_alignment, ...
    description: str
    is_positive: bool


class AutoLabelResult(BaseModel):
    """Structured labels for one resume + JD pair.

    industry and role_level are plain strings so out-of-vocabulary answers
    survive parsing and are reported by validate_label_result instead.
    """
    job_title: str
    company_name: str | None = None
    industry: str
    role_level: str
    required_skills: list[str] = []
    candidate_experience_years: float = 0.0
    candidate_skills: list[str] = []
    is_quality_example: bool = False
    quality_reasoning: str = ""
    notable_patterns: list[NotablePattern] = []


class LabelValidation(BaseModel):
    valid: bool
    issues: list[str] = []


class ResumeExample(BaseModel):
    """A labelled historical example as held by the example store."""
    id: str
    job_title: str | None = None
    company_name: str | None = None
    industry: str | None = None
    role_level: str | None = None
    outcome_type: OutcomeType
    content_patterns: ContentPatterns | None = None
    required_skills: list[str] | None = None
    job_description_embedding: list[float] | None = None
