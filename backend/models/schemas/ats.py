"""Deterministic ATS scoring contracts: keyword, formatting and section results."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

Severity = Literal["critical", "warning", "info"]
IssueType = Literal["missing_keyword", "weak_keyword", "formatting", "section"]


class JobType(str, Enum):
    TECH = "tech"
    SENIOR = "senior"
    ENTRY = "entry"
    GENERAL = "general"


class WeightProfile(BaseModel):
    """Component weights for one job type. The three weights sum to 1.0."""
    model_config = ConfigDict(frozen=True)

    keywords: float
    formatting: float
    sections: float


class ATSIssue(BaseModel):
    type: IssueType
    severity: Severity
    message: str
    suggestion: str | None = None


class KeywordMatchResult(BaseModel):
    matched: list[str] = []
    missing: list[str] = []
    match_pct: int = 100  # round(|matched| / |keywords| * 100), 100 for no keywords


class FormattingResult(BaseModel):
    score: int = 100  # 100 minus fixed per-issue penalties, floored at 0
    issues: list[ATSIssue] = []


class SectionCheck(BaseModel):
    name: str
    found: bool


class SectionValidationResult(BaseModel):
    score: int = 0
    sections: list[SectionCheck] = []


class ATSScore(BaseModel):
    overall: int = 0
    keyword_match_pct: int = 0
    formatting_score: int = 0
    section_score: int = 0
    matched_keywords: list[str] = []
    missing_keywords: list[str] = []
    issues: list[ATSIssue] = []
    passed: bool = False  # overall >= 75


class ATSAnalysis(ATSScore):
    """ATSScore plus the job type and weights that produced it."""
    job_type: JobType = JobType.GENERAL
    weights: WeightProfile


# ---------------------------------------------------------------------------
# Supplementary LLM keyword analysis
# ---------------------------------------------------------------------------

class KeywordAlias(BaseModel):
    original: str  # JD keyword missed by exact matching
    alias_found_in_resume: str = ""
    reasoning: str = ""


class KeywordPriority(BaseModel):
    keyword: str
    priority: Literal["critical", "important", "nice_to_have"] = "important"
    reasoning: str = ""


class WeakKeywordUsage(BaseModel):
    keyword: str
    current_context: str = ""
    issue: str = ""
    suggested_improvement: str = ""


class SupplementaryATSAnalysis(BaseModel):
    alias_matches: list[KeywordAlias] = []
    keyword_priorities: list[KeywordPriority] = []
    weak_usages: list[WeakKeywordUsage] = []
    additional_keywords: list[str] = []
