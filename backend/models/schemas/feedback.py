"""Section-level feedback assembled from ATS issues and semantic scores."""

from typing import Literal

from pydantic import BaseModel

from models.schemas.ats import Severity


class SectionFeedbackItem(BaseModel):
    source: Literal["ats", "semantic"]
    severity: Severity
    message: str
    suggestion: str | None = None


class SectionFeedback(BaseModel):
    section: str  # contact, summary, experience, education, skills, general
    items: list[SectionFeedbackItem] = []
    critical_count: int = 0
    ats_score: int = 0  # overall ATS score adjusted by this section's issues
    semantic_score: int | None = None
