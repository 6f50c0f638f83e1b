from pydantic import BaseModel, Field

from models.schemas.content_patterns import ContentPatterns

MAX_RESUME_CHARS = 50000
MAX_JD_CHARS = 10000


class ATSScoreRequest(BaseModel):
    resume_text: str = Field(..., min_length=1, max_length=MAX_RESUME_CHARS, description="Plain text resume content")
    job_description: str = Field(..., min_length=1, max_length=MAX_JD_CHARS, description="Job description text")
    page_count: int | None = Field(None, ge=1, description="Page count of the source document, if known")
    strict_mode: bool = True


class SemanticScoreRequest(BaseModel):
    resume_text: str = Field(..., min_length=1, max_length=MAX_RESUME_CHARS)
    job_description: str = Field(..., min_length=1, max_length=MAX_JD_CHARS)


class AnalyzeRequest(BaseModel):
    resume_text: str = Field(..., min_length=1, max_length=MAX_RESUME_CHARS)
    job_description: str = Field(..., min_length=1, max_length=MAX_JD_CHARS)
    page_count: int | None = Field(None, ge=1)


class ContrastiveRequest(BaseModel):
    positive: list[ContentPatterns] = []
    negative: list[ContentPatterns] = []
    user_patterns: ContentPatterns | None = None


class ExampleUploadRequest(BaseModel):
    resume_text: str = Field(..., min_length=1, max_length=MAX_RESUME_CHARS)
    job_description: str = Field(..., min_length=1, max_length=MAX_JD_CHARS)
    outcome_type: str = Field(..., pattern="^(positive|negative)$")
