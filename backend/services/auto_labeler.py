"""LLM auto-labeling of resume + JD pairs and ingestion into the example store."""

import asyncio
import logging
import uuid

from config import settings
from models.schemas.labeling import (
    INDUSTRIES,
    ROLE_LEVELS,
    AutoLabelResult,
    LabelValidation,
    ResumeExample,
)
from services import gemini_client, prompt_builder
from services.content_patterns import extract_content_patterns
from services.embeddings import EmbeddingProvider, generate_embedding
from services.errors import LabelingError
from services.keyword_extractor import extract_keywords

logger = logging.getLogger(__name__)

# Labeling wants consistent answers more than creative ones
LABELING_TEMPERATURE = 0.1
MAX_EXPERIENCE_YEARS = 50


async def auto_label_example(resume_text: str, job_description: str) -> AutoLabelResult:
    """Label one pair. Raises LabelingError when the LLM gives no usable answer."""
    prompt = prompt_builder.build_labeling_prompt(resume_text, job_description)
    data = await gemini_client.generate_json(prompt, temperature=LABELING_TEMPERATURE)
    if not isinstance(data, dict):
        raise LabelingError("No usable labeling response from LLM")

    try:
        return AutoLabelResult.model_validate(data)
    except ValueError as e:
        raise LabelingError(f"LLM labeling response did not match the expected schema: {e}") from e


async def auto_label_batch(examples: list[tuple[str, str]]) -> list[AutoLabelResult]:
    """Label (resume_text, job_description) pairs in fixed concurrent windows."""
    window = max(1, settings.label_concurrency)
    results: list[AutoLabelResult] = []
    for start in range(0, len(examples), window):
        batch = examples[start:start + window]
        results.extend(await asyncio.gather(
            *(auto_label_example(resume, jd) for resume, jd in batch)
        ))
        logger.debug("Labeled %d/%d examples", len(results), len(examples))
    return results


def validate_label_result(result: AutoLabelResult) -> LabelValidation:
    issues: list[str] = []

    if len(result.job_title.strip()) < 2:
        issues.append("Job title is missing or too short")
    if result.industry not in INDUSTRIES:
        issues.append(f"Invalid industry: {result.industry}")
    if result.role_level not in ROLE_LEVELS:
        issues.append(f"Invalid role level: {result.role_level}")
    if not result.required_skills:
        issues.append("No required skills extracted")
    if not 0 <= result.candidate_experience_years <= MAX_EXPERIENCE_YEARS:
        issues.append(f"Unrealistic experience years: {result.candidate_experience_years}")
    if not result.notable_patterns:
        issues.append("No notable patterns identified")

    return LabelValidation(valid=not issues, issues=issues)


async def build_example_record(
    resume_text: str,
    job_description: str,
    outcome_type: str,
    labels: AutoLabelResult,
    provider: EmbeddingProvider | None = None,
) -> ResumeExample:
    """Turn a labelled pair into a storable example row."""
    patterns = extract_content_patterns(resume_text, extract_keywords(job_description))
    embedding = await generate_embedding(job_description, provider)

    return ResumeExample(
        id=str(uuid.uuid4()),
        job_title=labels.job_title,
        company_name=labels.company_name,
        industry=labels.industry,
        role_level=labels.role_level,
        outcome_type=outcome_type,
        content_patterns=patterns,
        required_skills=labels.required_skills,
        job_description_embedding=embedding,
    )
