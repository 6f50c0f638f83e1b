"""Deterministic ATS scoring.

Pipeline:
1. Job type detection (selects the weight profile)
2. Keyword extraction from the JD
3. Strict keyword matching against the resume
4. Formatting checks
5. Section validation
6. Weighted composition into one score with an issue list

An optional LLM pass can recover alias matches afterwards; the deterministic
score is always produced first and never depends on it.
"""

import logging

from models.schemas.ats import (
    ATSAnalysis,
    ATSIssue,
    ATSScore,
    FormattingResult,
    JobType,
    KeywordMatchResult,
    SectionValidationResult,
    SupplementaryATSAnalysis,
    WeightProfile,
)
from services import gemini_client, prompt_builder
from services.formatting_checker import check_formatting
from services.job_classifier import WEIGHT_PROFILES, detect_job_type
from services.keyword_extractor import extract_keywords, match_keywords
from services.section_parser import validate_sections
from services.scoring_math import round_half_up

logger = logging.getLogger(__name__)

PASS_THRESHOLD = 75

# Missing Contact/Experience headings are critical, anything else is a warning
CRITICAL_SECTIONS = frozenset({"Contact", "Experience"})


def _weighted_overall(
    keyword_pct: int, formatting_score: int, section_score: int, weights: WeightProfile
) -> int:
    return round_half_up(
        keyword_pct * weights.keywords
        + formatting_score * weights.formatting
        + section_score * weights.sections
    )


def _section_issues(section_result: SectionValidationResult) -> list[ATSIssue]:
    issues = []
    for section in section_result.sections:
        if section.found:
            continue
        issues.append(ATSIssue(
            type="section",
            severity="critical" if section.name in CRITICAL_SECTIONS else "warning",
            message=(
                f'"{section.name}" section not detected. ATS systems expect standard resume '
                "sections to properly categorize your information."
            ),
            suggestion=f'Add a clearly labeled "{section.name}" section with a standard heading.',
        ))
    return issues


def compute_ats_score(
    keyword_result: KeywordMatchResult,
    formatting_result: FormattingResult,
    section_result: SectionValidationResult,
    job_type: JobType = JobType.GENERAL,
) -> ATSScore:
    """Combine component results into the weighted ATS score.

    Missing keywords stay in missing_keywords only; they are not expanded
    into individual issues.
    """
    weights = WEIGHT_PROFILES[job_type]
    overall = _weighted_overall(
        keyword_result.match_pct, formatting_result.score, section_result.score, weights
    )

    issues = list(formatting_result.issues) + _section_issues(section_result)

    return ATSScore(
        overall=overall,
        keyword_match_pct=keyword_result.match_pct,
        formatting_score=formatting_result.score,
        section_score=section_result.score,
        matched_keywords=keyword_result.matched,
        missing_keywords=keyword_result.missing,
        issues=issues,
        passed=overall >= PASS_THRESHOLD,
    )


def run_ats_analysis(
    resume_text: str,
    job_description: str,
    page_count: int | None = None,
    strict_mode: bool = True,
    job_type: JobType | None = None,
) -> ATSAnalysis:
    """Run the full deterministic ATS pipeline."""
    resolved_type = job_type or detect_job_type(job_description)

    keywords = extract_keywords(job_description)
    keyword_result = match_keywords(resume_text, keywords, strict_mode=strict_mode)
    formatting_result = check_formatting(resume_text, page_count=page_count)
    section_result = validate_sections(resume_text)

    score = compute_ats_score(
        keyword_result, formatting_result, section_result, job_type=resolved_type
    )
    logger.info(
        "ATS score %d (%s): keywords=%d%% formatting=%d sections=%d",
        score.overall, resolved_type.value, score.keyword_match_pct,
        score.formatting_score, score.section_score,
    )
    return ATSAnalysis(
        **score.model_dump(),
        job_type=resolved_type,
        weights=WEIGHT_PROFILES[resolved_type],
    )


# ---------------------------------------------------------------------------
# Supplementary LLM analysis (best-effort)
# ---------------------------------------------------------------------------

async def run_supplementary_ats_analysis(
    resume_text: str,
    job_description: str,
    matched_keywords: list[str],
    missing_keywords: list[str],
    match_pct: int,
) -> SupplementaryATSAnalysis | None:
    """Ask the LLM for alias matches, weak usages and extra keywords.

    Returns None when the LLM is unavailable or answers with something unusable.
    """
    prompt = prompt_builder.build_supplementary_ats_prompt(
        resume_text,
        job_description,
        matched_keywords=matched_keywords,
        missing_keywords=missing_keywords,
        match_pct=match_pct,
    )
    data = await gemini_client.generate_json(prompt)
    if not isinstance(data, dict):
        return None

    try:
        return SupplementaryATSAnalysis.model_validate(data)
    except ValueError as e:
        logger.warning("Discarding malformed supplementary ATS analysis: %s", e)
        return None


def combine_ats_results(
    deterministic: ATSAnalysis,
    supplementary: SupplementaryATSAnalysis | None,
) -> ATSAnalysis:
    """Fold supplementary findings into the deterministic score.

    Alias-recovered keywords move from missing to matched and the overall
    score is recomputed with the same weight profile.
    """
    if supplementary is None:
        return deterministic

    recovered = {a.original.lower() for a in supplementary.alias_matches}
    matched = list(deterministic.matched_keywords)
    missing: list[str] = []
    for kw in deterministic.missing_keywords:
        (matched if kw.lower() in recovered else missing).append(kw)

    total = len(matched) + len(missing)
    match_pct = round_half_up(len(matched) / total * 100) if total else 100
    overall = _weighted_overall(
        match_pct, deterministic.formatting_score, deterministic.section_score,
        deterministic.weights,
    )

    issues = list(deterministic.issues)
    for weak in supplementary.weak_usages:
        issues.append(ATSIssue(
            type="weak_keyword",
            severity="warning",
            message=f'Weak usage of "{weak.keyword}": {weak.issue}',
            suggestion=weak.suggested_improvement or None,
        ))
    for keyword in supplementary.additional_keywords:
        issues.append(ATSIssue(
            type="missing_keyword",
            severity="info",
            message=(
                f'Consider adding "{keyword}". It was identified as relevant for this role '
                "but not found in your resume."
            ),
            suggestion=f'Add "{keyword}" to a relevant section if it reflects your actual skills or experience.',
        ))

    return deterministic.model_copy(update={
        "overall": overall,
        "keyword_match_pct": match_pct,
        "matched_keywords": matched,
        "missing_keywords": missing,
        "issues": issues,
        "passed": overall >= PASS_THRESHOLD,
    })
