"""Orchestrator: full resume vs job description analysis.

Pipeline:
1. Deterministic ATS scoring (always produced)
2. Content-pattern extraction for the resume
3. Concurrently, all best-effort:
   a. Supplementary LLM keyword analysis
   b. Embedding-based semantic section scoring
   c. Learned insights from similar historical examples
4. Fold supplementary findings into the ATS score
5. Section-level feedback merge
"""

import asyncio
import logging

from models.responses import AnalysisResponse
from services.ats_engine import combine_ats_results, run_ats_analysis, run_supplementary_ats_analysis
from services.content_patterns import extract_content_patterns
from services.embeddings import EmbeddingProvider
from services.example_store import ExampleStore
from services.feedback_merger import merge_section_feedback
from services.similarity import run_semantic_analysis
from services.success_matching import get_learned_insights_for_resume

logger = logging.getLogger(__name__)


def _settle(name: str, result):
    """Turn a failed optional stage into None; returns (value, failed)."""
    if isinstance(result, Exception):
        logger.warning("%s unavailable, continuing without it: %s", name, result)
        return None, True
    if isinstance(result, BaseException):
        raise result
    return result, False


async def analyze(
    resume_text: str,
    job_description: str,
    page_count: int | None = None,
    provider: EmbeddingProvider | None = None,
    store: ExampleStore | None = None,
) -> AnalysisResponse:
    """Run the full analysis pipeline."""
    # --- Layer 1: Deterministic ATS score ---
    ats = run_ats_analysis(resume_text, job_description, page_count=page_count)

    # --- Layer 2: Content patterns ---
    jd_keywords = ats.matched_keywords + ats.missing_keywords
    user_patterns = extract_content_patterns(resume_text, jd_keywords)

    # --- Layer 3: Optional enrichment, concurrently ---
    supplementary_result, semantic_result, learned_result = await asyncio.gather(
        run_supplementary_ats_analysis(
            resume_text,
            job_description,
            matched_keywords=ats.matched_keywords,
            missing_keywords=ats.missing_keywords,
            match_pct=ats.keyword_match_pct,
        ),
        run_semantic_analysis(resume_text, job_description, provider=provider),
        get_learned_insights_for_resume(
            job_description, user_patterns, store=store, provider=provider
        ),
        return_exceptions=True,
    )

    supplementary, supplementary_failed = _settle("Supplementary ATS analysis", supplementary_result)
    semantic, semantic_failed = _settle("Semantic analysis", semantic_result)
    learned, learned_failed = _settle("Learned insights", learned_result)

    degraded = supplementary_failed or semantic_failed or learned_failed
    if supplementary is None and not supplementary_failed:
        logger.warning("Gemini supplementary analysis unavailable, using deterministic ATS only")
        degraded = True

    # --- Layer 4: Combine ---
    combined = combine_ats_results(ats, supplementary)
    semantic_score = semantic.score if semantic is not None else None

    # --- Layer 5: Section feedback ---
    section_feedback = merge_section_feedback(combined, semantic_score)

    return AnalysisResponse(
        ats=combined,
        supplementary=supplementary,
        semantic=semantic_score,
        content_patterns=user_patterns,
        learned=learned,
        section_feedback=section_feedback,
        degraded=degraded,
    )
