"""Success matching: learn from historical examples for similar jobs.

1. Embed the user's JD and rank stored examples by cosine similarity
2. Aggregate content patterns of the successful (and rejected) matches
3. Compare the user's own patterns against what was learned
"""

import logging
import math
from collections import Counter

import numpy as np
from pydantic import ValidationError
from sklearn.metrics.pairwise import cosine_similarity as sklearn_cosine

from config import settings
from models.schemas.content_patterns import ContentPatterns
from models.schemas.learning import (
    BulletCountComparison,
    LearnedInsight,
    LearnedInsightsResult,
    LearnedPatterns,
    MetricsComparison,
    SimilarJob,
)
from services.contrastive_analysis import (
    analyze_contrastive_patterns,
    contrastive_insights_to_suggestions,
    sort_by_importance,
)
from services.embeddings import EmbeddingProvider, generate_embedding
from services.example_store import ExampleStore, get_example_store
from services.scoring_math import round_half_up

logger = logging.getLogger(__name__)

WEAK_VERBS_TO_AVOID = ["helped", "assisted", "worked", "responsible"]
TOP_VERB_COUNT = 10
MUST_HAVE_SKILL_SHARE = 0.5


# ---------------------------------------------------------------------------
# Retrieval
# ---------------------------------------------------------------------------

def _valid_embedding(value, dimensions: int) -> bool:
    return isinstance(value, list) and len(value) == dimensions and dimensions > 0


async def find_similar_jobs(
    job_description: str,
    limit: int | None = None,
    min_similarity: float | None = None,
    industry: str | None = None,
    role_level: str | None = None,
    store: ExampleStore | None = None,
    provider: EmbeddingProvider | None = None,
) -> list[SimilarJob]:
    """Rank stored examples by JD similarity.

    Rows without a usable embedding are skipped. A failing store query is
    logged and yields no matches; a failing query embedding propagates.
    """
    limit = settings.similarity_limit if limit is None else limit
    min_similarity = settings.similarity_min if min_similarity is None else min_similarity
    store = store or get_example_store()

    query_embedding = await generate_embedding(job_description, provider)

    try:
        rows = await store.query(
            industry=industry,
            role_level=role_level,
            limit=settings.similarity_candidate_pool,
        )
    except Exception as e:
        logger.error("Failed to fetch examples for similarity search: %s", e)
        return []

    candidates: list[dict] = []
    for row in rows:
        if not _valid_embedding(row.get("job_description_embedding"), len(query_embedding)):
            logger.debug("Skipping example %s: missing or invalid embedding", row.get("id"))
            continue
        candidates.append(row)

    if not candidates:
        return []

    matrix = np.asarray([row["job_description_embedding"] for row in candidates], dtype=float)
    scores = sklearn_cosine(np.asarray([query_embedding], dtype=float), matrix)[0]

    matches: list[SimilarJob] = []
    for row, score in zip(candidates, scores):
        similarity = float(score)
        if similarity < min_similarity:
            continue
        try:
            matches.append(SimilarJob(
                id=str(row.get("id")),
                job_title=row.get("job_title"),
                company_name=row.get("company_name"),
                industry=row.get("industry"),
                role_level=row.get("role_level"),
                outcome_type=row.get("outcome_type"),
                similarity=similarity,
                content_patterns=row.get("content_patterns"),
                required_skills=row.get("required_skills"),
            ))
        except ValidationError as e:
            logger.debug("Skipping malformed example %s: %s", row.get("id"), e)

    matches.sort(key=lambda j: j.similarity, reverse=True)
    logger.info(
        "Found %d similar examples (of %d candidates, min similarity %.2f)",
        min(len(matches), limit), len(candidates), min_similarity,
    )
    return matches[:limit]


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------

def _patterns_of(jobs: list[SimilarJob]) -> list[ContentPatterns]:
    return [j.content_patterns for j in jobs if j.content_patterns is not None]


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def get_learned_patterns(similar_jobs: list[SimilarJob]) -> LearnedPatterns | None:
    """Aggregate the retrieved examples. Returns None without any positive example."""
    positives = [j for j in similar_jobs if j.outcome_type == "positive"]
    negatives = [j for j in similar_jobs if j.outcome_type == "negative"]
    if not positives:
        return None

    pos_patterns = _patterns_of(positives)
    neg_patterns = _patterns_of(negatives)

    avg_pos_metrics = _mean([p.quantification.avg_metrics_per_bullet for p in pos_patterns])
    avg_neg_metrics = _mean([p.quantification.avg_metrics_per_bullet for p in neg_patterns])
    avg_pos_bullets = _mean([p.structure.bullet_count for p in pos_patterns])
    avg_neg_bullets = _mean([p.structure.bullet_count for p in neg_patterns])

    verb_counts: Counter[str] = Counter()
    for p in pos_patterns:
        verb_counts.update(v.lower() for v in p.action_verbs.verbs)
    common_verbs = [verb for verb, _ in verb_counts.most_common(TOP_VERB_COUNT)]

    skill_counts: Counter[str] = Counter()
    for job in positives:
        skill_counts.update(s.lower() for s in job.required_skills or [])
    threshold = math.ceil(len(positives) * MUST_HAVE_SKILL_SHARE)
    must_have = [skill for skill, count in skill_counts.items() if count >= threshold]

    missing_in_rejected: list[str] = []
    for p in neg_patterns:
        if p.keywords is None:
            continue
        for skill in p.keywords.jd_keywords_missing:
            if skill.lower() not in missing_in_rejected:
                missing_in_rejected.append(skill.lower())

    insights: list[LearnedInsight] = []
    if avg_pos_metrics > avg_neg_metrics * 1.5 or avg_pos_metrics > 0.5:
        versus = f" (vs {avg_neg_metrics:.1f} in rejected ones)" if neg_patterns else ""
        insights.append(LearnedInsight(
            type="quantification",
            message=f"Successful resumes for similar jobs averaged {avg_pos_metrics:.1f} metrics per bullet{versus}.",
            importance="high",
            source="contrastive" if neg_patterns else "positive_only",
        ))
    if len(common_verbs) >= 5:
        insights.append(LearnedInsight(
            type="verbs",
            message=f"Top action verbs in successful resumes: {', '.join(common_verbs[:5])}.",
            importance="medium",
            source="aggregate",
        ))
    if must_have:
        insights.append(LearnedInsight(
            type="skills",
            message=f"Key skills appearing in most successful resumes: {', '.join(must_have[:5])}.",
            importance="high",
            source="aggregate",
        ))
    if avg_pos_bullets > 0:
        insights.append(LearnedInsight(
            type="structure",
            message=f"Successful resumes averaged {round_half_up(avg_pos_bullets)} bullet points.",
            importance="low",
            source="aggregate",
        ))

    order_counts = Counter(tuple(p.structure.section_order) for p in pos_patterns)
    recommended_order = list(order_counts.most_common(1)[0][0]) if order_counts else []

    if avg_pos_metrics > avg_neg_metrics:
        recommendation = f"Aim for at least {math.ceil(avg_pos_metrics)} metrics per bullet"
    else:
        recommendation = "Include quantified metrics in your achievements"

    return LearnedPatterns(
        avg_metrics_per_bullet=MetricsComparison(
            positive=avg_pos_metrics,
            negative=avg_neg_metrics,
            recommendation=recommendation,
        ),
        common_strong_verbs=common_verbs,
        weak_verbs_to_avoid=list(WEAK_VERBS_TO_AVOID),
        must_have_skills=must_have,
        nice_to_have_skills=[],
        missing_skills_in_rejected=missing_in_rejected,
        avg_bullet_count=BulletCountComparison(
            positive=round_half_up(avg_pos_bullets),
            negative=round_half_up(avg_neg_bullets),
        ),
        recommended_section_order=recommended_order,
        insights=insights,
    )


# ---------------------------------------------------------------------------
# Insights for one resume
# ---------------------------------------------------------------------------

def generate_insights(user: ContentPatterns, learned: LearnedPatterns) -> list[LearnedInsight]:
    """Compare the user's patterns with the learned ones."""
    insights: list[LearnedInsight] = []

    user_metrics = user.quantification.avg_metrics_per_bullet
    target_metrics = learned.avg_metrics_per_bullet.positive
    if user_metrics < target_metrics * 0.7:
        insights.append(LearnedInsight(
            type="quantification",
            message=(
                f"Add more metrics! Successful resumes for similar jobs have {target_metrics:.1f} "
                f"metrics per bullet (you have {user_metrics:.1f})."
            ),
            importance="high",
            source="contrastive",
        ))

    weak = user.action_verbs.weak_verb_count
    if weak > 0:
        insights.append(LearnedInsight(
            type="verbs",
            message=f"Replace {weak} weak verbs. Try using: {', '.join(learned.common_strong_verbs[:4])}.",
            importance="high" if weak > 3 else "medium",
            source="aggregate",
        ))

    found = {s.lower() for s in (user.keywords.jd_keywords_found if user.keywords else [])}
    missing_must_have = [s for s in learned.must_have_skills if s not in found]
    if missing_must_have:
        insights.append(LearnedInsight(
            type="skills",
            message=f"Consider adding these commonly required skills: {', '.join(missing_must_have[:3])}.",
            importance="high",
            source="aggregate",
        ))

    user_bullets = user.structure.bullet_count
    target_bullets = learned.avg_bullet_count.positive
    if user_bullets < target_bullets * 0.6:
        insights.append(LearnedInsight(
            type="structure",
            message=(
                f"Add more details. Successful resumes average {target_bullets} bullet points "
                f"(you have {user_bullets})."
            ),
            importance="medium",
            source="contrastive",
        ))

    return insights


async def get_learned_insights_for_resume(
    job_description: str,
    user_patterns: ContentPatterns,
    store: ExampleStore | None = None,
    provider: EmbeddingProvider | None = None,
    limit: int | None = None,
    min_similarity: float | None = None,
) -> LearnedInsightsResult:
    """Retrieve similar examples and turn them into insights for this resume."""
    similar = await find_similar_jobs(
        job_description,
        limit=limit,
        min_similarity=min_similarity,
        store=store,
        provider=provider,
    )
    if not similar:
        return LearnedInsightsResult()

    positives = [j for j in similar if j.outcome_type == "positive"]
    negatives = [j for j in similar if j.outcome_type == "negative"]

    contrastive = analyze_contrastive_patterns(_patterns_of(positives), _patterns_of(negatives))
    suggestions = contrastive_insights_to_suggestions(user_patterns, contrastive)

    learned = get_learned_patterns(similar)
    insights: list[LearnedInsight] = []
    if learned is not None:
        seen: set[str] = set()
        for insight in generate_insights(user_patterns, learned) + learned.insights:
            if insight.message not in seen:
                seen.add(insight.message)
                insights.append(insight)
        insights = sort_by_importance(insights)

    return LearnedInsightsResult(
        similar_jobs_found=len(similar),
        positive_examples=len(positives),
        negative_examples=len(negatives),
        patterns=learned,
        insights=insights,
        contrastive=contrastive,
        suggestions=suggestions,
    )
