"""Contrastive analysis of successful vs rejected resume examples.

When both outcomes exist for similar jobs, comparing their content patterns
shows which habits actually separate the two groups. Every finding carries a
confidence driven by the smaller of the two sample sizes.
"""

import logging
from typing import Callable

from models.schemas.content_patterns import ContentPatterns
from models.schemas.learning import (
    ContrastiveAnalysisResult,
    ContrastiveInsight,
    Importance,
    LearnedSuggestion,
)
from services.scoring_math import round_half_up

logger = logging.getLogger(__name__)

IMPORTANCE_ORDER: dict[str, int] = {"high": 0, "medium": 1, "low": 2}

SIGNIFICANT_PERCENT_DIFF = 50
HIGH_CONFIDENCE = 0.7

# A user value below 80% (or above 120% for lower-is-better metrics) of the
# positive average makes an insight relevant to that user
BELOW_TARGET_RATIO = 0.8
ABOVE_TARGET_RATIO = 1.2
BULLET_COUNT_MARGIN = 5


def _average(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _percent_diff(delta: float, base: float) -> float:
    """Delta relative to the comparison group; 100% when that group is zero."""
    if base > 0:
        return delta / base * 100
    return 100.0 if delta > 0 else 0.0


def calculate_confidence(pos_count: int, neg_count: int) -> float:
    min_samples = min(pos_count, neg_count)
    if min_samples == 0:
        return 0.0
    if min_samples == 1:
        return 0.3
    if min_samples == 2:
        return 0.5
    if min_samples <= 5:
        return 0.7
    if min_samples <= 10:
        return 0.85
    return 0.95


def determine_importance(percent_diff: float, confidence: float) -> Importance:
    significant = abs(percent_diff) > SIGNIFICANT_PERCENT_DIFF
    confident = confidence >= HIGH_CONFIDENCE
    if significant and confident:
        return "high"
    if significant or confident:
        return "medium"
    return "low"


def sort_by_importance(items: list) -> list:
    """Stable sort of anything with an `importance` field, high first."""
    return sorted(items, key=lambda i: IMPORTANCE_ORDER[i.importance])


def _insight(
    pattern: str,
    metric: str,
    positive_avg: float,
    negative_avg: float,
    delta: float,
    percent_diff: float,
    insight: str,
    confidence: float,
) -> ContrastiveInsight:
    return ContrastiveInsight(
        pattern=pattern,
        metric=metric,
        positive_avg=positive_avg,
        negative_avg=negative_avg,
        delta=delta,
        percent_diff=percent_diff,
        insight=insight,
        importance=determine_importance(percent_diff, confidence),
        confidence=confidence,
    )


def analyze_contrastive_patterns(
    positive: list[ContentPatterns], negative: list[ContentPatterns]
) -> ContrastiveAnalysisResult:
    """Compare the two groups metric by metric.

    An insight is only emitted when its delta clears the metric's materiality
    threshold. Missing either group is not an error: the result just says so.
    """
    pos_count, neg_count = len(positive), len(negative)

    if pos_count == 0 or neg_count == 0:
        return ContrastiveAnalysisResult(
            has_contrastive_data=False,
            positive_count=pos_count,
            negative_count=neg_count,
            insights=[],
            summary=(
                "No successful examples available for comparison."
                if pos_count == 0
                else "No rejected examples available for comparison."
            ),
        )

    confidence = calculate_confidence(pos_count, neg_count)
    insights: list[ContrastiveInsight] = []

    # Metrics per bullet
    pos_mpb = _average([p.quantification.avg_metrics_per_bullet for p in positive])
    neg_mpb = _average([p.quantification.avg_metrics_per_bullet for p in negative])
    mpb_delta = pos_mpb - neg_mpb
    if abs(mpb_delta) > 0.1 or pos_mpb > 0.3:
        if mpb_delta > 0:
            message = (
                f"Successful resumes have {pos_mpb / max(neg_mpb, 0.1):.1f}x more metrics "
                "per bullet point."
            )
        else:
            message = "Quantification levels are similar between successful and rejected resumes."
        insights.append(_insight(
            "quantification", "metrics_per_bullet",
            round_half_up(pos_mpb, 1), round_half_up(neg_mpb, 1), round_half_up(mpb_delta, 1),
            round_half_up(_percent_diff(mpb_delta, neg_mpb)), message, confidence,
        ))

    # Total metrics
    pos_total = _average([p.quantification.metrics_count for p in positive])
    neg_total = _average([p.quantification.metrics_count for p in negative])
    total_delta = pos_total - neg_total
    if abs(total_delta) > 2:
        insights.append(_insight(
            "quantification", "total_metrics",
            round_half_up(pos_total), round_half_up(neg_total), round_half_up(total_delta),
            round_half_up(_percent_diff(total_delta, neg_total)),
            f"Successful resumes contain {round_half_up(pos_total)} metrics on average vs "
            f"{round_half_up(neg_total)} in rejected ones.",
            confidence,
        ))

    # Strong verbs
    pos_strong = _average([p.action_verbs.strong_verb_count for p in positive])
    neg_strong = _average([p.action_verbs.strong_verb_count for p in negative])
    strong_delta = pos_strong - neg_strong
    if strong_delta > 2:
        insights.append(_insight(
            "action_verbs", "strong_verbs",
            round_half_up(pos_strong), round_half_up(neg_strong), round_half_up(strong_delta),
            round_half_up(_percent_diff(strong_delta, neg_strong)),
            f"Successful candidates use {round_half_up(pos_strong)} strong action verbs vs "
            f"{round_half_up(neg_strong)} in rejected resumes.",
            confidence,
        ))

    # Weak verbs (lower is better, so the difference is relative to the positive group)
    pos_weak = _average([p.action_verbs.weak_verb_count for p in positive])
    neg_weak = _average([p.action_verbs.weak_verb_count for p in negative])
    if neg_weak - pos_weak > 1:
        insights.append(_insight(
            "action_verbs", "weak_verbs",
            round_half_up(pos_weak), round_half_up(neg_weak), round_half_up(pos_weak - neg_weak),
            round_half_up(_percent_diff(neg_weak - pos_weak, pos_weak)),
            f"Rejected resumes have {round_half_up(neg_weak - pos_weak)} more weak verbs "
            "(helped, assisted, worked) on average.",
            confidence,
        ))

    # Results-first framing
    pos_results = _average([p.achievements.results_first_count for p in positive])
    neg_results = _average([p.achievements.results_first_count for p in negative])
    results_delta = pos_results - neg_results
    if results_delta > 2:
        insights.append(_insight(
            "achievement_framing", "results_first",
            round_half_up(pos_results), round_half_up(neg_results), round_half_up(results_delta),
            round_half_up(_percent_diff(results_delta, neg_results)),
            f"Successful resumes lead {round_half_up(pos_results)} bullets with results vs "
            f"{round_half_up(neg_results)} in rejected ones.",
            confidence,
        ))

    # Bullet count
    pos_bullets = _average([p.structure.bullet_count for p in positive])
    neg_bullets = _average([p.structure.bullet_count for p in negative])
    bullet_delta = pos_bullets - neg_bullets
    if abs(bullet_delta) > 5:
        if bullet_delta > 0:
            message = (
                f"Successful resumes have more detail ({round_half_up(pos_bullets)} vs "
                f"{round_half_up(neg_bullets)} bullets)."
            )
        else:
            message = (
                f"Successful resumes are more concise ({round_half_up(pos_bullets)} vs "
                f"{round_half_up(neg_bullets)} bullets)."
            )
        insights.append(_insight(
            "structure", "bullet_count",
            round_half_up(pos_bullets), round_half_up(neg_bullets), round_half_up(bullet_delta),
            round_half_up(_percent_diff(bullet_delta, neg_bullets) if neg_bullets > 0 else 100),
            message, confidence,
        ))

    # Verb diversity
    pos_div = _average([p.action_verbs.verb_diversity for p in positive])
    neg_div = _average([p.action_verbs.verb_diversity for p in negative])
    div_delta = pos_div - neg_div
    if div_delta > 0.1:
        insights.append(_insight(
            "action_verbs", "verb_diversity",
            round_half_up(pos_div * 100), round_half_up(neg_div * 100), round_half_up(div_delta * 100),
            round_half_up(_percent_diff(div_delta, neg_div)),
            f"Successful candidates vary their verbs more ({round_half_up(pos_div * 100)}% unique vs "
            f"{round_half_up(neg_div * 100)}%).",
            confidence,
        ))

    insights = sort_by_importance(insights)

    high = sum(1 for i in insights if i.importance == "high")
    if high:
        summary = (
            f"Found {len(insights)} differentiating patterns ({high} high-impact) from "
            f"{pos_count} successful and {neg_count} rejected examples."
        )
    elif insights:
        summary = f"Found {len(insights)} patterns that differ between successful and rejected resumes."
    else:
        summary = "No significant differences found between successful and rejected resumes."

    logger.info(
        "Contrastive analysis: %d insights from %d positive / %d negative examples",
        len(insights), pos_count, neg_count,
    )
    return ContrastiveAnalysisResult(
        has_contrastive_data=True,
        positive_count=pos_count,
        negative_count=neg_count,
        insights=insights,
        summary=summary,
    )


# How to read each metric off the user's own patterns, on the insight's scale
USER_METRIC_VALUES: dict[str, Callable[[ContentPatterns], float]] = {
    "metrics_per_bullet": lambda p: p.quantification.avg_metrics_per_bullet,
    "total_metrics": lambda p: p.quantification.metrics_count,
    "strong_verbs": lambda p: p.action_verbs.strong_verb_count,
    "weak_verbs": lambda p: p.action_verbs.weak_verb_count,
    "results_first": lambda p: p.achievements.results_first_count,
    "bullet_count": lambda p: p.structure.bullet_count,
    "verb_diversity": lambda p: p.action_verbs.verb_diversity * 100,
}


def _is_relevant(insight: ContrastiveInsight, user_value: float) -> bool:
    if insight.metric == "weak_verbs":
        return user_value > insight.positive_avg * ABOVE_TARGET_RATIO
    if insight.metric == "bullet_count":
        return abs(user_value - insight.positive_avg) > BULLET_COUNT_MARGIN
    return user_value < insight.positive_avg * BELOW_TARGET_RATIO


def contrastive_insights_to_suggestions(
    user: ContentPatterns, result: ContrastiveAnalysisResult
) -> list[LearnedSuggestion]:
    """Turn insights into suggestions where the user trails the successful group."""
    if not result.has_contrastive_data:
        return []

    suggestions = []
    for insight in result.insights:
        if insight.importance == "low":
            continue
        read_value = USER_METRIC_VALUES.get(insight.metric)
        if read_value is None or not _is_relevant(insight, read_value(user)):
            continue
        suggestions.append(LearnedSuggestion(
            message=f"[Learned] {insight.insight}",
            importance=insight.importance,
            type=insight.pattern,
        ))
    return suggestions
