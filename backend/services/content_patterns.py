"""Content-pattern extraction for resumes.

Produces the per-resume statistics (action verbs, quantification,
achievement framing, structure and optional JD keyword coverage) that the
learning pipeline aggregates across successful and rejected examples.
"""

import math
import re

from models.schemas.content_patterns import (
    AchievementPatterns,
    ActionVerbPatterns,
    ContentPatterns,
    KeywordPatterns,
    PatternComparison,
    QuantificationPatterns,
    StructurePatterns,
)
from services.scoring_math import round_half_up
from services.section_parser import detect_section_order

# ---------------------------------------------------------------------------
# Verb vocabularies
# ---------------------------------------------------------------------------

STRONG_VERBS = frozenset({
    # Leadership
    "led", "directed", "managed", "supervised", "orchestrated", "spearheaded",
    "championed", "pioneered", "drove", "headed", "oversaw",
    # Achievement
    "achieved", "exceeded", "surpassed", "delivered", "accomplished",
    "attained", "secured", "won", "earned",
    # Growth
    "increased", "improved", "boosted", "enhanced", "elevated", "grew",
    "expanded", "accelerated", "maximized", "optimized", "streamlined",
    # Creation
    "created", "developed", "designed", "built", "established", "launched",
    "initiated", "introduced", "implemented", "engineered", "architected",
    # Transformation
    "transformed", "revamped", "restructured", "modernized", "revolutionized",
    "overhauled", "reengineered", "redesigned",
    # Analysis
    "analyzed", "evaluated", "assessed", "identified", "discovered",
    "formulated", "devised", "strategized",
    # Collaboration
    "partnered", "collaborated", "negotiated", "influenced", "persuaded",
    "mentored", "coached", "trained",
    # Cost and revenue
    "reduced", "saved", "cut", "generated", "produced", "captured",
})

WEAK_VERBS = frozenset({
    "helped", "assisted", "worked", "supported", "contributed", "participated",
    "involved", "responsible", "handled", "dealt", "used", "utilized",
    "did", "made", "got", "had", "was", "were", "been", "being",
    "served", "provided", "performed", "conducted", "completed",
    "maintained", "ensured", "facilitated",
})

# ---------------------------------------------------------------------------
# Line and metric patterns
# ---------------------------------------------------------------------------

_BULLET_GLYPHS = "-–—•·∙●○◦⦾*►▸→➤»"
BULLET_LINE_RE = re.compile(rf"^\s*[{_BULLET_GLYPHS}]\s+|^\s*\d+[.)]\s+")
_BULLET_PREFIX_RE = re.compile(rf"^\s*[{_BULLET_GLYPHS}\d.)]+\s*")
_NON_ALPHA_RE = re.compile(r"[^a-z]")

METRIC_PATTERNS: dict[str, re.Pattern] = {
    "percentage": re.compile(r"\b\d{1,3}(?:\.\d+)?%"),
    "dollar": re.compile(r"\$\d{1,3}(?:,\d{3})*(?:\.\d+)?(?:\s*[MBKmk](?:illion)?)?"),
    "multiplier": re.compile(r"\b\d+(?:\.\d+)?x\b", re.IGNORECASE),
    "time": re.compile(r"\b\d+\+?\s*(?:hours?|days?|weeks?|months?|years?)\b", re.IGNORECASE),
    "headcount": re.compile(
        r"\b\d+\+?\s*(?:engineers?|developers?|team\s*members?|employees?|people"
        r"|reports?|direct\s*reports?)\b",
        re.IGNORECASE,
    ),
    "count": re.compile(r"\b\d{1,3}(?:,\d{3})+\b"),
    "users": re.compile(
        r"\b\d+(?:\+|k|K|m|M)?\s*(?:users?|customers?|clients?|subscribers?|visitors?|downloads?)\b",
        re.IGNORECASE,
    ),
}
MAX_METRIC_EXAMPLES = 15

RESULT_INDICATORS: tuple[re.Pattern, ...] = (
    re.compile(
        r"^(?:achieved|delivered|generated|saved|reduced|increased|improved|grew|boosted|cut|drove|secured)",
        re.IGNORECASE,
    ),
    re.compile(r"^\d+%"),
    re.compile(r"^\$[\d,]+"),
    re.compile(r"^(?:resulting|leading|driving)\s+(?:in|to)", re.IGNORECASE),
    re.compile(r"(?:by|to)\s+\d+%"),
)

# Challenge-Action-Result framing
CAR_CHALLENGE_RE = re.compile(
    r"faced|addressed|tackled|confronted|dealt with|responding to|in response to|challenged by|given|when",
    re.IGNORECASE,
)
CAR_ACTION_RE = re.compile(
    r"implemented|developed|created|designed|built|established|led|managed|executed",
    re.IGNORECASE,
)
CAR_RESULT_RE = re.compile(
    r"resulting in|leading to|which|achieving|delivered|saved|reduced|increased|improved",
    re.IGNORECASE,
)

_SUMMARY_BLOCK_RE = re.compile(
    r"(?:summary|objective|profile|about\s*me|professional\s+summary)"
    r"[\s\S]*?(?=\n(?:experience|education|skills|\Z))",
    re.IGNORECASE,
)
_ENTRY_DATE_RE = re.compile(
    r"\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec|January|February|March|April"
    r"|June|July|August|September|October|November|December)\b\s*\d{4}",
    re.IGNORECASE,
)


def extract_bullet_lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if BULLET_LINE_RE.match(line.strip())]


def _strip_bullet(line: str) -> str:
    return _BULLET_PREFIX_RE.sub("", line, count=1).strip()


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------

def extract_action_verbs(text: str) -> ActionVerbPatterns:
    """Classify the first word of every bullet as a strong, weak or other verb."""
    all_verbs: list[str] = []
    strong: list[str] = []
    weak: list[str] = []

    for line in extract_bullet_lines(text):
        words = _strip_bullet(line).split()
        if not words:
            continue
        first = _NON_ALPHA_RE.sub("", words[0].lower())
        if len(first) <= 2:
            continue
        all_verbs.append(first)
        if first in STRONG_VERBS:
            strong.append(words[0])
        elif first in WEAK_VERBS:
            weak.append(words[0])

    return ActionVerbPatterns(
        verbs=list(dict.fromkeys(strong))[:20],
        strong_verb_count=len(strong),
        weak_verb_count=len(weak),
        verb_diversity=len(set(all_verbs)) / len(all_verbs) if all_verbs else 0.0,
    )


def extract_quantification(text: str) -> QuantificationPatterns:
    """Count metrics across the whole text; the per-bullet average uses bullet lines."""
    bullet_count = len(extract_bullet_lines(text))
    metric_types: list[str] = []
    examples: list[str] = []
    total = 0

    for metric_type, pattern in METRIC_PATTERNS.items():
        matches = [m.group(0) for m in pattern.finditer(text)]
        if not matches:
            continue
        metric_types.append(metric_type)
        total += len(matches)
        for m in matches:
            if len(examples) < MAX_METRIC_EXAMPLES and m not in examples:
                examples.append(m)

    return QuantificationPatterns(
        metrics_count=total,
        metric_types=metric_types,
        avg_metrics_per_bullet=total / bullet_count if bullet_count else 0.0,
        examples=examples,
    )


def analyze_achievements(text: str) -> AchievementPatterns:
    results_first = 0
    car_format = 0
    impact_statements: list[str] = []

    for line in extract_bullet_lines(text):
        cleaned = _strip_bullet(line)

        if any(p.search(cleaned) for p in RESULT_INDICATORS):
            results_first += 1
            if len(impact_statements) < 5:
                suffix = "..." if len(cleaned) > 100 else ""
                impact_statements.append(cleaned[:100] + suffix)

        has_challenge = bool(CAR_CHALLENGE_RE.search(cleaned))
        has_action = bool(CAR_ACTION_RE.search(cleaned))
        if (has_challenge or has_action) and CAR_RESULT_RE.search(cleaned):
            car_format += 1

    return AchievementPatterns(
        results_first_count=results_first,
        car_format_count=car_format,
        impact_statements=impact_statements,
    )


def analyze_structure(text: str) -> StructurePatterns:
    bullets = extract_bullet_lines(text)

    summary_length = 0
    summary = _SUMMARY_BLOCK_RE.search(text)
    if summary:
        summary_length = len(summary.group(0).split())

    # Employment entries usually carry a start and an end date
    dates = _ENTRY_DATE_RE.findall(text)
    experience_entries = math.ceil(len(dates) / 2)

    bullet_words = sum(len(_strip_bullet(line).split()) for line in bullets)

    return StructurePatterns(
        summary_length=summary_length,
        bullet_count=len(bullets),
        avg_bullet_length=round_half_up(bullet_words / len(bullets)) if bullets else 0,
        section_order=detect_section_order(text),
        experience_entries=experience_entries,
    )


def analyze_keywords(resume_text: str, jd_keywords: list[str]) -> KeywordPatterns:
    """Substring coverage of JD keywords, their density and first-half placement."""
    resume_lower = resume_text.lower()
    first_half = resume_text[: len(resume_text) // 2].lower()

    found: list[str] = []
    missing: list[str] = []
    first_half_count = 0

    for keyword in jd_keywords:
        kw = keyword.lower()
        if kw in resume_lower:
            found.append(keyword)
            if kw in first_half:
                first_half_count += 1
        else:
            missing.append(keyword)

    word_count = len(resume_text.split())
    occurrences = sum(
        len(re.findall(re.escape(kw.lower()), resume_text, re.IGNORECASE)) for kw in found
    )

    return KeywordPatterns(
        jd_keywords_found=found,
        jd_keywords_missing=missing,
        keyword_density=occurrences / word_count * 100 if word_count else 0.0,
        keyword_in_first_half=first_half_count / len(found) * 100 if found else 0.0,
    )


def extract_content_patterns(
    resume_text: str, jd_keywords: list[str] | None = None
) -> ContentPatterns:
    """Extract all content patterns. Keyword coverage is only computed with JD keywords."""
    return ContentPatterns(
        action_verbs=extract_action_verbs(resume_text),
        quantification=extract_quantification(resume_text),
        keywords=analyze_keywords(resume_text, jd_keywords) if jd_keywords else None,
        achievements=analyze_achievements(resume_text),
        structure=analyze_structure(resume_text),
    )


# ---------------------------------------------------------------------------
# Comparison against a reference resume
# ---------------------------------------------------------------------------

def compare_patterns(user: ContentPatterns, reference: ContentPatterns) -> list[PatternComparison]:
    """Point out where the user's patterns trail a reference resume."""
    comparisons: list[PatternComparison] = []

    user_metrics = user.quantification.avg_metrics_per_bullet
    ref_metrics = reference.quantification.avg_metrics_per_bullet
    if ref_metrics > 0:
        if user_metrics < ref_metrics:
            insight = (
                f"Add more quantified metrics. Successful resumes average {ref_metrics:.1f} "
                f"metrics per bullet (you have {user_metrics:.1f})."
            )
        else:
            insight = f"Your quantification is strong with {user_metrics:.1f} metrics per bullet."
        comparisons.append(PatternComparison(
            metric="metrics_per_bullet",
            user_value=round_half_up(user_metrics, 1),
            ref_value=round_half_up(ref_metrics, 1),
            delta=round_half_up(user_metrics - ref_metrics, 1),
            insight=insight,
        ))

    weak = user.action_verbs.weak_verb_count
    if weak > 0:
        comparisons.append(PatternComparison(
            metric="weak_verbs",
            user_value=weak,
            ref_value=0,
            delta=-weak,
            insight=f"Replace {weak} weak verbs (helped, assisted, worked) with strong action verbs.",
        ))

    user_bullets = user.structure.bullet_count
    ref_bullets = reference.structure.bullet_count
    user_pct = user.achievements.results_first_count / user_bullets * 100 if user_bullets else 0.0
    ref_pct = reference.achievements.results_first_count / ref_bullets * 100 if ref_bullets else 0.0
    if ref_pct > user_pct:
        comparisons.append(PatternComparison(
            metric="results_first_pct",
            user_value=round_half_up(user_pct),
            ref_value=round_half_up(ref_pct),
            delta=round_half_up(user_pct - ref_pct),
            insight=(
                f"Lead more bullets with results. Successful resumes start {round_half_up(ref_pct)}% "
                f"of bullets with outcomes (you: {round_half_up(user_pct)}%)."
            ),
        ))

    user_diversity = user.action_verbs.verb_diversity
    ref_diversity = reference.action_verbs.verb_diversity
    if user_diversity < 0.5 and ref_diversity > user_diversity:
        comparisons.append(PatternComparison(
            metric="verb_diversity",
            user_value=round_half_up(user_diversity * 100),
            ref_value=round_half_up(ref_diversity * 100),
            delta=round_half_up((user_diversity - ref_diversity) * 100),
            insight="Vary your action verbs more. You're repeating the same verbs too often.",
        ))

    return comparisons
