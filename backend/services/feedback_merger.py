"""Merge ATS issues and semantic section scores into per-section feedback."""

from models.schemas.ats import ATSIssue, ATSScore
from models.schemas.feedback import SectionFeedback, SectionFeedbackItem
from models.schemas.semantic import SemanticScore

SECTION_DISPLAY_ORDER: tuple[str, ...] = (
    "contact", "summary", "experience", "education", "skills", "general",
)

# Semantic sections that have no display section of their own
SEMANTIC_SECTION_MAP: dict[str, str] = {
    "header": "contact",
    "projects": "experience",
    "certifications": "education",
    "full": "general",
}

SEMANTIC_LOW_SCORE = 50

ATS_SEVERITY_PENALTY: dict[str, int] = {"critical": 15, "warning": 8, "info": 3}


def map_issue_to_section(issue: ATSIssue) -> str:
    msg = issue.message.lower()

    if issue.type == "formatting":
        if any(term in msg for term in ("email", "phone", "linkedin")):
            return "contact"
        return "general"

    if issue.type == "section":
        for term, section in (
            ("summary", "summary"),
            ("experience", "experience"),
            ("education", "education"),
            ("skill", "skills"),
        ):
            if term in msg:
                return section
        return "general"

    if issue.type in ("missing_keyword", "weak_keyword"):
        if "skill" in msg or "technical" in msg:
            return "skills"
        return "experience"

    return "general"


def _section_ats_score(items: list[SectionFeedbackItem], overall: int) -> int:
    ats_items = [i for i in items if i.source == "ats"]
    if not ats_items:
        return min(100, overall + 10)
    penalty = sum(ATS_SEVERITY_PENALTY[i.severity] for i in ats_items)
    return max(0, min(100, overall - penalty + 5))


def merge_section_feedback(
    ats_score: ATSScore, semantic_score: SemanticScore | None = None
) -> list[SectionFeedback]:
    """Group feedback by resume section, in display order."""
    items: dict[str, list[SectionFeedbackItem]] = {key: [] for key in SECTION_DISPLAY_ORDER}
    semantic_by_section: dict[str, int] = {}

    for issue in ats_score.issues:
        items[map_issue_to_section(issue)].append(SectionFeedbackItem(
            source="ats",
            severity=issue.severity,
            message=issue.message,
            suggestion=issue.suggestion,
        ))

    if semantic_score is not None:
        for section_score in semantic_score.section_scores:
            key = SEMANTIC_SECTION_MAP.get(section_score.section, section_score.section)
            if key not in items:
                key = "general"
            semantic_by_section[key] = max(semantic_by_section.get(key, 0), section_score.score)

            if section_score.score < SEMANTIC_LOW_SCORE:
                items[key].append(SectionFeedbackItem(
                    source="semantic",
                    severity="warning",
                    message=(
                        f'The "{section_score.section}" section is only loosely related to the job '
                        f"description (semantic match {section_score.score}%)."
                    ),
                    suggestion=(
                        "Rework this section around the responsibilities and skills the job "
                        "description emphasizes."
                    ),
                ))

    return [
        SectionFeedback(
            section=key,
            items=items[key],
            critical_count=sum(1 for i in items[key] if i.severity == "critical"),
            ats_score=_section_ats_score(items[key], ats_score.overall),
            semantic_score=semantic_by_section.get(key),
        )
        for key in SECTION_DISPLAY_ORDER
    ]
