"""Formatting checks for patterns known to break ATS parsers.

Each check is independent and carries a fixed penalty. The score starts at
100 and is floored at 0; issues are reported in check order.
"""

import re

from models.schemas.ats import ATSIssue, FormattingResult

EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
PHONE_RE = re.compile(r"(\+?1?[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}")

# Repeated tabs or three-plus pipes on one line
TABLE_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\t{2,}"),
    re.compile(r"\|.*\|.*\|"),
)

# Two wide horizontal gaps on the same line, each followed by text
MULTI_COLUMN_RE = re.compile(r"[ \t]{5,}\S+.*[ \t]{5,}\S+")

_MONTHS = r"January|February|March|April|May|June|July|August|September|October|November|December"
_MONTH_ABBREVS = r"Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec"

DATE_FORMAT_FAMILIES: dict[str, re.Pattern] = {
    "mm/yyyy": re.compile(r"\b\d{1,2}/\d{4}\b"),
    "mm-yyyy": re.compile(r"\b\d{1,2}-\d{4}\b"),
    "month yyyy": re.compile(rf"\b(?:{_MONTHS})\s+\d{{4}}\b", re.IGNORECASE),
    "mon yyyy": re.compile(rf"\b(?:{_MONTH_ABBREVS})\.?\s+\d{{4}}\b", re.IGNORECASE),
}

SPECIAL_BULLETS_RE = re.compile("[•‣◦⁃∙▪▫●○■□]")
IMAGE_MARKER_RE = re.compile(r"\[(?:image|graphic|logo|photo)\]", re.IGNORECASE)
_BULLET_START_RE = re.compile(r"^\s*(?:[-–—•·∙●○◦⦾*►▸→➤»]|\d+[.)])\s")

MIN_WORD_COUNT = 100
MAX_PAGE_COUNT = 2
MAX_WORDS_PER_LINE = 50

PENALTIES: dict[str, int] = {
    "missing_email": 15,
    "missing_phone": 5,
    "table_layout": 10,
    "multi_column": 10,
    "date_formats": 5,
    "page_count": 10,
    "special_bullets": 3,
    "too_short": 20,
    "long_paragraphs": 5,
    "images": 15,
}


def _issue(severity: str, message: str, suggestion: str) -> ATSIssue:
    return ATSIssue(type="formatting", severity=severity, message=message, suggestion=suggestion)


def check_formatting(resume_text: str, page_count: int | None = None) -> FormattingResult:
    """Run every formatting check and return the penalized score with its issues."""
    issues: list[ATSIssue] = []
    score = 100

    # 1. Contact info
    if not EMAIL_RE.search(resume_text):
        issues.append(_issue(
            "critical",
            "No email address detected. ATS systems require contact information to process your application.",
            "Add your email address to the top of your resume in the contact section.",
        ))
        score -= PENALTIES["missing_email"]

    if not PHONE_RE.search(resume_text):
        issues.append(_issue(
            "warning",
            "No phone number detected. Most ATS systems extract phone numbers as a required contact field.",
            "Add your phone number to your contact section.",
        ))
        score -= PENALTIES["missing_phone"]

    # 2. Table-based layout
    if any(p.search(resume_text) for p in TABLE_PATTERNS):
        issues.append(_issue(
            "warning",
            "Possible table-based layout detected. ATS systems often fail to parse tables correctly, "
            "resulting in garbled text.",
            "Replace table layouts with simple left-aligned text and standard headings.",
        ))
        score -= PENALTIES["table_layout"]

    # 3. Multi-column layout
    if MULTI_COLUMN_RE.search(resume_text):
        issues.append(_issue(
            "warning",
            "Possible multi-column layout detected. ATS may merge columns, scrambling your content order.",
            "Use a single-column layout for maximum ATS compatibility.",
        ))
        score -= PENALTIES["multi_column"]

    # 4. Mixed date formats
    date_families = sum(1 for p in DATE_FORMAT_FAMILIES.values() if p.search(resume_text))
    if date_families > 1:
        issues.append(_issue(
            "warning",
            "Inconsistent date formats detected. ATS systems may fail to parse dates in different formats.",
            "Use a consistent date format throughout your resume (e.g., 'Month YYYY' like 'January 2024').",
        ))
        score -= PENALTIES["date_formats"]

    # 5. Page count
    pages = page_count or 1
    if pages > MAX_PAGE_COUNT:
        issues.append(_issue(
            "warning",
            f"Resume is {pages} pages. Most ATS systems and recruiters prefer 1-2 pages. "
            "Longer resumes may have content truncated.",
            "Condense your resume to 1-2 pages by focusing on the most relevant experience.",
        ))
        score -= PENALTIES["page_count"]

    # 6. Many different special bullet glyphs
    if len(set(SPECIAL_BULLETS_RE.findall(resume_text))) > 2:
        issues.append(_issue(
            "info",
            "Multiple special bullet characters detected. Some ATS systems may not render these correctly.",
            "Use standard hyphens (-) or asterisks (*) as bullet points for maximum compatibility.",
        ))
        score -= PENALTIES["special_bullets"]

    # 7. Too short
    if len(resume_text.split()) < MIN_WORD_COUNT:
        issues.append(_issue(
            "critical",
            "Resume appears too short (fewer than 100 words). ATS systems may flag this as incomplete.",
            "Expand your resume with detailed work experience, skills, and achievements.",
        ))
        score -= PENALTIES["too_short"]

    # 8. Wall-of-text lines that are not bullets
    if any(
        len(line.split()) > MAX_WORDS_PER_LINE and not _BULLET_START_RE.match(line)
        for line in resume_text.split("\n")
    ):
        issues.append(_issue(
            "info",
            "Long paragraphs detected. ATS systems parse bullet points more reliably than dense paragraphs.",
            "Break long paragraphs into bullet points starting with action verbs.",
        ))
        score -= PENALTIES["long_paragraphs"]

    # 9. Image / graphic placeholders
    if IMAGE_MARKER_RE.search(resume_text):
        issues.append(_issue(
            "critical",
            "Image or graphic content detected. ATS systems cannot read images, charts, or graphics, "
            "so this content will be ignored.",
            "Replace all images and graphics with plain text equivalents.",
        ))
        score -= PENALTIES["images"]

    return FormattingResult(score=max(0, score), issues=issues)
