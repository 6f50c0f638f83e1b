"""Resume section segmentation and section-presence validation."""

import re

from models.schemas.ats import SectionCheck, SectionValidationResult
from models.schemas.semantic import SectionSplit
from services.scoring_math import round_half_up

# Heading patterns used to split resume text; a line must be the heading on its own
SECTION_PATTERNS: dict[str, list[str]] = {
    "summary": [
        r"summary",
        r"objective",
        r"profile",
        r"about\s*me",
        r"(?:professional|career|executive)\s+summary",
        r"personal\s+statement",
    ],
    "experience": [
        r"experience",
        r"employment",
        r"(?:work|professional)\s+experience",
        r"(?:work|career)\s+history",
        r"positions?\s+held",
    ],
    "education": [
        r"education",
        r"academic",
        r"(?:academic|educational)\s+background",
        r"degrees?",
    ],
    "skills": [
        r"skills",
        r"(?:technical|core|key)\s+skills",
        r"competencies",
        r"proficiencies",
        r"technologies",
        r"tools",
        r"expertise",
        r"areas?\s+of\s+expertise",
    ],
    "projects": [
        r"projects",
        r"(?:personal|key)\s+projects",
    ],
    "certifications": [
        r"certifications?",
        r"licenses?",
        r"credentials?",
        r"certifications?\s*(?:&|and)\s*licenses?",
    ],
}

_COMPILED: dict[str, re.Pattern] = {}
for section, patterns in SECTION_PATTERNS.items():
    combined = "|".join(patterns)
    _COMPILED[section] = re.compile(rf"^(?:{combined})\s*:?\s*$", re.IGNORECASE)

# Presence checks for the five canonical sections; keywords may appear anywhere
SECTION_PRESENCE_PATTERNS: dict[str, re.Pattern] = {
    "Contact": re.compile(
        r"email|phone|address|linkedin|github|portfolio|contact|website|www\.|@",
        re.IGNORECASE,
    ),
    "Summary": re.compile(
        r"summary|objective|profile|about\s*me|personal\s+statement",
        re.IGNORECASE,
    ),
    "Experience": re.compile(
        r"experience|employment|work\s+history|career\s+history|positions?\s+held",
        re.IGNORECASE,
    ),
    "Education": re.compile(
        r"education|academic|university|college|degree|bachelor|master|phd|mba|diploma|certifications?",
        re.IGNORECASE,
    ),
    "Skills": re.compile(
        r"skills|competencies|proficiencies|technologies|tools|expertise",
        re.IGNORECASE,
    ),
}

# Headings recognised when recording the order sections appear in
SECTION_ORDER_PATTERNS: dict[str, re.Pattern] = {
    "Contact": re.compile(r"^(?:contact(?:\s+info(?:rmation)?)?|personal\s+info(?:rmation)?)$", re.IGNORECASE),
    "Summary": re.compile(
        r"^(?:summary|objective|profile|about\s*me|professional\s+summary|career\s+summary"
        r"|personal\s+statement|executive\s+summary)$",
        re.IGNORECASE,
    ),
    "Experience": re.compile(
        r"^(?:experience|employment|work\s+history|professional\s+experience|career\s+history"
        r"|positions?\s+held|work\s+experience)$",
        re.IGNORECASE,
    ),
    "Education": re.compile(
        r"^(?:education|academic(?:\s+background)?|degrees?|certifications?(?:\s+and\s+education)?)$",
        re.IGNORECASE,
    ),
    "Skills": re.compile(
        r"^(?:skills|technical\s+skills|core\s+(?:competencies|skills)|proficiencies|technologies"
        r"|tools?\s+(?:and|&)\s+technologies|expertise|key\s+skills)$",
        re.IGNORECASE,
    ),
    "Projects": re.compile(r"^(?:projects|personal\s+projects|key\s+projects|selected\s+projects)$", re.IGNORECASE),
    "Certifications": re.compile(
        r"^(?:certifications?|licenses?(?:\s+and\s+certifications?)?|professional\s+certifications?)$",
        re.IGNORECASE,
    ),
}


def _match_heading(line: str) -> str | None:
    for section_name, pattern in _COMPILED.items():
        if pattern.match(line):
            return section_name
    return None


def split_into_sections(text: str) -> list[SectionSplit]:
    """Split resume text into named sections in document order.

    Text before the first heading becomes 'header'. If no heading is found
    the whole text is returned as a single 'full' section. Empty sections are
    dropped; short ones are kept (callers decide what is meaningful).
    """
    sections: list[SectionSplit] = []
    current_section: str | None = None
    current_lines: list[str] = []
    header_lines: list[str] = []

    def flush(name: str, lines: list[str]) -> None:
        content = "\n".join(lines).strip()
        if content:
            sections.append(SectionSplit(name=name, content=content))

    for line in text.split("\n"):
        matched_section = _match_heading(line.strip())

        if matched_section:
            if current_section:
                flush(current_section, current_lines)
            else:
                flush("header", header_lines)
            current_section = matched_section
            current_lines = []
        elif current_section:
            current_lines.append(line)
        else:
            header_lines.append(line)

    if current_section:
        flush(current_section, current_lines)
    else:
        flush("full", [text])

    return sections


def validate_sections(resume_text: str) -> SectionValidationResult:
    """Check the five canonical sections. Each found section is worth 20 points."""
    checks = [
        SectionCheck(name=name, found=bool(pattern.search(resume_text)))
        for name, pattern in SECTION_PRESENCE_PATTERNS.items()
    ]
    found = sum(1 for c in checks if c.found)
    score = round_half_up(found / len(SECTION_PRESENCE_PATTERNS) * 100)
    return SectionValidationResult(score=score, sections=checks)


def detect_section_order(text: str) -> list[str]:
    """Return canonical section names in the order their headings first appear."""
    order: list[str] = []
    for line in text.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        for name, pattern in SECTION_ORDER_PATTERNS.items():
            if pattern.match(stripped):
                if name not in order:
                    order.append(name)
                break
    return order
