"""Keyword extraction and matching for resume-JD analysis.

Extraction pulls curated multi-word technical phrases out of the JD first,
then ranks the remaining single words by raw frequency after stop-word
filtering. Matching runs in one of two modes:

- strict (default): exact, case-insensitive, word-bounded phrase lookup with
  no stemming. This is how real ATS products (Workday, Greenhouse, Taleo,
  iCIMS) behave, so it feeds the ATS score.
- fuzzy: substring, then all-words-of-phrase, then stemmed lookup. Used for
  supplementary and semantic analysis only.
"""

import logging
import re
from collections import Counter

from models.schemas.ats import KeywordMatchResult
from services.scoring_math import round_half_up
from services.text_processing import stem, tokenize

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Stop words: function words, JD boilerplate, locations, compensation terms
# ---------------------------------------------------------------------------
STOP_WORDS: frozenset[str] = frozenset({
    # Common English words
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "as", "is", "was", "are", "were", "be", "been",
    "being", "have", "has", "had", "do", "does", "did", "will", "would",
    "could", "should", "may", "might", "shall", "can", "need", "must",
    "about", "above", "after", "again", "all", "also", "am", "any", "because",
    "before", "between", "both", "during", "each", "few", "further", "get",
    "got", "he", "her", "here", "him", "his", "how", "i", "if", "into", "it",
    "its", "just", "let", "like", "me", "more", "most", "my", "no", "nor",
    "not", "now", "only", "other", "our", "out", "over", "own", "same", "she",
    "so", "some", "such", "than", "that", "their", "them", "then", "there",
    "these", "they", "this", "those", "through", "too", "under", "until", "up",
    "us", "very", "we", "what", "when", "where", "which", "while", "who",
    "whom", "why", "you", "your", "able", "across", "already", "among",
    "around", "become", "within", "without", "work", "working", "including",
    "well", "using", "used", "use", "new", "make", "ensure", "based",
    "related", "per", "via", "etc", "e.g", "i.e",
    # Job posting filler
    "experience", "role", "position", "team", "company", "opportunity",
    "responsibilities", "requirements", "qualifications", "candidate",
    "looking", "join", "apply", "ideal", "required", "preferred", "plus",
    "strong", "excellent", "proven", "ability", "skills", "knowledge",
    "understanding", "years", "minimum", "bachelor", "master", "degree",
    # Locations
    "san", "francisco", "york", "los", "angeles", "chicago", "denver",
    "seattle", "austin", "boston", "atlanta", "dallas", "houston", "remote",
    "hybrid", "onsite", "on-site", "location", "located", "area",
    "region", "city", "state", "headquarters", "hq", "office", "bay",
    "california", "texas", "washington", "florida", "virginia", "colorado",
    "massachusetts", "georgia", "illinois", "oregon", "arizona", "carolina",
    # Compensation & benefits
    "salary", "salaries", "equity", "compensation", "bonus", "bonuses",
    "benefits", "perks", "package", "stock", "options", "rrsp", "401k",
    "pension", "insurance", "health", "dental", "vision", "pto", "vacation",
    "competitive", "range", "annual", "base", "total", "hourly", "pay",
    # Posting metadata
    "posting", "posted", "applying", "application", "submit",
    "deadline", "asap", "immediately", "urgent", "available", "seeking",
    "hiring", "opportunities", "opening", "openings", "requisition",
    "employment", "employer", "employee", "employees", "staff", "workforce",
    # Generic fillers and action words that aren't skills
    "approximately", "circa", "includes", "similar",
    "desired", "nice", "preparation", "assist", "support", "help",
    "provide", "create", "develop", "implement", "maintain", "manage",
    "build", "drive", "deliver", "execute", "lead", "partner", "collaborate",
    "effectively", "efficiently", "successfully", "consistently", "regularly",
})

# Two-letter tokens that are real skills rather than noise
TECH_ACRONYMS: frozenset[str] = frozenset({
    "ai", "ml", "ui", "ux", "qa", "ci", "cd", "db", "os", "it", "bi", "hr",
})

# ---------------------------------------------------------------------------
# Multi-word technical phrases, matched before single-word tokenization
# ---------------------------------------------------------------------------
_PHRASE_SOURCES: tuple[str, ...] = (
    r"machine\s+learning",
    r"deep\s+learning",
    r"artificial\s+intelligence",
    r"natural\s+language\s+processing",
    r"computer\s+vision",
    r"data\s+science",
    r"data\s+engineering",
    r"data\s+analysis",
    r"data\s+analytics",
    r"data\s+pipeline",
    r"data\s+warehouse",
    r"data\s+modeling",
    r"project\s+management",
    r"product\s+management",
    r"full\s+stack",
    r"front\s+end",
    r"back\s+end",
    r"user\s+experience",
    r"user\s+interface",
    r"quality\s+assurance",
    r"continuous\s+integration",
    r"continuous\s+delivery",
    r"continuous\s+deployment",
    r"version\s+control",
    r"cloud\s+computing",
    r"software\s+engineering",
    r"software\s+development",
    r"web\s+development",
    r"mobile\s+development",
    r"api\s+development",
    r"test\s+driven",
    r"cross[\s-]+functional",
    r"object[\s-]+oriented",
    r"event[\s-]+driven",
    r"micro[\s-]?services",
    r"rest(?:ful)?\s+api",
    r"supply\s+chain",
    r"business\s+intelligence",
    r"business\s+analysis",
    r"customer\s+service",
    r"customer\s+success",
    r"human\s+resources",
    r"real[\s-]+time",
    r"open[\s-]+source",
    r"unit\s+test(?:ing|s)?",
    r"end[\s-]+to[\s-]+end",
    r"a/b\s+test(?:ing|s)?",
    r"ci[\s/]+cd",
)

MULTI_WORD_PATTERNS: tuple[re.Pattern, ...] = tuple(
    re.compile(source, re.IGNORECASE) for source in _PHRASE_SOURCES
)

_WHITESPACE_RE = re.compile(r"\s+")


def extract_multi_word_phrases(text: str) -> list[str]:
    """Find curated technical phrases, whitespace-normalized and deduplicated in pattern order."""
    phrases: list[str] = []
    for pattern in MULTI_WORD_PATTERNS:
        for match in pattern.finditer(text):
            normalized = _WHITESPACE_RE.sub(" ", match.group().lower()).strip()
            if normalized not in phrases:
                phrases.append(normalized)
    return phrases


def _is_candidate_word(word: str) -> bool:
    if word in STOP_WORDS:
        return False
    if len(word) <= 2 and word not in TECH_ACRONYMS:
        return False
    return True


def extract_keywords(job_description: str) -> list[str]:
    """Extract significant keywords and phrases from a job description.

    Phrases come first, then single words by descending frequency in the JD
    (a TF proxy, no corpus IDF). Words already covered by a phrase are skipped.
    The order is significance-descending and callers rely on it.
    """
    text = job_description.lower()
    phrases = extract_multi_word_phrases(text)

    word_freq: Counter[str] = Counter(
        word for word in tokenize(text) if _is_candidate_word(word)
    )
    # sorted() is stable, so equal counts keep first-appearance order
    ranked = sorted(word_freq.items(), key=lambda item: item[1], reverse=True)

    phrase_words = {w for phrase in phrases for w in phrase.split()}
    keywords = list(phrases)
    keywords.extend(word for word, _ in ranked if word not in phrase_words)

    logger.debug(
        "Extracted %d keywords (%d phrases) from JD", len(keywords), len(phrases)
    )
    return keywords


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

def _exact_pattern(keyword: str) -> re.Pattern:
    # Lookarounds instead of \b so terms ending in symbols ("c++", "c#") still bound correctly
    return re.compile(rf"(?<!\w){re.escape(keyword)}(?!\w)", re.IGNORECASE)


def match_keyword_exact(keyword: str, resume_text: str) -> bool:
    """Exact, case-insensitive, word-bounded lookup of a keyword or phrase."""
    return bool(_exact_pattern(keyword).search(resume_text))


def _match_fuzzy(keyword: str, resume_lower: str, resume_stems: set[str]) -> bool:
    kw_lower = keyword.lower()

    # 1. Plain substring
    if kw_lower in resume_lower:
        return True

    words = kw_lower.split()

    # 2. Phrase: every word present somewhere, verbatim or stemmed (not necessarily adjacent)
    if len(words) > 1:
        return all(w in resume_lower or stem(w) in resume_stems for w in words)

    # 3. Single word: stemmed match
    return stem(kw_lower) in resume_stems


def match_keywords(
    resume_text: str,
    keywords: list[str],
    strict_mode: bool = True,
) -> KeywordMatchResult:
    """Match JD keywords against resume text.

    Returns matched/missing lists in keyword order and the match percentage.
    An empty keyword list is a perfect match.
    """
    if not keywords:
        return KeywordMatchResult(matched=[], missing=[], match_pct=100)

    matched: list[str] = []
    missing: list[str] = []

    if strict_mode:
        for kw in keywords:
            (matched if match_keyword_exact(kw, resume_text) else missing).append(kw)
    else:
        resume_lower = resume_text.lower()
        resume_stems = {stem(t) for t in tokenize(resume_text)}
        for kw in keywords:
            if _match_fuzzy(kw, resume_lower, resume_stems):
                matched.append(kw)
            else:
                missing.append(kw)

    match_pct = round_half_up(len(matched) / len(keywords) * 100)
    return KeywordMatchResult(matched=matched, missing=missing, match_pct=match_pct)
