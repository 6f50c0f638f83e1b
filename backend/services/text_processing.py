"""Tokenizer and rule-based stemmer shared by keyword extraction and matching."""

import re
from typing import NamedTuple

# Anything that is not a letter, digit, whitespace or one of - / + # becomes a space
_NON_TOKEN_RE = re.compile(r"[^a-z0-9\s\-/+#]")
_PURE_NUMBER_RE = re.compile(r"^\d+$")

# Hyphens and slashes only survive inside a token ("ci/cd", "e-commerce");
# trailing + and # are kept so "c++" and "c#" stay intact.
_LEADING_SPECIAL = "-/#+"
_TRAILING_SPECIAL = "-/"


def tokenize(text: str) -> list[str]:
    """Lower-case and split text into tokens.

    Drops single characters and pure numbers (salary figures, years).
    """
    cleaned = _NON_TOKEN_RE.sub(" ", text.lower())
    tokens = []
    for raw in cleaned.split():
        token = raw.lstrip(_LEADING_SPECIAL).rstrip(_TRAILING_SPECIAL)
        if len(token) <= 1 or _PURE_NUMBER_RE.match(token):
            continue
        tokens.append(token)
    return tokens


class _SuffixRule(NamedTuple):
    suffix: str
    replacement: str
    min_length: int = 0  # rule applies only when len(word) > min_length
    unless: str = ""  # rule skipped when the word ends with this


# Tried top to bottom; the first applicable rule rewrites the word and stemming stops.
STEM_RULES: tuple[_SuffixRule, ...] = (
    _SuffixRule("iness", "y"),
    _SuffixRule("ies", "y", 4),
    _SuffixRule("ational", "ate"),
    _SuffixRule("ization", "ize"),
    _SuffixRule("fulness", "ful"),
    _SuffixRule("ousness", "ous"),
    _SuffixRule("iveness", "ive"),
    _SuffixRule("ement", ""),
    _SuffixRule("ment", ""),
    _SuffixRule("tion", "t"),
    _SuffixRule("sion", "s"),
    _SuffixRule("ness", ""),
    _SuffixRule("able", ""),
    _SuffixRule("ible", ""),
    _SuffixRule("ally", "al"),
    _SuffixRule("ful", ""),
    _SuffixRule("ous", ""),
    _SuffixRule("ive", ""),
    _SuffixRule("ing", "", 5),
    _SuffixRule("ied", "y"),
    _SuffixRule("ted", "t", 5),
    _SuffixRule("ed", "", 4),
    _SuffixRule("ly", "", 4),
    _SuffixRule("er", "", 4),
    _SuffixRule("es", "", 4),
    _SuffixRule("al", "", 4),
    _SuffixRule("s", "", 3, unless="ss"),
)


def stem(word: str) -> str:
    """Strip one English suffix using the ordered STEM_RULES cascade.

    Words of three characters or fewer are returned lower-cased but otherwise unchanged.
    """
    w = word.lower()
    if len(w) <= 3:
        return w

    for rule in STEM_RULES:
        if not w.endswith(rule.suffix) or len(w) <= rule.min_length:
            continue
        if rule.unless and w.endswith(rule.unless):
            continue
        return w[: -len(rule.suffix)] + rule.replacement
    return w
