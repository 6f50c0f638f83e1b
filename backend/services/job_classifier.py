"""Job-type detection and the scoring-weight profile each type selects."""

import logging
from types import MappingProxyType

from models.schemas.ats import JobType, WeightProfile

logger = logging.getLogger(__name__)

WEIGHT_PROFILES: MappingProxyType[JobType, WeightProfile] = MappingProxyType({
    JobType.TECH: WeightProfile(keywords=0.45, formatting=0.35, sections=0.20),
    JobType.SENIOR: WeightProfile(keywords=0.50, formatting=0.30, sections=0.20),
    JobType.ENTRY: WeightProfile(keywords=0.35, formatting=0.40, sections=0.25),
    JobType.GENERAL: WeightProfile(keywords=0.50, formatting=0.25, sections=0.25),
})

TECH_SIGNALS: tuple[str, ...] = (
    "engineer", "developer", "programming", "software", "backend", "frontend",
    "devops", "data scientist", "machine learning", "full stack", "fullstack",
    "sre", "infrastructure", "platform",
)

SENIOR_SIGNALS: tuple[str, ...] = (
    "senior", "lead", "principal", "staff", "architect", "director", "manager",
    "head of", "vp ", "vice president", "10+ years", "8+ years", "7+ years",
    "extensive experience",
)

ENTRY_SIGNALS: tuple[str, ...] = (
    "junior", "entry", "entry-level", "intern", "internship", "graduate",
    "new grad", "associate", "0-2 years", "1-3 years", "0-3 years",
    "early career", "no experience required",
)

# Hits needed before a vocabulary decides the job type
SIGNAL_THRESHOLD = 2


def _count_signals(text: str, signals: tuple[str, ...]) -> int:
    return sum(1 for s in signals if s in text)


def detect_job_type(job_description: str) -> JobType:
    """Classify a JD. Priority is senior > entry > tech > general.

    Senior roles are usually tech roles too, so seniority is checked first.
    """
    lower = job_description.lower()
    senior = _count_signals(lower, SENIOR_SIGNALS)
    entry = _count_signals(lower, ENTRY_SIGNALS)
    tech = _count_signals(lower, TECH_SIGNALS)
    logger.debug("Job type signals: senior=%d entry=%d tech=%d", senior, entry, tech)

    if senior >= SIGNAL_THRESHOLD:
        return JobType.SENIOR
    if entry >= SIGNAL_THRESHOLD:
        return JobType.ENTRY
    if tech >= SIGNAL_THRESHOLD:
        return JobType.TECH
    return JobType.GENERAL


def get_weight_profile(job_type: JobType) -> WeightProfile:
    return WEIGHT_PROFILES[job_type]
