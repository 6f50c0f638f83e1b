"""Per-resume content statistics used to compare successful and rejected examples."""

from pydantic import BaseModel


class ActionVerbPatterns(BaseModel):
    verbs: list[str] = []  # unique strong verbs as written, capped at 20
    strong_verb_count: int = 0
    weak_verb_count: int = 0
    verb_diversity: float = 0.0  # unique first words / total first words


class QuantificationPatterns(BaseModel):
    metrics_count: int = 0
    metric_types: list[str] = []  # percentage, dollar, multiplier, time, headcount, count, users
    avg_metrics_per_bullet: float = 0.0
    examples: list[str] = []


class KeywordPatterns(BaseModel):
    jd_keywords_found: list[str] = []
    jd_keywords_missing: list[str] = []
    keyword_density: float = 0.0  # keyword occurrences per 100 words
    keyword_in_first_half: float = 0.0  # % of found keywords present in the first half


class AchievementPatterns(BaseModel):
    results_first_count: int = 0
    car_format_count: int = 0
    impact_statements: list[str] = []


class StructurePatterns(BaseModel):
    summary_length: int = 0
    bullet_count: int = 0
    avg_bullet_length: int = 0
    section_order: list[str] = []
    experience_entries: int = 0


class ContentPatterns(BaseModel):
    action_verbs: ActionVerbPatterns = ActionVerbPatterns()
    quantification: QuantificationPatterns = QuantificationPatterns()
    keywords: KeywordPatterns | None = None  # only when JD keywords were supplied
    achievements: AchievementPatterns = AchievementPatterns()
    structure: StructurePatterns = StructurePatterns()


class PatternComparison(BaseModel):
    metric: str
    user_value: float
    ref_value: float
    delta: float
    insight: str
