import pytest

from models.schemas.content_patterns import (
    ActionVerbPatterns,
    ContentPatterns,
    KeywordPatterns,
    QuantificationPatterns,
    StructurePatterns,
)
from models.schemas.learning import SimilarJob
from services.errors import EmbeddingUnavailableError
from services.example_store import InMemoryExampleStore
from services.success_matching import (
    find_similar_jobs,
    generate_insights,
    get_learned_insights_for_resume,
    get_learned_patterns,
)


class BrokenStore:
    async def query(self, industry=None, role_level=None, limit=100):
        raise RuntimeError("database unavailable")

    async def add(self, record):
        raise RuntimeError("database unavailable")


def _user_patterns() -> ContentPatterns:
    return ContentPatterns(
        action_verbs=ActionVerbPatterns(weak_verb_count=4),
        quantification=QuantificationPatterns(avg_metrics_per_bullet=0.2),
        keywords=KeywordPatterns(jd_keywords_found=["Python"]),
        structure=StructurePatterns(bullet_count=3),
    )


async def _similar(example_store, fake_provider) -> list[SimilarJob]:
    return await find_similar_jobs("Backend engineer", store=example_store, provider=fake_provider)


@pytest.mark.asyncio
async def test_find_similar_jobs_ranks_and_filters(example_store, fake_provider):
    jobs = await _similar(example_store, fake_provider)
    assert [j.id for j in jobs] == ["pos-1", "neg-1"]
    assert jobs[0].similarity == pytest.approx(1.0)
    assert jobs[1].similarity == pytest.approx(0.9 / (0.82 ** 0.5))
    assert jobs[0].content_patterns.quantification.metrics_count == 10


@pytest.mark.asyncio
async def test_find_similar_jobs_threshold_and_limit(example_store, fake_provider):
    strict = await find_similar_jobs(
        "jd", min_similarity=0.995, store=example_store, provider=fake_provider
    )
    assert [j.id for j in strict] == ["pos-1"]

    everything = await find_similar_jobs(
        "jd", min_similarity=-1.0, store=example_store, provider=fake_provider
    )
    # rows without an embedding or with the wrong dimensions never appear
    assert [j.id for j in everything] == ["pos-1", "neg-1", "far-1"]

    limited = await find_similar_jobs("jd", limit=1, store=example_store, provider=fake_provider)
    assert [j.id for j in limited] == ["pos-1"]


@pytest.mark.asyncio
async def test_find_similar_jobs_filters_by_industry(example_store, fake_provider):
    jobs = await find_similar_jobs(
        "jd", industry="finance", store=example_store, provider=fake_provider
    )
    assert jobs == []


@pytest.mark.asyncio
async def test_find_similar_jobs_skips_malformed_rows(fake_provider):
    store = InMemoryExampleStore([
        {"id": "no-outcome", "job_description_embedding": [1.0, 0.0, 0.0]},
        {"id": "unknown-outcome", "outcome_type": "maybe", "job_description_embedding": [1.0, 0.0, 0.0]},
        {"id": "ok", "outcome_type": "negative", "job_description_embedding": [1.0, 0.0, 0.0]},
    ])
    jobs = await find_similar_jobs("jd", store=store, provider=fake_provider)
    assert [j.id for j in jobs] == ["ok"]


@pytest.mark.asyncio
async def test_store_failure_yields_no_matches(fake_provider):
    assert await find_similar_jobs("jd", store=BrokenStore(), provider=fake_provider) == []


@pytest.mark.asyncio
async def test_query_embedding_failure_propagates(example_store, failing_provider):
    with pytest.raises(EmbeddingUnavailableError):
        await find_similar_jobs("jd", store=example_store, provider=failing_provider)


@pytest.mark.asyncio
async def test_learned_patterns(example_store, fake_provider):
    learned = get_learned_patterns(await _similar(example_store, fake_provider))

    assert learned.avg_metrics_per_bullet.positive == pytest.approx(1.2)
    assert learned.avg_metrics_per_bullet.negative == pytest.approx(0.2)
    assert learned.avg_metrics_per_bullet.recommendation == "Aim for at least 2 metrics per bullet"
    assert learned.common_strong_verbs == ["led", "built", "reduced", "designed", "launched"]
    assert learned.must_have_skills == ["python", "kubernetes", "postgresql"]
    assert learned.missing_skills_in_rejected == ["kafka", "terraform"]
    assert learned.avg_bullet_count.positive == 12
    assert learned.avg_bullet_count.negative == 5
    assert learned.recommended_section_order == ["Summary", "Experience", "Skills"]
    assert [i.type for i in learned.insights] == ["quantification", "verbs", "skills", "structure"]
    assert learned.insights[0].source == "contrastive"
    assert learned.insights[0].message.endswith("(vs 0.2 in rejected ones).")


def test_learned_patterns_need_positive_examples():
    negative = SimilarJob(id="n", outcome_type="negative", similarity=0.9)
    assert get_learned_patterns([negative]) is None


def test_must_have_skills_need_half_of_positives():
    jobs = [
        SimilarJob(id="a", outcome_type="positive", similarity=0.9, required_skills=["Go", "SQL"]),
        SimilarJob(id="b", outcome_type="positive", similarity=0.9, required_skills=["go"]),
        SimilarJob(id="c", outcome_type="positive", similarity=0.9, required_skills=["Rust"]),
    ]
    assert get_learned_patterns(jobs).must_have_skills == ["go"]


@pytest.mark.asyncio
async def test_generate_insights(example_store, fake_provider):
    learned = get_learned_patterns(await _similar(example_store, fake_provider))
    insights = generate_insights(_user_patterns(), learned)

    assert [i.type for i in insights] == ["quantification", "verbs", "skills", "structure"]
    assert insights[1].importance == "high"
    assert insights[1].message == "Replace 4 weak verbs. Try using: led, built, reduced, designed."
    assert "kubernetes, postgresql" in insights[2].message
    assert "python" not in insights[2].message


@pytest.mark.asyncio
async def test_get_learned_insights_for_resume(example_store, fake_provider):
    result = await get_learned_insights_for_resume(
        "Backend engineer", _user_patterns(), store=example_store, provider=fake_provider
    )
    assert result.similar_jobs_found == 2
    assert result.positive_examples == 1
    assert result.negative_examples == 1
    assert result.contrastive.has_contrastive_data
    assert result.patterns is not None

    messages = [i.message for i in result.insights]
    assert len(messages) == len(set(messages))
    order = {"high": 0, "medium": 1, "low": 2}
    ranks = [order[i.importance] for i in result.insights]
    assert ranks == sorted(ranks)

    assert result.suggestions
    assert all(s.message.startswith("[Learned] ") for s in result.suggestions)


@pytest.mark.asyncio
async def test_get_learned_insights_without_matches(fake_provider):
    result = await get_learned_insights_for_resume(
        "Backend engineer", _user_patterns(), store=InMemoryExampleStore(), provider=fake_provider
    )
    assert result.similar_jobs_found == 0
    assert result.contrastive is None
    assert result.insights == []
