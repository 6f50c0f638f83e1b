import pytest

from models.schemas.labeling import ResumeExample
from services.example_store import InMemoryExampleStore, JsonExampleStore


def _record(id_: str, industry: str = "technology", embedding=(1.0, 0.0)) -> ResumeExample:
    return ResumeExample(
        id=id_,
        job_title="Data Engineer",
        industry=industry,
        role_level="mid",
        outcome_type="positive",
        required_skills=["SQL"],
        job_description_embedding=list(embedding) if embedding is not None else None,
    )


@pytest.mark.asyncio
async def test_in_memory_query_drops_rows_without_embedding(example_rows):
    store = InMemoryExampleStore(example_rows)
    ids = [row["id"] for row in await store.query()]
    assert "no-embedding" not in ids
    assert len(ids) == len(example_rows) - 1


@pytest.mark.asyncio
async def test_in_memory_filters_and_limit(example_rows):
    store = InMemoryExampleStore(example_rows)
    assert [r["id"] for r in await store.query(role_level="mid")] == ["pos-1", "neg-1"]
    assert len(await store.query(limit=1)) == 1


@pytest.mark.asyncio
async def test_in_memory_add():
    store = InMemoryExampleStore()
    await store.add(_record("a"))
    assert len(store) == 1
    assert (await store.query())[0]["id"] == "a"


@pytest.mark.asyncio
async def test_json_store_round_trip(tmp_path):
    store = JsonExampleStore(tmp_path / "nested" / "examples.jsonl")
    await store.add(_record("a"))
    await store.add(_record("b", industry="finance"))
    await store.add(_record("c", embedding=None))

    rows = await store.query()
    assert [r["id"] for r in rows] == ["a", "b"]
    assert rows[0]["job_description_embedding"] == [1.0, 0.0]
    assert [r["id"] for r in await store.query(industry="finance")] == ["b"]


@pytest.mark.asyncio
async def test_json_store_missing_file(tmp_path):
    assert await JsonExampleStore(tmp_path / "absent.jsonl").query() == []


@pytest.mark.asyncio
async def test_json_store_skips_corrupt_lines(tmp_path):
    path = tmp_path / "examples.jsonl"
    path.write_text(
        '{"id": "ok", "outcome_type": "positive", "job_description_embedding": [1.0]}\n'
        "{not json\n"
        "\n",
        encoding="utf-8",
    )
    rows = await JsonExampleStore(path).query()
    assert [r["id"] for r in rows] == ["ok"]
