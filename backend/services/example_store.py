"""Storage for labelled historical resume examples.

Stores only return rows that carry a JD embedding; similarity ranking is
done by the caller, not by the store.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

from config import settings
from models.schemas.labeling import ResumeExample

logger = logging.getLogger(__name__)


class ExampleStore(Protocol):
    async def query(
        self,
        industry: str | None = None,
        role_level: str | None = None,
        limit: int = 100,
    ) -> list[dict]:
        """Rows with a non-null JD embedding, optionally pre-filtered."""

    async def add(self, record: ResumeExample) -> None:
        """Persist one labelled example."""


def _filter_rows(
    rows: list[dict], industry: str | None, role_level: str | None, limit: int
) -> list[dict]:
    selected = []
    for row in rows:
        if row.get("job_description_embedding") is None:
            continue
        if industry and row.get("industry") != industry:
            continue
        if role_level and row.get("role_level") != role_level:
            continue
        selected.append(row)
        if len(selected) >= limit:
            break
    return selected


class InMemoryExampleStore:
    def __init__(self, rows: list[dict] | None = None):
        self._rows: list[dict] = list(rows or [])

    async def query(
        self,
        industry: str | None = None,
        role_level: str | None = None,
        limit: int = 100,
    ) -> list[dict]:
        return _filter_rows(self._rows, industry, role_level, limit)

    async def add(self, record: ResumeExample) -> None:
        self._rows.append(record.model_dump())

    def __len__(self) -> int:
        return len(self._rows)


class JsonExampleStore:
    """Examples kept one JSON object per line in a local file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_rows(self) -> list[dict]:
        if not self.path.exists():
            return []
        rows = []
        with self.path.open(encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    rows.append(json.loads(line))
                except json.JSONDecodeError as e:
                    logger.warning("Skipping corrupt example at %s:%d: %s", self.path, line_no, e)
        return rows

    async def query(
        self,
        industry: str | None = None,
        role_level: str | None = None,
        limit: int = 100,
    ) -> list[dict]:
        return _filter_rows(self._read_rows(), industry, role_level, limit)

    async def add(self, record: ResumeExample) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(record.model_dump_json() + "\n")
        logger.info("Stored example %s (%s)", record.id, record.outcome_type)


_default_store: ExampleStore | None = None


def get_example_store() -> ExampleStore:
    global _default_store
    if _default_store is None:
        _default_store = JsonExampleStore(settings.examples_store_path)
    return _default_store
