"""Shared fixtures: the three-lawyer directory and a scriptable fake remote."""

from __future__ import annotations

import os

import pytest

from models import LawyerRecord
from remote_client import QueryPage

# Keep Rich spinners out of captured output
os.environ.setdefault("LAWYERS_NO_PROGRESS", "1")


class FakeRemote:
    """In-memory RemoteReader that counts calls.

    ``rows`` is returned (windowed by offset/limit and filtered by category)
    unless ``error`` is set, in which case it is raised instead. A ``None``
    row stands for a stored document that could not be decoded.
    """

    def __init__(self, rows=None, error: Exception | None = None, docs=None) -> None:
        self.rows = list(rows or [])
        self.docs = {str(k): v for k, v in (docs or {}).items()}
        self.error = error
        self.query_calls: list[tuple] = []
        self.get_calls: list = []
        self.featured_calls: list[int] = []

    async def query_lawyers(self, categories, limit, offset=0):
        self.query_calls.append((tuple(categories), limit, offset))
        if self.error:
            raise self.error
        rows = self.rows
        if categories:
            rows = [r for r in rows if r is None or set(categories) & set(r.categories)]
        window = rows[offset:offset + limit]
        return QueryPage([r for r in window if r is not None], len(window))

    async def query_featured(self, limit):
        self.featured_calls.append(limit)
        if self.error:
            raise self.error
        return [r for r in self.rows if r is not None and r.verified][:limit]

    async def get_lawyer(self, lawyer_id):
        self.get_calls.append(lawyer_id)
        if self.error:
            raise self.error
        return self.docs.get(str(lawyer_id))


class FakeClock:
    def __init__(self, now: int = 1_000_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture()
def three_lawyers() -> list[LawyerRecord]:
    return [
        LawyerRecord(id=1, name="Alice Archer", firm="Archer Family Law",
                     categories=["Family Law"], rating=4.5, verified=True),
        LawyerRecord(id=2, name="Bob Baker", firm="Baker & Co",
                     categories=["Family Law", "Corporate Law"], rating=3.0, verified=False),
        LawyerRecord(id=3, name="Carol Chu", firm="Chu Legal",
                     categories=["Corporate Law"], rating=4.9, verified=False),
    ]


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
