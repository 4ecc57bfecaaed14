"""
Store fixtures: every backend, each on in-process infrastructure.

    memory → MemoryAnalysisStore
    sql    → SqlAnalysisStore on in-memory SQLite
    redis  → RedisAnalysisStore on fakeredis

Tests that take the `store` fixture run once per backend, which is how the
shared contract in store/base.py is enforced.
"""

from datetime import datetime, timedelta, timezone

import fakeredis
import pytest

from models.base import make_engine
from store.memory import MemoryAnalysisStore
from store.redis_store import RedisAnalysisStore
from store.sql import SqlAnalysisStore


class FakeClock:
    """Deterministic clock: returns `now`, and only moves when told to."""

    def __init__(self):
        self.now = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return FakeClock()


def _build(backend: str, clock):
    if backend == "memory":
        return MemoryAnalysisStore(clock=clock)
    if backend == "sql":
        return SqlAnalysisStore(make_engine("sqlite:///:memory:"), clock=clock)
    if backend == "redis":
        return RedisAnalysisStore(fakeredis.FakeRedis(), clock=clock)
    raise ValueError(backend)


@pytest.fixture(params=["memory", "sql", "redis"])
def store(request, clock):
    s = _build(request.param, clock)
    yield s
    s.close()
