"""
Store factory — maps a backend name to a configured store instance.

One place that knows how to build every backend from settings:
    create_store("memory")  → MemoryAnalysisStore
    create_store("sql")     → SqlAnalysisStore on settings.DATABASE_URL
    create_store("redis")   → RedisAnalysisStore on settings.redis_url
"""

from redis import Redis

from config.settings import settings
from models.base import make_engine
from store.base import AbstractAnalysisStore
from store.memory import MemoryAnalysisStore
from store.redis_store import RedisAnalysisStore
from store.sql import SqlAnalysisStore

BACKENDS = ("memory", "sql", "redis")


def create_store(backend: str | None = None) -> AbstractAnalysisStore:
    backend = (backend or settings.STORE_BACKEND).lower()
    common = {"fixed_ratio": settings.FIXED_RATIO}

    if backend == "memory":
        return MemoryAnalysisStore(**common)
    if backend == "sql":
        return SqlAnalysisStore(make_engine(settings.DATABASE_URL), **common)
    if backend == "redis":
        return RedisAnalysisStore(Redis.from_url(settings.redis_url), **common)

    raise ValueError(f"Unknown store backend: '{backend}'. Available: {list(BACKENDS)}")
