"""
Shared test fixtures.

These replace real infrastructure with lightweight in-process alternatives:
- Store → MemoryAnalysisStore (SQL and Redis backends get their own fixtures
  in tests/test_store/conftest.py: in-memory SQLite and fakeredis)
- Worker pool → a real WorkerPool with 2 threads, stopped after each test
- HTTP server → httpx.AsyncClient with ASGI transport (no network)

This means tests:
- Run without Docker, Postgres or Redis
- Are fully isolated (each test gets a fresh store and pool)
"""

import asyncio
import time

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from api.dependencies import get_pipeline
from api.main import create_app
from pipeline.orchestrator import AnalysisPipeline
from store.memory import MemoryAnalysisStore
from worker.executor import AnalysisExecutor
from worker.pool import WorkerPool

POLL_TIMEOUT_SEC = 5.0


@pytest.fixture
def memory_store():
    return MemoryAnalysisStore()


@pytest.fixture
def pipeline(memory_store):
    """A started pipeline over a fresh in-memory store."""
    pool = WorkerPool(AnalysisExecutor(memory_store), pool_size=2, queue_max_size=0)
    p = AnalysisPipeline(memory_store, pool)
    p.start()
    yield p
    p.shutdown()


@pytest.fixture
def wait_for_terminal():
    """Poll a store until an analysis leaves pending (or fail the test)."""

    def _wait(store, analysis_id, timeout=POLL_TIMEOUT_SEC):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            record = store.get(analysis_id)
            if record is not None and record.status.is_terminal:
                return record
            time.sleep(0.01)
        raise AssertionError(f"Analysis {analysis_id} still pending after {timeout}s")

    return _wait


@pytest_asyncio.fixture
async def client(pipeline):
    """
    Create a test HTTP client that talks directly to the FastAPI app.

    dependency_overrides tells FastAPI: "instead of the pipeline built in the
    lifespan, use this test one". ASGITransport does not run the lifespan,
    so no second pipeline is started.
    """
    app = create_app()
    app.dependency_overrides[get_pipeline] = lambda: pipeline

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def poll_until_done():
    """Async equivalent of wait_for_terminal, going through GET /api/analyses/{id}."""

    async def _poll(client, analysis_id, timeout=POLL_TIMEOUT_SEC):
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            response = await client.get(f"/api/analyses/{analysis_id}")
            assert response.status_code == 200
            data = response.json()
            if data["status"] != "pending":
                return data
            await asyncio.sleep(0.01)
        raise AssertionError(f"Analysis {analysis_id} still pending after {timeout}s")

    return _poll
