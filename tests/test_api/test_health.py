"""Tests for the /health endpoint."""

import pytest


@pytest.mark.asyncio
async def test_health_check(client):
    """GET /health should return healthy status."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["store"] == "memory"
    assert data["analyses"] == 0
    assert data["queue_depth"] == 0


@pytest.mark.asyncio
async def test_health_counts_analyses(client):
    await client.post(
        "/api/analyze",
        json={"code": "var a = 1;", "language": "javascript", "filename": "a.js"},
    )
    response = await client.get("/health")
    assert response.json()["analyses"] == 1


@pytest.mark.asyncio
async def test_health_degraded_when_pool_stopped(client, pipeline):
    pipeline.pool.stop()
    response = await client.get("/health")
    assert response.json()["status"] == "degraded"
