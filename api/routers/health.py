"""
Health check endpoint.

This is the first thing you hit to verify the system is running.
It touches the store (count) and reports the worker queue depth.

In production, load balancers and container orchestrators (k8s) use
health endpoints to decide if a service is ready to receive traffic.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_pipeline
from pipeline.orchestrator import AnalysisPipeline

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check(
    pipeline: AnalysisPipeline = Depends(get_pipeline),
) -> dict:
    """Check that the store is reachable and the worker pool is running."""
    return {
        "status": "healthy" if pipeline.pool.running else "degraded",
        "store": pipeline.store.backend_name,
        "analyses": pipeline.store.count(),
        "queue_depth": pipeline.pool.queue_depth,
    }
