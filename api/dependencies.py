"""
FastAPI dependency injection.

How this works:
- An endpoint declares `pipeline: AnalysisPipeline = Depends(get_pipeline)`
- FastAPI calls get_pipeline() before your endpoint runs
- Tests swap it out with app.dependency_overrides[get_pipeline]

The pipeline itself is built once in the app lifespan and stored on app.state.
"""

from fastapi import Request

from pipeline.orchestrator import AnalysisPipeline


def get_pipeline(request: Request) -> AnalysisPipeline:
    """Returns the pipeline stored on the app during startup."""
    return request.app.state.pipeline
