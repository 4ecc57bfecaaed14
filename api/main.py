"""
FastAPI application factory.

This file:
1. Creates the FastAPI app
2. Runs startup logic (build the store, start the worker pool)
3. Registers all routers (analyses, health) and error handlers
4. Runs shutdown logic (stop the worker pool, close the store)

The `lifespan` context manager is FastAPI's way of handling startup/shutdown.

To run:  uvicorn api.main:app --host 0.0.0.0 --port 8000 --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.routers import analyses, health
from config.settings import settings
from pipeline.orchestrator import build_pipeline
from pipeline.upload import UploadRejected
from worker.pool import PoolStopped

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Runs on startup (before yield) and shutdown (after yield).

    Startup:
    - Builds the configured store (memory, sql or redis)
    - Starts the worker pool that processes submitted analyses

    Shutdown:
    - Stops the worker pool (waits for in-flight analyses)
    - Closes the store
    """
    # ── Startup ─────────────────────────────────────────────────
    pipeline = build_pipeline()
    pipeline.start()
    app.state.pipeline = pipeline
    logger.info(f"API ready — store: {pipeline.store.backend_name}")

    yield  # app is running and serving requests between startup and shutdown

    # ── Shutdown ────────────────────────────────────────────────
    pipeline.shutdown()
    logger.info("API shut down")


async def upload_rejected_handler(request: Request, exc: UploadRejected) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def pool_stopped_handler(request: Request, exc: PoolStopped) -> JSONResponse:
    """Submissions that arrive while the app is shutting down."""
    return JSONResponse(status_code=503, content={"detail": "Service is shutting down"})


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    app = FastAPI(
        title="Code Analysis Pipeline",
        description="Asynchronous rule-based source code analysis (JavaScript, Python, Solidity)",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Register routers; each one adds its endpoints to the app
    app.include_router(health.router)
    app.include_router(analyses.router)

    app.add_exception_handler(PoolStopped, pool_stopped_handler)
    app.add_exception_handler(UploadRejected, upload_rejected_handler)

    return app


# This is what uvicorn imports: `uvicorn api.main:app`
app = create_app()
