"""
Centralized configuration using pydantic-settings.

How it works:
- Reads environment variables automatically (e.g., WORKER_POOL_SIZE env var → Settings.WORKER_POOL_SIZE)
- Falls back to defaults defined here if env vars are not set
- Can also read from a .env file in the project root

Every module imports `settings` from here instead of hardcoding values.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Store ───────────────────────────────────────────────────
    STORE_BACKEND: str = "memory"      # memory | sql | redis
    DATABASE_URL: str = "sqlite:///./analyses.db"

    # ── Redis (only used when STORE_BACKEND=redis) ──────────────
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0

    # ── Worker ──────────────────────────────────────────────────
    WORKER_POOL_SIZE: int = 4          # number of threads in the worker pool
    QUEUE_MAX_SIZE: int = 0            # 0 = unbounded work queue
    ANALYSIS_TIMEOUT_SEC: Optional[float] = None  # None = no deadline on a scan

    # ── Polling ─────────────────────────────────────────────────
    POLL_INTERVAL_SEC: float = 1.0     # how often clients re-read a pending analysis
    POLL_TIMEOUT_SEC: float = 60.0

    # ── Uploads ─────────────────────────────────────────────────
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    ALLOWED_UPLOAD_EXTENSIONS: list[str] = [
        ".js", ".py", ".sol", ".txt", ".ts", ".jsx", ".tsx",
    ]

    # ── Stats ───────────────────────────────────────────────────
    # Share of found bugs reported as "fixed". Not backed by remediation
    # tracking; kept as a fixed estimate.
    FIXED_RATIO: float = 0.7

    # ── App ─────────────────────────────────────────────────────
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    @property
    def redis_url(self) -> str:
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton: import this everywhere
settings = Settings()
