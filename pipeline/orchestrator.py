"""
Analysis pipeline — owns the analysis lifecycle.

    submit(code, language, filename)
        │ Submission(...)     invalid → pydantic.ValidationError, nothing stored
        │ store.create        status = pending
        │ pool.enqueue(id)    returns immediately
        ▼
    pending record returned to the caller

    (worker thread)  AnalysisExecutor.execute(id)
        pending ──► completed   results + duration attached
        pending ──► failed      error reason, no results

    get(id)  ← callers poll this (~1s interval) until status != pending

Both terminal statuses are final: the store ignores any later update, so a
poller that has seen completed/failed will never see the record change again.

The pipeline never touches a record directly; reads and writes go through
the store, and the process step lives in worker/executor.py.
"""

import logging
from typing import Optional

from analyzer.scanner import split_lines
from config.settings import settings
from models.enums import AnalysisStatus, FailureReason, Language
from pipeline.validation import Submission
from rules.registry import supported_languages
from store.base import AbstractAnalysisStore, AnalysisRecord, AnalysisStats, DEFAULT_RECENT_LIMIT
from store.registry import create_store
from worker.executor import AnalysisExecutor
from worker.pool import PoolStopped, WorkerPool

logger = logging.getLogger(__name__)


class AnalysisPipeline:

    def __init__(self, store: AbstractAnalysisStore, pool: WorkerPool):
        self._store = store
        self._pool = pool

    @property
    def store(self) -> AbstractAnalysisStore:
        return self._store

    @property
    def pool(self) -> WorkerPool:
        return self._pool

    def submit(self, code: str, language: Language | str, filename: str) -> AnalysisRecord:
        """
        Accept a submission and schedule it for background processing.

        Returns:
            The freshly created record (status pending). The caller does not
            wait for the scan.

        Raises:
            pydantic.ValidationError: invalid code/language/filename; no record is created
            PoolStopped: the worker pool has been stopped; no record is created
        """
        submission = Submission(code=code, language=language, filename=filename)
        if self._pool.stopped:
            raise PoolStopped(f"Worker pool is stopped, not accepting {submission.filename!r}")

        record = self._store.create(
            filename=submission.filename,
            language=submission.language,
            code=submission.code,
        )
        try:
            self._pool.enqueue(record.id)
        except PoolStopped:
            # stopped between the check above and the enqueue
            self._store.update(record.id, status=AnalysisStatus.FAILED, error=FailureReason.SHUTDOWN.value)
            raise
        logger.info(
            f"Submitted analysis {record.id} [{submission.language.value}] "
            f"filename={submission.filename!r} lines={len(split_lines(submission.code))}"
        )
        return record

    def get(self, analysis_id: str) -> Optional[AnalysisRecord]:
        return self._store.get(analysis_id)

    def list_all(self) -> list[AnalysisRecord]:
        return self._store.list_all()

    def list_recent(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[AnalysisRecord]:
        return self._store.list_recent(limit)

    def stats(self) -> AnalysisStats:
        return self._store.stats()

    @staticmethod
    def languages() -> list[str]:
        return supported_languages()

    def start(self) -> None:
        self._pool.start()

    def shutdown(self) -> None:
        self._pool.stop()
        self._store.close()


def build_pipeline(store: Optional[AbstractAnalysisStore] = None) -> AnalysisPipeline:
    """Wire store → executor → worker pool → pipeline from settings."""
    store = store or create_store()
    executor = AnalysisExecutor(store, timeout_sec=settings.ANALYSIS_TIMEOUT_SEC)
    pool = WorkerPool(executor)
    return AnalysisPipeline(store, pool)
