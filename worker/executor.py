"""
Analysis executor — runs the process step for one analysis inside a worker thread.

This is the code that actually DOES THE WORK. Each worker thread calls
executor.execute(analysis_id), and this method handles the full lifecycle:

    1. Look up the analysis in the store; skip it unless it is still PENDING
    2. Run the analyzer (rule engine + aggregator) on its code/language
    3. On success: update → COMPLETED with results and duration
    4. On deadline overrun: update → FAILED (error="timeout")
    5. On any other exception: update → FAILED (error="scan_error")

The executor never mutates a record itself; every state change goes
through store.update(), which refuses to move a record out of a terminal
status. Together with the PENDING check in step 1 this makes the process
step run at most once per analysis.

Thread safety:
- The analyzer is a pure function (no shared mutable state)
- The store is the only shared resource and is safe for concurrent callers
So multiple threads can call execute() simultaneously without locks.
"""

import logging
import time
from typing import Callable, Optional

from analyzer.scanner import AnalysisTimeout
from analyzer.service import analyze
from analyzer.types import AnalysisResult
from models.enums import AnalysisStatus, FailureReason
from store.base import AbstractAnalysisStore

logger = logging.getLogger(__name__)

Analyzer = Callable[..., AnalysisResult]


class AnalysisExecutor:

    def __init__(
        self,
        store: AbstractAnalysisStore,
        analyzer: Analyzer = analyze,
        timeout_sec: Optional[float] = None,
    ):
        self._store = store
        self._analyzer = analyzer
        self._timeout_sec = timeout_sec

    def execute(self, analysis_id: str) -> dict:
        """
        Process a single analysis. Called by WorkerPool from a thread.

        Returns:
            dict with execution status (for logging/debugging, not stored)
        """
        record = self._store.get(analysis_id)
        if record is None:
            logger.warning(f"Analysis {analysis_id} not found in store, skipping")
            return {"status": "skipped", "analysis_id": analysis_id}
        if record.status != AnalysisStatus.PENDING:
            logger.warning(f"Analysis {analysis_id} is already {record.status.value}, skipping")
            return {"status": "skipped", "analysis_id": analysis_id}

        deadline = None
        if self._timeout_sec is not None:
            deadline = time.monotonic() + self._timeout_sec

        logger.info(f"Analysis {analysis_id} [{record.language.value}] started")
        try:
            result = self._analyzer(record.code, record.language, deadline=deadline)
            self._store.update(
                analysis_id,
                status=AnalysisStatus.COMPLETED,
                results=result,
                duration=result.analysis_time,
            )
            logger.info(
                f"Analysis {analysis_id} [{record.language.value}] completed in "
                f"{result.analysis_time}ms: {result.summary.total} issues"
            )
            return {"status": "completed", "analysis_id": analysis_id}

        except AnalysisTimeout as e:
            logger.error(f"Analysis {analysis_id} timed out: {e}")
            return self._fail(analysis_id, FailureReason.TIMEOUT)

        except Exception as e:
            logger.error(f"Analysis {analysis_id} [{record.language.value}] failed: {e}", exc_info=True)
            return self._fail(analysis_id, FailureReason.SCAN_ERROR)

    def _fail(self, analysis_id: str, reason: FailureReason) -> dict:
        self._store.update(analysis_id, status=AnalysisStatus.FAILED, error=reason.value)
        return {"status": "failed", "analysis_id": analysis_id, "error": reason.value}
