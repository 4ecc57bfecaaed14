"""
Worker pool — manages a thread pool that processes analyses off a work queue.

Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                    WorkerPool                            │
    │                                                         │
    │  enqueue(analysis_id) ──► queue.Queue (work queue)       │
    │                                                         │
    │  Dispatcher Thread                                      │
    │  ┌───────────────────────┐                              │
    │  │ queue.get(timeout=1)  │  ← blocks until an id        │
    │  │                       │    arrives, zero polling     │
    │  └──────────┬────────────┘                              │
    │             │ submit()                                   │
    │             ▼                                            │
    │  ┌──────────────────────────────────────────┐           │
    │  │ ThreadPoolExecutor (N threads)            │           │
    │  │  ┌────────┐ ┌────────┐ ┌────────┐         │           │
    │  │  │execute │ │execute │ │(idle)  │  ...    │           │
    │  │  └────────┘ └────────┘ └────────┘         │           │
    │  └──────────────────────────────────────────┘           │
    └─────────────────────────────────────────────────────────┘

enqueue() returns as soon as the id is queued, so the submit path never
waits for a scan. With QUEUE_MAX_SIZE > 0 the queue is bounded and
enqueue() blocks while it is full — natural backpressure.

Analyses for different ids run concurrently; nothing orders their
completion relative to submission order.
"""

import logging
import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from config.settings import settings
from worker.executor import AnalysisExecutor

logger = logging.getLogger(__name__)

_STOP = object()


class PoolStopped(RuntimeError):
    """enqueue() after stop(): the id would never be dispatched."""


class WorkerPool:

    DISPATCH_TIMEOUT_SEC = 1.0

    def __init__(
        self,
        executor: AnalysisExecutor,
        pool_size: Optional[int] = None,
        queue_max_size: Optional[int] = None,
    ):
        self._pool_size = pool_size or settings.WORKER_POOL_SIZE
        self._queue: queue.Queue[str] = queue.Queue(
            maxsize=settings.QUEUE_MAX_SIZE if queue_max_size is None else queue_max_size
        )
        self._job_executor = executor
        self._executor: Optional[ThreadPoolExecutor] = None
        self._dispatcher: Optional[threading.Thread] = None
        self._running = threading.Event()
        self._stopped = False
        self._accept_lock = threading.Lock()  # orders enqueue() against stop()

    @property
    def queue_depth(self) -> int:
        return self._queue.qsize()

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def stopped(self) -> bool:
        """True between stop() and the next start(). A pool that was never started is not stopped."""
        return self._stopped

    def start(self) -> None:
        """Start the dispatcher thread that feeds analyses to the thread pool."""
        if self.running:
            return
        self._executor = ThreadPoolExecutor(
            max_workers=self._pool_size,
            thread_name_prefix="analysis-worker",
        )
        self._stopped = False
        self._running.set()
        self._dispatcher = threading.Thread(
            target=self._dispatch_loop, name="analysis-dispatcher", daemon=True
        )
        self._dispatcher.start()
        logger.info(f"Worker pool started with {self._pool_size} threads")

    def stop(self) -> None:
        """Stop taking new work: drain the queue, then wait for in-flight analyses."""
        if not self.running:
            return
        with self._accept_lock:
            self._stopped = True
            self._running.clear()
            try:
                self._queue.put_nowait(_STOP)  # wake the dispatcher instead of waiting out its timeout
            except queue.Full:
                pass
        if self._dispatcher is not None:
            self._dispatcher.join()
        self._executor.shutdown(wait=True)
        logger.info("Worker pool stopped")

    def enqueue(self, analysis_id: str) -> None:
        """
        Queue an analysis for processing. Blocks only if a bounded queue is full.

        Raises:
            PoolStopped: the pool has been stopped, nothing would dispatch the id
        """
        with self._accept_lock:
            if self._stopped:
                logger.warning(f"Refusing analysis {analysis_id}: worker pool is stopped")
                raise PoolStopped(f"Worker pool is stopped, cannot queue {analysis_id}")
            self._queue.put(analysis_id)
        logger.debug(f"Queued analysis {analysis_id} (depth={self._queue.qsize()})")

    def _dispatch_loop(self) -> None:
        """
        Continuously take ids off the queue and submit them to the thread pool.

        Runs until it reaches the stop sentinel, so every id queued before
        stop() is still dispatched. The 1-second timeout is a fallback for
        when the sentinel could not be queued (bounded queue full).
        """
        while True:
            try:
                analysis_id = self._queue.get(timeout=self.DISPATCH_TIMEOUT_SEC)
            except queue.Empty:
                if not self._running.is_set():
                    break
                continue  # timeout, loop again (check running flag)

            if analysis_id is _STOP:
                self._queue.task_done()
                break

            try:
                logger.debug(f"Dispatching analysis {analysis_id} to thread pool")
                future: Future = self._executor.submit(
                    self._job_executor.execute, analysis_id
                )
                future.add_done_callback(self._on_job_done)
            except Exception as e:
                logger.error(f"Dispatch error for {analysis_id}: {e}", exc_info=True)
            finally:
                self._queue.task_done()

    def _on_job_done(self, future: Future) -> None:
        """
        Callback fired when a worker thread finishes executing an analysis.

        We use it only for logging unhandled exceptions — all normal
        success/failure handling happens inside AnalysisExecutor.execute().
        """
        exc = future.exception()
        if exc:
            logger.error(f"Unhandled worker exception: {exc}")
