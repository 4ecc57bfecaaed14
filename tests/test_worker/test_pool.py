"""
Tests for WorkerPool dispatching.

A recording executor stands in for AnalysisExecutor so these check only
the pool: ids flow from enqueue() to execute() on worker threads, and
stop() drains what was queued before it.
"""

import threading
import time

import pytest

from models.enums import AnalysisStatus
from store.memory import MemoryAnalysisStore
from worker.executor import AnalysisExecutor
from worker.pool import PoolStopped, WorkerPool


class RecordingExecutor:

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.seen: list[str] = []
        self.threads: set[str] = set()
        self._lock = threading.Lock()

    def execute(self, analysis_id: str) -> dict:
        if self.delay:
            time.sleep(self.delay)
        with self._lock:
            self.seen.append(analysis_id)
            self.threads.add(threading.current_thread().name)
        return {"status": "completed", "analysis_id": analysis_id}


def _wait_until(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


def test_enqueued_ids_are_executed_on_worker_threads():
    executor = RecordingExecutor()
    pool = WorkerPool(executor, pool_size=2, queue_max_size=0)
    pool.start()
    try:
        for i in range(10):
            pool.enqueue(f"id-{i}")
        assert _wait_until(lambda: len(executor.seen) == 10)
    finally:
        pool.stop()

    assert sorted(executor.seen) == sorted(f"id-{i}" for i in range(10))
    assert all(name.startswith("analysis-worker") for name in executor.threads)


def test_stop_drains_queued_ids():
    executor = RecordingExecutor(delay=0.02)
    pool = WorkerPool(executor, pool_size=1, queue_max_size=0)
    pool.start()
    for i in range(5):
        pool.enqueue(f"id-{i}")

    pool.stop()

    assert len(executor.seen) == 5
    assert not pool.running


def test_enqueue_before_start_runs_after_start():
    executor = RecordingExecutor()
    pool = WorkerPool(executor, pool_size=1, queue_max_size=0)
    pool.enqueue("early")
    assert pool.queue_depth == 1

    pool.start()
    try:
        assert _wait_until(lambda: executor.seen == ["early"])
    finally:
        pool.stop()


def test_start_and_stop_are_idempotent():
    pool = WorkerPool(RecordingExecutor(), pool_size=1, queue_max_size=0)
    pool.stop()           # never started
    pool.start()
    pool.start()
    assert pool.running
    pool.stop()
    pool.stop()
    assert not pool.running


def test_executor_exception_does_not_kill_the_pool():
    class Flaky(RecordingExecutor):
        def execute(self, analysis_id):
            if analysis_id == "bad":
                raise RuntimeError("unhandled")
            return super().execute(analysis_id)

    executor = Flaky()
    pool = WorkerPool(executor, pool_size=1, queue_max_size=0)
    pool.start()
    try:
        pool.enqueue("bad")
        pool.enqueue("good")
        assert _wait_until(lambda: executor.seen == ["good"])
    finally:
        pool.stop()


def test_many_submissions_all_reach_a_terminal_status():
    store = MemoryAnalysisStore()
    pool = WorkerPool(AnalysisExecutor(store), pool_size=4, queue_max_size=8)
    pool.start()
    try:
        ids = [
            store.create(f"f{i}.js", "javascript", f"var x{i} = {i};").id
            for i in range(40)
        ]
        for analysis_id in ids:
            pool.enqueue(analysis_id)    # blocks while the bounded queue is full
    finally:
        pool.stop()

    statuses = {store.get(i).status for i in ids}
    assert statuses == {AnalysisStatus.COMPLETED}


def test_enqueue_after_stop_is_refused():
    executor = RecordingExecutor()
    pool = WorkerPool(executor, pool_size=1, queue_max_size=0)
    pool.start()
    pool.stop()

    assert pool.stopped
    with pytest.raises(PoolStopped):
        pool.enqueue("late")
    assert pool.queue_depth == 0
    assert executor.seen == []


def test_never_started_pool_is_not_stopped():
    pool = WorkerPool(RecordingExecutor(), pool_size=1, queue_max_size=0)
    assert not pool.stopped
    pool.stop()           # no-op, so early enqueues still work
    assert not pool.stopped


def test_restart_accepts_work_again():
    executor = RecordingExecutor()
    pool = WorkerPool(executor, pool_size=1, queue_max_size=0)
    pool.start()
    pool.stop()

    pool.start()
    try:
        assert not pool.stopped
        pool.enqueue("again")
        assert _wait_until(lambda: executor.seen == ["again"])
    finally:
        pool.stop()
