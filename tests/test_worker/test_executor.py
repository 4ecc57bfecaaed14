"""
Tests for AnalysisExecutor.

These test the lifecycle decisions for one analysis:
- Analyzer returns → COMPLETED with results and duration
- Analyzer overruns its deadline → FAILED with error "timeout"
- Analyzer raises anything else → FAILED with error "scan_error"
- Unknown or already-terminal ids are skipped, never re-processed
"""

from analyzer.scanner import AnalysisTimeout
from analyzer.service import analyze
from models.enums import AnalysisStatus
from store.memory import MemoryAnalysisStore
from worker.executor import AnalysisExecutor


def _setup(analyzer=analyze, timeout_sec=None):
    store = MemoryAnalysisStore()
    return store, AnalysisExecutor(store, analyzer=analyzer, timeout_sec=timeout_sec)


def test_successful_analysis_completes():
    store, executor = _setup()
    record = store.create("app.js", "javascript", "var x = 1;\nif (x == 1) { console.log(x); }")

    outcome = executor.execute(record.id)

    assert outcome == {"status": "completed", "analysis_id": record.id}
    done = store.get(record.id)
    assert done.status == AnalysisStatus.COMPLETED
    assert done.results.summary.total == 3
    assert done.results.lines_of_code == 2
    assert done.duration == done.results.analysis_time
    assert done.error is None


def test_timeout_fails_with_timeout_reason():
    """A zero timeout puts the deadline in the past before the first line."""
    store, executor = _setup(timeout_sec=0)
    record = store.create("app.js", "javascript", "var x = 1;")

    outcome = executor.execute(record.id)

    assert outcome["status"] == "failed"
    assert outcome["error"] == "timeout"
    failed = store.get(record.id)
    assert failed.status == AnalysisStatus.FAILED
    assert failed.error == "timeout"
    assert failed.results is None


def test_unexpected_exception_fails_with_scan_error():
    def _explode(code, language, deadline=None):
        raise RuntimeError("boom")

    store, executor = _setup(analyzer=_explode)
    record = store.create("main.py", "python", "x = 1")

    outcome = executor.execute(record.id)

    assert outcome["error"] == "scan_error"
    failed = store.get(record.id)
    assert failed.status == AnalysisStatus.FAILED
    assert failed.error == "scan_error"


def test_analyzer_timeout_exception_is_mapped():
    def _slow(code, language, deadline=None):
        raise AnalysisTimeout("took too long")

    store, executor = _setup(analyzer=_slow)
    record = store.create("main.py", "python", "x = 1")

    executor.execute(record.id)

    assert store.get(record.id).error == "timeout"


def test_deadline_is_passed_only_when_configured():
    seen = []

    def _spy(code, language, deadline=None):
        seen.append(deadline)
        return analyze(code, language)

    store, executor = _setup(analyzer=_spy)
    executor.execute(store.create("a.py", "python", "x").id)

    store2, executor2 = _setup(analyzer=_spy, timeout_sec=30)
    executor2.execute(store2.create("b.py", "python", "x").id)

    assert seen[0] is None
    assert seen[1] is not None


def test_unknown_id_is_skipped():
    _, executor = _setup()
    assert executor.execute("missing")["status"] == "skipped"


def test_terminal_record_is_not_processed_again():
    calls = []

    def _counting(code, language, deadline=None):
        calls.append(code)
        return analyze(code, language)

    store, executor = _setup(analyzer=_counting)
    record = store.create("app.js", "javascript", "var x = 1;")

    executor.execute(record.id)
    first = store.get(record.id)
    second_outcome = executor.execute(record.id)

    assert len(calls) == 1
    assert second_outcome["status"] == "skipped"
    assert store.get(record.id) == first
