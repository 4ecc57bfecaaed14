"""
Abstract base class for analysis stores (Strategy pattern).

The pipeline only knows about AbstractAnalysisStore — it calls create(),
get() and update() without caring whether records live in a dict, a SQL
table or Redis.

To add a new backend:
1. Create a class that inherits AbstractAnalysisStore
2. Implement the abstract methods
3. Register it in store/registry.py

Contract shared by every backend:
- Safe for concurrent callers; updates to one id are atomic
- Readers always see whole records, never a half-applied update
- list_all() is newest first; equal timestamps keep insertion order
- Only status/results/duration/error can be updated, and a record in a
  terminal status is never changed again
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from analyzer.types import AnalysisResult
from models.enums import AnalysisStatus, Language

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

UPDATABLE_FIELDS = frozenset({"status", "results", "duration", "error"})
DEFAULT_RECENT_LIMIT = 5
DEFAULT_FIXED_RATIO = 0.7


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AnalysisRecord:
    """One submitted scan request and its lifecycle state."""
    id: str
    filename: str
    language: Language
    code: str
    created_at: datetime
    status: AnalysisStatus = AnalysisStatus.PENDING
    results: Optional[AnalysisResult] = None
    duration: Optional[int] = None   # milliseconds, set together with results
    error: Optional[str] = None      # FailureReason value when status is failed


@dataclass(frozen=True)
class AnalysisStats:
    total_analyses: int
    bugs_found: int
    vulnerabilities: int
    fixed: int


class AbstractAnalysisStore(ABC):
    """
    Interface that all store backends implement.

    Backends implement the storage primitives (create, get, list_all, update,
    count). list_recent() and stats() are derived from list_all() here, so every
    backend aggregates the same way.
    """

    backend_name: str = "abstract"

    def __init__(self, clock: Clock = utcnow, fixed_ratio: float = DEFAULT_FIXED_RATIO):
        self._clock = clock
        self._fixed_ratio = fixed_ratio

    @abstractmethod
    def create(self, filename: str, language: Language | str, code: str) -> AnalysisRecord:
        """Store a new pending record with a fresh id and created_at=now."""
        ...

    @abstractmethod
    def get(self, analysis_id: str) -> Optional[AnalysisRecord]:
        """Return the record, or None if the id is unknown."""
        ...

    @abstractmethod
    def list_all(self) -> list[AnalysisRecord]:
        """All records, newest first (ties in insertion order)."""
        ...

    @abstractmethod
    def update(self, analysis_id: str, **fields: Any) -> Optional[AnalysisRecord]:
        """
        Merge fields into an existing record.

        Returns the stored record after the update, or None if the id is
        unknown. A record already in a terminal status is returned unchanged.

        Raises:
            ValueError: a field outside status/results/duration/error
        """
        ...

    @abstractmethod
    def count(self) -> int:
        ...

    def list_recent(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[AnalysisRecord]:
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        return self.list_all()[:limit]

    def stats(self) -> AnalysisStats:
        records = self.list_all()
        completed = [
            r for r in records
            if r.status == AnalysisStatus.COMPLETED and r.results is not None
        ]
        bugs_found = sum(r.results.summary.total for r in completed)
        vulnerabilities = sum(r.results.summary.vulnerabilities for r in completed)
        return AnalysisStats(
            total_analyses=len(records),
            bugs_found=bugs_found,
            vulnerabilities=vulnerabilities,
            fixed=math.floor(bugs_found * self._fixed_ratio),
        )

    def close(self) -> None:
        """Release backend resources. No-op by default."""


def check_update_fields(fields: dict) -> None:
    """
    Reject updates that could break "results is set iff status is completed".

    Only a pending record is ever changed, and it has no results, so it is
    enough to check the fields of one update on their own:
    - results/duration only arrive together with status=completed
    - status=completed always brings both results and duration

    Raises:
        ValueError: unknown field, or an inconsistent combination
    """
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(
            f"Cannot update field(s) {sorted(unknown)}; "
            f"updatable: {sorted(UPDATABLE_FIELDS)}"
        )

    status = AnalysisStatus(fields["status"]) if "status" in fields else None
    carries_result = any(fields.get(name) is not None for name in ("results", "duration"))

    if carries_result and status != AnalysisStatus.COMPLETED:
        raise ValueError("results and duration can only be set with status=completed")
    if status == AnalysisStatus.COMPLETED and (
        fields.get("results") is None or fields.get("duration") is None
    ):
        raise ValueError("status=completed requires both results and duration")
    if status == AnalysisStatus.COMPLETED and fields.get("error") is not None:
        raise ValueError("a completed analysis cannot carry an error")


def merge_update(record: AnalysisRecord, fields: dict) -> AnalysisRecord:
    """
    Return the record with fields applied, or the same record if it is
    already terminal. Callers must hold whatever lock makes this atomic.
    """
    check_update_fields(fields)
    if record.status.is_terminal:
        logger.warning(
            f"Analysis {record.id} is already {record.status.value}; "
            f"ignoring update {sorted(fields)}"
        )
        return record
    if "status" in fields:
        fields = {**fields, "status": AnalysisStatus(fields["status"])}
    return replace(record, **fields)
