"""
In-memory store — the default backend.

A dict of frozen AnalysisRecord objects guarded by one lock. An update
builds a new record and swaps it in under the lock, so a reader either
sees the old record or the new one, never a mix.

Python dicts preserve insertion order, and sorted(reverse=True) is stable,
so equal created_at values come out in insertion order.
"""

import threading
import uuid
from typing import Any, Optional

from models.enums import Language
from store.base import (
    AbstractAnalysisStore,
    AnalysisRecord,
    check_update_fields,
    merge_update,
)


class MemoryAnalysisStore(AbstractAnalysisStore):

    backend_name = "memory"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._records: dict[str, AnalysisRecord] = {}
        self._lock = threading.Lock()

    def create(self, filename: str, language: Language | str, code: str) -> AnalysisRecord:
        record = AnalysisRecord(
            id=str(uuid.uuid4()),
            filename=filename,
            language=Language(language),
            code=code,
            created_at=self._clock(),
        )
        with self._lock:
            self._records[record.id] = record
        return record

    def get(self, analysis_id: str) -> Optional[AnalysisRecord]:
        with self._lock:
            return self._records.get(analysis_id)

    def list_all(self) -> list[AnalysisRecord]:
        with self._lock:
            snapshot = list(self._records.values())
        return sorted(snapshot, key=lambda r: r.created_at, reverse=True)

    def update(self, analysis_id: str, **fields: Any) -> Optional[AnalysisRecord]:
        check_update_fields(fields)
        with self._lock:
            existing = self._records.get(analysis_id)
            if existing is None:
                return None
            updated = merge_update(existing, fields)
            self._records[analysis_id] = updated
            return updated

    def count(self) -> int:
        with self._lock:
            return len(self._records)
