"""
SQL store — persists analyses through SQLAlchemy.

Every call opens its own session and closes it before returning, the same
way the worker executor handles sessions, so the store is safe to share
between FastAPI handlers and worker threads.

update() reads the row with SELECT ... FOR UPDATE inside one transaction,
so two writers on the same id serialize. SQLite ignores FOR UPDATE, so on
SQLite every call takes one in-process lock instead.
"""

import threading
import uuid
from contextlib import nullcontext
from datetime import timezone
from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from analyzer.types import AnalysisResult
from models.analysis import Analysis
from models.base import Base
from models.enums import AnalysisStatus, Language
from store.base import (
    AbstractAnalysisStore,
    AnalysisRecord,
    check_update_fields,
    merge_update,
)


class SqlAnalysisStore(AbstractAnalysisStore):

    backend_name = "sql"

    def __init__(self, engine: Engine, create_tables: bool = True, **kwargs):
        super().__init__(**kwargs)
        self._engine = engine
        self._session_factory = sessionmaker(engine, expire_on_commit=False)
        # SQLite has one writer at a time and ignores FOR UPDATE; an in-memory
        # database is also a single shared connection (StaticPool). Calls are
        # serialized in-process there. Other databases rely on row locks.
        self._lock = threading.Lock() if engine.dialect.name == "sqlite" else nullcontext()
        if create_tables:
            # Safe to call repeatedly: existing tables are left alone
            Base.metadata.create_all(engine)

    def create(self, filename: str, language: Language | str, code: str) -> AnalysisRecord:
        row = Analysis(
            id=str(uuid.uuid4()),
            filename=filename,
            language=Language(language).value,
            code=code,
            status=AnalysisStatus.PENDING.value,
            created_at=self._clock(),
        )
        with self._lock:
            session: Session = self._session_factory()
            try:
                session.add(row)
                session.commit()
                return _to_record(row)
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    def get(self, analysis_id: str) -> Optional[AnalysisRecord]:
        with self._lock, self._session_factory() as session:
            row = session.scalar(select(Analysis).where(Analysis.id == analysis_id))
            return _to_record(row) if row is not None else None

    def list_all(self) -> list[AnalysisRecord]:
        query = select(Analysis).order_by(Analysis.created_at.desc(), Analysis.seq.asc())
        with self._lock, self._session_factory() as session:
            return [_to_record(row) for row in session.scalars(query)]

    def update(self, analysis_id: str, **fields: Any) -> Optional[AnalysisRecord]:
        check_update_fields(fields)
        with self._lock:
            session: Session = self._session_factory()
            try:
                row = session.scalar(
                    select(Analysis).where(Analysis.id == analysis_id).with_for_update()
                )
                if row is None:
                    session.rollback()
                    return None

                current = _to_record(row)
                updated = merge_update(current, fields)
                if updated is current:
                    session.rollback()
                    return current

                row.status = updated.status.value
                row.results = updated.results.to_dict() if updated.results is not None else None
                row.duration = updated.duration
                row.error = updated.error
                session.commit()
                return updated
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    def count(self) -> int:
        with self._lock, self._session_factory() as session:
            return session.scalar(select(func.count(Analysis.seq))) or 0

    def close(self) -> None:
        self._engine.dispose()


def _to_record(row: Analysis) -> AnalysisRecord:
    created_at = row.created_at
    if created_at.tzinfo is None:
        # SQLite drops the offset; values are always written in UTC
        created_at = created_at.replace(tzinfo=timezone.utc)
    return AnalysisRecord(
        id=row.id,
        filename=row.filename,
        language=Language(row.language),
        code=row.code,
        created_at=created_at,
        status=AnalysisStatus(row.status),
        results=AnalysisResult.from_dict(row.results) if row.results else None,
        duration=row.duration,
        error=row.error,
    )
