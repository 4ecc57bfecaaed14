"""
Analysis ORM model — maps to the "analyses" table used by the SQL store.

Key design decisions:
- seq (autoincrement) is the primary key and records insertion order, which
  breaks ties between analyses created in the same instant
- id is the public UUID string callers poll with
- results is a JSON column holding AnalysisResult.to_dict(); every issue and
  the summary travel together, so a row is always a complete snapshot
- code/filename/language are written once at creation and never updated
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.enums import AnalysisStatus


class Analysis(Base):
    __tablename__ = "analyses"

    # ── Identity ────────────────────────────────────────────────
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), unique=True, index=True, nullable=False)

    # ── Submission (immutable) ──────────────────────────────────
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    language: Mapped[str] = mapped_column(String(20), nullable=False)
    code: Mapped[str] = mapped_column(Text, nullable=False)

    # ── Lifecycle ───────────────────────────────────────────────
    status: Mapped[str] = mapped_column(
        String(20), default=AnalysisStatus.PENDING.value, nullable=False, index=True
    )
    results: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    error: Mapped[str | None] = mapped_column(String(50), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<Analysis {self.id} [{self.language}] {self.status}>"
