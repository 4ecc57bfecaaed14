"""
Value objects produced by the analyzer.

These are plain frozen dataclasses, not ORM models or Pydantic schemas:
- The scanner and aggregator stay independent of SQLAlchemy and FastAPI
- Frozen instances can be handed to any thread without copying
- Stores serialize them with to_dict() / from_dict() (JSON column, Redis value)
"""

from dataclasses import dataclass, asdict
from typing import Optional

from models.enums import Severity


@dataclass(frozen=True)
class Issue:
    """One finding emitted by a rule against a specific line."""
    id: str
    severity: Severity
    title: str
    description: str
    line: int                  # 1-based
    rule_id: str
    suggestion: Optional[str] = None
    code_snippet: Optional[str] = None
    end_line: Optional[int] = None
    column: Optional[int] = None
    end_column: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Issue":
        return cls(**{**data, "severity": Severity(data["severity"])})


@dataclass(frozen=True)
class Summary:
    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0
    total: int = 0

    @property
    def vulnerabilities(self) -> int:
        return self.critical + self.high


@dataclass(frozen=True)
class AnalysisResult:
    issues: tuple[Issue, ...]
    summary: Summary
    analysis_time: int         # milliseconds
    lines_of_code: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["issues"] = [
            {**issue, "severity": issue["severity"].value} for issue in data["issues"]
        ]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisResult":
        return cls(
            issues=tuple(Issue.from_dict(i) for i in data.get("issues", [])),
            summary=Summary(**data["summary"]),
            analysis_time=data["analysis_time"],
            lines_of_code=data["lines_of_code"],
        )
