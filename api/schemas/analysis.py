"""
Pydantic schemas for the /api endpoints.

These are NOT the domain objects — they define the HTTP API contract:
- AnalyzeRequest: what the user sends to submit code (request body)
- AnalysisResponse: one analysis with its lifecycle state and results
- AnalysisStatsResponse: corpus-wide statistics

Field names are snake_case in Python and camelCase on the wire
(rule_id → "ruleId", created_at → "createdAt").

AnalyzeRequest is the pipeline's Submission model, so FastAPI validates the
body with exactly the rules AnalysisPipeline.submit() applies. An empty
code string or an unknown language gets a 422 before our code even runs.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from models.enums import AnalysisStatus, Language, Severity
from pipeline.validation import Submission

_CONFIG = {
    "from_attributes": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}


class AnalyzeRequest(Submission):
    """Request body for POST /api/analyze."""

    model_config = _CONFIG


class IssueResponse(BaseModel):
    id: str
    severity: Severity
    title: str
    description: str
    line: int
    end_line: Optional[int] = None
    column: Optional[int] = None
    end_column: Optional[int] = None
    rule_id: str
    suggestion: Optional[str] = None
    code_snippet: Optional[str] = None

    model_config = _CONFIG


class SummaryResponse(BaseModel):
    critical: int
    high: int
    medium: int
    low: int
    total: int

    model_config = _CONFIG


class AnalysisResultResponse(BaseModel):
    issues: list[IssueResponse]
    summary: SummaryResponse
    analysis_time: int      # milliseconds
    lines_of_code: int

    model_config = _CONFIG


class AnalysisResponse(BaseModel):
    """Response body for a single analysis — returned by GET /api/analyses/{id} and POST /api/analyze."""

    id: str
    filename: str
    language: Language
    code: str
    status: AnalysisStatus
    results: Optional[AnalysisResultResponse] = None
    duration: Optional[int] = None
    error: Optional[str] = None
    created_at: datetime

    model_config = _CONFIG


class AnalysisStatsResponse(BaseModel):
    """Aggregate statistics — returned by GET /api/stats."""

    total_analyses: int
    bugs_found: int
    vulnerabilities: int
    fixed: int     # fixed share of bugs_found, an estimate (see FIXED_RATIO)

    model_config = _CONFIG
