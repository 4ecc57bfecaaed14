"""
Analyzer — scan + summarize + timing, producing one AnalysisResult.

This is what the worker's process step calls. It owns the fallback for
faults raised by a rule: instead of propagating, the result carries a
single synthetic "Analysis Error" issue so the scan still terminates with
a result. A deadline overrun (AnalysisTimeout) is NOT converted; it
propagates so the job can be marked failed with a timeout reason.
"""

import logging
import time
import uuid
from typing import Optional

from analyzer.scanner import AnalysisTimeout, scan, split_lines
from analyzer.summary import summarize
from analyzer.types import AnalysisResult, Issue
from models.enums import Language, Severity

logger = logging.getLogger(__name__)

ANALYSIS_ERROR_RULE_ID = "analysis-error"


def analyze(
    code: str,
    language: Language | str,
    deadline: Optional[float] = None,
) -> AnalysisResult:
    start = time.monotonic()
    lines_of_code = len(split_lines(code))

    try:
        issues = scan(code, language, deadline=deadline)
    except AnalysisTimeout:
        raise
    except Exception as e:
        logger.error(f"Rule engine fault ({language}): {e}", exc_info=True)
        issues = [analysis_error_issue()]

    return AnalysisResult(
        issues=tuple(issues),
        summary=summarize(issues),
        analysis_time=_elapsed_ms(start),
        lines_of_code=lines_of_code,
    )


def analysis_error_issue() -> Issue:
    return Issue(
        id=str(uuid.uuid4()),
        severity=Severity.HIGH,
        title="Analysis Error",
        description="Failed to analyze code due to parsing error",
        line=1,
        rule_id=ANALYSIS_ERROR_RULE_ID,
        suggestion="Check code syntax and try again",
    )


def _elapsed_ms(start: float) -> int:
    return int(round((time.monotonic() - start) * 1000))
