"""
Shared enumerations used across the entire project.

Using Python enums (inheriting from str) means:
- They serialize to JSON automatically ("pending", not "AnalysisStatus.PENDING")
- They work as SQLAlchemy column values
- They work as FastAPI query parameters
- Typos become immediate errors instead of silent bugs
"""

import enum


class AnalysisStatus(str, enum.Enum):
    PENDING = "pending"        # submitted, waiting for (or in) a worker thread
    COMPLETED = "completed"    # scan finished, results attached
    FAILED = "failed"          # scan could not produce results

    @property
    def is_terminal(self) -> bool:
        return self is not AnalysisStatus.PENDING


class Language(str, enum.Enum):
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    SOLIDITY = "solidity"


class Severity(str, enum.Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FailureReason(str, enum.Enum):
    SCAN_ERROR = "scan_error"  # unexpected exception in the process step
    TIMEOUT = "timeout"        # scan ran past ANALYSIS_TIMEOUT_SEC
    SHUTDOWN = "shutdown"      # submitted while the worker pool was stopping
