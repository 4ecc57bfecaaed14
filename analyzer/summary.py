"""Severity aggregator: reduce an issue list to per-tier counts."""

from collections import Counter
from typing import Iterable

from analyzer.types import Issue, Summary
from models.enums import Severity


def summarize(issues: Iterable[Issue]) -> Summary:
    counts = Counter(Severity(issue.severity) for issue in issues)
    return Summary(
        critical=counts[Severity.CRITICAL],
        high=counts[Severity.HIGH],
        medium=counts[Severity.MEDIUM],
        low=counts[Severity.LOW],
        total=sum(counts.values()),
    )
