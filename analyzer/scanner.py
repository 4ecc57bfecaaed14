"""
Rule engine — turns raw source text into a flat list of issues.

    scan(code, language)
        │
        ├── language table (rules/javascript.py, python.py, solidity.py)
        │     for each line → for each rule → Issue on match
        │
        └── common table (rules/common.py)
              for each line → for each rule → Issue on match

Output order: language issues first, then common issues; each pass in
source-line order, and rules within a line in table order.

scan() is a pure function of (code, language). It keeps no state between
calls, so any number of worker threads can call it at once.
"""

import time
import uuid
from typing import Iterable, Optional

from analyzer.types import Issue
from models.enums import Language
from rules.base import Rule
from rules.registry import get_common_rules, get_language_rules


class AnalysisTimeout(Exception):
    """Raised when a scan runs past its deadline."""


def split_lines(code: str) -> list[str]:
    # An empty submission is still one (empty) line.
    return code.split("\n")


def scan(
    code: str,
    language: Language | str,
    deadline: Optional[float] = None,
) -> list[Issue]:
    """
    Run the language table and then the common table over every line.

    Args:
        code: raw source text
        language: one of the supported languages
        deadline: optional time.monotonic() value; once passed, the scan
                  stops with AnalysisTimeout

    Returns:
        Issues in production order (not sorted by severity).
    """
    lines = split_lines(code)
    issues = _apply(get_language_rules(language), lines, deadline)
    issues.extend(_apply(get_common_rules(), lines, deadline))
    return issues


def _apply(rules: Iterable[Rule], lines: list[str], deadline: Optional[float]) -> list[Issue]:
    rules = tuple(rules)
    issues: list[Issue] = []
    for index, line in enumerate(lines):
        if deadline is not None and time.monotonic() >= deadline:
            raise AnalysisTimeout(f"Scan exceeded its deadline at line {index + 1}")
        for rule in rules:
            if rule.matches(line):
                issues.append(_issue_for(rule, index + 1, line))
    return issues


def _issue_for(rule: Rule, line_number: int, line: str) -> Issue:
    return Issue(
        id=str(uuid.uuid4()),
        severity=rule.severity,
        title=rule.title,
        description=rule.description,
        line=line_number,
        rule_id=rule.rule_id,
        suggestion=rule.suggestion,
        code_snippet=line.strip(),
    )
