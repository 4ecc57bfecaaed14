"""
Language-agnostic rules, applied after the language-specific table
regardless of the declared language.
"""

import re

from models.enums import Severity
from rules.base import Rule, contains, matches_any

SECRET_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"password\s*=\s*[\"']"),
    re.compile(r"api_key\s*=\s*[\"']"),
    re.compile(r"secret\s*=\s*[\"']", re.IGNORECASE),
)


COMMON_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="todo-fixme",
        severity=Severity.LOW,
        title="TODO/FIXME Comment",
        description="Code contains TODO or FIXME comment",
        suggestion="Address the TODO/FIXME or create a ticket to track the work",
        predicate=contains("TODO", "FIXME"),
    ),
    Rule(
        rule_id="hardcoded-secret",
        severity=Severity.CRITICAL,
        title="Hardcoded Secret",
        description="Potential hardcoded password or API key found",
        suggestion="Move secrets to environment variables or secure configuration",
        predicate=matches_any(*SECRET_PATTERNS),
    ),
)
