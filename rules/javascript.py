"""
JavaScript / TypeScript line rules.

Example matches:
    var x = 1;                 → no-var
    if (x == 1) { ... }        → eqeqeq
    console.log(x);            → no-console
"""

from models.enums import Severity
from rules.base import Rule, contains, starts_with


def _loose_equality(line: str) -> bool:
    return "==" in line and "===" not in line and "!==" not in line


JAVASCRIPT_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="no-console",
        severity=Severity.LOW,
        title="Console Statement",
        description="Console statements should be removed in production code",
        suggestion="Remove console.log statements or use a proper logging library",
        predicate=contains("console.log"),
    ),
    Rule(
        rule_id="no-var",
        severity=Severity.MEDIUM,
        title="Use of var",
        description="Use 'let' or 'const' instead of 'var' for better scoping",
        suggestion="Replace 'var' with 'let' or 'const'",
        predicate=starts_with("var "),
    ),
    Rule(
        rule_id="eqeqeq",
        severity=Severity.MEDIUM,
        title="Loose Equality",
        description="Use strict equality (===) instead of loose equality (==)",
        suggestion="Replace '==' with '===' and '!=' with '!=='",
        predicate=_loose_equality,
    ),
)
