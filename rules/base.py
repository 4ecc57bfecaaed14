"""
Rule definition shared by every rule table.

A rule is data, not code: a predicate over one physical line plus the
metadata copied onto every Issue it produces. The scanner walks lines and
rules without knowing which language or pattern it is checking.

To add a rule:
1. Append a Rule(...) to the table in the language module (or common.py)
2. That's it. The scanner's traversal never changes.

Declaration order inside a table is significant: when several rules match
the same line, their issues come out in table order.
"""

import re
from dataclasses import dataclass
from typing import Callable

from models.enums import Severity

LinePredicate = Callable[[str], bool]


@dataclass(frozen=True)
class Rule:
    rule_id: str
    severity: Severity
    title: str
    description: str
    suggestion: str
    predicate: LinePredicate

    def matches(self, line: str) -> bool:
        return bool(self.predicate(line))


def contains(*needles: str) -> LinePredicate:
    """Line contains any of the given substrings."""
    return lambda line: any(n in line for n in needles)


def starts_with(prefix: str) -> LinePredicate:
    """Line, ignoring surrounding whitespace, starts with prefix."""
    return lambda line: line.strip().startswith(prefix)


def matches_any(*patterns: re.Pattern) -> LinePredicate:
    return lambda line: any(p.search(line) for p in patterns)
