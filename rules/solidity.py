"""
Solidity line rules.

A single external call line such as `msg.sender.call(...)` deliberately
trips two rules: reentrancy (critical) and, unless wrapped in require(),
unchecked-call (high).
"""

from models.enums import Severity
from rules.base import Rule, contains

_external_call = contains(".call(", ".send(")


def _unchecked_call(line: str) -> bool:
    return _external_call(line) and "require(" not in line


def _outdated_pragma(line: str) -> bool:
    return "pragma solidity" in line and "^0.8" not in line


SOLIDITY_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="reentrancy",
        severity=Severity.CRITICAL,
        title="Potential Reentrancy Vulnerability",
        description="External calls can lead to reentrancy attacks",
        suggestion="Use the checks-effects-interactions pattern or ReentrancyGuard",
        predicate=_external_call,
    ),
    Rule(
        rule_id="tx-origin",
        severity=Severity.HIGH,
        title="tx.origin Usage",
        description="Using tx.origin for authorization can be unsafe",
        suggestion="Use msg.sender instead of tx.origin for authentication",
        predicate=contains("tx.origin"),
    ),
    Rule(
        rule_id="unchecked-call",
        severity=Severity.HIGH,
        title="Unchecked External Call",
        description="External call return value is not checked",
        suggestion="Check return value of external calls or use transfer() instead of send()",
        predicate=_unchecked_call,
    ),
    Rule(
        rule_id="solidity-version",
        severity=Severity.MEDIUM,
        title="Outdated Solidity Version",
        description="Using an older Solidity version may miss security improvements",
        suggestion="Consider upgrading to Solidity ^0.8.0 for built-in overflow protection",
        predicate=_outdated_pragma,
    ),
)
