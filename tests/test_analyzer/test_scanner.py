"""
Tests for the rule engine (analyzer/scanner.py).

The scanner is a pure function, so these need no fixtures: feed it source
text, check which rules fired, on which lines, in which order.
"""

import time

import pytest

from analyzer.scanner import AnalysisTimeout, scan
from models.enums import Language, Severity


def _hits(issues):
    """(rule_id, line) pairs in production order."""
    return [(i.rule_id, i.line) for i in issues]


def test_javascript_scenario():
    code = "var x = 1;\nif (x == 1) { console.log(x); }"
    issues = scan(code, Language.JAVASCRIPT)

    assert _hits(issues) == [("no-var", 1), ("no-console", 2), ("eqeqeq", 2)]


def test_python_scenario():
    issues = scan("except:\n    eval(x)", "python")

    by_rule = {i.rule_id: i for i in issues}
    assert by_rule["bare-except"].severity == Severity.HIGH
    assert by_rule["bare-except"].line == 1
    assert by_rule["no-eval"].severity == Severity.CRITICAL
    assert by_rule["no-eval"].line == 2


def test_solidity_scenario():
    code = "pragma solidity ^0.7.0;\nmsg.sender.call(...)"
    issues = scan(code, Language.SOLIDITY)

    assert _hits(issues) == [
        ("solidity-version", 1),
        ("reentrancy", 2),
        ("unchecked-call", 2),
    ]
    severities = {i.rule_id: i.severity for i in issues}
    assert severities == {
        "solidity-version": Severity.MEDIUM,
        "reentrancy": Severity.CRITICAL,
        "unchecked-call": Severity.HIGH,
    }


def test_language_rules_come_before_common_rules():
    """Common issues on line 1 still come after language issues on line 2."""
    code = "# TODO: remove\nresult = eval(data)"
    issues = scan(code, Language.PYTHON)

    assert _hits(issues) == [("no-eval", 2), ("todo-fixme", 1)]


def test_common_rules_apply_to_every_language():
    code = 'password = "hunter2"  // FIXME'
    for language in Language:
        rule_ids = [i.rule_id for i in scan(code, language)]
        assert "todo-fixme" in rule_ids
        assert "hardcoded-secret" in rule_ids


def test_rules_within_a_line_follow_table_order():
    """todo-fixme is declared before hardcoded-secret in the common table."""
    issues = scan("api_key = 'abc'  # TODO rotate", Language.PYTHON)
    assert [i.rule_id for i in issues] == ["todo-fixme", "hardcoded-secret"]


def test_line_numbers_are_one_based():
    code = "\n\n\nvar late = true;"
    issues = scan(code, Language.JAVASCRIPT)
    assert _hits(issues) == [("no-var", 4)]


def test_empty_code_produces_no_issues():
    assert scan("", Language.JAVASCRIPT) == []


def test_clean_code_produces_no_issues():
    code = "const total = items.reduce((a, b) => a + b, 0);\nif (total === 0) { return; }"
    assert scan(code, Language.JAVASCRIPT) == []


def test_issue_carries_rule_metadata_and_snippet():
    issue = scan("    global counter", Language.PYTHON)[0]

    assert issue.rule_id == "global-variable"
    assert issue.title == "Global Variable Usage"
    assert issue.suggestion
    assert issue.code_snippet == "global counter"
    assert issue.end_line is None
    assert issue.column is None


def test_issue_ids_are_unique():
    code = "\n".join(["console.log(1);"] * 20)
    issues = scan(code, Language.JAVASCRIPT)
    assert len({i.id for i in issues}) == len(issues) == 20


def test_scanning_twice_is_identical_up_to_ids():
    code = "var a = 1;\nif (a == 2) {}\n// TODO\nconsole.log(a)"
    first = scan(code, Language.JAVASCRIPT)
    second = scan(code, Language.JAVASCRIPT)

    def _strip(issues):
        return [(i.rule_id, i.line, i.severity, i.title) for i in issues]

    assert _strip(first) == _strip(second)
    assert {i.id for i in first}.isdisjoint({i.id for i in second})


def test_unknown_language_raises_value_error():
    with pytest.raises(ValueError, match="Unknown language"):
        scan("x = 1", "cobol")


def test_passed_deadline_raises_timeout():
    with pytest.raises(AnalysisTimeout):
        scan("var a;\nvar b;", Language.JAVASCRIPT, deadline=time.monotonic() - 1)


def test_future_deadline_does_not_interfere():
    issues = scan("var a;", Language.JAVASCRIPT, deadline=time.monotonic() + 60)
    assert _hits(issues) == [("no-var", 1)]
