"""Python line rules."""

from models.enums import Severity
from rules.base import Rule, contains, starts_with


PYTHON_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="bare-except",
        severity=Severity.HIGH,
        title="Bare Except Clause",
        description="Catching all exceptions with bare 'except:' can hide errors",
        suggestion="Specify the exception type: except SpecificException:",
        predicate=lambda line: line.strip() == "except:",
    ),
    Rule(
        rule_id="no-eval",
        severity=Severity.CRITICAL,
        title="Use of eval()",
        description="eval() can execute arbitrary code and is a security risk",
        suggestion="Avoid using eval(). Consider safer alternatives like ast.literal_eval()",
        predicate=contains("eval("),
    ),
    Rule(
        rule_id="global-variable",
        severity=Severity.MEDIUM,
        title="Global Variable Usage",
        description="Global variables can make code harder to maintain and test",
        suggestion="Consider using function parameters or class attributes instead",
        predicate=starts_with("global "),
    ),
)
