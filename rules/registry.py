"""
Rule table registry — maps a Language to its rule table.

When the scanner receives a submission it knows the declared language
("javascript", "python", "solidity") but needs the actual rule table.
This registry does that lookup, plus hands out the language-agnostic table.

One place that knows every language.
"""

from models.enums import Language
from rules.base import Rule
from rules.common import COMMON_RULES
from rules.javascript import JAVASCRIPT_RULES
from rules.python import PYTHON_RULES
from rules.solidity import SOLIDITY_RULES

_REGISTRY: dict[Language, tuple[Rule, ...]] = {
    Language.JAVASCRIPT: JAVASCRIPT_RULES,
    Language.PYTHON: PYTHON_RULES,
    Language.SOLIDITY: SOLIDITY_RULES,
}


def get_language_rules(language: Language | str) -> tuple[Rule, ...]:
    """Look up the rule table for a language. Raises ValueError if unknown."""
    try:
        return _REGISTRY[Language(language)]
    except ValueError:
        raise ValueError(
            f"Unknown language: '{language}'. Available: {supported_languages()}"
        ) from None


def get_common_rules() -> tuple[Rule, ...]:
    return COMMON_RULES


def supported_languages() -> list[str]:
    return [lang.value for lang in _REGISTRY]
