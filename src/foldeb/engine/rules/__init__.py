"""Classification rules.

This package contains the built-in rule tables used to decide whether a
block handles an error.
"""

from .base import PatternRule, Rule, RuleScope, RuleSet
from .guard import CONDITION_PATTERNS, LABEL_PATTERN, condition_rules, label_rule
from .keyword import ERROR_KEYWORDS, KEYWORD_PATTERNS, KeywordRule, keyword_rules
from .log_call import LOG_PATTERNS, log_rule


__all__ = [
    # Base classes
    'PatternRule',
    'Rule',
    'RuleScope',
    'RuleSet',
    # Rules
    'KeywordRule',
    # Pattern tables
    'CONDITION_PATTERNS',
    'ERROR_KEYWORDS',
    'KEYWORD_PATTERNS',
    'LABEL_PATTERN',
    'LOG_PATTERNS',
    # Factories
    'condition_rules',
    'default_rules',
    'keyword_rules',
    'label_rule',
    'log_rule',
]


def default_rules() -> RuleSet:
    """Get the built-in rule set.

    Content rules are ordered keywords first, then logging calls, so a line
    that satisfies both is attributed to its keyword.

    Returns:
        RuleSet with guard, label, keyword and logging rules.
    """
    return RuleSet(
        [
            *condition_rules(),
            label_rule(),
            *keyword_rules(),
            log_rule(),
        ]
    )
