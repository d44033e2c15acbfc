"""Guard-condition and label rules, evaluated against the line before a block."""

import re
from collections.abc import Mapping
from types import MappingProxyType

from .base import PatternRule, RuleScope


# Branch keywords introducing a guard; matched case-sensitively. Loop conditions are not guards
_GUARD = r'\b(?:if|elif|unless|guard)\b'
_NULL_SENTINEL = r'(?i:null|nullptr|nil|none|undefined)'
_IDENTIFIER = r'[A-Za-z_$][\w$]*(?:(?:\.|->)[A-Za-z_$][\w$]*)*'
_STATUS_NAME = r'\b(?:ret|rc|err|error|status|res|result|retval|errno|rv)\w*'

CONDITION_PATTERNS: Mapping[str, tuple[re.Pattern, ...]] = MappingProxyType(
    {
        'null_check': (
            # x == null, p != NULL, err != nil, x is None, x is not None
            re.compile(rf'{_GUARD}.*(?:===?|!==?|\bis\s+not\b|\bis\b)\s*{_NULL_SENTINEL}\b'),
            # NULL == p
            re.compile(rf'{_GUARD}.*\b{_NULL_SENTINEL}\s*(?:===?|!==?)'),
            # if (!ptr)
            re.compile(rf'{_GUARD}\s*\(\s*!\s*\(?\s*{_IDENTIFIER}\s*\)?\s*\)'),
        ),
        'threshold_check': (
            re.compile(rf'{_GUARD}.*(?:<\s*0\b|<=\s*0\b|<\s*-\s*\d+|==\s*-\s*\d+)'),
            re.compile(rf'{_GUARD}.*{_STATUS_NAME}\s*!=\s*0\b'),
        ),
        'empty_check': (
            re.compile(rf'{_GUARD}.*(?:\.length\s*===?\s*0\b|\.(?:size|count|Count|Length)\(?\)?\s*==\s*0\b)'),
            re.compile(rf'{_GUARD}.*\.(?:isEmpty|empty|IsEmpty)\(\)'),
            re.compile(rf'{_GUARD}.*\blen\([^)]*\)\s*==\s*0\b'),
            re.compile(rf'{_GUARD}.*(?:===?|!==?)\s*(?:""|\'\')'),
            re.compile(rf'{_GUARD}.*\bstring\.IsNullOrEmpty\('),
            # Python falsy check: if not data:
            re.compile(rf'\b(?:if|elif)\s+not\s+{_IDENTIFIER}\s*:'),
        ),
    }
)

# A trailing identifier followed by a colon, e.g. "err:" or "cleanup:"
LABEL_PATTERN = re.compile(r'(?:^|\s)[A-Za-z_]\w*:\s*$')


def condition_rules() -> list[PatternRule]:
    """Build one preceding-line rule per guard shape."""
    return [
        PatternRule(name=name, category='guard', scope=RuleScope.PRECEDING, patterns=patterns)
        for name, patterns in CONDITION_PATTERNS.items()
    ]


def label_rule() -> PatternRule:
    """Build the rule that exempts labelled blocks from the depth gate."""
    return PatternRule(name='label', category='label', scope=RuleScope.GATE, patterns=(LABEL_PATTERN,))
