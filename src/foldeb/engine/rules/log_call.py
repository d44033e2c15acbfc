"""Logging call rule: a print/log call whose string literal reports an error."""

import re

from .base import PatternRule, RuleScope


ERROR_WORDS = r"(?:error|err\b|fail|invalid|cannot|can't|unable|exception|fatal|abort|panic)"

_LOG_CALL = (
    r'(?:console\.(?:log|error|warn|info|debug)'
    r'|f?printf|perror|eprintln!?|println!?|print|puts'
    r'|System\.(?:out|err)\.print(?:ln|f)?'
    r'|Console\.(?:Error\.)?Write(?:Line)?'
    r'|(?:self\.|this\.)?_?(?:log|logger|logging|LOG|Log)\.\w+'
    r'|syslog|warn|die)'
)

# Text before the reporting literal: anything but quotes, or whole literals
_BEFORE_LITERAL = r'''(?:[^"'`]|"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*'|`[^`]*`)*?'''
# An error word inside the literal opened by group 1
_IN_LITERAL = rf'(["\'`])(?:(?!\1)[^\\]|\\.)*?{ERROR_WORDS}'

LOG_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(rf'(?:^|[^\w.]){_LOG_CALL}\s*\({_BEFORE_LITERAL}{_IN_LITERAL}', re.IGNORECASE),
    # C++ streams: std::cerr << "error: ..."
    re.compile(rf'\b(?:std::)?(?:cerr|clog)\s*<<{_BEFORE_LITERAL}{_IN_LITERAL}', re.IGNORECASE),
)


def log_rule() -> PatternRule:
    return PatternRule(name='log_error', category='log', scope=RuleScope.CONTENT, patterns=LOG_PATTERNS)
