"""Control-flow keyword rules."""

import re
from collections.abc import Mapping
from types import MappingProxyType

from .base import Rule, RuleScope


# Sentinel values compare case-insensitively; keywords themselves never do
_NULL_SENTINEL = r'(?i:null|nullptr|nil|none|undefined)'
_ERROR_NAME = r'(?i:err\w*|e_\w+|fail\w*|invalid\w*)'

KEYWORD_PATTERNS: Mapping[str, tuple[re.Pattern, ...]] = MappingProxyType(
    {
        'return': (
            re.compile(r'^return\b\s*\(?\s*-\s*\d+'),  # return -1
            re.compile(r'^return\b\s*\(?\s*-\s*E[A-Z0-9_]+\b'),  # return -EINVAL
            re.compile(r'^return\b\s*\(?\s*(?:false|False|FALSE)\b'),
            re.compile(rf'^return\b\s*\(?\s*{_NULL_SENTINEL}\b'),
            re.compile(rf'^return\b\s*\(?\s*(?:\w+\.)*{_ERROR_NAME}\b'),  # return err / errors.New(...)
            re.compile(r'^return\b.*\b(?:Err|\w*Error|\w*Exception|Failure|reject)\s*\('),
        ),
        'throw': (re.compile(r'^throw\b'),),
        'raise': (re.compile(r'^raise\b'),),
        'goto': (re.compile(r'^goto\s+(?i:\w*(?:err|fail|out|cleanup|exit|bail|abort|free|unlock|done)\w*)\s*;?'),),
        'break': (re.compile(r'^break\b\s*;?\s*(?://|#).*(?i:err|fail|invalid|abort)'),),
        'continue': (re.compile(r'^continue\b\s*;?\s*(?://|#).*(?i:err|fail|invalid|skip)'),),
    }
)

ERROR_KEYWORDS = tuple(KEYWORD_PATTERNS)


class KeywordRule(Rule):
    """Matches lines that start with a control-flow keyword signalling failure.

    The trimmed line must begin with the keyword (case-sensitive) and at
    least one of the keyword's patterns must match it. A keyword without
    patterns never matches.
    """

    def __init__(self, keyword: str, patterns: tuple[re.Pattern, ...] | None = None):
        self.keyword = keyword
        if patterns is None:
            patterns = KEYWORD_PATTERNS.get(keyword, ())
        self.patterns = tuple(patterns)

    @property
    def name(self) -> str:
        return self.keyword

    @property
    def category(self) -> str:
        return 'keyword'

    @property
    def scope(self) -> RuleScope:
        return RuleScope.CONTENT

    def matches(self, line: str) -> bool:
        stripped = line.strip()
        if not stripped.startswith(self.keyword):
            return False
        return any(pattern.search(stripped) for pattern in self.patterns)


def keyword_rules(keywords: tuple[str, ...] = ERROR_KEYWORDS) -> list[KeywordRule]:
    """Build one rule per keyword from the built-in pattern table."""
    return [KeywordRule(keyword) for keyword in keywords]
