"""Base classes for block classification rules."""

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Sequence
from enum import Enum


class RuleScope(str, Enum):
    """Which line of a block a rule is evaluated against."""

    # The line immediately before the block; a match accepts the block
    PRECEDING = 'preceding'
    # Lines at the block's own indentation; a match accepts the block
    CONTENT = 'content'
    # The line immediately before the block; a match exempts it from the depth gate
    GATE = 'gate'


class Rule(ABC):
    """Base class for all classification rules.

    A rule answers one question about one line. Which line it is asked
    about, and what a positive answer means, is decided by its scope.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule identifier (e.g., 'return', 'null_check')."""
        pass

    @property
    @abstractmethod
    def category(self) -> str:
        """Rule category (e.g., 'keyword', 'guard', 'log')."""
        pass

    @property
    @abstractmethod
    def scope(self) -> RuleScope:
        pass

    @abstractmethod
    def matches(self, line: str) -> bool:
        """Check whether a line satisfies this rule.

        Args:
            line: Raw line text; rules trim it themselves.

        Returns:
            True if the line matches.
        """
        pass

    def __repr__(self) -> str:
        return f'{type(self).__name__}(name={self.name!r}, scope={self.scope.value!r})'


class PatternRule(Rule):
    """Matches when any of its regular expressions is found in the trimmed line."""

    def __init__(self, name: str, category: str, scope: RuleScope, patterns: Iterable[re.Pattern]):
        self._name = name
        self._category = category
        self._scope = scope
        self.patterns: tuple[re.Pattern, ...] = tuple(patterns)

    @property
    def name(self) -> str:
        return self._name

    @property
    def category(self) -> str:
        return self._category

    @property
    def scope(self) -> RuleScope:
        return self._scope

    def matches(self, line: str) -> bool:
        stripped = line.strip()
        return any(pattern.search(stripped) for pattern in self.patterns)


class RuleSet:
    """Immutable ordered collection of rules.

    Rules are tried in insertion order within each scope, so the first
    matching rule is the one reported as the reason for acceptance.
    """

    def __init__(self, rules: Iterable[Rule]):
        self._rules: tuple[Rule, ...] = tuple(rules)
        self._by_scope: dict[RuleScope, tuple[Rule, ...]] = {
            scope: tuple(rule for rule in self._rules if rule.scope == scope) for scope in RuleScope
        }

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def for_scope(self, scope: RuleScope) -> Sequence[Rule]:
        return self._by_scope[scope]

    @property
    def preceding(self) -> Sequence[Rule]:
        return self._by_scope[RuleScope.PRECEDING]

    @property
    def content(self) -> Sequence[Rule]:
        return self._by_scope[RuleScope.CONTENT]

    def first_match(self, line: str, scope: RuleScope) -> Rule | None:
        """Return the first rule in ``scope`` matching ``line``, or None."""
        for rule in self._by_scope[scope]:
            if rule.matches(line):
                return rule
        return None

    def extended(self, rules: Iterable[Rule]) -> 'RuleSet':
        """Return a new rule set with ``rules`` appended."""
        return RuleSet((*self._rules, *rules))
