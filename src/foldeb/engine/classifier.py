"""Error-handling block classifier.

A block is accepted by the first of these that holds:

1. (optional depth gate) a shallow block is rejected unless the line
   before it ends in a label;
2. the line before the block is a guard condition;
3. a line at the block's own indentation matches a keyword or logging rule.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from foldeb.engine.rules import RuleScope, RuleSet, default_rules
from foldeb.engine.segmenter import COMMENT_MARKER, PREPROCESSOR_MARKER, CodeBlock, get_indent_level, is_skippable
from foldeb.utils import get_bool_env, get_int_env


logger = logging.getLogger(__name__)

DEFAULT_DEPTH_THRESHOLD = 4


@dataclass(frozen=True)
class ClassifierConfig:
    """Policy knobs for the classifier.

    Attributes:
        depth_gate: Reject blocks at or above ``depth_threshold`` unless labelled.
        depth_threshold: Deepest indentation still considered top level.
        comment_markers: Line prefixes ignored during the content scan.
    """

    depth_gate: bool = False
    depth_threshold: int = DEFAULT_DEPTH_THRESHOLD
    comment_markers: tuple[str, ...] = (COMMENT_MARKER, PREPROCESSOR_MARKER)

    @classmethod
    def from_env(cls) -> 'ClassifierConfig':
        """Build a config from FOLDEB_DEPTH_GATE and FOLDEB_DEPTH_THRESHOLD."""
        return cls(
            depth_gate=get_bool_env('FOLDEB_DEPTH_GATE', False),
            depth_threshold=get_int_env('FOLDEB_DEPTH_THRESHOLD', DEFAULT_DEPTH_THRESHOLD),
        )


@dataclass(frozen=True)
class Verdict:
    """Why a block was accepted."""

    rule: str  # Name of the rule that matched
    category: str  # 'guard', 'keyword' or 'log'
    line: int  # Line index the rule matched on (0-based)


class ErrorClassifier:
    """Decides whether a code block is an error-handling branch.

    The rule set and config are fixed at construction time and never
    mutated, so one classifier can be shared across threads.
    """

    def __init__(self, rules: RuleSet | None = None, config: ClassifierConfig | None = None):
        self.rules = rules if rules is not None else default_rules()
        self.config = config if config is not None else ClassifierConfig()

    def classify(self, block: CodeBlock, lines: Sequence[str]) -> bool:
        return self.explain(block, lines) is not None

    def explain(self, block: CodeBlock, lines: Sequence[str]) -> Verdict | None:
        """Classify a block and report which rule accepted it.

        Args:
            block: Block produced by the segmenter for ``lines``.
            lines: The full line sequence the block indexes into.

        Returns:
            Verdict for an accepted block, None if rejected.
        """
        preceding = self._preceding_line(block, lines)

        if self.config.depth_gate and block.indent_level <= self.config.depth_threshold:
            if preceding is None or self.rules.first_match(preceding, RuleScope.GATE) is None:
                return None

        if preceding is not None:
            rule = self.rules.first_match(preceding, RuleScope.PRECEDING)
            if rule is not None:
                return Verdict(rule=rule.name, category=rule.category, line=block.start_line - 1)

        end = min(block.end_line, len(lines) - 1)
        for i in range(block.start_line, end + 1):
            line = lines[i]
            if is_skippable(line, self.config.comment_markers):
                continue
            # Nested sub-blocks are judged on their own
            if get_indent_level(line) > block.indent_level:
                continue
            rule = self.rules.first_match(line, RuleScope.CONTENT)
            if rule is not None:
                return Verdict(rule=rule.name, category=rule.category, line=i)

        return None

    @staticmethod
    def _preceding_line(block: CodeBlock, lines: Sequence[str]) -> str | None:
        if block.start_line <= 0 or block.start_line > len(lines):
            return None
        return lines[block.start_line - 1]
