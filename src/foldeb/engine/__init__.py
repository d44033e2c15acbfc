"""Block segmentation and error-handling classification engine.

This module provides:
- Indentation-based block segmentation
- A rule-driven classifier for error-handling blocks
- The host-facing ``find_error_branches`` entry point
"""

from .classifier import ClassifierConfig, ErrorClassifier, Verdict
from .finder import FoldingRange, find_error_branches, split_lines
from .rules import PatternRule, Rule, RuleScope, RuleSet, default_rules
from .segmenter import CodeBlock, get_indent_level, is_skippable, segment


__all__ = [
    # Segmentation
    'CodeBlock',
    'get_indent_level',
    'is_skippable',
    'segment',
    # Classification
    'ClassifierConfig',
    'ErrorClassifier',
    'Verdict',
    # Rules
    'PatternRule',
    'Rule',
    'RuleScope',
    'RuleSet',
    'default_rules',
    # Entry point
    'FoldingRange',
    'find_error_branches',
    'split_lines',
]
