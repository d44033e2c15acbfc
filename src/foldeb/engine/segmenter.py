"""Indentation-driven block segmentation.

Blocks are recovered from indentation alone: a single running indent
counter plus a stack of block-start markers. There is no per-language
parser, so anything whose indentation does not follow nesting (multi-line
expressions, dedented ``case`` labels, ``{`` on its own line at parent
level) is segmented by its indentation, not by its syntax.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass


logger = logging.getLogger(__name__)

COMMENT_MARKER = '//'
PREPROCESSOR_MARKER = '#'
SEGMENT_SKIP_MARKERS = (COMMENT_MARKER, PREPROCESSOR_MARKER)


@dataclass(frozen=True)
class CodeBlock:
    """A run of lines opened by an indentation increase and closed by a decrease.

    The enriched form carries column bounds so it can be handed to editor
    range APIs directly; see ``with_columns``.
    """

    start_line: int  # First body line (0-based)
    end_line: int  # Last body line (inclusive, 0-based)
    indent_level: int  # Indentation of the body lines
    start_column: int = 0
    end_column: int = 0

    def with_columns(self, lines: Sequence[str]) -> 'CodeBlock':
        """Return a copy whose end column is the length of the end line."""
        end_column = len(lines[self.end_line]) if 0 <= self.end_line < len(lines) else 0
        return CodeBlock(
            start_line=self.start_line,
            end_line=self.end_line,
            indent_level=self.indent_level,
            start_column=0,
            end_column=end_column,
        )

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1


def get_indent_level(line: str) -> int:
    """Count leading whitespace characters (a tab counts as one)."""
    return len(line) - len(line.lstrip())


def is_skippable(line: str, markers: Sequence[str] = SEGMENT_SKIP_MARKERS) -> bool:
    """Return True for blank lines and lines starting with one of ``markers``."""
    stripped = line.strip()
    if not stripped:
        return True
    return stripped.startswith(tuple(markers))


def segment(lines: Sequence[str]) -> list[CodeBlock]:
    """Split lines into indentation blocks.

    Each indentation increase pushes one start marker, however many levels
    it jumps. Each decrease pops one marker and emits the block ending on
    the line before. A decrease with nothing on the stack emits nothing,
    and blocks still open at end of input are never emitted.

    Args:
        lines: Source lines without line terminators.

    Returns:
        Blocks in the order their closing boundary was reached.
    """
    blocks: list[CodeBlock] = []
    start_stack: list[int] = []
    current_indent = 0

    for i, line in enumerate(lines):
        if is_skippable(line):
            continue

        indent = get_indent_level(line)
        if indent > current_indent:
            start_stack.append(i)
            current_indent = indent
        elif indent < current_indent:
            if start_stack:
                start = start_stack.pop()
                blocks.append(CodeBlock(start_line=start, end_line=i - 1, indent_level=current_indent))
            current_indent = indent

    if start_stack:
        logger.debug(f'{len(start_stack)} block(s) still open at end of input')

    return blocks
