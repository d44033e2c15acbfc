"""Entry point used by hosts: raw text in, folding ranges out."""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass

from foldeb.engine.classifier import ErrorClassifier
from foldeb.engine.segmenter import segment


logger = logging.getLogger(__name__)

_NEWLINE_RE = re.compile(r'\r\n|\r|\n')


@dataclass(frozen=True)
class FoldingRange:
    """A range of lines a host can collapse.

    ``start`` and ``end`` are the block's own first and last lines (0-based,
    inclusive); they are not the span to hand an editor's fold command. A
    one-line block has ``start == end``, which most editors cannot fold.
    ``header_line`` is the line before the block, the one an editor keeps
    visible when it folds; None when the block starts the document.

    Hosts should fold ``[fold_start, end]``.
    """

    start: int
    end: int
    header_line: int | None
    rule: str
    category: str

    @property
    def fold_start(self) -> int:
        """Line an editor folds from: the header line, or ``start`` at document start."""
        return self.header_line if self.header_line is not None else self.start


def split_lines(text: str) -> list[str]:
    """Split text on \\n, \\r\\n or \\r.

    A terminator at the very end does not produce an extra empty line.
    """
    if not text:
        return []
    lines = _NEWLINE_RE.split(text)
    if lines[-1] == '':
        lines.pop()
    return lines


def find_error_branches(
    source: str | Sequence[str], classifier: ErrorClassifier | None = None
) -> list[FoldingRange]:
    """Find error-handling blocks in a document.

    Args:
        source: Full document text, or its lines already split.
        classifier: Classifier to use; a default one is built if omitted.

    Returns:
        Accepted ranges, in the order the segmenter closed their blocks.
    """
    lines = split_lines(source) if isinstance(source, str) else list(source)
    if classifier is None:
        classifier = ErrorClassifier()

    ranges: list[FoldingRange] = []
    for block in segment(lines):
        verdict = classifier.explain(block, lines)
        if verdict is None:
            continue
        logger.debug(
            f'Error-handling block {block.start_line + 1}-{block.end_line + 1} '
            f'({verdict.category}: {verdict.rule} on line {verdict.line + 1})'
        )
        ranges.append(
            FoldingRange(
                start=block.start_line,
                end=block.end_line,
                header_line=block.start_line - 1 if block.start_line > 0 else None,
                rule=verdict.rule,
                category=verdict.category,
            )
        )

    return ranges
