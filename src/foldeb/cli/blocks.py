"""CLI command that shows the segmenter's view of a file."""

import json
import sys

import click

from foldeb.cli.options import build_classifier, classifier_options
from foldeb.engine import segment, split_lines


@click.command('blocks')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--json', 'json_output', is_flag=True, help='Output in JSON format')
@click.option('--accepted', is_flag=True, help='Only show blocks classified as error handling')
@classifier_options
def blocks_command(
    path: str,
    json_output: bool,
    accepted: bool,
    depth_gate: bool,
    no_depth_gate: bool,
    depth_threshold: int | None,
    verbose: bool,
):
    """Show every indentation block in a file and its classification.

    Blocks are listed in the order they close, which is how the engine
    sees them.

    \b
    Examples:
        foldeb blocks src/main.c
        foldeb blocks src/main.c --accepted --json
    """
    try:
        with open(path, encoding='utf-8', newline='') as f:
            lines = split_lines(f.read())
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f'Error: {path}: {e}', err=True)
        sys.exit(1)

    classifier = build_classifier(depth_gate, no_depth_gate, depth_threshold, verbose)

    rows = []
    for block in segment(lines):
        verdict = classifier.explain(block, lines)
        if accepted and verdict is None:
            continue
        block = block.with_columns(lines)
        rows.append(
            {
                'start_line': block.start_line,
                'end_line': block.end_line,
                'start_column': block.start_column,
                'end_column': block.end_column,
                'indent_level': block.indent_level,
                'error_handling': verdict is not None,
                'rule': verdict.rule if verdict else None,
                'category': verdict.category if verdict else None,
                'matched_line': verdict.line if verdict else None,
            }
        )

    if json_output:
        click.echo(json.dumps({'path': path, 'line_count': len(lines), 'blocks': rows}, indent=2))
        return

    if not rows:
        click.echo('No blocks found.')
        return

    for row in rows:
        span = f'{row["start_line"] + 1}-{row["end_line"] + 1}'
        status = f'error handling ({row["category"]}: {row["rule"]})' if row['error_handling'] else '-'
        click.echo(f'{span:>11}  indent={row["indent_level"]:<3} {status}')
