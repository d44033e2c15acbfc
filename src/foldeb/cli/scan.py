"""CLI command for scanning files for error-handling branches."""

import sys

import click

from foldeb.cli.options import build_classifier, classifier_options
from foldeb.engine import split_lines
from foldeb.models import FileScanResponse, FoldingRangeResult, ScanResponse
from foldeb.scanner import DEFAULT_MAX_WORKERS, FileScanner, ScanResult


def build_scan_response(result: ScanResult) -> ScanResponse:
    return ScanResponse(
        files=[
            FileScanResponse(
                path=item.path,
                language=item.language,
                line_count=item.line_count,
                ranges=[FoldingRangeResult.from_range(r) for r in item.ranges],
            )
            for item in result.scanned
        ],
        skipped=result.skipped,
        errors=[{'path': p, 'error': e} for p, e in result.errors],
        count=result.range_count,
        total_time=result.total_time,
    )


def _read_header_lines(response: ScanResponse) -> dict[str, list[str]]:
    """Re-read files that have ranges so their header lines can be printed."""
    lines_by_path = {}
    for file_result in response.files:
        if not file_result.ranges:
            continue
        try:
            with open(file_result.path, encoding='utf-8', newline='') as f:
                lines_by_path[file_result.path] = split_lines(f.read())
        except (OSError, UnicodeDecodeError) as e:
            click.echo(f'Warning: cannot re-read {file_result.path}: {e}', err=True)
    return lines_by_path


@click.command('scan')
@click.argument('paths', nargs=-1, required=True, type=click.Path(exists=True))
@click.option('--recursive', '-r', is_flag=True, help='Recursively scan directories')
@click.option('--json', 'json_output', is_flag=True, help='Output in JSON format')
@click.option('--all-languages', is_flag=True, help='Scan every file, not only supported language extensions')
@click.option('--show-lines', is_flag=True, help='Print the line each block hangs off')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.option(
    '--max-workers',
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_WORKERS,
    help='Maximum parallel workers (default: 10 or FOLDEB_MAX_WORKERS)',
)
@classifier_options
def scan_command(
    paths: tuple[str, ...],
    recursive: bool,
    json_output: bool,
    all_languages: bool,
    show_lines: bool,
    no_color: bool,
    max_workers: int,
    depth_gate: bool,
    no_depth_gate: bool,
    depth_threshold: int | None,
    verbose: bool,
):
    """Find error-handling branches in source files.

    Ranges are printed with 1-based line numbers; JSON output keeps the
    0-based line indexes an editor expects.

    \b
    Examples:
        foldeb scan src/main.c                # Scan one file
        foldeb scan src/ -r                   # Scan a directory tree
        foldeb scan src/ -r --json            # JSON output (same shape as API)
        foldeb scan app.py --depth-gate       # Ignore shallow unlabelled blocks
    """
    classifier = build_classifier(depth_gate, no_depth_gate, depth_threshold, verbose)
    scanner = FileScanner(classifier=classifier, all_languages=all_languages)

    result = scanner.scan_paths(list(paths), recursive=recursive, max_workers=max_workers)
    response = build_scan_response(result)

    if json_output:
        click.echo(response.model_dump_json(indent=2))
    else:
        colorize = not no_color and sys.stdout.isatty()
        lines_by_path = _read_header_lines(response) if show_lines else None
        click.echo(response.to_cli(show_lines=lines_by_path, colorize=colorize))
        if result.skipped:
            click.echo(f'Skipped {len(result.skipped)} files (unsupported language)')

    for path, error in result.errors:
        click.echo(f'Error: {path}: {error}', err=True)

    # Exit with error if any failures
    if result.errors:
        sys.exit(1)
