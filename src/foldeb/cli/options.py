"""Options shared by commands that classify blocks."""

import logging
from dataclasses import replace

import click

from foldeb.engine import ClassifierConfig, ErrorClassifier
from foldeb.utils import setup_logging


def classifier_options(func):
    """Attach --depth-gate/--no-depth-gate/--depth-threshold/--verbose to a command."""
    func = click.option('--verbose', '-v', is_flag=True, help='Log every accepted block to stderr')(func)
    func = click.option(
        '--depth-threshold',
        type=click.IntRange(min=0),
        default=None,
        help='Deepest indentation treated as top level by the depth gate (default: 4 or FOLDEB_DEPTH_THRESHOLD)',
    )(func)
    func = click.option(
        '--no-depth-gate',
        is_flag=True,
        help='Disable the depth gate even if FOLDEB_DEPTH_GATE is set',
    )(func)
    func = click.option(
        '--depth-gate',
        is_flag=True,
        help='Reject shallow blocks unless the line before them is a label (default: FOLDEB_DEPTH_GATE or off)',
    )(func)
    return func


def build_classifier(
    depth_gate: bool,
    no_depth_gate: bool,
    depth_threshold: int | None,
    verbose: bool,
) -> ErrorClassifier:
    """Build a classifier from environment defaults overridden by CLI flags."""
    if depth_gate and no_depth_gate:
        raise click.UsageError('--depth-gate and --no-depth-gate are mutually exclusive')

    setup_logging(level=logging.DEBUG if verbose else None, default='WARNING')

    config = ClassifierConfig.from_env()
    if depth_gate or no_depth_gate:
        config = replace(config, depth_gate=depth_gate)
    if depth_threshold is not None:
        config = replace(config, depth_threshold=depth_threshold)
    return ErrorClassifier(config=config)
