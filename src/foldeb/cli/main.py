"""Main CLI entry point with command groups"""

import click

from foldeb.__version__ import __version__
from foldeb.cli.blocks import blocks_command
from foldeb.cli.scan import scan_command
from foldeb.cli.serve import serve_command


class DefaultCommandGroup(click.Group):
    """Custom Click Group that allows a default command"""

    def parse_args(self, ctx, args):
        # During shell completion, don't redirect to default command
        if ctx.resilient_parsing:
            return super().parse_args(ctx, args)

        # If --help or --version is requested, show group help/version
        if not args or args[0] in ('--help', '-h', '--version'):
            return super().parse_args(ctx, args)

        # Check if first arg is a known command
        if args[0] in self.commands:
            return super().parse_args(ctx, args)

        # Otherwise, treat as scan command (default)
        return super().parse_args(ctx, ['scan'] + args)


@click.group(cls=DefaultCommandGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name='foldeb')
@click.pass_context
def cli(ctx):
    """
    foldeb - Find error-handling branches so editors can fold them.

    \b
    Commands:
      foldeb <path> [path ...]   Scan files for error-handling branches (default command)
      foldeb blocks <path>       Show every indentation block and its verdict
      foldeb serve               Start web API server

    \b
    Examples:
      foldeb src/main.c
      foldeb src/ -r --json
      foldeb src/ -r --depth-gate --depth-threshold 4
      foldeb blocks src/main.c
      foldeb serve --port 8000
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


# Register subcommands (scan is the default command)
cli.add_command(scan_command, name='scan')
cli.add_command(blocks_command, name='blocks')
cli.add_command(serve_command, name='serve')


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
