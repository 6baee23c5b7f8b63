"""segconv CLI main entry point with global options."""

import logging
import sys

import click

from ..config import load_settings
from ..context import SegconvContext


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log debug details to stderr")
@click.option(
    "--log-level",
    help="Logging level (overrides $SEGCONV_LOG_LEVEL)",
)
@click.pass_context
def cli(ctx, verbose, log_level):
    """segconv - lossless conversion between flat segments, JSON and XML."""
    ctx.ensure_object(SegconvContext)

    settings = load_settings(log_level_option="DEBUG" if verbose else log_level)
    ctx.obj.settings = settings

    logging.basicConfig(
        level=settings.log_level_value,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


# Register commands at module level so tests can import cli with commands attached
from .commands.convert import convert
from .commands.detect import detect

cli.add_command(convert)
cli.add_command(detect)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
