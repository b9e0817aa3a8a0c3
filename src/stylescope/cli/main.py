"""stylescope CLI entry point: Click group with subcommands."""

import logging

import click

from stylescope import __version__


@click.group()
@click.version_option(version=__version__, prog_name="stylescope")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
def cli(verbose: bool) -> None:
    """stylescope - resolve :global / :local scoping in component styles."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from stylescope.cli.selector import selector  # noqa: E402
from stylescope.cli.css import css  # noqa: E402
from stylescope.cli.process import process  # noqa: E402

cli.add_command(selector)
cli.add_command(css)
cli.add_command(process)
