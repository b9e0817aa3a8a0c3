"""CLI command: stylescope selector -- rewrite one selector list."""

from __future__ import annotations

import sys

import click

from stylescope.selector import ParseError, Scope, globalize_selector


@click.command()
@click.argument("text")
@click.option(
    "--global",
    "global_",
    is_flag=True,
    help="Start in global scope, as inside <style global>",
)
def selector(text: str, global_: bool) -> None:
    """Print SELECTOR with its :global / :local markers resolved."""
    initial = Scope.GLOBAL if global_ else Scope.LOCAL
    try:
        click.echo(globalize_selector(text, initial))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
