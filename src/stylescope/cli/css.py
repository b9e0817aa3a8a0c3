"""CLI command: stylescope css -- rewrite the selectors of a stylesheet."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from stylescope.selector import ParseError
from stylescope.stylesheet import Mode, StylesheetWalker


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--global",
    "global_",
    is_flag=True,
    help="Treat the stylesheet as a <style global> block",
)
@click.option("--strict", is_flag=True, help="Fail on selectors that do not parse")
def css(cssfile: str, global_: bool, strict: bool) -> None:
    """Rewrite CSSFILE and print the result.

    Without --global only rules using the bare :global marker are rewritten.
    Diagnostics for rules left untouched are printed to stderr.
    """
    mode = Mode.GLOBAL_ATTRIBUTE if global_ else Mode.BARE_RULE
    walker = StylesheetWalker(mode, strict=strict)

    try:
        source = Path(cssfile).read_text(encoding="utf-8")
        output = walker.rewrite(source)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    click.echo(output, nl=False)
    for diag in walker.diagnostics:
        click.echo(str(diag), err=True)
