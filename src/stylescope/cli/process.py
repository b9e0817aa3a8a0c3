"""CLI command: stylescope process -- preprocess a component file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from stylescope.config import PreprocessConfig
from stylescope.errors import PreprocessError
from stylescope.preprocess import Preprocessor
from stylescope.selector import ParseError


def _parse_replacement(value: str) -> tuple[str, str]:
    pattern, sep, replacement = value.partition("=")
    if not sep or not pattern:
        raise click.BadParameter(f"expected PATTERN=REPLACEMENT, got {value!r}")
    return pattern, replacement


@click.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None, help="Write the result here instead of stdout")
@click.option("--strict", is_flag=True, help="Fail on selectors that do not parse")
@click.option("--no-global-rule", is_flag=True, help="Leave bare :global markers alone")
@click.option("--no-global-style", is_flag=True, help="Ignore the global attribute on <style>")
@click.option("--markup-tag", default="template", show_default=True, help="Markup tag to unwrap")
@click.option("--replace", "replacements", multiple=True, help="Regex replacement applied to markup, as PATTERN=REPLACEMENT")
@click.option("--strip-indent", is_flag=True, help="Strip common indentation from style blocks")
def process(
    source: str,
    output: str | None,
    strict: bool,
    no_global_rule: bool,
    no_global_style: bool,
    markup_tag: str,
    replacements: tuple[str, ...],
    strip_indent: bool,
) -> None:
    """Preprocess the markup and <style> blocks of SOURCE."""
    config = PreprocessConfig(
        global_rule=not no_global_rule,
        global_style=not no_global_style,
        strict=strict,
        markup_tag_name=markup_tag,
        replace=tuple(_parse_replacement(r) for r in replacements),
        strip_indent=strip_indent,
    )
    path = Path(source)

    try:
        result = Preprocessor(config).process(path.read_text(encoding="utf-8"), filename=str(path))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    except PreprocessError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_text(result.code, encoding="utf-8")
    else:
        click.echo(result.code, nl=False)

    for diag in result.diagnostics:
        click.echo(str(diag), err=True)
    for dep in result.dependencies:
        click.echo(f"Dependency: {dep}", err=True)
