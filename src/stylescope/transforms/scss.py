"""SCSS / Sass transform backed by the optional libsass package."""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from typing import Iterable

from stylescope.deps import has_dep_installed
from stylescope.errors import PreprocessError
from stylescope.model.block import StyleBlock

logger = logging.getLogger(__name__)


def get_include_paths(filename: str | None, base: Iterable[str] = ()) -> list[str]:
    """Paths the compiler resolves ``@import`` against, without duplicates."""
    paths = [*base, os.getcwd()]
    if filename:
        paths.append(os.path.dirname(os.path.abspath(filename)))
    return list(dict.fromkeys(paths))


class ScssTransform:
    """Compile SCSS (or indented Sass when *indented* is set) to CSS."""

    def __init__(self, include_paths: Iterable[str] = (), indented: bool = False):
        self.include_paths = tuple(include_paths)
        self.indented = indented

    def apply(self, block: StyleBlock) -> StyleBlock:
        if not has_dep_installed("sass"):
            raise PreprocessError(
                "libsass is required to compile scss/sass style blocks "
                "(pip install 'stylescope[scss]')"
            )
        import sass

        # libsass rejects empty input.
        if not block.content.strip():
            return replace(block, content="")

        paths = get_include_paths(block.filename, self.include_paths)
        logger.debug("Compiling %s with include paths %s", block.filename or "<style>", paths)
        try:
            css = sass.compile(
                string=block.content,
                include_paths=paths,
                indented=self.indented,
                output_style="expanded",
            )
        except sass.CompileError as exc:
            raise PreprocessError(f"Failed to compile {block.filename or 'style block'}: {exc}") from exc
        return replace(block, content=css)
