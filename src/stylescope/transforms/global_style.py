"""Global style transform: makes a whole ``<style global>`` block global."""

from __future__ import annotations

from dataclasses import replace

from stylescope.model.block import StyleBlock
from stylescope.stylesheet import Mode, StylesheetWalker


class GlobalStyleTransform:
    """Wrap every selector of a block carrying the ``global`` attribute.

    Selectors resolve as global unless marked with ``:local``; ``@keyframes``
    names are prefixed with ``-global-``.  Blocks without the attribute pass
    through unchanged.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def apply(self, block: StyleBlock) -> StyleBlock:
        if not block.attributes.get("global"):
            return block

        walker = StylesheetWalker(Mode.GLOBAL_ATTRIBUTE, strict=self.strict)
        content = walker.rewrite(block.content)
        return replace(
            block,
            content=content,
            diagnostics=block.diagnostics + tuple(walker.diagnostics),
        )
