"""Global rule transform: resolves the bare ``:global`` marker in style blocks."""

from __future__ import annotations

from dataclasses import replace

from stylescope.model.block import StyleBlock
from stylescope.stylesheet import Mode, StylesheetWalker


class GlobalRuleTransform:
    """Rewrite rules such as ``div :global .cls`` to ``div :global(.cls)``.

    Rules whose only selector is ``:global`` are removed, and ``@global { ... }``
    blocks are unwrapped with their content made global.  Rules without a bare
    ``:global`` marker are left alone.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def apply(self, block: StyleBlock) -> StyleBlock:
        if ":global" not in block.content and "@global" not in block.content:
            return block

        walker = StylesheetWalker(Mode.BARE_RULE, strict=self.strict)
        content = walker.rewrite(block.content)
        return replace(
            block,
            content=content,
            diagnostics=block.diagnostics + tuple(walker.diagnostics),
        )
