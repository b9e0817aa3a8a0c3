"""Base protocol for style transforms."""

from __future__ import annotations

from typing import Protocol

from stylescope.model.block import StyleBlock


class Transform(Protocol):
    """A style-block-to-style-block transformation step."""

    def apply(self, block: StyleBlock) -> StyleBlock: ...
