"""Block model: the style block flowing through transforms and the processed result."""

from __future__ import annotations

from dataclasses import dataclass, field

from stylescope.model.diagnostic import Diagnostic

# Tag attributes: bare attributes (``<style global>``) map to True.
Attributes = dict[str, str | bool]


@dataclass(frozen=True)
class StyleBlock:
    """Content of one ``<style>`` tag plus what is known about it."""

    content: str
    attributes: Attributes = field(default_factory=dict)
    filename: str | None = None
    dependencies: tuple[str, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()


@dataclass(frozen=True)
class Processed:
    """Result of preprocessing markup, a style block, or a whole component."""

    code: str
    dependencies: tuple[str, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()
