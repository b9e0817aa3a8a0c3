"""Selector model: SelectorList, ComplexSelector, and the token variants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Scope(Enum):
    """Namespace a compound selector resolves against."""

    LOCAL = "local"
    GLOBAL = "global"


@dataclass(frozen=True)
class Combinator:
    """Relationship between two compounds.

    ``value`` is one of ``">"``, ``"+"``, ``"~"`` or ``" "`` (descendant).
    """

    value: str

    @property
    def is_descendant(self) -> bool:
        return self.value == " "

    def __str__(self) -> str:
        if self.is_descendant:
            return " "
        return f" {self.value} "


@dataclass(frozen=True)
class ScopeMarker:
    """A ``:global`` / ``:local`` pseudo-class.

    Bare markers (``argument is None``) stand as tokens of a complex selector
    and toggle the running scope.  Parenthesized markers carry the parsed
    selector list they wrap and live inside a compound as one of its parts.
    """

    scope: Scope
    argument: SelectorList | None = None

    @property
    def is_bare(self) -> bool:
        return self.argument is None

    def __str__(self) -> str:
        if self.argument is None:
            return f":{self.scope.value}"
        return f":{self.scope.value}({self.argument})"


# A compound part is either literal selector text (type, class, id,
# attribute, or a pseudo-class with its raw arguments) or a scope marker.
Part = Union[str, ScopeMarker]


@dataclass(frozen=True)
class Compound:
    """A run of simple selectors with no combinator between them."""

    parts: tuple[Part, ...]

    @property
    def has_scope_markers(self) -> bool:
        return any(isinstance(p, ScopeMarker) for p in self.parts)

    def __str__(self) -> str:
        return "".join(str(p) for p in self.parts)


Token = Union[Compound, Combinator, ScopeMarker]


@dataclass(frozen=True)
class ComplexSelector:
    """Compounds and bare markers joined by explicit combinator tokens."""

    tokens: tuple[Token, ...]

    @property
    def has_scope_markers(self) -> bool:
        for token in self.tokens:
            if isinstance(token, ScopeMarker):
                return True
            if isinstance(token, Compound) and token.has_scope_markers:
                return True
        return False

    def has_bare_marker(self, scope: Scope) -> bool:
        return any(
            isinstance(t, ScopeMarker) and t.is_bare and t.scope is scope
            for t in self.tokens
        )

    def __str__(self) -> str:
        return "".join(str(t) for t in self.tokens)


@dataclass(frozen=True)
class SelectorList:
    """Comma-separated complex selectors, in source order."""

    selectors: tuple[ComplexSelector, ...] = ()

    @property
    def has_scope_markers(self) -> bool:
        return any(s.has_scope_markers for s in self.selectors)

    def has_bare_marker(self, scope: Scope) -> bool:
        return any(s.has_bare_marker(scope) for s in self.selectors)

    def single_compound(self) -> Compound | None:
        """Return the only compound of a one-compound list, else None."""
        if len(self.selectors) != 1:
            return None
        tokens = self.selectors[0].tokens
        if len(tokens) == 1 and isinstance(tokens[0], Compound):
            return tokens[0]
        return None

    def __len__(self) -> int:
        return len(self.selectors)

    def __str__(self) -> str:
        return ", ".join(str(s) for s in self.selectors)
