"""Lark Transformer that converts a selector parse tree into the selector model."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, VisitError

from stylescope.selector.errors import ParseError
from stylescope.selector.model import (
    Combinator,
    ComplexSelector,
    Compound,
    Scope,
    ScopeMarker,
    SelectorList,
    Token as SelectorToken,
)

__all__ = ["parse_selector_list"]

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_SCOPES = {":global": Scope.GLOBAL, ":local": Scope.LOCAL}


@lru_cache(maxsize=None)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(), parser="lalr", start="start")


class SelectorTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into a SelectorList.

    ``offset`` is where the parsed text starts inside ``root``, the string the
    caller originally handed in; nested ``:global(...)`` arguments are parsed
    recursively and report errors against ``root``.
    """

    def __init__(self, root: str, offset: int = 0):
        super().__init__()
        self._root = root
        self._offset = offset

    # ---- simple selectors ----

    def plain(self, items: list[Token]) -> str:
        return str(items[0])

    def attribute(self, items: list[Token]) -> str:
        return str(items[0])

    def arguments(self, items: list[object]) -> str:
        return "".join(str(i) for i in items)

    group = arguments

    def pseudo(self, items: list[object]) -> str | ScopeMarker:
        name = items[0]
        assert isinstance(name, Token)
        arguments = str(items[1]) if len(items) > 1 else None
        scope = _SCOPES.get(str(name).lower())
        if scope is None:
            return str(name) + (arguments or "")
        if arguments is None:
            return ScopeMarker(scope)
        # Skip the opening parenthesis; the argument is a selector list of its own.
        inner = arguments[1:-1]
        nested = _parse(inner, self._root, self._offset + name.end_pos + 1)
        return ScopeMarker(scope, nested)

    # ---- structural ----

    def compound(self, items: list[str | ScopeMarker]) -> list[SelectorToken]:
        # Bare markers glued to other simple selectors (":global.foo") are
        # hoisted in front of the compound they were attached to.
        markers = [p for p in items if isinstance(p, ScopeMarker) and p.is_bare]
        parts = tuple(p for p in items if not (isinstance(p, ScopeMarker) and p.is_bare))
        tokens: list[SelectorToken] = list(markers)
        if parts:
            tokens.append(Compound(parts))
        return tokens

    def combinator(self, items: list[Token]) -> Combinator:
        return Combinator(str(items[0]).strip() or " ")

    def complex(self, items: list[object]) -> ComplexSelector:
        tokens: list[SelectorToken] = []
        for item in items:
            if isinstance(item, Combinator):
                tokens.append(item)
            else:
                tokens.extend(item)  # type: ignore[arg-type]
        return ComplexSelector(tuple(tokens))

    def selector_list(self, items: list[object]) -> SelectorList:
        return SelectorList(tuple(i for i in items if isinstance(i, ComplexSelector)))

    def start(self, items: list[object]) -> SelectorList:
        return items[0]  # type: ignore[return-value]


def _describe(exc: UnexpectedInput, text: str) -> tuple[int, str]:
    """Return the position and a description of what the parser choked on."""
    if isinstance(exc, UnexpectedCharacters):
        return exc.pos_in_stream, repr(exc.char)
    token = getattr(exc, "token", None)
    if token is None or not str(token):
        return len(text), "end of selector"
    return token.start_pos, repr(str(token))


def _parse(text: str, root: str, offset: int) -> SelectorList:
    stripped = text.strip()
    if not stripped:
        return SelectorList()
    offset += len(text) - len(text.lstrip())

    try:
        tree = _parser().parse(stripped)
    except UnexpectedInput as exc:
        position, found = _describe(exc, stripped)
        position += offset
        raise ParseError(
            f"Invalid selector {root!r}: unexpected {found} at position {position}",
            position=position,
            selector=root,
        ) from None

    try:
        return SelectorTransformer(root, offset).transform(tree)
    except VisitError as exc:
        # Nested :global(...) arguments are parsed from inside the transformer.
        if isinstance(exc.orig_exc, ParseError):
            raise exc.orig_exc from None
        raise


def parse_selector_list(text: str) -> SelectorList:
    """Parse a CSS selector list string into a SelectorList.

    An empty or blank string yields an empty SelectorList.  Malformed input
    raises ParseError with the 0-based position of the problem in *text*.
    """
    return _parse(text, text, 0)
