"""Globalizer: resolve :global / :local scoping into explicit :global(...) wrapping.

A complex selector is folded left to right with a running scope:

    div :global span .cls   ->  div :global(span) :global(.cls)
    .a :local(div) .b       ->  :global(.a) div :global(.b)      (initial GLOBAL)

Every compound that ends up in global scope is wrapped on its own; wrapping
never spans a combinator.
"""

from __future__ import annotations

from stylescope.selector.model import (
    Combinator,
    ComplexSelector,
    Compound,
    Scope,
    ScopeMarker,
    SelectorList,
)
from stylescope.selector.parser import parse_selector_list

__all__ = ["globalize", "globalize_selector"]


def _wrap(text: str) -> str:
    return f":global({text})"


def _splice(selectors: SelectorList, initial: Scope) -> str:
    """Resolve a marker argument into text that can stand inside a compound."""
    rewritten = globalize(selectors, initial)
    if len(rewritten) == 1:
        return rewritten[0]
    if not rewritten:
        return ""
    return f":is({', '.join(rewritten)})"


def _rewrite_compound(compound: Compound, scope: Scope) -> str:
    pieces: list[str] = []
    run: list[str] = []

    def flush() -> None:
        if run:
            text = "".join(run)
            pieces.append(_wrap(text) if scope is Scope.GLOBAL else text)
            run.clear()

    for part in compound.parts:
        if isinstance(part, str):
            run.append(part)
            continue

        assert isinstance(part, ScopeMarker) and part.argument is not None
        if part.scope is Scope.LOCAL:
            flush()
            pieces.append(_splice(part.argument, Scope.LOCAL))
        elif part.argument.has_scope_markers:
            flush()
            pieces.append(_splice(part.argument, Scope.GLOBAL))
        elif scope is Scope.GLOBAL and part.argument.single_compound() is not None:
            # Already global; fold it into the surrounding wrapper instead of nesting.
            run.append(str(part.argument))
        else:
            flush()
            pieces.append(str(part))

    flush()
    return "".join(pieces)


def _rewrite_complex(selector: ComplexSelector, initial: Scope) -> str:
    scope = initial
    out: list[str] = []
    pending: Combinator | None = None

    for token in selector.tokens:
        if isinstance(token, ScopeMarker):
            scope = token.scope
            continue
        if isinstance(token, Combinator):
            # Dropping a marker leaves two combinators side by side; an
            # explicit one wins over the descendant combinator.
            if pending is None or pending.is_descendant:
                pending = token
            continue

        text = _rewrite_compound(token, scope)
        if not text:
            continue
        if out and pending is not None:
            out.append(str(pending))
        out.append(text)
        pending = None

    return "".join(out)


def globalize(selectors: SelectorList, initial: Scope = Scope.LOCAL) -> list[str]:
    """Rewrite every complex selector of *selectors*.

    Scope starts at *initial* for each complex selector.  Complex selectors
    that end up empty (a lone ``:global``) are dropped, so an empty result
    means the rule carrying this selector list should be removed.
    """
    rewritten = (_rewrite_complex(s, initial) for s in selectors.selectors)
    return [text for text in rewritten if text]


def globalize_selector(selector: str, initial: Scope = Scope.LOCAL) -> str:
    """Parse and rewrite a selector list string, joining the results with commas."""
    return ", ".join(globalize(parse_selector_list(selector), initial))
