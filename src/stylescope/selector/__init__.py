from stylescope.selector.errors import ParseError
from stylescope.selector.globalizer import globalize, globalize_selector
from stylescope.selector.model import (
    Combinator,
    ComplexSelector,
    Compound,
    Scope,
    ScopeMarker,
    SelectorList,
)
from stylescope.selector.parser import parse_selector_list

__all__ = [
    "ParseError",
    "parse_selector_list",
    "globalize",
    "globalize_selector",
    "Combinator",
    "ComplexSelector",
    "Compound",
    "Scope",
    "ScopeMarker",
    "SelectorList",
]
