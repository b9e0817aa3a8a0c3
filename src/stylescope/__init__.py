"""Scoped-style preprocessing: :global / :local selector resolution for component styles."""

__version__ = "0.1.0"

from stylescope.config import PreprocessConfig  # noqa: E402
from stylescope.preprocess import Preprocessor  # noqa: E402
from stylescope.selector import (  # noqa: E402
    ParseError,
    Scope,
    globalize,
    globalize_selector,
    parse_selector_list,
)
from stylescope.stylesheet import Mode, StylesheetWalker, rewrite_stylesheet  # noqa: E402

__all__ = [
    "__version__",
    "Mode",
    "ParseError",
    "PreprocessConfig",
    "Preprocessor",
    "Scope",
    "StylesheetWalker",
    "globalize",
    "globalize_selector",
    "parse_selector_list",
    "rewrite_stylesheet",
]
