from stylescope.stylesheet.walker import (
    KEYFRAMES_PREFIX,
    Mode,
    StylesheetWalker,
    rewrite_stylesheet,
)

__all__ = ["KEYFRAMES_PREFIX", "Mode", "StylesheetWalker", "rewrite_stylesheet"]
