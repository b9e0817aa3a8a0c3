"""Selector parser error types."""


class ParseError(Exception):
    """Raised when a CSS selector list cannot be parsed."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        selector: str | None = None,
        line: int | None = None,
    ):
        self.position = position
        self.selector = selector
        self.line = line
        super().__init__(message)
