"""Diagnostics recorded for rules a stylesheet rewrite had to leave alone."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from stylescope.selector.errors import ParseError

SELECTOR_PARSE = "selector-parse"


class Severity(Enum):
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """One finding about a stylesheet, tied to the rule it came from.

    ``code`` names the kind of finding (``selector-parse`` for selectors the
    parser rejected), ``line`` is the 1-based line of the rule and
    ``selector`` the prelude text as it was found.
    """

    code: str
    severity: Severity
    message: str
    line: int | None = None
    selector: str | None = None

    @classmethod
    def from_parse_error(cls, exc: ParseError, line: int, selector: str) -> Diagnostic:
        return cls(
            code=SELECTOR_PARSE,
            severity=Severity.WARNING,
            message=str(exc),
            line=line,
            selector=selector,
        )

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    @property
    def location(self) -> str:
        return "" if self.line is None else f"line {self.line}"

    def __str__(self) -> str:
        where = f" [{self.location}]" if self.location else ""
        return f"{self.severity.value}{where}: {self.message}"
