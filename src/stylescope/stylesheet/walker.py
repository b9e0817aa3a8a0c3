"""Stylesheet walker: apply the globalizer to every rule of a stylesheet.

tinycss2 provides the rule structure (qualified rules, at-rules and their
nesting).  Rewrites are recorded as text edits against the source and
spliced in at the end, so everything the walker does not touch is kept
byte for byte.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

import tinycss2

from stylescope.model.diagnostic import Diagnostic
from stylescope.selector import ParseError, Scope, globalize, parse_selector_list

__all__ = ["Mode", "StylesheetWalker", "rewrite_stylesheet", "KEYFRAMES_PREFIX"]

logger = logging.getLogger(__name__)

KEYFRAMES_PREFIX = "-global-"

# At-rules whose block holds more rules to rewrite.
_GROUPING_RULES = frozenset(
    {"media", "supports", "layer", "container", "document", "scope", "starting-style"}
)

# tinycss2 counts lines on text with these newlines normalized to "\n".
_NEWLINE_RE = re.compile(r"\r\n|\r|\f")


class Mode(Enum):
    """Which rules the walker rewrites and the scope they start in."""

    BARE_RULE = "rule"
    GLOBAL_ATTRIBUTE = "global"


@dataclass(frozen=True)
class _Edit:
    start: int
    end: int
    text: str


def _significant(source: str, pos: int) -> Iterator[tuple[int, str]]:
    """Yield (index, char) for characters outside comments, strings and escapes."""
    length = len(source)
    while pos < length:
        char = source[pos]
        if char == "\\":
            pos += 2
            continue
        if source.startswith("/*", pos):
            end = source.find("*/", pos + 2)
            pos = length if end == -1 else end + 2
            continue
        if char in "\"'":
            pos += 1
            while pos < length and source[pos] not in (char, "\n"):
                pos += 2 if source[pos] == "\\" else 1
            pos += 1
            continue
        yield pos, char
        pos += 1


def _block_start(source: str, pos: int) -> int:
    """Index of the "{" opening the block of the rule starting at *pos*."""
    depth = 0
    for index, char in _significant(source, pos):
        if char in "([":
            depth += 1
        elif char in ")]":
            depth = max(depth - 1, 0)
        elif char == "{" and depth == 0:
            return index
    return len(source)


def _block_end(source: str, brace: int) -> int:
    """Index just past the "}" matching the "{" at *brace*."""
    depth = 0
    for index, char in _significant(source, brace):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index + 1
    return len(source)


def _apply(source: str, edits: Iterable[_Edit]) -> str:
    pieces: list[str] = []
    cursor = 0
    for edit in sorted(edits, key=lambda e: (e.start, e.end)):
        pieces.append(source[cursor:edit.start])
        pieces.append(edit.text)
        cursor = edit.end
    pieces.append(source[cursor:])
    return "".join(pieces)


class StylesheetWalker:
    """Rewrite the selectors of a stylesheet according to *mode*.

    ``Mode.BARE_RULE`` only touches rules whose selector list holds a bare
    ``:global`` marker and resolves them starting in local scope; ``@global``
    blocks are unwrapped and their content handled as in global mode.

    ``Mode.GLOBAL_ATTRIBUTE`` resolves every rule starting in global scope and
    prefixes ``@keyframes`` names with ``-global-``.

    Selectors that fail to parse are left as they are and reported on
    ``diagnostics``, unless *strict* is set, in which case the ParseError is
    raised with the rule's line attached.
    """

    def __init__(self, mode: Mode, strict: bool = False):
        self.mode = mode
        self.strict = strict
        self.diagnostics: list[Diagnostic] = []
        self._source = ""
        self._line_starts: list[int] = [0]

    def rewrite(self, css: str) -> str:
        source = _NEWLINE_RE.sub("\n", css)
        self._source = source
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", source)]

        edits: list[_Edit] = []
        self._walk(tinycss2.parse_stylesheet(source), self.mode, edits)
        if not edits:
            return source
        return _apply(source, edits)

    # ---- traversal ----

    def _offset(self, node: object) -> int:
        line = getattr(node, "source_line")
        column = getattr(node, "source_column")
        return self._line_starts[line - 1] + column - 1

    def _walk(self, nodes: list, mode: Mode, edits: list[_Edit], nested: bool = False) -> None:
        for node in nodes:
            if node.type == "qualified-rule":
                self._rewrite_rule(node, mode, edits)
            elif node.type == "at-rule":
                self._rewrite_at_rule(node, mode, edits, nested)
            elif node.type == "error":
                logger.debug("tinycss2 parse error at line %d: %s", node.source_line, node.message)

    def _walk_block(self, rule, mode: Mode, edits: list[_Edit], nested: bool) -> None:
        # Inside a style rule a block mixes declarations with nested rules.
        if nested:
            nodes = tinycss2.parse_blocks_contents(rule.content)
        else:
            nodes = tinycss2.parse_rule_list(rule.content)
        self._walk(nodes, mode, edits, nested)

    def _selector_text(self, rule, start: int, brace: int) -> str:
        """The prelude between *start* and *brace* with its comments cut out."""
        pieces: list[str] = []
        cursor = start
        for token in rule.prelude:
            if token.type != "comment":
                continue
            position = self._offset(token)
            pieces.append(self._source[cursor:position])
            cursor = min(position + len(token.value) + 4, brace)
        pieces.append(self._source[cursor:brace])
        return "".join(pieces).strip()

    def _rewrite_rule(self, rule, mode: Mode, edits: list[_Edit]) -> None:
        start = self._offset(rule)
        brace = _block_start(self._source, start)
        if self._rewrite_prelude(rule, mode, start, brace, edits):
            self._walk_block(rule, mode, edits, nested=True)

    def _rewrite_prelude(self, rule, mode: Mode, start: int, brace: int, edits: list[_Edit]) -> bool:
        """Record the selector edit for *rule*; False when the whole rule is removed."""
        source = self._source
        prelude = source[start:brace]
        selector_text = self._selector_text(rule, start, brace)

        if mode is Mode.BARE_RULE and ":global" not in selector_text.lower():
            return True

        try:
            selectors = parse_selector_list(selector_text)
        except ParseError as exc:
            self._report(rule, selector_text, exc)
            return True

        if mode is Mode.BARE_RULE:
            if not selectors.has_bare_marker(Scope.GLOBAL):
                return True
            rewritten = globalize(selectors, Scope.LOCAL)
        else:
            rewritten = globalize(selectors, Scope.GLOBAL)

        if not rewritten:
            logger.debug("Removing rule %r at line %d", selector_text, rule.source_line)
            edits.append(_Edit(start, _block_end(source, brace), ""))
            return False

        new_selector = ", ".join(rewritten)
        logger.debug("Rewrote %r -> %r", selector_text, new_selector)
        trailing = prelude[len(prelude.rstrip()):]
        edits.append(_Edit(start, brace, new_selector + trailing))
        return True

    def _rewrite_at_rule(self, rule, mode: Mode, edits: list[_Edit], nested: bool) -> None:
        name = rule.lower_at_keyword
        if rule.content is None:
            return

        if name.endswith("keyframes"):
            # Keyframe selectors (from, to, 50%) are not CSS selectors.
            if mode is Mode.GLOBAL_ATTRIBUTE:
                self._prefix_keyframes(rule, edits)
            return

        if name == "global" and mode is Mode.BARE_RULE:
            self._unwrap_global_block(rule, edits, nested)
            return

        if name in _GROUPING_RULES:
            self._walk_block(rule, mode, edits, nested)

    def _prefix_keyframes(self, rule, edits: list[_Edit]) -> None:
        name_token = next(
            (t for t in rule.prelude if t.type not in ("whitespace", "comment")), None
        )
        if name_token is None or name_token.type != "ident":
            return
        if name_token.value.startswith(KEYFRAMES_PREFIX):
            return
        logger.debug("Prefixing keyframes %r", name_token.value)
        position = self._offset(name_token)
        edits.append(_Edit(position, position, KEYFRAMES_PREFIX))

    def _unwrap_global_block(self, rule, edits: list[_Edit], nested: bool) -> None:
        source = self._source
        start = self._offset(rule)
        brace = _block_start(source, start)
        end = _block_end(source, brace)
        close = end - 1 if source[end - 1:end] == "}" else end

        inner_start = brace + 1
        while inner_start < close and source[inner_start].isspace():
            inner_start += 1
        inner_end = close
        while inner_end > inner_start and source[inner_end - 1].isspace():
            inner_end -= 1

        edits.append(_Edit(start, inner_start, ""))
        edits.append(_Edit(inner_end, end, ""))
        self._walk_block(rule, Mode.GLOBAL_ATTRIBUTE, edits, nested)

    # ---- errors ----

    def _report(self, rule, selector_text: str, exc: ParseError) -> None:
        line = rule.source_line
        if self.strict:
            raise ParseError(
                f"{exc} (rule at line {line})",
                position=exc.position,
                selector=selector_text,
                line=line,
            ) from exc
        logger.warning("Leaving rule at line %d untouched: %s", line, exc)
        self.diagnostics.append(Diagnostic.from_parse_error(exc, line, selector_text))


def rewrite_stylesheet(css: str, mode: Mode, strict: bool = False) -> str:
    """Rewrite *css* with a fresh StylesheetWalker and return the result."""
    return StylesheetWalker(mode, strict=strict).rewrite(css)
