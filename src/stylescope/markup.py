"""Locate tags in component source, read their attributes, and splice results back."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Pattern, Union

from stylescope.model.block import Attributes

__all__ = [
    "MarkupReplacer",
    "Tag",
    "find_tags",
    "parse_attributes",
    "transform_markup",
    "transform_tags",
]

_ATTRIBUTE_RE = re.compile(
    r"""([^\s=/>"']+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s>"']+)))?"""
)


@dataclass(frozen=True)
class Tag:
    """One occurrence of a tag in a source string."""

    name: str
    attributes: Attributes
    content: str
    start: int
    end: int
    open_tag: str
    close_tag: str


def parse_attributes(text: str) -> Attributes:
    """Turn an attribute string into a dict; bare attributes map to True."""
    attributes: Attributes = {}
    for match in _ATTRIBUTE_RE.finditer(text or ""):
        name, double, single, bare = match.groups()
        value = next((v for v in (double, single, bare) if v is not None), None)
        attributes[name] = True if value is None else value
    return attributes


def _tag_pattern(name: str) -> re.Pattern[str]:
    # HTML comments are matched too, so tags inside them can be skipped.
    tag = re.escape(name)
    return re.compile(
        rf"<!--.*?-->|<{tag}(\s.*?)?(?:>(.*?)</{tag}>|/>)",
        re.DOTALL | re.IGNORECASE,
    )


def find_tags(source: str, name: str) -> list[Tag]:
    """Return every ``<name>`` tag of *source* outside HTML comments."""
    tags: list[Tag] = []
    for match in _tag_pattern(name).finditer(source):
        if match.group(0).startswith("<!--"):
            continue
        attributes_text = match.group(1) or ""
        content = match.group(2)
        open_tag = f"<{name}{attributes_text.rstrip()}>"
        if content is not None:
            open_tag = source[match.start():match.start(2)]
        tags.append(
            Tag(
                name=name,
                attributes=parse_attributes(attributes_text),
                content=content or "",
                start=match.start(),
                end=match.end(),
                open_tag=open_tag,
                close_tag=f"</{name}>",
            )
        )
    return tags


def transform_tags(source: str, name: str, transform: Callable[[Tag], str]) -> str:
    """Replace the content of every ``<name>`` tag with ``transform(tag)``.

    Self-closing tags come back as an open/close pair around the new content.
    """
    pieces: list[str] = []
    cursor = 0
    for tag in find_tags(source, name):
        pieces.append(source[cursor:tag.start])
        pieces.append(tag.open_tag + transform(tag) + tag.close_tag)
        cursor = tag.end
    pieces.append(source[cursor:])
    return "".join(pieces)


def transform_markup(
    source: str,
    transform: Callable[[str, Attributes], str],
    tag_name: str = "template",
) -> str:
    """Run *transform* over the markup of a component.

    When a ``<template>`` tag (or *tag_name*) is present, only its content is
    transformed and the result replaces the whole tag.  Otherwise the whole
    source is transformed.
    """
    tag = re.escape(tag_name.lower())
    match = re.search(rf"<{tag}(\s[^>]*?)?(?:>(.*)</{tag}>|/>)", source, re.DOTALL)
    if match is None:
        return transform(source, {})

    code = transform(match.group(2) or "", parse_attributes(match.group(1) or ""))
    return source[:match.start()] + code + source[match.end():]


Replacement = Union[str, Callable[[re.Match], str]]


class MarkupReplacer:
    """Ordered ``(pattern, replacement)`` regex substitutions over markup."""

    def __init__(self, patterns: Iterable[tuple[Union[str, Pattern[str]], Replacement]]):
        self.patterns = [(re.compile(p), r) for p, r in patterns]

    def replace(self, content: str) -> str:
        for pattern, replacement in self.patterns:
            content = pattern.sub(replacement, content)
        return content
