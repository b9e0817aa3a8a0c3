"""Style language detection from tag attributes."""

from __future__ import annotations

import re

from stylescope.model.block import Attributes

DEFAULT_STYLE_LANGUAGE = "css"

_ALIASES = {"pcss": "css", "postcss": "css"}
_EXTENSION_RE = re.compile(r"\.([^/.]+)$")


def get_language(attributes: Attributes, default: str = DEFAULT_STYLE_LANGUAGE) -> str:
    """Return the language named by ``lang``, ``type`` or the ``src`` extension."""
    lang: str | None = None
    src = attributes.get("src")
    if isinstance(src, str):
        match = _EXTENSION_RE.search(src)
        lang = match.group(1) if match else None
    if lang is None:
        for key in ("lang", "type"):
            value = attributes.get(key)
            if isinstance(value, str) and value:
                lang = value.replace("text/", "")
                break
    lang = (lang or default).lower()
    return _ALIASES.get(lang, lang)
