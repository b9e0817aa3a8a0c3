from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PreprocessConfig:
    global_rule: bool = True
    global_style: bool = True
    strict: bool = False
    markup_tag_name: str = "template"
    replace: tuple[tuple[str, str], ...] = ()  # (regex, replacement) applied to markup
    strip_indent: bool = False
    prepend_data: str = ""
    include_paths: tuple[str, ...] = ()  # extra SCSS include paths
