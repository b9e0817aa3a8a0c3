"""Preprocessor: the markup and style pipeline over a component source file."""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from pathlib import Path

from stylescope.config import PreprocessConfig
from stylescope.errors import PreprocessError
from stylescope.language import get_language
from stylescope.markup import MarkupReplacer, Tag, transform_markup, transform_tags
from stylescope.model.block import Attributes, Processed, StyleBlock
from stylescope.model.diagnostic import Diagnostic
from stylescope.transforms import apply_transforms
from stylescope.transforms.base import Transform
from stylescope.transforms.global_rule import GlobalRuleTransform
from stylescope.transforms.global_style import GlobalStyleTransform
from stylescope.transforms.scss import ScssTransform

__all__ = ["Preprocessor", "prepare_content", "strip_indent"]

logger = logging.getLogger(__name__)

_INDENT_RE = re.compile(r"^[ \t]*(?=\S)", re.MULTILINE)


def strip_indent(content: str) -> str:
    """Remove the shortest leading indentation of non-blank lines from every line."""
    indents = _INDENT_RE.findall(content)
    if not indents:
        return content
    indent = min(len(i) for i in indents)
    if indent == 0:
        return content
    return re.sub(rf"^[ \t]{{{indent}}}", "", content, flags=re.MULTILINE)


def prepare_content(content: str, config: PreprocessConfig) -> str:
    if config.strip_indent:
        content = strip_indent(content)
    if config.prepend_data:
        content = f"{config.prepend_data}\n{content}"
    return content


def _is_local_path(path: str) -> bool:
    return path.startswith("./") or path.startswith("../")


class Preprocessor:
    """Preprocess component sources according to a PreprocessConfig.

    ``markup`` applies the configured replacements and unwraps the markup tag,
    ``style`` runs one style block through content preparation, compilation
    and the global transforms, and ``process`` does both over a whole file.
    """

    def __init__(self, config: PreprocessConfig | None = None):
        self.config = config or PreprocessConfig()
        self._replacer = MarkupReplacer(self.config.replace)

    # ---- markup ----

    def markup(self, content: str, filename: str | None = None) -> Processed:
        code = self._replacer.replace(content)
        code = transform_markup(
            code,
            lambda markup, attributes: markup,
            tag_name=self.config.markup_tag_name,
        )
        return Processed(code=code)

    # ---- style ----

    def _global_transforms(self) -> list[Transform]:
        transforms: list[Transform] = []
        if self.config.global_rule:
            transforms.append(GlobalRuleTransform(strict=self.config.strict))
        if self.config.global_style:
            transforms.append(GlobalStyleTransform(strict=self.config.strict))
        return transforms

    def _load_src(self, block: StyleBlock) -> StyleBlock:
        """Fill an empty block from its local ``src`` file."""
        src = block.attributes.get("src")
        if not isinstance(src, str) or block.content.strip() or not _is_local_path(src):
            return block

        base = Path(block.filename).parent if block.filename else Path.cwd()
        path = (base / src).resolve()
        if not path.is_file():
            logger.warning("The file %s was not found.", path)
            return block
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PreprocessError(f"Could not read {path}: {exc}") from exc
        return replace(block, content=content, dependencies=block.dependencies + (str(path),))

    def _compile(self, block: StyleBlock) -> StyleBlock:
        lang = get_language(block.attributes)
        if lang == "css":
            return block
        if lang in ("scss", "sass"):
            transform = ScssTransform(self.config.include_paths, indented=lang == "sass")
            return transform.apply(block)
        raise PreprocessError(f"Unsupported style language {lang!r}")

    def style(
        self,
        content: str,
        attributes: Attributes | None = None,
        filename: str | None = None,
    ) -> Processed:
        block = StyleBlock(content=content, attributes=dict(attributes or {}), filename=filename)
        block = self._load_src(block)
        block = replace(block, content=prepare_content(block.content, self.config))
        block = self._compile(block)
        block = apply_transforms(block, self._global_transforms())
        return Processed(
            code=block.content,
            dependencies=block.dependencies,
            diagnostics=block.diagnostics,
        )

    # ---- whole file ----

    def process(self, source: str, filename: str | None = None) -> Processed:
        """Preprocess markup, then every ``<style>`` block of *source*."""
        code = self.markup(source, filename).code
        dependencies: list[str] = []
        diagnostics: list[Diagnostic] = []

        def run_style(tag: Tag) -> str:
            logger.debug("Processing <style> at offset %d of %s", tag.start, filename or "<source>")
            result = self.style(tag.content, tag.attributes, filename)
            dependencies.extend(result.dependencies)
            diagnostics.extend(result.diagnostics)
            return result.code

        code = transform_tags(code, "style", run_style)
        return Processed(
            code=code,
            dependencies=tuple(dict.fromkeys(dependencies)),
            diagnostics=tuple(diagnostics),
        )
