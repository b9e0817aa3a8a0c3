from stylescope.model.block import StyleBlock
from stylescope.transforms.base import Transform
from stylescope.transforms.global_rule import GlobalRuleTransform
from stylescope.transforms.global_style import GlobalStyleTransform

BUILTIN_TRANSFORMS: list[Transform] = [
    GlobalRuleTransform(),
    GlobalStyleTransform(),
]


def apply_transforms(block: StyleBlock, transforms: list[Transform] | None = None) -> StyleBlock:
    """Apply *transforms* (the built-in ones by default) to *block* in order."""
    for t in BUILTIN_TRANSFORMS if transforms is None else transforms:
        block = t.apply(block)
    return block
