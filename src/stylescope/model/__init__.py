from stylescope.model.block import Attributes, Processed, StyleBlock
from stylescope.model.diagnostic import Diagnostic, Severity

__all__ = ["Attributes", "Diagnostic", "Processed", "Severity", "StyleBlock"]
