"""Errors raised by the preprocessing glue (not by the selector engine)."""


class PreprocessError(Exception):
    """Raised when a style or markup block cannot be preprocessed."""

    def __init__(self, message: str):
        super().__init__(f"[stylescope] {message}")
