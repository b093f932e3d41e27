"""Base exception class for all panel-eval-specific errors."""


class PanelEvalError(Exception):
    """Base class for all panel-eval errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable
