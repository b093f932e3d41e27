"""Error types raised by score aggregation."""

from panel_eval.core.errors import PanelEvalError


class AggregationError(PanelEvalError):
    """Raised when judgment results do not match the configured domain set."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to aggregate scores: {reason}")
