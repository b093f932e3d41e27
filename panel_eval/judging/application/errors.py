"""Error types raised when the judge panel yields no usable signal."""

from collections.abc import Sequence

from panel_eval.core.errors import PanelEvalError
from panel_eval.scoring.domain.judgment import JudgmentResult


class AllJudgesFailedError(PanelEvalError):
    """Raised when every domain judge failed, so no meaningful verdict exists."""

    def __init__(self, results: Sequence[JudgmentResult]) -> None:
        self.results = list(results)
        reasons = "; ".join(
            f"{result.domain}: {result.failure_reason}" for result in self.results
        )
        super().__init__(f"Failed to judge agent output: every domain failed ({reasons})")
