"""ArtifactLogger Protocol — persistence port for run artifacts."""

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from panel_eval.aggregation.domain.aggregate import AggregateResult
from panel_eval.artifacts.domain.artifact import RunTiming
from panel_eval.scoring.domain.judgment import JudgmentResult


class ArtifactLogger(Protocol):
    """Persists one run record and appends one line to the cumulative history.

    Returns the run record's location.

    Raises:
        ArtifactWriteError: if any part of the record cannot be written.
    """

    def persist(
        self,
        run_id: str,
        scenario_name: str,
        agent_output: str,
        judgments: Sequence[JudgmentResult],
        aggregate: AggregateResult,
        timing: RunTiming | None = None,
    ) -> Path: ...
