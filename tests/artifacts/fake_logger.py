"""FakeArtifactLogger — in-memory ArtifactLogger for use in tests."""

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from panel_eval.aggregation.domain.aggregate import AggregateResult
from panel_eval.artifacts.domain.artifact import RunTiming
from panel_eval.artifacts.infrastructure.errors import ArtifactWriteError
from panel_eval.scoring.domain.judgment import JudgmentResult


@dataclass(frozen=True)
class PersistCall:
    run_id: str
    scenario_name: str
    agent_output: str
    judgments: list[JudgmentResult]
    aggregate: AggregateResult
    timing: RunTiming | None


class FakeArtifactLogger:
    """Records persist() calls and returns a fictitious run directory.

    With ``fail=True`` every call raises ArtifactWriteError.
    """

    def __init__(self, root: Path = Path("/artifacts"), fail: bool = False) -> None:
        self._root = root
        self._fail = fail
        self.calls: list[PersistCall] = []

    def persist(
        self,
        run_id: str,
        scenario_name: str,
        agent_output: str,
        judgments: Sequence[JudgmentResult],
        aggregate: AggregateResult,
        timing: RunTiming | None = None,
    ) -> Path:
        run_dir = self._root / "runs" / f"{run_id}_{scenario_name}"
        if self._fail:
            raise ArtifactWriteError(path=run_dir, reason="disk full")
        self.calls.append(
            PersistCall(
                run_id=run_id,
                scenario_name=scenario_name,
                agent_output=agent_output,
                judgments=list(judgments),
                aggregate=aggregate,
                timing=timing,
            )
        )
        return run_dir
