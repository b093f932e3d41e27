"""Error types raised by the ScenarioRunner."""

from pathlib import Path

from panel_eval.aggregation.domain.aggregate import AggregateResult
from panel_eval.core.errors import PanelEvalError


class AgentRunFailedError(PanelEvalError):
    """Raised when the agent under test produced no output. No verdict exists."""

    def __init__(self, scenario: str, reason: str, retriable: bool = False) -> None:
        self.scenario = scenario
        super().__init__(
            f"Failed to run agent for scenario '{scenario}': {reason}",
            retriable=retriable,
        )


class VerdictMismatchError(PanelEvalError, AssertionError):
    """Raised when the panel's verdict differs from the scenario's expectation."""

    def __init__(
        self,
        scenario: str,
        expected_pass: bool,
        aggregate: AggregateResult,
        artifact_dir: Path,
    ) -> None:
        self.scenario = scenario
        self.aggregate = aggregate
        self.artifact_dir = artifact_dir
        expected = "PASS" if expected_pass else "FAIL"
        actual = "PASS" if aggregate.passed else "FAIL"
        degraded = " (degraded)" if aggregate.degraded else ""
        super().__init__(
            f"Failed to meet expected verdict for scenario '{scenario}': "
            f"expected {expected}, got {actual}{degraded} with "
            f"{aggregate.total_score}/{aggregate.max_score} "
            f"(threshold {aggregate.threshold_score}). "
            f"See {artifact_dir / 'summary.md'}"
        )


class ScenarioCheckFailedError(PanelEvalError, AssertionError):
    """Raised with every failing scenario check of a run."""

    def __init__(self, scenario: str, failures: list[str], artifact_dir: Path) -> None:
        self.scenario = scenario
        self.failures = failures
        self.artifact_dir = artifact_dir
        listed = "\n".join(f"  - {failure}" for failure in failures)
        super().__init__(
            f"Failed {len(failures)} check(s) for scenario '{scenario}':\n{listed}\n"
            f"See {artifact_dir / 'agent_output.md'}"
        )
