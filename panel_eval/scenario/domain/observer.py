"""Observer port for the scenario domain — defines events in domain language."""

from typing import Protocol


class ScenarioObserver(Protocol):
    """Observer port emitting structured events during a scenario run.

    Implementations may log to structlog or record for tests.
    """

    def scenario_started(self, run_id: str, scenario: str) -> None: ...

    def state_changed(
        self, run_id: str, scenario: str, from_state: str, to_state: str
    ) -> None: ...

    def agent_completed(
        self, run_id: str, scenario: str, duration_ms: int, output_chars: int
    ) -> None: ...

    def scenario_completed(
        self,
        run_id: str,
        scenario: str,
        passed: bool,
        expected_pass: bool,
        total_score: int,
        max_score: int,
        artifact_dir: str,
    ) -> None: ...

    def scenario_failed(self, run_id: str, scenario: str, reason: str) -> None: ...
