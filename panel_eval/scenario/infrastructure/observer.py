"""Structlog implementation of the ScenarioObserver port."""

import structlog


class StructlogScenarioObserver:
    """Delegates scenario domain events to structlog.

    Satisfies the ScenarioObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def scenario_started(self, run_id: str, scenario: str) -> None:
        self._log.info("scenario.started", run_id=run_id, scenario=scenario)

    def state_changed(
        self, run_id: str, scenario: str, from_state: str, to_state: str
    ) -> None:
        self._log.debug(
            "scenario.state_changed",
            run_id=run_id,
            scenario=scenario,
            from_state=from_state,
            to_state=to_state,
        )

    def agent_completed(
        self, run_id: str, scenario: str, duration_ms: int, output_chars: int
    ) -> None:
        self._log.info(
            "scenario.agent_completed",
            run_id=run_id,
            scenario=scenario,
            duration_ms=duration_ms,
            output_chars=output_chars,
        )

    def scenario_completed(
        self,
        run_id: str,
        scenario: str,
        passed: bool,
        expected_pass: bool,
        total_score: int,
        max_score: int,
        artifact_dir: str,
    ) -> None:
        self._log.info(
            "scenario.completed",
            run_id=run_id,
            scenario=scenario,
            passed=passed,
            expected_pass=expected_pass,
            total_score=total_score,
            max_score=max_score,
            artifact_dir=artifact_dir,
        )

    def scenario_failed(self, run_id: str, scenario: str, reason: str) -> None:
        self._log.error("scenario.failed", run_id=run_id, scenario=scenario, reason=reason)
