"""ScenarioRunner — runs one scenario end to end and asserts its verdict."""

import asyncio
import time
from collections.abc import Sequence
from datetime import UTC, datetime

from panel_eval.aggregation.application.aggregator import ScoreAggregator
from panel_eval.aggregation.domain.aggregate import AggregateResult
from panel_eval.artifacts.domain.artifact import RunTiming
from panel_eval.artifacts.domain.logger import ArtifactLogger
from panel_eval.artifacts.infrastructure.errors import ArtifactWriteError
from panel_eval.config.domain.config import HarnessConfig
from panel_eval.invocation.domain.invoker import InvokerFactory
from panel_eval.invocation.domain.result import InvocationResult
from panel_eval.invocation.infrastructure.errors import InvocationError
from panel_eval.judging.application.panel import JudgePanel
from panel_eval.scenario.application.errors import (
    AgentRunFailedError,
    ScenarioCheckFailedError,
    VerdictMismatchError,
)
from panel_eval.scenario.application.run_id import RunIdGenerator
from panel_eval.scenario.domain.checks import ScenarioCheck
from panel_eval.scenario.domain.observer import ScenarioObserver
from panel_eval.scenario.domain.outcome import ScenarioOutcome
from panel_eval.scenario.domain.scenario import ScenarioDefinition
from panel_eval.scenario.domain.state import ALLOWED_TRANSITIONS, RunState

AGENT_ROLE = "agent"


class ScenarioRunner:
    """Invokes the agent once, judges its output, persists the record, then asserts.

    The runner depends only on ports (an InvokerFactory for the agent, the
    JudgePanel, an ArtifactLogger and an observer) so tests can drive it with
    fakes. ``state`` reflects the most recent run started on this instance.
    """

    def __init__(
        self,
        config: HarnessConfig,
        agent_factory: InvokerFactory,
        panel: JudgePanel,
        artifact_logger: ArtifactLogger,
        observer: ScenarioObserver,
        run_ids: RunIdGenerator | None = None,
    ) -> None:
        self._config = config
        self._agent_factory = agent_factory
        self._panel = panel
        self._artifact_logger = artifact_logger
        self._observer = observer
        self._run_ids = run_ids if run_ids is not None else RunIdGenerator()
        self._aggregator = ScoreAggregator(
            domains=config.domains,
            pass_threshold_percent=config.execution.pass_threshold_percent,
        )
        self._state = RunState.CREATED

    @property
    def state(self) -> RunState:
        return self._state

    async def run(
        self, scenario: ScenarioDefinition, checks: Sequence[ScenarioCheck] = ()
    ) -> AggregateResult:
        """Run the scenario and return its AggregateResult.

        Raises:
            AgentRunFailedError: if the agent could not produce output.
            AllJudgesFailedError: if no judge produced a usable score.
            AggregationError: if the judgments do not match the configured domains.
            ArtifactWriteError: if the run record could not be written.
            VerdictMismatchError: if ``passed`` differs from ``expected_pass``.
            ScenarioCheckFailedError: if any of ``checks`` fails.
        """
        run_id = self._run_ids.next_id()
        self._state = RunState.CREATED
        self._observer.scenario_started(run_id=run_id, scenario=scenario.name)
        started_at = time.monotonic()

        self._transition(run_id, scenario, RunState.AGENT_INVOKED)
        agent_result = await self._invoke_agent(run_id=run_id, scenario=scenario)

        self._transition(run_id, scenario, RunState.JUDGING)
        judging_started_at = time.monotonic()
        try:
            judgments = await self._panel.evaluate(
                run_id=run_id,
                agent_output=agent_result.text,
                domains=self._config.domains,
                per_judge_timeout=self._config.judge.timeout_seconds,
                global_timeout=self._config.execution.global_timeout_seconds,
                scenario_prompt=scenario.agent_prompt,
            )
            aggregate = self._aggregator.aggregate(
                judgments=judgments, run_id=run_id, timestamp=datetime.now(UTC)
            )
        except Exception as exc:
            self._fail(run_id, scenario, reason=str(exc) or type(exc).__name__)
            raise
        judge_duration_ms = int((time.monotonic() - judging_started_at) * 1000)

        self._transition(run_id, scenario, RunState.AGGREGATED)

        self._transition(run_id, scenario, RunState.PERSISTED)
        try:
            artifact_dir = await asyncio.to_thread(
                self._artifact_logger.persist,
                run_id=run_id,
                scenario_name=scenario.name,
                agent_output=agent_result.text,
                judgments=judgments,
                aggregate=aggregate,
                timing=RunTiming(
                    agent_duration_ms=agent_result.duration_ms,
                    judge_duration_ms=judge_duration_ms,
                    total_duration_ms=int((time.monotonic() - started_at) * 1000),
                ),
            )
        except ArtifactWriteError as exc:
            self._fail(run_id, scenario, reason=str(exc))
            raise

        self._transition(run_id, scenario, RunState.ASSERTED)
        self._observer.scenario_completed(
            run_id=run_id,
            scenario=scenario.name,
            passed=aggregate.passed,
            expected_pass=scenario.expected_pass,
            total_score=aggregate.total_score,
            max_score=aggregate.max_score,
            artifact_dir=str(artifact_dir),
        )

        if aggregate.passed != scenario.expected_pass:
            raise VerdictMismatchError(
                scenario=scenario.name,
                expected_pass=scenario.expected_pass,
                aggregate=aggregate,
                artifact_dir=artifact_dir,
            )

        if checks:
            outcome = ScenarioOutcome(
                scenario=scenario,
                agent_output=agent_result.text,
                judgments=judgments,
                aggregate=aggregate,
                artifact_dir=artifact_dir,
            )
            failures = [msg for check in checks if (msg := check(outcome)) is not None]
            if failures:
                raise ScenarioCheckFailedError(
                    scenario=scenario.name, failures=failures, artifact_dir=artifact_dir
                )

        return aggregate

    async def _invoke_agent(
        self, run_id: str, scenario: ScenarioDefinition
    ) -> InvocationResult:
        agent = self._agent_factory.create(
            run_id=run_id, role=AGENT_ROLE, system_prompt=scenario.system_prompt
        )
        timeout_seconds = self._config.agent.timeout_seconds
        try:
            async with asyncio.timeout(timeout_seconds):
                result = await agent.invoke(
                    prompt=scenario.agent_prompt, timeout_seconds=timeout_seconds
                )
        except TimeoutError as exc:
            reason = f"no response within {timeout_seconds:g}s"
            self._fail(run_id, scenario, reason=reason)
            raise AgentRunFailedError(
                scenario=scenario.name, reason=reason, retriable=True
            ) from exc
        except InvocationError as exc:
            self._fail(run_id, scenario, reason=str(exc))
            raise AgentRunFailedError(
                scenario=scenario.name, reason=str(exc), retriable=exc.retriable
            ) from exc

        self._observer.agent_completed(
            run_id=run_id,
            scenario=scenario.name,
            duration_ms=result.duration_ms,
            output_chars=len(result.text),
        )
        return result

    def _transition(
        self, run_id: str, scenario: ScenarioDefinition, to_state: RunState
    ) -> None:
        from_state = self._state
        if to_state not in ALLOWED_TRANSITIONS[from_state]:
            raise RuntimeError(f"illegal run state transition {from_state} -> {to_state}")
        self._state = to_state
        self._observer.state_changed(
            run_id=run_id,
            scenario=scenario.name,
            from_state=from_state.value,
            to_state=to_state.value,
        )

    def _fail(self, run_id: str, scenario: ScenarioDefinition, reason: str) -> None:
        self._transition(run_id, scenario, RunState.FAILED)
        self._observer.scenario_failed(run_id=run_id, scenario=scenario.name, reason=reason)
