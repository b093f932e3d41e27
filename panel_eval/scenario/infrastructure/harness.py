"""Wiring — builds a ScenarioRunner with production adapters from a HarnessConfig."""

from panel_eval.artifacts.infrastructure.filesystem import FileArtifactLogger
from panel_eval.artifacts.infrastructure.observer import StructlogArtifactObserver
from panel_eval.config.domain.config import HarnessConfig
from panel_eval.context.infrastructure.filesystem import FileDomainContextLoader
from panel_eval.invocation.infrastructure.observer import StructlogInvocationObserver
from panel_eval.invocation.infrastructure.registry import create_invoker_factory
from panel_eval.judging.application.panel import JudgePanel
from panel_eval.judging.infrastructure.observer import StructlogPanelObserver
from panel_eval.scenario.application.run_id import RunIdGenerator
from panel_eval.scenario.application.runner import ScenarioRunner
from panel_eval.scenario.infrastructure.observer import StructlogScenarioObserver
from panel_eval.scoring.domain.parser import ScoringParser
from panel_eval.scoring.domain.rubric import DEFAULT_RUBRICS


def build_scenario_runner(
    config: HarnessConfig, run_ids: RunIdGenerator | None = None
) -> ScenarioRunner:
    """Assemble a ScenarioRunner that logs through structlog.

    Pass a shared RunIdGenerator when several runners live in one process.

    Raises:
        InvokerTypeNotSupportedError: if the agent or judge type is unknown.
    """
    invocation_observer = StructlogInvocationObserver()
    rubrics = {domain: DEFAULT_RUBRICS[domain] for domain in config.domains}

    panel = JudgePanel(
        invoker_factory=create_invoker_factory(
            config=config.judge, observer=invocation_observer
        ),
        context_loader=FileDomainContextLoader(context_dir=config.context_dir),
        parser=ScoringParser(rubrics=rubrics),
        rubrics=rubrics,
        observer=StructlogPanelObserver(),
        retry=config.execution.retry,
    )
    return ScenarioRunner(
        config=config,
        agent_factory=create_invoker_factory(
            config=config.agent, observer=invocation_observer
        ),
        panel=panel,
        artifact_logger=FileArtifactLogger(
            artifacts_dir=config.artifacts_dir, observer=StructlogArtifactObserver()
        ),
        observer=StructlogScenarioObserver(),
        run_ids=run_ids,
    )
