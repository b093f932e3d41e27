"""ScenarioOutcome — everything a scenario check may inspect after a run."""

from pathlib import Path

from pydantic import BaseModel

from panel_eval.aggregation.domain.aggregate import AggregateResult
from panel_eval.scenario.domain.scenario import ScenarioDefinition
from panel_eval.scoring.domain.judgment import JudgmentResult


class ScenarioOutcome(BaseModel, frozen=True):
    scenario: ScenarioDefinition
    agent_output: str
    judgments: list[JudgmentResult]
    aggregate: AggregateResult
    artifact_dir: Path

    def judgment_for(self, domain: str) -> JudgmentResult | None:
        return next((j for j in self.judgments if j.domain == domain), None)
