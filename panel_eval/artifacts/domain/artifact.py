"""RunArtifact — the write-once audit record of one run."""

from pydantic import BaseModel, Field

from panel_eval.aggregation.domain.aggregate import AggregateResult
from panel_eval.scoring.domain.judgment import JudgmentResult

UNKNOWN_REVISION = "unknown"


class SourceRevision(BaseModel, frozen=True):
    """The git commit and branch of the code under test when the run was recorded."""

    git_sha: str = UNKNOWN_REVISION
    git_branch: str = UNKNOWN_REVISION


class RunTiming(BaseModel, frozen=True):
    agent_duration_ms: int = Field(ge=0)
    judge_duration_ms: int = Field(ge=0)
    total_duration_ms: int = Field(ge=0)


class RunArtifact(BaseModel, frozen=True):
    """Everything needed to audit a verdict after the fact."""

    run_id: str = Field(min_length=1)
    scenario_name: str = Field(min_length=1)
    agent_output_text: str
    judge_responses_by_domain: dict[str, str]
    judgments: list[JudgmentResult]
    aggregate_result: AggregateResult
    timing: RunTiming | None = None
    revision: SourceRevision = SourceRevision()
