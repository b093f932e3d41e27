"""Top-level HarnessConfig aggregate — the root configuration object."""

from pathlib import Path
from typing import Self

from pydantic import BaseModel, Field, model_validator

from panel_eval.config.domain.execution import ExecutionConfig
from panel_eval.config.domain.invoker import InvokerConfig
from panel_eval.scoring.domain.rubric import DEFAULT_RUBRICS

DEFAULT_DOMAINS = ("backend", "frontend", "tests", "security")


class HarnessConfig(BaseModel, frozen=True):
    """Root configuration aggregate for a panel-eval harness."""

    name: str = Field(min_length=1)
    agent: InvokerConfig
    judge: InvokerConfig
    domains: tuple[str, ...] = Field(default=DEFAULT_DOMAINS, min_length=1)
    context_dir: Path
    artifacts_dir: Path
    execution: ExecutionConfig

    @model_validator(mode="after")
    def _domains_are_judgeable(self) -> Self:
        duplicates = sorted({d for d in self.domains if self.domains.count(d) > 1})
        if duplicates:
            raise ValueError(f"duplicate domains: {', '.join(duplicates)}")
        unknown = [d for d in self.domains if d not in DEFAULT_RUBRICS]
        if unknown:
            raise ValueError(
                f"no rubric for domains: {', '.join(unknown)} "
                f"(known: {', '.join(DEFAULT_RUBRICS)})"
            )
        return self
