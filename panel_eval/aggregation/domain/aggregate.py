"""AggregateResult — the scored verdict of one run across all domains."""

from datetime import datetime
from typing import Self

from pydantic import BaseModel, Field, computed_field, model_validator

from panel_eval.scoring.domain.rubric import MAX_DOMAIN_SCORE


def meets_threshold(total_score: int, max_score: int, pass_threshold_percent: int) -> bool:
    """Integer form of ``total_score >= percent / 100 * max_score``."""
    return total_score * 100 >= pass_threshold_percent * max_score


class AggregateResult(BaseModel, frozen=True):
    """Immutable verdict. Construction enforces the scoring invariants."""

    run_id: str = Field(min_length=1)
    timestamp: datetime
    per_domain_scores: dict[str, int]
    total_score: int = Field(ge=0)
    max_score: int = Field(gt=0)
    pass_threshold_percent: int = Field(ge=0, le=100)
    passed: bool
    degraded: bool

    @computed_field  # type: ignore[prop-decorator]
    @property
    def threshold_score(self) -> int:
        """Smallest total score that passes."""
        return -(-self.pass_threshold_percent * self.max_score // 100)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def percentage(self) -> int:
        return round(self.total_score * 100 / self.max_score)

    @model_validator(mode="after")
    def _check_invariants(self) -> Self:
        for domain, score in self.per_domain_scores.items():
            if not 0 <= score <= MAX_DOMAIN_SCORE:
                raise ValueError(
                    f"domain '{domain}' score {score} outside 0..{MAX_DOMAIN_SCORE}"
                )
        if self.total_score != sum(self.per_domain_scores.values()):
            raise ValueError("total_score must equal the sum of per_domain_scores")
        if self.total_score > self.max_score:
            raise ValueError(f"total_score {self.total_score} exceeds {self.max_score}")
        expected = meets_threshold(
            self.total_score, self.max_score, self.pass_threshold_percent
        )
        if self.passed != expected:
            raise ValueError(f"passed={self.passed} contradicts the threshold rule")
        return self
