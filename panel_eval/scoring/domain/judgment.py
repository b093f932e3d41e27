"""JudgmentResult — the structured score of one domain judge's response."""

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, Field, field_validator, model_validator

from panel_eval.scoring.domain.rubric import MAX_CRITERION_SCORE, MAX_DOMAIN_SCORE


class ParseStatus(StrEnum):
    PARSED = "parsed"
    PARTIALLY_PARSED = "partially_parsed"
    FAILED = "failed"


class JudgmentResult(BaseModel, frozen=True):
    """Immutable per-domain result.

    Produced by the ScoringParser from a judge response, or by the JudgePanel
    directly when the judge could not be run. Downstream code branches on
    ``parse_status``, never on the response text.
    """

    domain: str = Field(min_length=1)
    raw_response_text: str
    criteria_scores: dict[str, int]
    domain_score: int = Field(ge=0, le=MAX_DOMAIN_SCORE)
    parse_status: ParseStatus
    failure_reason: str | None = None

    @field_validator("criteria_scores")
    @classmethod
    def _criteria_in_range(cls, value: dict[str, int]) -> dict[str, int]:
        for criterion, score in value.items():
            if not 0 <= score <= MAX_CRITERION_SCORE:
                raise ValueError(
                    f"criterion '{criterion}' score {score} outside 0..{MAX_CRITERION_SCORE}"
                )
        return value

    @model_validator(mode="after")
    def _domain_score_is_sum(self) -> Self:
        expected = sum(self.criteria_scores.values())
        if self.domain_score != expected:
            raise ValueError(
                f"domain_score {self.domain_score} != sum of criteria scores {expected}"
            )
        return self

    @classmethod
    def failed(
        cls, domain: str, reason: str, raw_response_text: str = ""
    ) -> "JudgmentResult":
        """Build a zero-score result for a domain whose judge produced no usable score."""
        return cls(
            domain=domain,
            raw_response_text=raw_response_text,
            criteria_scores={},
            domain_score=0,
            parse_status=ParseStatus.FAILED,
            failure_reason=reason,
        )
