"""Tests for the JudgmentResult value object."""

import pytest
from pydantic import ValidationError

from panel_eval.scoring.domain.judgment import JudgmentResult, ParseStatus


def _scores(value: int) -> dict[str, int]:
    return {f"criterion_{i}": value for i in range(5)}


class TestJudgmentResultConstruction:
    def test_valid_result_is_accepted(self) -> None:
        result = JudgmentResult(
            domain="backend",
            raw_response_text="text",
            criteria_scores=_scores(8),
            domain_score=40,
            parse_status=ParseStatus.PARSED,
        )

        assert result.domain_score == 40
        assert result.failure_reason is None

    def test_domain_score_must_equal_sum_of_criteria(self) -> None:
        with pytest.raises(ValidationError, match="sum of criteria"):
            JudgmentResult(
                domain="backend",
                raw_response_text="text",
                criteria_scores=_scores(8),
                domain_score=41,
                parse_status=ParseStatus.PARSED,
            )

    def test_criterion_above_ten_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            JudgmentResult(
                domain="backend",
                raw_response_text="text",
                criteria_scores={"a": 11},
                domain_score=11,
                parse_status=ParseStatus.PARSED,
            )

    def test_negative_criterion_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            JudgmentResult(
                domain="backend",
                raw_response_text="text",
                criteria_scores={"a": -1, "b": 1},
                domain_score=0,
                parse_status=ParseStatus.PARSED,
            )

    def test_domain_score_above_fifty_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            JudgmentResult(
                domain="backend",
                raw_response_text="text",
                criteria_scores={f"c{i}": 10 for i in range(6)},
                domain_score=60,
                parse_status=ParseStatus.PARSED,
            )


class TestFailedJudgment:
    def test_failed_has_zero_score_and_reason(self) -> None:
        result = JudgmentResult.failed(domain="tests", reason="judge timed out")

        assert result.parse_status is ParseStatus.FAILED
        assert result.domain_score == 0
        assert result.criteria_scores == {}
        assert result.failure_reason == "judge timed out"
        assert result.raw_response_text == ""

    def test_failed_keeps_raw_response(self) -> None:
        result = JudgmentResult.failed(
            domain="tests", reason="no markers", raw_response_text="I refuse."
        )

        assert result.raw_response_text == "I refuse."
