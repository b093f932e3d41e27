"""Tests for ScoreAggregator."""

import random
from datetime import UTC, datetime

import pytest

from panel_eval.aggregation.application.aggregator import ScoreAggregator
from panel_eval.aggregation.application.errors import AggregationError
from panel_eval.aggregation.domain.aggregate import AggregateResult
from panel_eval.judging.application.errors import AllJudgesFailedError
from panel_eval.scoring.domain.judgment import JudgmentResult, ParseStatus

_DOMAINS = ["backend", "frontend", "tests", "security"]
_TIMESTAMP = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _judgment(
    domain: str, scores: list[int], status: ParseStatus = ParseStatus.PARSED
) -> JudgmentResult:
    criteria = {f"c{i}": score for i, score in enumerate(scores)}
    return JudgmentResult(
        domain=domain,
        raw_response_text="...",
        criteria_scores=criteria,
        domain_score=sum(criteria.values()),
        parse_status=status,
        failure_reason=None if status is ParseStatus.PARSED else "missing: c4",
    )


def _aggregate(judgments: list[JudgmentResult]) -> AggregateResult:
    return ScoreAggregator(domains=_DOMAINS).aggregate(
        judgments=judgments, run_id="run-1", timestamp=_TIMESTAMP
    )


class TestThresholdExamples:
    def test_four_domains_at_45_pass(self) -> None:
        result = _aggregate([_judgment(d, [9, 9, 9, 9, 9]) for d in _DOMAINS])

        assert result.total_score == 180
        assert result.max_score == 200
        assert result.passed is True
        assert result.degraded is False

    def test_130_of_200_fails(self) -> None:
        result = _aggregate(
            [
                _judgment("backend", [7, 7, 7, 6, 6]),
                _judgment("frontend", [7, 7, 7, 6, 6]),
                _judgment("tests", [7, 7, 6, 6, 6]),
                _judgment("security", [7, 7, 6, 6, 6]),
            ]
        )

        assert result.total_score == 130
        assert result.passed is False

    def test_custom_threshold_percent(self) -> None:
        aggregator = ScoreAggregator(domains=_DOMAINS, pass_threshold_percent=60)

        result = aggregator.aggregate(
            judgments=[_judgment(d, [7, 6, 6, 6, 7]) for d in _DOMAINS],
            run_id="run-1",
            timestamp=_TIMESTAMP,
        )

        assert result.total_score == 128
        assert result.passed is True


class TestSumInvariants:
    def test_total_is_sum_of_domains(self) -> None:
        result = _aggregate(
            [
                _judgment("backend", [10, 10, 10, 10, 10]),
                _judgment("frontend", [0, 0, 0, 0, 0]),
                _judgment("tests", [5, 5, 5, 5, 5]),
                _judgment("security", [1, 2, 3, 4, 5]),
            ]
        )

        assert result.per_domain_scores == {
            "backend": 50,
            "frontend": 0,
            "tests": 25,
            "security": 15,
        }
        assert result.total_score == 90

    def test_order_of_judgments_does_not_matter(self) -> None:
        judgments = [_judgment(d, [i + 4] * 5) for i, d in enumerate(_DOMAINS)]
        shuffled = judgments[:]
        random.Random(7).shuffle(shuffled)

        assert _aggregate(judgments) == _aggregate(shuffled)
        assert list(_aggregate(shuffled).per_domain_scores) == _DOMAINS

    def test_raising_one_domain_never_lowers_total_or_flips_pass_to_fail(self) -> None:
        base = [_judgment(d, [7, 7, 7, 7, 7]) for d in _DOMAINS]
        before = _aggregate(base)

        raised = [_judgment("backend", [9, 9, 9, 9, 9])] + base[1:]
        after = _aggregate(raised)

        assert after.total_score > before.total_score
        assert before.passed is True
        assert after.passed is True


class TestDegradedResults:
    def test_partial_parse_marks_degraded(self) -> None:
        judgments = [_judgment(d, [9, 9, 9, 9, 9]) for d in _DOMAINS[:3]]
        judgments.append(_judgment("security", [9, 9, 9, 9, 0], ParseStatus.PARTIALLY_PARSED))

        result = _aggregate(judgments)

        assert result.degraded is True
        assert result.total_score == 171

    def test_failed_domain_counts_zero(self) -> None:
        judgments = [_judgment(d, [10, 10, 10, 10, 10]) for d in _DOMAINS[:3]]
        judgments.append(JudgmentResult.failed("security", "judge timed out"))

        result = _aggregate(judgments)

        assert result.per_domain_scores["security"] == 0
        assert result.total_score == 150
        assert result.passed is True
        assert result.degraded is True

    def test_missing_domain_counts_zero_and_degrades(self) -> None:
        result = _aggregate([_judgment(d, [10] * 5) for d in _DOMAINS[:3]])

        assert result.per_domain_scores["security"] == 0
        assert result.degraded is True


class TestAggregationErrors:
    def test_all_failed_raises(self) -> None:
        with pytest.raises(AllJudgesFailedError):
            _aggregate([JudgmentResult.failed(d, "timeout") for d in _DOMAINS])

    def test_no_judgments_raises(self) -> None:
        with pytest.raises(AllJudgesFailedError):
            _aggregate([])

    def test_duplicate_domain_raises(self) -> None:
        with pytest.raises(AggregationError, match="duplicate"):
            _aggregate([_judgment("backend", [5] * 5), _judgment("backend", [6] * 5)])

    def test_unconfigured_domain_raises(self) -> None:
        with pytest.raises(AggregationError, match="unconfigured"):
            _aggregate([_judgment("devops", [5] * 5)])

    def test_empty_domain_list_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            ScoreAggregator(domains=[])

    def test_max_score_scales_with_domains(self) -> None:
        assert ScoreAggregator(domains=["backend", "tests"]).max_score == 100
