"""Tests for scenario checks."""

import re
from pathlib import Path

from panel_eval.scenario.domain.checks import (
    criterion_score_at_least,
    domain_score_at_least,
    output_excludes,
    output_matches,
)
from panel_eval.scenario.domain.outcome import ScenarioOutcome
from panel_eval.scenario.domain.scenario import ScenarioDefinition
from panel_eval.scoring.domain.judgment import JudgmentResult
from tests.artifacts.builders import aggregate, judgments


def _outcome(
    agent_output: str = "class Task < ApplicationRecord\n  validates :title, presence: true\nend",
    results: list[JudgmentResult] | None = None,
) -> ScenarioOutcome:
    results = results if results is not None else judgments(score=8)
    return ScenarioOutcome(
        scenario=ScenarioDefinition(name="simple_model", agent_prompt="Add a Task model."),
        agent_output=agent_output,
        judgments=results,
        aggregate=aggregate(results),
        artifact_dir=Path("/tmp/runs/run-1_simple_model"),
    )


class TestOutputMatches:
    def test_match_passes(self) -> None:
        assert output_matches(r"class Task")(_outcome()) is None

    def test_no_match_reports_pattern(self) -> None:
        message = output_matches(r"has_many :comments")(_outcome())

        assert message == "agent output does not match /has_many :comments/"

    def test_flags_are_applied(self) -> None:
        assert output_matches(r"CLASS TASK", re.IGNORECASE)(_outcome()) is None


class TestOutputExcludes:
    def test_absent_pattern_passes(self) -> None:
        assert output_excludes(r"permit!")(_outcome()) is None

    def test_present_pattern_reports_match(self) -> None:
        message = output_excludes(r"validates :\w+")(_outcome())

        assert message is not None
        assert "'validates :title'" in message


class TestScoreChecks:
    def test_domain_score_at_least(self) -> None:
        assert domain_score_at_least("backend", 40)(_outcome()) is None
        assert domain_score_at_least("backend", 41)(_outcome()) == (
            "domain 'backend' scored 40, expected at least 41"
        )

    def test_domain_not_judged(self) -> None:
        message = domain_score_at_least("devops", 1)(_outcome())

        assert message == "domain 'devops' was not judged"

    def test_criterion_score_at_least(self) -> None:
        assert criterion_score_at_least("security", "authorization", 8)(_outcome()) is None
        assert criterion_score_at_least("security", "authorization", 9)(_outcome()) == (
            "criterion 'security.authorization' scored 8, expected at least 9"
        )

    def test_criterion_missing_from_failed_judgment(self) -> None:
        results = judgments()[:3] + [JudgmentResult.failed("security", "timeout")]

        message = criterion_score_at_least("security", "authorization", 1)(
            _outcome(results=results)
        )

        assert message == "criterion 'security.authorization' has no score"
