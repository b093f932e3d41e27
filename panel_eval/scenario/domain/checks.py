"""Scenario checks — extra assertions evaluated over a ScenarioOutcome.

A check returns ``None`` when satisfied and a failure message otherwise, so
the runner can report every failing check of a run together.
"""

import re
from collections.abc import Callable
from typing import TypeAlias

from panel_eval.scenario.domain.outcome import ScenarioOutcome

ScenarioCheck: TypeAlias = Callable[[ScenarioOutcome], str | None]


def output_matches(pattern: str, flags: int = 0) -> ScenarioCheck:
    """The agent output must contain a match for ``pattern``."""
    compiled = re.compile(pattern, flags)

    def check(outcome: ScenarioOutcome) -> str | None:
        if compiled.search(outcome.agent_output):
            return None
        return f"agent output does not match /{pattern}/"

    return check


def output_excludes(pattern: str, flags: int = 0) -> ScenarioCheck:
    """The agent output must not contain a match for ``pattern``."""
    compiled = re.compile(pattern, flags)

    def check(outcome: ScenarioOutcome) -> str | None:
        found = compiled.search(outcome.agent_output)
        if found is None:
            return None
        return f"agent output unexpectedly matches /{pattern}/: {found.group(0)!r}"

    return check


def domain_score_at_least(domain: str, minimum: int) -> ScenarioCheck:
    def check(outcome: ScenarioOutcome) -> str | None:
        score = outcome.aggregate.per_domain_scores.get(domain)
        if score is None:
            return f"domain '{domain}' was not judged"
        if score < minimum:
            return f"domain '{domain}' scored {score}, expected at least {minimum}"
        return None

    return check


def criterion_score_at_least(domain: str, criterion: str, minimum: int) -> ScenarioCheck:
    """``criterion`` is the criterion key, e.g. ``model_design``."""

    def check(outcome: ScenarioOutcome) -> str | None:
        judgment = outcome.judgment_for(domain)
        if judgment is None:
            return f"domain '{domain}' was not judged"
        score = judgment.criteria_scores.get(criterion)
        if score is None:
            return f"criterion '{domain}.{criterion}' has no score"
        if score < minimum:
            return (
                f"criterion '{domain}.{criterion}' scored {score}, "
                f"expected at least {minimum}"
            )
        return None

    return check
