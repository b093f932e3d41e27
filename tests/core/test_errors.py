"""Tests verifying the PanelEvalError type hierarchy."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from panel_eval.aggregation.application.errors import AggregationError
from panel_eval.aggregation.domain.aggregate import AggregateResult
from panel_eval.artifacts.infrastructure.errors import ArtifactWriteError
from panel_eval.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)
from panel_eval.context.infrastructure.errors import DomainContextLoadError
from panel_eval.core.errors import PanelEvalError
from panel_eval.invocation.domain.failure import InvocationFailureKind
from panel_eval.invocation.infrastructure.errors import (
    InvocationError,
    InvokerTypeNotSupportedError,
)
from panel_eval.judging.application.errors import AllJudgesFailedError
from panel_eval.scenario.application.errors import (
    AgentRunFailedError,
    ScenarioCheckFailedError,
    VerdictMismatchError,
)
from panel_eval.scoring.domain.judgment import JudgmentResult


def _aggregate(passed: bool) -> AggregateResult:
    scores = {"backend": 45, "frontend": 45} if passed else {"backend": 10, "frontend": 10}
    return AggregateResult(
        run_id="r1",
        timestamp=datetime(2026, 1, 1, tzinfo=UTC),
        per_domain_scores=scores,
        total_score=sum(scores.values()),
        max_score=100,
        pass_threshold_percent=70,
        passed=passed,
        degraded=False,
    )


class TestPanelEvalErrorHierarchy:
    """All panel-eval-specific exceptions inherit from PanelEvalError."""

    @pytest.mark.parametrize(
        "error",
        [
            MissingEnvVarsError(missing_vars=["MY_VAR"]),
            ConfigValidationError(reason="bad value"),
            ConfigLoadError(path=Path("/some/config.yaml"), reason="not found"),
            InvokerTypeNotSupportedError(invoker_type="bogus"),
            InvocationError(kind=InvocationFailureKind.TIMEOUT, reason="slow"),
            DomainContextLoadError(domain="backend", reason="missing"),
            AggregationError(reason="duplicate"),
            ArtifactWriteError(path=Path("/tmp/x"), reason="disk full"),
            AllJudgesFailedError(results=[JudgmentResult.failed("backend", "boom")]),
            AgentRunFailedError(scenario="s", reason="crashed"),
        ],
    )
    def test_is_panel_eval_error_with_failed_to_message(
        self, error: PanelEvalError
    ) -> None:
        assert isinstance(error, PanelEvalError)
        assert str(error).startswith("Failed to ")

    def test_panel_eval_error_is_exception(self) -> None:
        assert isinstance(PanelEvalError("test"), Exception)

    def test_panel_eval_error_is_not_retriable_by_default(self) -> None:
        assert PanelEvalError("test").retriable is False


class TestInvocationError:
    def test_timeout_is_retriable(self) -> None:
        error = InvocationError(kind=InvocationFailureKind.TIMEOUT, reason="slow")
        assert error.retriable is True

    def test_non_zero_exit_is_retriable(self) -> None:
        error = InvocationError(kind=InvocationFailureKind.NON_ZERO_EXIT, reason="exit 1")
        assert error.retriable is True

    def test_empty_output_is_not_retriable(self) -> None:
        error = InvocationError(kind=InvocationFailureKind.EMPTY_OUTPUT, reason="blank")
        assert error.retriable is False

    def test_message_names_kind(self) -> None:
        error = InvocationError(kind=InvocationFailureKind.TIMEOUT, reason="slow")
        assert "timeout" in str(error)
        assert "slow" in str(error)

    def test_stderr_is_kept(self) -> None:
        error = InvocationError(
            kind=InvocationFailureKind.NON_ZERO_EXIT, reason="exit 2", stderr="trace"
        )
        assert error.stderr == "trace"


class TestAllJudgesFailedError:
    def test_lists_every_domain_reason(self) -> None:
        error = AllJudgesFailedError(
            results=[
                JudgmentResult.failed("backend", "timed out"),
                JudgmentResult.failed("tests", "no score markers found"),
            ]
        )

        assert "backend: timed out" in str(error)
        assert "tests: no score markers found" in str(error)
        assert len(error.results) == 2


class TestAssertionErrors:
    """Verdict and check failures surface as assertion failures in pytest."""

    def test_verdict_mismatch_is_assertion_error(self) -> None:
        error = VerdictMismatchError(
            scenario="simple",
            expected_pass=True,
            aggregate=_aggregate(passed=False),
            artifact_dir=Path("/tmp/runs/r1_simple"),
        )

        assert isinstance(error, AssertionError)
        assert isinstance(error, PanelEvalError)

    def test_verdict_mismatch_message_names_scores_and_artifacts(self) -> None:
        error = VerdictMismatchError(
            scenario="simple",
            expected_pass=True,
            aggregate=_aggregate(passed=False),
            artifact_dir=Path("/tmp/runs/r1_simple"),
        )

        message = str(error)
        assert "expected PASS, got FAIL" in message
        assert "20/100" in message
        assert "threshold 70" in message
        assert "/tmp/runs/r1_simple/summary.md" in message

    def test_scenario_check_failed_lists_all_failures(self) -> None:
        error = ScenarioCheckFailedError(
            scenario="simple",
            failures=["first problem", "second problem"],
            artifact_dir=Path("/tmp/runs/r1_simple"),
        )

        assert isinstance(error, AssertionError)
        assert "Failed 2 check(s)" in str(error)
        assert "first problem" in str(error)
        assert "second problem" in str(error)
