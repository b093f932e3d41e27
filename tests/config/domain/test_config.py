"""Tests for HarnessConfig and its component models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from panel_eval.config.domain.config import HarnessConfig
from panel_eval.config.domain.execution import ExecutionConfig, RetryConfig
from panel_eval.config.domain.invoker import InvokerConfig


def _config(**overrides: object) -> HarnessConfig:
    data: dict[str, object] = {
        "name": "rails-agents",
        "agent": {"type": "claude_cli", "timeout_seconds": 600},
        "judge": {"type": "claude_cli", "timeout_seconds": 300},
        "context_dir": "/srv/context",
        "artifacts_dir": "/srv/artifacts",
        "execution": {"global_timeout_seconds": 900},
    }
    data.update(overrides)
    return HarnessConfig.model_validate(data)


class TestHarnessConfig:
    def test_default_domains(self) -> None:
        assert _config().domains == ("backend", "frontend", "tests", "security")

    def test_paths_are_paths(self) -> None:
        assert _config().context_dir == Path("/srv/context")

    def test_subset_of_domains(self) -> None:
        assert _config(domains=["security"]).domains == ("security",)

    def test_unknown_domain_rejected(self) -> None:
        with pytest.raises(ValidationError, match="no rubric for domains: devops"):
            _config(domains=["backend", "devops"])

    def test_duplicate_domain_rejected(self) -> None:
        with pytest.raises(ValidationError, match="duplicate domains: tests"):
            _config(domains=["tests", "tests"])

    def test_empty_domains_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _config(domains=[])

    def test_is_frozen(self) -> None:
        cfg = _config()

        with pytest.raises(ValidationError):
            cfg.name = "other"  # type: ignore[misc]


class TestInvokerConfig:
    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            InvokerConfig(type="claude_cli", timeout_seconds=0)

    def test_negative_temperature_rejected(self) -> None:
        with pytest.raises(ValidationError):
            InvokerConfig(type="litellm", temperature=-0.1, timeout_seconds=10)


class TestExecutionConfig:
    def test_defaults(self) -> None:
        execution = ExecutionConfig(global_timeout_seconds=60)

        assert execution.pass_threshold_percent == 70
        assert execution.retry == RetryConfig()

    @pytest.mark.parametrize("percent", [-1, 101])
    def test_threshold_bounds(self, percent: int) -> None:
        with pytest.raises(ValidationError):
            ExecutionConfig(global_timeout_seconds=60, pass_threshold_percent=percent)

    def test_retry_needs_at_least_one_attempt(self) -> None:
        with pytest.raises(ValidationError):
            RetryConfig(max_attempts=0)
