"""Tests for DomainRubric and the default rubrics."""

import pytest
from pydantic import ValidationError

from panel_eval.scoring.domain.rubric import (
    CRITERIA_PER_DOMAIN,
    DEFAULT_RUBRICS,
    MAX_DOMAIN_SCORE,
    Criterion,
    DomainRubric,
)


class TestDefaultRubrics:
    def test_four_default_domains(self) -> None:
        assert list(DEFAULT_RUBRICS) == ["backend", "frontend", "tests", "security"]

    @pytest.mark.parametrize("domain", ["backend", "frontend", "tests", "security"])
    def test_each_domain_has_five_distinct_criteria(self, domain: str) -> None:
        criteria = DEFAULT_RUBRICS[domain].criteria

        assert len(criteria) == CRITERIA_PER_DOMAIN
        assert len({c.key for c in criteria}) == CRITERIA_PER_DOMAIN

    def test_keys_derive_from_labels(self) -> None:
        keys = [c.key for c in DEFAULT_RUBRICS["security"].criteria]

        assert "mass_assignment_protection" in keys

    def test_max_domain_score_is_fifty(self) -> None:
        assert MAX_DOMAIN_SCORE == 50


class TestDomainRubricValidation:
    def test_rejects_fewer_than_five_criteria(self) -> None:
        with pytest.raises(ValidationError):
            DomainRubric(
                domain="backend",
                title="Backend",
                criteria=(Criterion(key="only_one", label="Only One"),),
            )

    def test_criterion_key_must_be_snake_case(self) -> None:
        with pytest.raises(ValidationError):
            Criterion(key="Model Design", label="Model Design")

    def test_is_frozen(self) -> None:
        rubric = DEFAULT_RUBRICS["backend"]

        with pytest.raises(ValidationError):
            rubric.domain = "other"  # type: ignore[misc]
