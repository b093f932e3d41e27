"""DomainRubric — the five scored criteria of one evaluation domain."""

from pydantic import BaseModel, Field

MAX_CRITERION_SCORE = 10
CRITERIA_PER_DOMAIN = 5
MAX_DOMAIN_SCORE = MAX_CRITERION_SCORE * CRITERIA_PER_DOMAIN


class Criterion(BaseModel, frozen=True):
    """One scored criterion. ``key`` is used in JSON markers, ``label`` in line markers."""

    key: str = Field(pattern=r"^[a-z][a-z0-9_]*$")
    label: str = Field(min_length=1)


class DomainRubric(BaseModel, frozen=True):
    domain: str = Field(min_length=1)
    title: str = Field(min_length=1)
    criteria: tuple[Criterion, ...] = Field(
        min_length=CRITERIA_PER_DOMAIN, max_length=CRITERIA_PER_DOMAIN
    )


def _rubric(domain: str, title: str, labels: list[str]) -> DomainRubric:
    return DomainRubric(
        domain=domain,
        title=title,
        criteria=tuple(
            Criterion(key=label.lower().replace(" ", "_"), label=label)
            for label in labels
        ),
    )


DEFAULT_RUBRICS: dict[str, DomainRubric] = {
    rubric.domain: rubric
    for rubric in (
        _rubric(
            "backend",
            "Backend (Models, Migrations, Validations)",
            [
                "Model Design",
                "Migration Quality",
                "Validations",
                "Business Logic",
                "Rails Conventions",
            ],
        ),
        _rubric(
            "frontend",
            "Frontend (Controllers, Views, Hotwire)",
            [
                "Controller Design",
                "View Structure",
                "Hotwire Usage",
                "Accessibility",
                "Frontend Conventions",
            ],
        ),
        _rubric(
            "tests",
            "Tests (Coverage, Quality, Organization)",
            [
                "Test Coverage",
                "Test Quality",
                "Test Organization",
                "Edge Cases",
                "Test Maintainability",
            ],
        ),
        _rubric(
            "security",
            "Security (Authorization, Protection, Best Practices)",
            [
                "Authorization",
                "Mass Assignment Protection",
                "Data Validation",
                "Sensitive Data Handling",
                "Security Best Practices",
            ],
        ),
    )
}
