"""Judge prompt construction for a single domain."""

from panel_eval.scoring.domain.rubric import (
    MAX_CRITERION_SCORE,
    MAX_DOMAIN_SCORE,
    DomainRubric,
)

JUDGE_SYSTEM_PROMPT = """\
You are an expert reviewer scoring the output of an autonomous development \
agent for exactly one quality domain. Judge only that domain. Ground every \
score in the domain context you are given and be strict: a criterion the \
output does not address scores 0. Do not ask for clarification.
"""


def build_judge_prompt(
    rubric: DomainRubric,
    context: str,
    scenario_prompt: str,
    agent_output: str,
) -> str:
    """Embed the rubric, domain context, scenario and agent output in one prompt.

    The output-format section spells out the line markers the ScoringParser
    accepts, one per criterion.
    """
    criteria_lines = "\n".join(
        f"- **{criterion.label}**: <0-{MAX_CRITERION_SCORE}>/{MAX_CRITERION_SCORE}"
        for criterion in rubric.criteria
    )
    return (
        f"You are evaluating an agent's output for the {rubric.domain} domain: "
        f"{rubric.title}.\n\n"
        f"## Scenario Requirements\n\n{scenario_prompt.strip() or '(not provided)'}\n\n"
        f"## Agent Output to Evaluate\n\n{agent_output.strip()}\n\n"
        f"## Domain Context (Skills & Rules)\n\n{context.strip()}\n\n"
        "## Output Format\n\n"
        f"Score each criterion as an integer from 0 to {MAX_CRITERION_SCORE}. "
        "Write each score on its own line exactly as shown, replacing the "
        "placeholder with a single integer:\n\n"
        f"{criteria_lines}\n\n"
        f"Then write `## {rubric.domain.capitalize()} Total: <sum>/{MAX_DOMAIN_SCORE}` "
        "followed by a `## Critical Issues` section listing at most 10 issues.\n"
    )
