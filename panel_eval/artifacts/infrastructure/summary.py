"""Markdown rendering of a run's human-readable summary."""

from panel_eval.artifacts.domain.artifact import RunArtifact
from panel_eval.scoring.domain.judgment import ParseStatus
from panel_eval.scoring.domain.rubric import MAX_CRITERION_SCORE, MAX_DOMAIN_SCORE

AGENT_OUTPUT_FILENAME = "agent_output.md"
SUMMARY_FILENAME = "summary.md"
RUN_RECORD_FILENAME = "run.json"


def judgment_filename(domain: str) -> str:
    return f"{domain}_judgment.md"


def format_duration(milliseconds: int) -> str:
    """Render a duration as ``850ms``, ``12.3s`` or ``4m 5s``."""
    if milliseconds < 1000:
        return f"{milliseconds}ms"
    seconds = milliseconds / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, remainder = divmod(round(seconds), 60)
    return f"{minutes}m {remainder}s"


def render_summary(artifact: RunArtifact) -> str:
    aggregate = artifact.aggregate_result
    verdict = "PASS" if aggregate.passed else "FAIL"

    lines = [
        f"# Evaluation Summary: {artifact.scenario_name}",
        "",
        f"**Run ID**: {artifact.run_id}",
        f"**Timestamp**: {aggregate.timestamp.isoformat(timespec='seconds')}",
        f"**Git SHA**: {artifact.revision.git_sha}",
        f"**Branch**: {artifact.revision.git_branch}",
        "",
        "## Overall Result",
        "",
        f"**{verdict}**",
        "",
        f"**Total Score**: {aggregate.total_score}/{aggregate.max_score} "
        f"({aggregate.percentage}%)",
        f"**Threshold**: {aggregate.threshold_score}/{aggregate.max_score} "
        f"({aggregate.pass_threshold_percent}%)",
    ]
    if aggregate.degraded:
        lines += [
            "",
            "> Degraded: at least one domain was not fully scored. "
            "Missing criteria count as 0.",
        ]

    if artifact.timing is not None:
        lines += [
            "",
            "## Timing",
            "",
            f"- **Agent Duration**: {format_duration(artifact.timing.agent_duration_ms)}",
            f"- **Judge Duration**: {format_duration(artifact.timing.judge_duration_ms)}",
            f"- **Total Duration**: {format_duration(artifact.timing.total_duration_ms)}",
        ]

    lines += [
        "",
        "## Domain Scores",
        "",
        "| Domain | Score | Status |",
        "|--------|-------|--------|",
    ]
    statuses = {j.domain: j.parse_status for j in artifact.judgments}
    for domain, score in aggregate.per_domain_scores.items():
        status = statuses.get(domain, ParseStatus.FAILED)
        lines.append(f"| {domain} | {score}/{MAX_DOMAIN_SCORE} | {status.value} |")

    for judgment in artifact.judgments:
        lines += ["", f"### {judgment.domain.capitalize()}", ""]
        for criterion, score in judgment.criteria_scores.items():
            lines.append(f"- {criterion}: {score}/{MAX_CRITERION_SCORE}")
        if judgment.failure_reason:
            lines.append(f"- _{judgment.parse_status.value}_: {judgment.failure_reason}")

    lines += ["", "## Detailed Judgments", ""]
    lines += [
        f"- [{judgment_filename(domain)}](./{judgment_filename(domain)})"
        for domain in artifact.judge_responses_by_domain
    ]
    lines += [
        "",
        "## Agent Output",
        "",
        f"See [{AGENT_OUTPUT_FILENAME}](./{AGENT_OUTPUT_FILENAME}) for the full agent response.",
        "",
    ]
    return "\n".join(lines)
