"""FileArtifactLogger — writes each run's audit trail under an artifacts directory."""

import fcntl
import json
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import NoReturn

from panel_eval.aggregation.domain.aggregate import AggregateResult
from panel_eval.artifacts.domain.artifact import RunArtifact, RunTiming, SourceRevision
from panel_eval.artifacts.domain.observer import ArtifactObserver
from panel_eval.artifacts.infrastructure.errors import ArtifactWriteError
from panel_eval.artifacts.infrastructure.git import read_source_revision
from panel_eval.artifacts.infrastructure.summary import (
    AGENT_OUTPUT_FILENAME,
    RUN_RECORD_FILENAME,
    SUMMARY_FILENAME,
    judgment_filename,
    render_summary,
)
from panel_eval.scoring.domain.judgment import JudgmentResult

HISTORY_FILENAME = "history.jsonl"


class FileArtifactLogger:
    """Persists runs as ``<artifacts_dir>/runs/<run_id>_<scenario>/``.

    Every file is created exclusively, so an existing record is never
    overwritten. The shared ``history.jsonl`` is appended to under an
    exclusive flock with a single write per run, so concurrent runs never
    interleave lines. Each record carries the git revision returned by
    ``read_revision``, looked up once per run.
    """

    def __init__(
        self,
        artifacts_dir: Path,
        observer: ArtifactObserver,
        read_revision: Callable[[], SourceRevision] = read_source_revision,
    ) -> None:
        self._artifacts_dir = artifacts_dir
        self._observer = observer
        self._read_revision = read_revision

    @property
    def history_path(self) -> Path:
        return self._artifacts_dir / HISTORY_FILENAME

    def persist(
        self,
        run_id: str,
        scenario_name: str,
        agent_output: str,
        judgments: Sequence[JudgmentResult],
        aggregate: AggregateResult,
        timing: RunTiming | None = None,
    ) -> Path:
        artifact = RunArtifact(
            run_id=run_id,
            scenario_name=scenario_name,
            agent_output_text=agent_output,
            judge_responses_by_domain={j.domain: j.raw_response_text for j in judgments},
            judgments=list(judgments),
            aggregate_result=aggregate,
            timing=timing,
            revision=self._read_revision(),
        )
        run_dir = self._artifacts_dir / "runs" / f"{run_id}_{scenario_name}"

        files = {
            AGENT_OUTPUT_FILENAME: agent_output,
            **{judgment_filename(j.domain): _render_judgment(j) for j in judgments},
            SUMMARY_FILENAME: render_summary(artifact),
            RUN_RECORD_FILENAME: artifact.model_dump_json(indent=2),
        }

        try:
            run_dir.parent.mkdir(parents=True, exist_ok=True)
            run_dir.mkdir(exist_ok=False)
        except OSError as exc:
            self._fail(run_id=run_id, path=run_dir, exc=exc)

        for filename, content in files.items():
            path = run_dir / filename
            try:
                with path.open("x", encoding="utf-8") as f:
                    f.write(content)
            except OSError as exc:
                self._fail(run_id=run_id, path=path, exc=exc)

        self._observer.artifacts_persisted(
            run_id=run_id, run_dir=str(run_dir), files=len(files)
        )

        self._append_history(artifact=artifact, run_dir=run_dir)
        return run_dir

    def _append_history(self, artifact: RunArtifact, run_dir: Path) -> None:
        aggregate = artifact.aggregate_result
        line = json.dumps(
            {
                "run_id": artifact.run_id,
                "scenario": artifact.scenario_name,
                "timestamp": aggregate.timestamp.isoformat(),
                "total_score": aggregate.total_score,
                "max_score": aggregate.max_score,
                "passed": aggregate.passed,
                "degraded": aggregate.degraded,
                "run_dir": str(run_dir),
                "git_sha": artifact.revision.git_sha,
                "git_branch": artifact.revision.git_branch,
            }
        )
        try:
            with self.history_path.open("a", encoding="utf-8") as f:
                fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                try:
                    f.write(line + "\n")
                    f.flush()
                finally:
                    fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except OSError as exc:
            self._fail(run_id=artifact.run_id, path=self.history_path, exc=exc)

        self._observer.history_appended(
            run_id=artifact.run_id, history_path=str(self.history_path)
        )

    def _fail(self, run_id: str, path: Path, exc: OSError) -> NoReturn:
        reason = exc.strerror or str(exc)
        self._observer.artifact_write_failed(run_id=run_id, path=str(path), reason=reason)
        raise ArtifactWriteError(path=path, reason=reason) from exc


def _render_judgment(judgment: JudgmentResult) -> str:
    header = (
        f"<!-- domain: {judgment.domain} | status: {judgment.parse_status.value} "
        f"| score: {judgment.domain_score} -->\n\n"
    )
    if judgment.raw_response_text:
        return header + judgment.raw_response_text
    return header + f"_No judge response: {judgment.failure_reason}_\n"
