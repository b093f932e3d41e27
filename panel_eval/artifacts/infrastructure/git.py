"""Best-effort lookup of the git revision a run is recorded against."""

import subprocess
from pathlib import Path

from panel_eval.artifacts.domain.artifact import UNKNOWN_REVISION, SourceRevision

_GIT_TIMEOUT_SECONDS = 5.0


def read_source_revision(cwd: Path | None = None) -> SourceRevision:
    """Return the short HEAD sha and current branch of the repository at ``cwd``.

    Each field falls back to ``unknown`` when git is missing, ``cwd`` is not
    inside a repository, or HEAD is detached.
    """
    return SourceRevision(
        git_sha=_git(["rev-parse", "--short", "HEAD"], cwd=cwd),
        git_branch=_git(["branch", "--show-current"], cwd=cwd),
    )


def _git(args: list[str], cwd: Path | None) -> str:
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
            timeout=_GIT_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.SubprocessError):
        return UNKNOWN_REVISION
    return result.stdout.strip() or UNKNOWN_REVISION
