"""Observer port for the artifacts domain — defines events in domain language."""

from typing import Protocol


class ArtifactObserver(Protocol):
    def artifacts_persisted(self, run_id: str, run_dir: str, files: int) -> None: ...

    def history_appended(self, run_id: str, history_path: str) -> None: ...

    def artifact_write_failed(self, run_id: str, path: str, reason: str) -> None: ...
