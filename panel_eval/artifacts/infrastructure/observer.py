"""Structlog implementation of the ArtifactObserver port."""

import structlog


class StructlogArtifactObserver:
    """Delegates artifact domain events to structlog.

    Satisfies the ArtifactObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def artifacts_persisted(self, run_id: str, run_dir: str, files: int) -> None:
        self._log.info("artifacts.persisted", run_id=run_id, run_dir=run_dir, files=files)

    def history_appended(self, run_id: str, history_path: str) -> None:
        self._log.info("artifacts.history_appended", run_id=run_id, history_path=history_path)

    def artifact_write_failed(self, run_id: str, path: str, reason: str) -> None:
        self._log.error("artifacts.write_failed", run_id=run_id, path=path, reason=reason)
