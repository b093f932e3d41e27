"""Error types raised by artifact infrastructure."""

from pathlib import Path

from panel_eval.core.errors import PanelEvalError


class ArtifactWriteError(PanelEvalError):
    """Raised when a run's audit trail cannot be written completely."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to write artifact {path}: {reason}")
