"""Error types raised by context infrastructure."""

from panel_eval.core.errors import PanelEvalError


class DomainContextLoadError(PanelEvalError):
    """Raised when a domain's context documents are missing or unreadable."""

    def __init__(self, domain: str, reason: str) -> None:
        self.domain = domain
        super().__init__(f"Failed to load context for domain '{domain}': {reason}")
