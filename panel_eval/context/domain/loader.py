"""DomainContextLoader Protocol — read-only source of per-domain rubric context."""

from typing import Protocol


class DomainContextLoader(Protocol):
    """Returns the context documents a judge receives for one domain.

    Loaded fresh per run; implementations hold no cache.

    Raises:
        DomainContextLoadError: if no context exists for the domain.
    """

    def load(self, domain: str) -> str: ...
