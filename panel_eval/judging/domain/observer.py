"""PanelObserver port — domain events emitted while the judge panel runs."""

from typing import Protocol


class PanelObserver(Protocol):
    """Observer port for judge panel events.

    Implementations may log to structlog, record for tests, or emit metrics.
    """

    def panel_started(
        self,
        run_id: str,
        domains: list[str],
        per_judge_timeout_seconds: float,
        global_timeout_seconds: float,
    ) -> None: ...

    def judge_started(self, run_id: str, domain: str) -> None: ...

    def judge_completed(
        self, run_id: str, domain: str, domain_score: int, parse_status: str
    ) -> None: ...

    def judge_failed(self, run_id: str, domain: str, reason: str) -> None: ...

    def judge_retry(
        self,
        run_id: str,
        domain: str,
        attempt: int,
        reason: str,
        backoff_seconds: float,
    ) -> None: ...

    def panel_timed_out(
        self, run_id: str, global_timeout_seconds: float, unfinished: list[str]
    ) -> None: ...

    def panel_completed(
        self, run_id: str, failed_domains: list[str], elapsed_seconds: float
    ) -> None: ...
