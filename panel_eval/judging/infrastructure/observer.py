"""StructlogPanelObserver — production panel observer that delegates to structlog."""

import structlog


class StructlogPanelObserver:
    """Logs judge panel events to structlog.

    Does NOT inherit from PanelObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def panel_started(
        self,
        run_id: str,
        domains: list[str],
        per_judge_timeout_seconds: float,
        global_timeout_seconds: float,
    ) -> None:
        self._log.info(
            "panel.started",
            run_id=run_id,
            domains=domains,
            per_judge_timeout_seconds=per_judge_timeout_seconds,
            global_timeout_seconds=global_timeout_seconds,
        )

    def judge_started(self, run_id: str, domain: str) -> None:
        self._log.info("panel.judge_started", run_id=run_id, domain=domain)

    def judge_completed(
        self, run_id: str, domain: str, domain_score: int, parse_status: str
    ) -> None:
        self._log.info(
            "panel.judge_completed",
            run_id=run_id,
            domain=domain,
            domain_score=domain_score,
            parse_status=parse_status,
        )

    def judge_failed(self, run_id: str, domain: str, reason: str) -> None:
        self._log.error("panel.judge_failed", run_id=run_id, domain=domain, reason=reason)

    def judge_retry(
        self,
        run_id: str,
        domain: str,
        attempt: int,
        reason: str,
        backoff_seconds: float,
    ) -> None:
        self._log.warning(
            "panel.judge_retry",
            run_id=run_id,
            domain=domain,
            attempt=attempt,
            reason=reason,
            backoff_seconds=backoff_seconds,
        )

    def panel_timed_out(
        self, run_id: str, global_timeout_seconds: float, unfinished: list[str]
    ) -> None:
        self._log.warning(
            "panel.timed_out",
            run_id=run_id,
            global_timeout_seconds=global_timeout_seconds,
            unfinished=unfinished,
        )

    def panel_completed(
        self, run_id: str, failed_domains: list[str], elapsed_seconds: float
    ) -> None:
        self._log.info(
            "panel.completed",
            run_id=run_id,
            failed_domains=failed_domains,
            elapsed_seconds=round(elapsed_seconds, 2),
        )
