"""Structlog implementation of the InvocationObserver port."""

import structlog


class StructlogInvocationObserver:
    """Delegates invocation events to structlog.

    Satisfies the InvocationObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def invocation_started(self, run_id: str, role: str, model: str) -> None:
        self._log.info("invocation.started", run_id=run_id, role=role, model=model)

    def invocation_completed(
        self, run_id: str, role: str, duration_ms: int, output_chars: int
    ) -> None:
        self._log.info(
            "invocation.completed",
            run_id=run_id,
            role=role,
            duration_ms=duration_ms,
            output_chars=output_chars,
        )

    def invocation_failed(self, run_id: str, role: str, kind: str, reason: str) -> None:
        self._log.error(
            "invocation.failed", run_id=run_id, role=role, kind=kind, reason=reason
        )

    def invocation_high_temperature_warned(
        self, run_id: str, role: str, temperature: float
    ) -> None:
        self._log.warning(
            "invocation.high_temperature",
            run_id=run_id,
            role=role,
            temperature=temperature,
            message="Judge temperature > 0.0 may produce non-deterministic scoring",
        )
