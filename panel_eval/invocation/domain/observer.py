"""InvocationObserver port — domain events emitted around every invocation."""

from typing import Protocol


class InvocationObserver(Protocol):
    """Observer port for invocation events.

    Implementations may log to structlog, record for tests, or emit metrics.
    """

    def invocation_started(self, run_id: str, role: str, model: str) -> None: ...

    def invocation_completed(
        self, run_id: str, role: str, duration_ms: int, output_chars: int
    ) -> None: ...

    def invocation_failed(
        self, run_id: str, role: str, kind: str, reason: str
    ) -> None: ...

    def invocation_high_temperature_warned(
        self, run_id: str, role: str, temperature: float
    ) -> None: ...
