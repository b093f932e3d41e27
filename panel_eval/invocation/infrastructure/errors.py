"""Error types raised by invocation infrastructure."""

from panel_eval.core.errors import PanelEvalError
from panel_eval.invocation.domain.failure import InvocationFailureKind

_RETRIABLE_KINDS = frozenset(
    {InvocationFailureKind.TIMEOUT, InvocationFailureKind.NON_ZERO_EXIT}
)


class InvocationError(PanelEvalError):
    """Raised when an invocation times out, exits non-zero, or returns no text."""

    def __init__(
        self, kind: InvocationFailureKind, reason: str, stderr: str = ""
    ) -> None:
        self.kind = kind
        self.reason = reason
        self.stderr = stderr
        super().__init__(
            f"Failed to invoke ({kind.value}): {reason}",
            retriable=kind in _RETRIABLE_KINDS,
        )


class InvokerTypeNotSupportedError(PanelEvalError):
    """Raised when the invoker type specified in config is not a known type."""

    def __init__(self, invoker_type: str) -> None:
        super().__init__(
            f"Failed to create invoker factory: unsupported invoker type '{invoker_type}'"
        )
