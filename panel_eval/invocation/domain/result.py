"""InvocationResult value object — the outcome of a single successful invocation."""

from pydantic import BaseModel, Field


class InvocationResult(BaseModel, frozen=True):
    """Immutable value object capturing the output of one prompt invocation.

    ``text`` is the scored output channel only. Diagnostic output the
    underlying process wrote to its error channel is kept apart in ``stderr``.
    """

    text: str = Field(min_length=1)
    duration_ms: int = Field(ge=0)
    stderr: str = ""
