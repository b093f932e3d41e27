"""AgentInvoker and InvokerFactory Protocols — the black-box invocation boundary."""

from typing import Protocol

from panel_eval.invocation.domain.result import InvocationResult


class AgentInvoker(Protocol):
    """Structural interface for "run prompt, get text or fail".

    The same interface serves the agent-under-test and every judge; a judge
    is simply a differently-prompted invocation.
    """

    async def invoke(self, prompt: str, timeout_seconds: float) -> InvocationResult:
        """Run the prompt and return its output.

        Raises:
            InvocationError: with kind timeout, non_zero_exit or empty_output.
        """
        ...


class InvokerFactory(Protocol):
    """Constructs a new AgentInvoker bound to a run and a role (agent or judge:<domain>)."""

    def create(
        self, run_id: str, role: str, system_prompt: str | None
    ) -> AgentInvoker: ...
