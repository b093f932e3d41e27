"""ConfiguredInvokerFactory — constructs invokers of one concrete type from config."""

from typing import TypeAlias

from panel_eval.config.domain.invoker import InvokerConfig
from panel_eval.invocation.domain.invoker import AgentInvoker
from panel_eval.invocation.domain.observer import InvocationObserver
from panel_eval.invocation.infrastructure.claude_cli import ClaudeCliInvoker
from panel_eval.invocation.infrastructure.claude_sdk import ClaudeAgentSDKInvoker
from panel_eval.invocation.infrastructure.litellm import LiteLLMInvoker

InvokerClass: TypeAlias = (
    type[ClaudeCliInvoker] | type[ClaudeAgentSDKInvoker] | type[LiteLLMInvoker]
)


class ConfiguredInvokerFactory:
    """Creates invokers for a given run and role.

    An explicit system prompt passed to create() takes precedence over the
    one in the InvokerConfig.
    """

    def __init__(
        self,
        invoker_class: InvokerClass,
        config: InvokerConfig,
        observer: InvocationObserver,
    ) -> None:
        self._invoker_class = invoker_class
        self._config = config
        self._observer = observer

    def create(self, run_id: str, role: str, system_prompt: str | None) -> AgentInvoker:
        return self._invoker_class(
            config=self._config,
            run_id=run_id,
            role=role,
            system_prompt=(
                system_prompt if system_prompt is not None else self._config.system_prompt
            ),
            observer=self._observer,
        )
