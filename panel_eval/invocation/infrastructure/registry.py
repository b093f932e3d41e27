"""Invoker registry — maps InvokerConfig.type to the correct InvokerFactory."""

import litellm

from panel_eval.config.domain.invoker import InvokerConfig
from panel_eval.invocation.domain.invoker import InvokerFactory
from panel_eval.invocation.domain.observer import InvocationObserver
from panel_eval.invocation.infrastructure.claude_cli import ClaudeCliInvoker
from panel_eval.invocation.infrastructure.claude_sdk import ClaudeAgentSDKInvoker
from panel_eval.invocation.infrastructure.errors import InvokerTypeNotSupportedError
from panel_eval.invocation.infrastructure.factory import (
    ConfiguredInvokerFactory,
    InvokerClass,
)
from panel_eval.invocation.infrastructure.litellm import LiteLLMInvoker

_INVOKER_CLASSES: dict[str, InvokerClass] = {
    "claude_cli": ClaudeCliInvoker,
    "claude_code_sdk": ClaudeAgentSDKInvoker,
    "litellm": LiteLLMInvoker,
}

SUPPORTED_INVOKER_TYPES = frozenset(_INVOKER_CLASSES)


def create_invoker_factory(
    config: InvokerConfig, observer: InvocationObserver
) -> InvokerFactory:
    """Return the InvokerFactory for the given InvokerConfig.

    Raises:
        InvokerTypeNotSupportedError: if config.type is not a known invoker type.
    """
    invoker_class = _INVOKER_CLASSES.get(config.type)
    if invoker_class is None:
        raise InvokerTypeNotSupportedError(invoker_type=config.type)

    if invoker_class is LiteLLMInvoker:
        litellm.suppress_debug_info = True

    return ConfiguredInvokerFactory(
        invoker_class=invoker_class, config=config, observer=observer
    )
