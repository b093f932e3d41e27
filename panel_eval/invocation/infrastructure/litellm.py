"""LiteLLMInvoker — invoker implementation using LiteLLM chat completions."""

import asyncio
import time

import litellm

from panel_eval.config.domain.invoker import InvokerConfig
from panel_eval.invocation.domain.failure import InvocationFailureKind
from panel_eval.invocation.domain.observer import InvocationObserver
from panel_eval.invocation.domain.result import InvocationResult
from panel_eval.invocation.infrastructure.errors import InvocationError


class LiteLLMInvoker:
    """Invoker that sends the prompt as a single chat turn through LiteLLM.

    Intended for judges backed by an API model. A temperature above 0.0 is
    reported at construction because it makes scoring non-deterministic.
    """

    def __init__(
        self,
        config: InvokerConfig,
        run_id: str,
        role: str,
        system_prompt: str | None,
        observer: InvocationObserver,
    ) -> None:
        self._config = config
        self._run_id = run_id
        self._role = role
        self._system_prompt = system_prompt
        self._observer = observer

        if config.temperature > 0.0:
            self._observer.invocation_high_temperature_warned(
                run_id=run_id, role=role, temperature=config.temperature
            )

    async def invoke(self, prompt: str, timeout_seconds: float) -> InvocationResult:
        """Call the model and return the first choice's message content.

        Raises:
            InvocationError: on timeout, any LiteLLM/provider error, or blank content.
        """
        model = self._config.model or ""
        self._observer.invocation_started(
            run_id=self._run_id, role=self._role, model=model
        )

        messages: list[dict[str, str]] = []
        if self._system_prompt:
            messages.append({"role": "system", "content": self._system_prompt})
        messages.append({"role": "user", "content": prompt})

        start = time.monotonic()
        try:
            text = await self._complete(
                model=model, messages=messages, timeout_seconds=timeout_seconds
            )
        except InvocationError as exc:
            self._observer.invocation_failed(
                run_id=self._run_id,
                role=self._role,
                kind=exc.kind.value,
                reason=exc.reason,
            )
            raise

        duration_ms = int((time.monotonic() - start) * 1000)
        self._observer.invocation_completed(
            run_id=self._run_id,
            role=self._role,
            duration_ms=duration_ms,
            output_chars=len(text),
        )
        return InvocationResult(text=text, duration_ms=duration_ms)

    async def _complete(
        self, model: str, messages: list[dict[str, str]], timeout_seconds: float
    ) -> str:
        try:
            async with asyncio.timeout(timeout_seconds):
                response = await litellm.acompletion(
                    model=model,
                    temperature=self._config.temperature,
                    messages=messages,
                    timeout=timeout_seconds,
                )
        except (TimeoutError, litellm.Timeout) as exc:
            raise InvocationError(
                kind=InvocationFailureKind.TIMEOUT,
                reason=f"no response within {timeout_seconds:g}s",
            ) from exc
        except Exception as exc:
            raise InvocationError(
                kind=InvocationFailureKind.NON_ZERO_EXIT, reason=str(exc)
            ) from exc

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise InvocationError(
                kind=InvocationFailureKind.EMPTY_OUTPUT,
                reason="model returned an empty message",
            )
        return str(content)
