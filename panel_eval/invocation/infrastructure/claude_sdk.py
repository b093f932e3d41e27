"""ClaudeAgentSDKInvoker — invoker implementation using the Claude Agent SDK."""

import asyncio
import time

from claude_agent_sdk import query
from claude_agent_sdk._errors import ClaudeSDKError
from claude_agent_sdk.types import ClaudeAgentOptions, ResultMessage

from panel_eval.config.domain.invoker import InvokerConfig
from panel_eval.invocation.domain.failure import InvocationFailureKind
from panel_eval.invocation.domain.observer import InvocationObserver
from panel_eval.invocation.domain.result import InvocationResult
from panel_eval.invocation.infrastructure.errors import InvocationError


class ClaudeAgentSDKInvoker:
    """Invoker that delegates to the Claude Agent SDK.

    Opens a new SDK session per call. The final ResultMessage supplies the
    text; the SDK subprocess's stderr is collected through the options
    callback so it never mixes with the result.
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

    async def invoke(self, prompt: str, timeout_seconds: float) -> InvocationResult:
        """Invoke the SDK and return the final result text.

        Raises:
            InvocationError: on timeout, SDK errors, an error ResultMessage, or
                a missing/blank result.
        """
        self._observer.invocation_started(
            run_id=self._run_id,
            role=self._role,
            model=self._config.model or "default",
        )

        stderr_lines: list[str] = []
        options = ClaudeAgentOptions(
            model=self._config.model,
            system_prompt=self._system_prompt,
            permission_mode="bypassPermissions",
            setting_sources=[],
            stderr=stderr_lines.append,
        )

        start = time.monotonic()
        try:
            try:
                async with asyncio.timeout(timeout_seconds):
                    text = await self._collect_result(prompt=prompt, options=options)
            except TimeoutError as exc:
                raise InvocationError(
                    kind=InvocationFailureKind.TIMEOUT,
                    reason=f"no response within {timeout_seconds:g}s",
                    stderr="\n".join(stderr_lines),
                ) from exc
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
        return InvocationResult(
            text=text, duration_ms=duration_ms, stderr="\n".join(stderr_lines)
        )

    async def _collect_result(self, prompt: str, options: ClaudeAgentOptions) -> str:
        """Drain the SDK message stream and return the ResultMessage text."""
        result_message: ResultMessage | None = None

        try:
            async for message in query(prompt=prompt, options=options):
                if isinstance(message, ResultMessage):
                    result_message = message
        except ClaudeSDKError as exc:
            raise InvocationError(
                kind=InvocationFailureKind.NON_ZERO_EXIT, reason=str(exc)
            ) from exc
        except Exception as exc:
            # The SDK raises a bare Exception when its subprocess exits abnormally.
            raise InvocationError(
                kind=InvocationFailureKind.NON_ZERO_EXIT, reason=str(exc)
            ) from exc

        if result_message is None:
            raise InvocationError(
                kind=InvocationFailureKind.NON_ZERO_EXIT,
                reason="no ResultMessage in response stream",
            )
        if result_message.is_error:
            raise InvocationError(
                kind=InvocationFailureKind.NON_ZERO_EXIT,
                reason=f"agent returned error response: {result_message.result}",
            )
        if result_message.result is None or not result_message.result.strip():
            raise InvocationError(
                kind=InvocationFailureKind.EMPTY_OUTPUT,
                reason="ResultMessage has no result text",
            )
        return result_message.result
