"""ClaudeCliInvoker — invoker that runs the ``claude`` CLI in print mode."""

import asyncio
import contextlib
import os
import time

from panel_eval.config.domain.invoker import InvokerConfig
from panel_eval.invocation.domain.failure import InvocationFailureKind
from panel_eval.invocation.domain.observer import InvocationObserver
from panel_eval.invocation.domain.result import InvocationResult
from panel_eval.invocation.infrastructure.errors import InvocationError


class ClaudeCliInvoker:
    """Invoker that pipes the prompt to ``claude --print`` on stdin.

    stdout and stderr are read from separate pipes; only stdout becomes the
    result text. One instance is constructed per (run, role) so observer
    events carry full context without polluting the invoke() signature.
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
        """Run the CLI with the prompt and return its stdout.

        Raises:
            InvocationError: on timeout (the process is killed), a non-zero
                exit status, an executable that cannot be started, or blank stdout.
        """
        self._observer.invocation_started(
            run_id=self._run_id,
            role=self._role,
            model=self._config.model or "default",
        )

        start = time.monotonic()
        try:
            stdout, stderr = await self._communicate(
                prompt=prompt, timeout_seconds=timeout_seconds
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
            output_chars=len(stdout),
        )
        return InvocationResult(text=stdout, duration_ms=duration_ms, stderr=stderr)

    async def _communicate(self, prompt: str, timeout_seconds: float) -> tuple[str, str]:
        command = self._build_command()
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=self._build_env(),
            )
        except FileNotFoundError as exc:
            raise InvocationError(
                kind=InvocationFailureKind.NON_ZERO_EXIT,
                reason=f"executable not found: {command[0]}",
            ) from exc
        except OSError as exc:
            raise InvocationError(
                kind=InvocationFailureKind.NON_ZERO_EXIT,
                reason=f"could not start {command[0]}: {exc.strerror or exc}",
            ) from exc

        try:
            async with asyncio.timeout(timeout_seconds):
                raw_stdout, raw_stderr = await process.communicate(
                    input=prompt.encode("utf-8")
                )
        except TimeoutError as exc:
            await _terminate(process)
            raise InvocationError(
                kind=InvocationFailureKind.TIMEOUT,
                reason=f"no response within {timeout_seconds:g}s",
            ) from exc
        except asyncio.CancelledError:
            await _terminate(process)
            raise

        stdout = raw_stdout.decode("utf-8", errors="replace")
        stderr = raw_stderr.decode("utf-8", errors="replace")

        if process.returncode != 0:
            raise InvocationError(
                kind=InvocationFailureKind.NON_ZERO_EXIT,
                reason=f"{command[0]} exited with status {process.returncode}",
                stderr=stderr,
            )
        if not stdout.strip():
            raise InvocationError(
                kind=InvocationFailureKind.EMPTY_OUTPUT,
                reason=f"{command[0]} produced no output",
                stderr=stderr,
            )
        return stdout, stderr

    def _build_command(self) -> list[str]:
        command = [self._config.executable, "--print"]
        if self._config.model:
            command += ["--model", self._config.model]
        if self._system_prompt:
            command += ["--system-prompt", self._system_prompt]
        return command

    def _build_env(self) -> dict[str, str]:
        """Copy the environment, dropping the marker that blocks nested CLI sessions."""
        env = os.environ.copy()
        env.pop("CLAUDECODE", None)
        return env


async def _terminate(process: asyncio.subprocess.Process) -> None:
    if process.returncode is not None:
        return
    with contextlib.suppress(ProcessLookupError):
        process.kill()
    await process.wait()
