"""JudgePanel — runs one judge per domain concurrently against a single agent output."""

import asyncio
import time
from collections.abc import Mapping, Sequence

from panel_eval.config.domain.execution import RetryConfig
from panel_eval.context.domain.loader import DomainContextLoader
from panel_eval.context.infrastructure.errors import DomainContextLoadError
from panel_eval.invocation.domain.failure import InvocationFailureKind
from panel_eval.invocation.domain.invoker import AgentInvoker, InvokerFactory
from panel_eval.invocation.domain.result import InvocationResult
from panel_eval.invocation.infrastructure.errors import InvocationError
from panel_eval.judging.application.errors import AllJudgesFailedError
from panel_eval.judging.domain.observer import PanelObserver
from panel_eval.judging.domain.prompt import JUDGE_SYSTEM_PROMPT, build_judge_prompt
from panel_eval.scoring.domain.judgment import JudgmentResult, ParseStatus
from panel_eval.scoring.domain.parser import ScoringParser
from panel_eval.scoring.domain.rubric import DomainRubric


class JudgePanel:
    """Fans a single agent output out to one judge per domain.

    Each domain is judged in its own task inside an asyncio.TaskGroup, so the
    panel has exactly one join point. A judge that fails or times out is
    recorded as a ``failed`` JudgmentResult with score 0 and never aborts the
    others. The whole group runs under a global timeout; on expiry the
    unfinished judges are cancelled and recorded as failed while completed
    results are kept.
    """

    def __init__(
        self,
        invoker_factory: InvokerFactory,
        context_loader: DomainContextLoader,
        parser: ScoringParser,
        rubrics: Mapping[str, DomainRubric],
        observer: PanelObserver,
        retry: RetryConfig | None = None,
    ) -> None:
        self._invoker_factory = invoker_factory
        self._context_loader = context_loader
        self._parser = parser
        self._rubrics = dict(rubrics)
        self._observer = observer
        self._retry = retry if retry is not None else RetryConfig()

    async def evaluate(
        self,
        run_id: str,
        agent_output: str,
        domains: Sequence[str],
        per_judge_timeout: float,
        global_timeout: float,
        scenario_prompt: str = "",
    ) -> list[JudgmentResult]:
        """Judge the agent output in every domain and return results in domain order.

        Raises:
            ValueError: if domains is empty or contains duplicates.
            AllJudgesFailedError: if every domain's result is ``failed``.
        """
        if not domains:
            raise ValueError("at least one domain is required")
        if len(set(domains)) != len(domains):
            raise ValueError(f"duplicate domains: {list(domains)}")

        self._observer.panel_started(
            run_id=run_id,
            domains=list(domains),
            per_judge_timeout_seconds=per_judge_timeout,
            global_timeout_seconds=global_timeout,
        )
        started_at = time.monotonic()

        tasks: dict[str, asyncio.Task[JudgmentResult]] = {}
        try:
            async with asyncio.timeout(global_timeout):
                async with asyncio.TaskGroup() as tg:
                    for domain in domains:
                        tasks[domain] = tg.create_task(
                            self._judge_isolated(
                                run_id=run_id,
                                domain=domain,
                                agent_output=agent_output,
                                scenario_prompt=scenario_prompt,
                                per_judge_timeout=per_judge_timeout,
                            ),
                            name=f"judge:{domain}",
                        )
        except TimeoutError:
            self._observer.panel_timed_out(
                run_id=run_id,
                global_timeout_seconds=global_timeout,
                unfinished=[
                    domain
                    for domain, task in tasks.items()
                    if task.cancelled() or not task.done()
                ],
            )

        results = [
            self._collect(
                run_id=run_id,
                domain=domain,
                task=tasks.get(domain),
                global_timeout=global_timeout,
            )
            for domain in domains
        ]

        failed = [r.domain for r in results if r.parse_status is ParseStatus.FAILED]
        self._observer.panel_completed(
            run_id=run_id,
            failed_domains=failed,
            elapsed_seconds=time.monotonic() - started_at,
        )
        if len(failed) == len(results):
            raise AllJudgesFailedError(results=results)
        return results

    def _collect(
        self,
        run_id: str,
        domain: str,
        task: asyncio.Task[JudgmentResult] | None,
        global_timeout: float,
    ) -> JudgmentResult:
        if task is not None and task.done() and not task.cancelled():
            return task.result()
        return self._failed(
            run_id=run_id,
            domain=domain,
            reason=f"cancelled after global timeout of {global_timeout:g}s",
        )

    async def _judge_isolated(
        self,
        run_id: str,
        domain: str,
        agent_output: str,
        scenario_prompt: str,
        per_judge_timeout: float,
    ) -> JudgmentResult:
        # A judge task never raises into the TaskGroup; cancellation still propagates.
        try:
            return await self._judge_one(
                run_id=run_id,
                domain=domain,
                agent_output=agent_output,
                scenario_prompt=scenario_prompt,
                per_judge_timeout=per_judge_timeout,
            )
        except Exception as exc:
            return self._failed(
                run_id=run_id,
                domain=domain,
                reason=f"unexpected {type(exc).__name__}: {exc}",
            )

    async def _judge_one(
        self,
        run_id: str,
        domain: str,
        agent_output: str,
        scenario_prompt: str,
        per_judge_timeout: float,
    ) -> JudgmentResult:
        """Load context, invoke the judge and parse its response for one domain."""
        self._observer.judge_started(run_id=run_id, domain=domain)

        rubric = self._rubrics.get(domain)
        if rubric is None:
            return self._failed(
                run_id=run_id, domain=domain, reason=f"no rubric for domain '{domain}'"
            )

        try:
            context = await asyncio.to_thread(self._context_loader.load, domain)
        except DomainContextLoadError as exc:
            return self._failed(run_id=run_id, domain=domain, reason=str(exc))

        prompt = build_judge_prompt(
            rubric=rubric,
            context=context,
            scenario_prompt=scenario_prompt,
            agent_output=agent_output,
        )
        invoker = self._invoker_factory.create(
            run_id=run_id, role=f"judge:{domain}", system_prompt=JUDGE_SYSTEM_PROMPT
        )

        try:
            invocation = await self._invoke_with_retry(
                run_id=run_id,
                domain=domain,
                invoker=invoker,
                prompt=prompt,
                timeout_seconds=per_judge_timeout,
            )
        except InvocationError as exc:
            return self._failed(run_id=run_id, domain=domain, reason=str(exc))

        judgment = self._parser.parse(domain, invocation.text)
        if judgment.parse_status is ParseStatus.FAILED:
            self._observer.judge_failed(
                run_id=run_id,
                domain=domain,
                reason=judgment.failure_reason or "unparseable response",
            )
        else:
            self._observer.judge_completed(
                run_id=run_id,
                domain=domain,
                domain_score=judgment.domain_score,
                parse_status=judgment.parse_status.value,
            )
        return judgment

    async def _invoke_with_retry(
        self,
        run_id: str,
        domain: str,
        invoker: AgentInvoker,
        prompt: str,
        timeout_seconds: float,
    ) -> InvocationResult:
        """Invoke the judge, retrying retriable failures when configured.

        The backoff sleep does not count against the per-judge timeout; the
        global timeout still bounds it.
        """
        backoff = self._retry.initial_backoff_seconds
        for attempt in range(1, self._retry.max_attempts + 1):
            try:
                return await _invoke_once(
                    invoker=invoker, prompt=prompt, timeout_seconds=timeout_seconds
                )
            except InvocationError as exc:
                if not exc.retriable or attempt == self._retry.max_attempts:
                    raise
                self._observer.judge_retry(
                    run_id=run_id,
                    domain=domain,
                    attempt=attempt,
                    reason=str(exc),
                    backoff_seconds=backoff,
                )
                await asyncio.sleep(backoff)
                backoff *= self._retry.backoff_multiplier

        raise AssertionError("unreachable: retry loop always returns or raises")

    def _failed(self, run_id: str, domain: str, reason: str) -> JudgmentResult:
        self._observer.judge_failed(run_id=run_id, domain=domain, reason=reason)
        return JudgmentResult.failed(domain=domain, reason=reason)


async def _invoke_once(
    invoker: AgentInvoker, prompt: str, timeout_seconds: float
) -> InvocationResult:
    # Backstop for invokers that do not enforce their own timeout.
    try:
        async with asyncio.timeout(timeout_seconds):
            return await invoker.invoke(prompt=prompt, timeout_seconds=timeout_seconds)
    except TimeoutError as exc:
        raise InvocationError(
            kind=InvocationFailureKind.TIMEOUT,
            reason=f"no response within {timeout_seconds:g}s",
        ) from exc
