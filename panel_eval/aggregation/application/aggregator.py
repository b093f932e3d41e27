"""ScoreAggregator — deterministic reduction of domain judgments into a verdict."""

from collections.abc import Iterable, Sequence
from datetime import datetime

from panel_eval.aggregation.application.errors import AggregationError
from panel_eval.aggregation.domain.aggregate import AggregateResult, meets_threshold
from panel_eval.judging.application.errors import AllJudgesFailedError
from panel_eval.scoring.domain.judgment import JudgmentResult, ParseStatus
from panel_eval.scoring.domain.rubric import MAX_DOMAIN_SCORE


class ScoreAggregator:
    """Sums domain scores and applies the pass threshold.

    The result does not depend on the order judgments arrive in:
    ``per_domain_scores`` follows the configured domain order. A configured
    domain with no judgment counts as 0 and marks the result degraded.
    """

    def __init__(self, domains: Sequence[str], pass_threshold_percent: int = 70) -> None:
        if not domains:
            raise ValueError("at least one domain is required")
        if len(set(domains)) != len(domains):
            raise ValueError(f"duplicate domains: {list(domains)}")
        self._domains = list(domains)
        self._pass_threshold_percent = pass_threshold_percent

    @property
    def max_score(self) -> int:
        return MAX_DOMAIN_SCORE * len(self._domains)

    def aggregate(
        self,
        judgments: Iterable[JudgmentResult],
        run_id: str,
        timestamp: datetime,
    ) -> AggregateResult:
        """Reduce judgments to an AggregateResult.

        Raises:
            AggregationError: on a duplicate or unconfigured domain.
            AllJudgesFailedError: if no judgment carries a score.
        """
        by_domain: dict[str, JudgmentResult] = {}
        for judgment in judgments:
            if judgment.domain not in self._domains:
                raise AggregationError(f"unconfigured domain '{judgment.domain}'")
            if judgment.domain in by_domain:
                raise AggregationError(f"duplicate result for domain '{judgment.domain}'")
            by_domain[judgment.domain] = judgment

        if all(j.parse_status is ParseStatus.FAILED for j in by_domain.values()):
            raise AllJudgesFailedError(results=list(by_domain.values()))

        per_domain_scores = {
            domain: by_domain[domain].domain_score if domain in by_domain else 0
            for domain in self._domains
        }
        total_score = sum(per_domain_scores.values())
        degraded = len(by_domain) < len(self._domains) or any(
            j.parse_status is not ParseStatus.PARSED for j in by_domain.values()
        )

        return AggregateResult(
            run_id=run_id,
            timestamp=timestamp,
            per_domain_scores=per_domain_scores,
            total_score=total_score,
            max_score=self.max_score,
            pass_threshold_percent=self._pass_threshold_percent,
            passed=meets_threshold(
                total_score, self.max_score, self._pass_threshold_percent
            ),
            degraded=degraded,
        )
