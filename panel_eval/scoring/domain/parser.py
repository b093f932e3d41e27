"""ScoringParser — turns a judge's free-text response into a JudgmentResult.

Accepted score markers, grammar version 1
-----------------------------------------

1. JSON form. The first JSON object in the response that has a ``"scores"``
   object, e.g. ``{"scores": {"model_design": 8, ...}}``. Keys are criterion
   keys. When such an object exists the line form is not consulted.
2. Line form. One line per criterion::

       - **Model Design**: 8/10

   The criterion label is matched case-insensitively and may be preceded by
   a list bullet (``-``, ``*``, ``+``, ``1.``), markdown heading hashes or a
   blockquote marker, and wrapped in ``*``/``_`` emphasis. The separator is
   ``:`` or a dash. The value is an integer followed by ``/10``. Only the
   first marker for a criterion counts.

A marker whose value is anything else (``approximately 8/10``, ``8.5/10``,
``11/10``, a JSON string or float) is malformed. Missing and malformed
criteria score 0 and make the result ``partially_parsed``; a response with no
marker for any criterion is ``failed``. Parsing never raises.
"""

import json
import re
from collections.abc import Mapping
from typing import Any

from panel_eval.scoring.domain.judgment import JudgmentResult, ParseStatus
from panel_eval.scoring.domain.rubric import (
    MAX_CRITERION_SCORE,
    Criterion,
    DomainRubric,
)

GRAMMAR_VERSION = "1"

_LINE_PREFIX = r"^[ \t]*(?:>[ \t]*)?(?:#{1,6}[ \t]*)?(?:(?:[-*+]|\d+[.)])[ \t]+)?[*_]{0,3}"
_LINE_SEPARATOR = r"[*_]{0,3}[ \t]*[:–—-][*_]{0,3}[ \t]*(?P<rest>[^\n]*)$"
_LINE_VALUE = re.compile(r"^[*_]{0,2}(?P<score>\d+)[*_]{0,2}[ \t]*/[ \t]*10(?![\d.])")

_MISSING = object()
_MALFORMED = object()


class ScoringParser:
    """Parses judge responses against a fixed set of domain rubrics.

    Pure and deterministic: the same (domain, text) always yields an equal
    JudgmentResult.
    """

    def __init__(self, rubrics: Mapping[str, DomainRubric]) -> None:
        self._rubrics = dict(rubrics)

    def parse(self, domain: str, response_text: str) -> JudgmentResult:
        rubric = self._rubrics.get(domain)
        if rubric is None:
            return JudgmentResult.failed(
                domain=domain,
                reason=f"no rubric for domain '{domain}'",
                raw_response_text=response_text,
            )

        json_scores = _find_json_scores(response_text)
        if json_scores is not None:
            raw_values = {
                c.key: _json_value(json_scores, c.key) for c in rubric.criteria
            }
        else:
            raw_values = {
                c.key: _line_value(response_text, c) for c in rubric.criteria
            }

        return _build_result(
            domain=domain, response_text=response_text, raw_values=raw_values
        )


def _build_result(
    domain: str, response_text: str, raw_values: dict[str, object]
) -> JudgmentResult:
    missing = [key for key, value in raw_values.items() if value is _MISSING]
    malformed = [key for key, value in raw_values.items() if value is _MALFORMED]

    if len(missing) == len(raw_values):
        return JudgmentResult.failed(
            domain=domain,
            reason="no score markers found",
            raw_response_text=response_text,
        )

    scores = {
        key: value if isinstance(value, int) else 0
        for key, value in raw_values.items()
    }

    problems: list[str] = []
    if missing:
        problems.append(f"missing: {', '.join(missing)}")
    if malformed:
        problems.append(f"malformed: {', '.join(malformed)}")

    return JudgmentResult(
        domain=domain,
        raw_response_text=response_text,
        criteria_scores=scores,
        domain_score=sum(scores.values()),
        parse_status=ParseStatus.PARTIALLY_PARSED if problems else ParseStatus.PARSED,
        failure_reason="; ".join(problems) if problems else None,
    )


def _find_json_scores(text: str) -> dict[str, Any] | None:
    """Return the ``scores`` object of the first JSON object that has one."""
    decoder = json.JSONDecoder()
    position = text.find("{")
    while position != -1:
        try:
            candidate, _ = decoder.raw_decode(text, position)
        except ValueError:
            candidate = None
        if isinstance(candidate, dict) and isinstance(candidate.get("scores"), dict):
            return candidate["scores"]
        position = text.find("{", position + 1)
    return None


def _json_value(scores: dict[str, Any], key: str) -> object:
    if key not in scores:
        return _MISSING
    value = scores[key]
    # bool is an int subclass; true/false is not a score.
    if isinstance(value, bool) or not isinstance(value, int):
        return _MALFORMED
    if not 0 <= value <= MAX_CRITERION_SCORE:
        return _MALFORMED
    return value


def _line_value(text: str, criterion: Criterion) -> object:
    pattern = re.compile(
        _LINE_PREFIX + re.escape(criterion.label) + _LINE_SEPARATOR,
        re.IGNORECASE | re.MULTILINE,
    )
    marker = pattern.search(text)
    if marker is None:
        return _MISSING

    value = _LINE_VALUE.match(marker.group("rest"))
    if value is None:
        return _MALFORMED
    score = int(value.group("score"))
    if score > MAX_CRITERION_SCORE:
        return _MALFORMED
    return score
