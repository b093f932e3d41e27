"""RunState — lifecycle of a single scenario run."""

from enum import StrEnum


class RunState(StrEnum):
    CREATED = "created"
    AGENT_INVOKED = "agent_invoked"
    JUDGING = "judging"
    AGGREGATED = "aggregated"
    PERSISTED = "persisted"
    ASSERTED = "asserted"
    FAILED = "failed"


ALLOWED_TRANSITIONS: dict[RunState, frozenset[RunState]] = {
    RunState.CREATED: frozenset({RunState.AGENT_INVOKED}),
    RunState.AGENT_INVOKED: frozenset({RunState.JUDGING, RunState.FAILED}),
    RunState.JUDGING: frozenset({RunState.AGGREGATED, RunState.FAILED}),
    RunState.AGGREGATED: frozenset({RunState.PERSISTED}),
    RunState.PERSISTED: frozenset({RunState.ASSERTED, RunState.FAILED}),
    RunState.ASSERTED: frozenset(),
    RunState.FAILED: frozenset(),
}
