"""InvocationFailureKind — the closed set of ways an invocation can fail."""

from enum import StrEnum


class InvocationFailureKind(StrEnum):
    TIMEOUT = "timeout"
    NON_ZERO_EXIT = "non_zero_exit"
    EMPTY_OUTPUT = "empty_output"
