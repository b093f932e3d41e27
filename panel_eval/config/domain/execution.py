"""Execution configuration models."""

from pydantic import BaseModel, Field


class RetryConfig(BaseModel, frozen=True):
    max_attempts: int = Field(default=1, ge=1)
    initial_backoff_seconds: float = Field(default=0.0, ge=0.0)
    backoff_multiplier: float = Field(default=2.0, ge=1.0)


class ExecutionConfig(BaseModel, frozen=True):
    global_timeout_seconds: float = Field(gt=0.0)
    pass_threshold_percent: int = Field(default=70, ge=0, le=100)
    retry: RetryConfig = RetryConfig()
