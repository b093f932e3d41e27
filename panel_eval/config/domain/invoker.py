"""Invoker configuration model — shared by the agent-under-test and the judges."""

from pydantic import BaseModel, Field


class InvokerConfig(BaseModel, frozen=True):
    type: str = Field(min_length=1)
    model: str | None = None
    temperature: float = Field(default=0.0, ge=0.0)
    timeout_seconds: float = Field(gt=0.0)
    system_prompt: str | None = None
    executable: str = Field(default="claude", min_length=1)
