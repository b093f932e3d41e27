"""ScenarioDefinition — one agent task with its expected verdict."""

from pydantic import BaseModel, Field


class ScenarioDefinition(BaseModel, frozen=True):
    """A prompt for the agent under test and whether its output should pass.

    ``name`` becomes part of the run directory, so it is restricted to a
    filesystem-safe slug. ``system_prompt`` overrides the agent config's.
    """

    name: str = Field(pattern=r"^[A-Za-z0-9][A-Za-z0-9_.-]*$", max_length=128)
    agent_prompt: str = Field(min_length=1)
    expected_pass: bool = True
    system_prompt: str | None = None
