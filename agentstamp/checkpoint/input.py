"""Structured stdin record for ``git-ai checkpoint agent-v1 --hook-input stdin``."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class HumanInput(BaseModel):
    """Change authored by a human."""

    model_config = ConfigDict(frozen=True)

    type: Literal["human"] = "human"


class AiAgentInput(BaseModel):
    """Change attributed to an AI agent."""

    model_config = ConfigDict(frozen=True)

    type: Literal["ai_agent"] = "ai_agent"
    agent_name: str = Field(min_length=1)


CheckpointInput = Annotated[Union[HumanInput, AiAgentInput], Field(discriminator="type")]

_CHECKPOINT_INPUT_ADAPTER: TypeAdapter[CheckpointInput] = TypeAdapter(CheckpointInput)


def to_json(checkpoint_input: CheckpointInput) -> str:
    """Serialize a checkpoint input to the JSON record the tool reads from stdin."""
    return _CHECKPOINT_INPUT_ADAPTER.dump_json(checkpoint_input).decode("utf-8")


def describe(checkpoint_input: CheckpointInput) -> str:
    """Short human-readable label used in logs."""
    match checkpoint_input:
        case HumanInput():
            return "human"
        case AiAgentInput(agent_name=agent_name):
            return f"ai_agent ({agent_name})"
    raise TypeError(f"Unsupported checkpoint input: {checkpoint_input!r}")
