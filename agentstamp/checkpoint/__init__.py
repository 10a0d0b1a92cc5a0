"""Checkpoint creation through the external git-ai CLI."""

from agentstamp.checkpoint.dispatcher import AvailabilityState, CheckpointDispatcher
from agentstamp.checkpoint.input import AiAgentInput, CheckpointInput, HumanInput
from agentstamp.checkpoint.version import ToolVersion

__all__ = [
    "AiAgentInput",
    "AvailabilityState",
    "CheckpointDispatcher",
    "CheckpointInput",
    "HumanInput",
    "ToolVersion",
]
