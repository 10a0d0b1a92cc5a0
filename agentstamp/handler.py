"""Document-change entry point: attribute the change, then checkpoint it."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from instrukt_ai_logging import get_logger

from agentstamp.attribution import (
    AGENT_SIGNATURES,
    AgentSignature,
    AttributionResult,
    StackFrame,
    analyze,
    format_relevant_frames,
)
from agentstamp.checkpoint import AiAgentInput, CheckpointDispatcher, CheckpointInput, HumanInput

logger = get_logger(__name__)


def build_checkpoint_input(result: AttributionResult) -> CheckpointInput:
    """Agent input when an agent was detected, human input otherwise."""
    if result.agent_name is None:
        return HumanInput()
    return AiAgentInput(agent_name=result.agent_name)


class ChangeAttributionHandler:
    """Glue between the editor's change events and the checkpoint tool.

    The dispatcher is injected so one availability cache is shared by every
    handler the application creates.
    """

    def __init__(
        self,
        dispatcher: CheckpointDispatcher,
        signatures: Sequence[AgentSignature] = AGENT_SIGNATURES,
        analyzer: Callable[[Iterable[StackFrame], Sequence[AgentSignature]], AttributionResult] = analyze,
    ) -> None:
        self.dispatcher = dispatcher
        self.signatures = signatures
        self._analyze = analyzer

    def classify(self, stack: Iterable[StackFrame]) -> CheckpointInput:
        return build_checkpoint_input(self._analyze(stack, self.signatures))

    def on_document_change(self, stack: Iterable[StackFrame], working_directory: str) -> bool:
        """Attribute the change captured in ``stack`` and record a checkpoint.

        Returns:
            True if a checkpoint was created.
        """
        result = self._analyze(stack, self.signatures)
        logger.debug(
            "Change attributed",
            agent=result.agent_name or "human",
            confidence=result.confidence.label,
            frames=len(result.relevant_frames),
        )
        if result.relevant_frames:
            logger.debug("Relevant frames:\n%s", format_relevant_frames(result.relevant_frames))
        return self.dispatcher.checkpoint(build_checkpoint_input(result), working_directory)
