"""Stack-trace based agent attribution.

Given a stack snapshot taken when a document changed, decide which agent (if
any) is implicated. All heuristics are deterministic pattern matching over the
frames' qualified type names:

- package prefix match (frame lives inside a vendor namespace) -> HIGH
- type name fragment match -> MEDIUM
- generic inline/completion machinery, only when nothing else matched -> LOW

The first agent detected wins. Later matches never override it, although
package-level matches keep being collected as evidence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Optional, Sequence

from agentstamp.attribution.frames import StackFrame
from agentstamp.attribution.signatures import AGENT_SIGNATURES, AgentSignature
from agentstamp.constants import (
    DEFAULT_MAX_STACK_FRAMES,
    GENERIC_AGENT_NAME,
    GENERIC_TYPE_FRAGMENTS,
    NO_RELEVANT_FRAMES,
)


class Confidence(IntEnum):
    """Attribution confidence (higher value = stronger evidence)."""

    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def label(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class AttributionResult:
    """Output of a single analysis."""

    agent_name: Optional[str] = None
    confidence: Confidence = Confidence.NONE
    relevant_frames: tuple[StackFrame, ...] = field(default_factory=tuple)

    @property
    def is_agent(self) -> bool:
        return self.agent_name is not None


def _is_generic_frame(frame: StackFrame) -> bool:
    lowered = frame.type_name.lower()
    return any(fragment in lowered for fragment in GENERIC_TYPE_FRAGMENTS)


def analyze(
    stack: Iterable[StackFrame],
    signatures: Sequence[AgentSignature] = AGENT_SIGNATURES,
) -> AttributionResult:
    """Attribute a stack snapshot (innermost frame first) to an agent."""
    frames = list(stack)
    relevant: list[StackFrame] = []
    detected: Optional[str] = None
    confidence = Confidence.NONE

    for frame in frames:
        for signature in signatures:
            if signature.matches_package(frame.type_name):
                relevant.append(frame)
                if detected is None:
                    detected = signature.name
                    confidence = Confidence.HIGH
            elif detected is None and signature.matches_fragment(frame.type_name):
                relevant.append(frame)
                detected = signature.name
                confidence = Confidence.MEDIUM

    if detected is None:
        for frame in frames:
            if not _is_generic_frame(frame):
                continue
            relevant.append(frame)
            if detected is None:
                detected = GENERIC_AGENT_NAME
                confidence = Confidence.LOW

    return AttributionResult(agent_name=detected, confidence=confidence, relevant_frames=tuple(relevant))


def format_stack_trace(stack: Iterable[StackFrame], max_frames: int = DEFAULT_MAX_STACK_FRAMES) -> str:
    """Render at most ``max_frames`` frames as ``  at Type.method(File:line)`` lines."""
    lines = []
    for index, frame in enumerate(stack):
        if index >= max_frames:
            break
        lines.append(f"  at {frame}")
    return "\n".join(lines)


def format_relevant_frames(frames: Sequence[StackFrame]) -> str:
    if not frames:
        return NO_RELEVANT_FRAMES
    return "\n".join(f"  {frame}" for frame in frames)
