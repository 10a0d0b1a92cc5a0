"""Agent attribution from stack snapshots."""

from agentstamp.attribution.analyzer import (
    AttributionResult,
    Confidence,
    analyze,
    format_relevant_frames,
    format_stack_trace,
)
from agentstamp.attribution.frames import StackFrame, capture_stack, parse_stack_text
from agentstamp.attribution.signatures import AGENT_SIGNATURES, AgentSignature

__all__ = [
    "AGENT_SIGNATURES",
    "AgentSignature",
    "AttributionResult",
    "Confidence",
    "StackFrame",
    "analyze",
    "capture_stack",
    "format_relevant_frames",
    "format_stack_trace",
    "parse_stack_text",
]
