"""Runtime-only policy modules (not user-configurable)."""

from agentstamp.runtime.binaries import resolve_tool_binary

__all__ = ["resolve_tool_binary"]
