"""Runtime binary resolution policy for the checkpoint tool."""

from __future__ import annotations

import os
import shutil

from agentstamp.constants import DEFAULT_TOOL_BINARY, TOOL_BINARY_ENV


def resolve_tool_binary(configured: str = DEFAULT_TOOL_BINARY) -> str:
    """Resolve the checkpoint tool binary.

    ``AGENTSTAMP_TOOL_BINARY`` wins over the configured name. Bare names are
    resolved through PATH when possible; otherwise the name is returned as-is
    and the launch itself reports a missing binary.
    """
    candidate = (os.getenv(TOOL_BINARY_ENV) or configured or DEFAULT_TOOL_BINARY).strip()
    expanded = os.path.expanduser(candidate)
    if os.sep in expanded:
        return expanded
    return shutil.which(expanded) or expanded
