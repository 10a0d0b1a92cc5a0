from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agentstamp.checkpoint.version import ToolVersion
from agentstamp.constants import (
    CHECKPOINT_TIMEOUT_S,
    DEFAULT_MAX_STACK_FRAMES,
    DEFAULT_MIN_TOOL_VERSION,
    DEFAULT_TOOL_BINARY,
    PROBE_TIMEOUT_S,
)


class AgentstampSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    tool_binary: str = DEFAULT_TOOL_BINARY
    min_version: str = DEFAULT_MIN_TOOL_VERSION
    probe_timeout_s: float = Field(default=PROBE_TIMEOUT_S, gt=0)
    checkpoint_timeout_s: float = Field(default=CHECKPOINT_TIMEOUT_S, gt=0)
    max_stack_frames: int = Field(default=DEFAULT_MAX_STACK_FRAMES, ge=1)
    log_level: Optional[str] = None

    @field_validator("tool_binary")
    @classmethod
    def validate_tool_binary(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("tool_binary must not be empty")
        return stripped

    @field_validator("min_version")
    @classmethod
    def validate_min_version(cls, v: str) -> str:
        if ToolVersion.parse(v) is None:
            raise ValueError(f"Invalid min_version: {v}. Expected format: <major>.<minor>.<patch> (e.g., '1.0.23')")
        return v.strip()

    @property
    def min_tool_version(self) -> ToolVersion:
        parsed = ToolVersion.parse(self.min_version)
        assert parsed is not None  # guaranteed by validate_min_version
        return parsed
