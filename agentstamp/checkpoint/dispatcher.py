"""Checkpoint dispatch to the external git-ai CLI.

The dispatcher owns a cached availability state for the tool. The version
probe runs at most once per cache epoch, even under concurrent callers, and
`reset_availability_check()` starts a new epoch so a tool installed
mid-session is picked up without a restart.

Every interaction with the external process is bounded by a deadline. A
child that outlives its deadline is killed and reaped before the call returns.
Failures never propagate: unavailability and checkpoint failure are plain
boolean outcomes, diagnosed through the log only.
"""

from __future__ import annotations

import subprocess
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from instrukt_ai_logging import get_logger

from agentstamp.checkpoint.input import CheckpointInput, describe, to_json
from agentstamp.checkpoint.version import ToolVersion
from agentstamp.constants import (
    CHECKPOINT_ARGS,
    CHECKPOINT_TIMEOUT_S,
    DEFAULT_MIN_TOOL_VERSION,
    DEFAULT_TOOL_BINARY,
    PROBE_TIMEOUT_S,
    VERSION_ARGS,
)
from agentstamp.runtime.binaries import resolve_tool_binary

if TYPE_CHECKING:
    from agentstamp.config.schema import AgentstampSettings

logger = get_logger(__name__)

_OUTPUT_LOG_LIMIT = 2000


@dataclass(frozen=True)
class AvailabilityState:
    """Snapshot of the cached tool probe. Replaced as a whole, never mutated."""

    checked: bool = False
    available: bool = False
    version: Optional[ToolVersion] = None


def _tail(output: Optional[str | bytes]) -> str:
    # TimeoutExpired carries raw bytes even for text-mode runs
    if isinstance(output, bytes):
        output = output.decode("utf-8", errors="replace")
    text = (output or "").strip()
    return text[-_OUTPUT_LOG_LIMIT:]


class CheckpointDispatcher:
    """Probe and invoke the checkpoint tool with bounded waits."""

    def __init__(
        self,
        tool_binary: str = DEFAULT_TOOL_BINARY,
        min_version: Optional[ToolVersion] = None,
        probe_timeout_s: float = PROBE_TIMEOUT_S,
        checkpoint_timeout_s: float = CHECKPOINT_TIMEOUT_S,
    ) -> None:
        self.tool_binary = tool_binary
        self.min_version = min_version or ToolVersion.parse(DEFAULT_MIN_TOOL_VERSION)
        self.probe_timeout_s = probe_timeout_s
        self.checkpoint_timeout_s = checkpoint_timeout_s
        self._lock = threading.Lock()
        self._state = AvailabilityState()

    @classmethod
    def from_settings(cls, settings: AgentstampSettings) -> CheckpointDispatcher:
        return cls(
            tool_binary=settings.tool_binary,
            min_version=settings.min_tool_version,
            probe_timeout_s=settings.probe_timeout_s,
            checkpoint_timeout_s=settings.checkpoint_timeout_s,
        )

    @property
    def state(self) -> AvailabilityState:
        return self._state

    @property
    def version(self) -> Optional[ToolVersion]:
        """Version seen by the last completed probe (also set when it was too old)."""
        return self._state.version

    # ------------------------------------------------------------------
    # Availability
    # ------------------------------------------------------------------

    def check_available(self) -> bool:
        """Return True when the tool is installed and meets the minimum version."""
        state = self._state
        if state.checked:
            return state.available

        with self._lock:
            state = self._state
            if state.checked:
                return state.available
            self._state = self._probe()
            return self._state.available

    def reset_availability_check(self) -> None:
        """Forget the cached probe so the next call re-checks the tool."""
        with self._lock:
            self._state = AvailabilityState()
        logger.debug("Checkpoint tool availability reset", tool=self.tool_binary)

    def _probe(self) -> AvailabilityState:
        unavailable = AvailabilityState(checked=True, available=False)
        binary = resolve_tool_binary(self.tool_binary)
        try:
            result = subprocess.run(
                [binary, *VERSION_ARGS],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.probe_timeout_s,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Checkpoint tool version check timed out", tool=binary, timeout_s=self.probe_timeout_s)
            return unavailable
        except Exception as e:
            logger.warning("Checkpoint tool not available", tool=binary, error=str(e))
            return unavailable

        output = (result.stdout or "").strip()
        if result.returncode != 0:
            logger.warning(
                "Checkpoint tool not found or returned error",
                tool=binary,
                exit_code=result.returncode,
                output=_tail(output),
            )
            return unavailable

        version = ToolVersion.parse(output)
        if version is None:
            logger.warning("Could not parse checkpoint tool version", tool=binary, output=_tail(output))
            return unavailable

        if self.min_version is not None and version < self.min_version:
            logger.warning(
                "Checkpoint tool version is below minimum required version",
                tool=binary,
                version=str(version),
                min_version=str(self.min_version),
            )
            return AvailabilityState(checked=True, available=False, version=version)

        logger.info("Checkpoint tool available", tool=binary, version=str(version))
        return AvailabilityState(checked=True, available=True, version=version)

    # ------------------------------------------------------------------
    # Checkpoints
    # ------------------------------------------------------------------

    def checkpoint(self, checkpoint_input: CheckpointInput, working_directory: str) -> bool:
        """Create a checkpoint for ``checkpoint_input`` in ``working_directory``.

        Returns:
            True if the tool exited 0 within the deadline; otherwise False.
        """
        if not self.check_available():
            logger.debug("Skipping checkpoint - checkpoint tool not available")
            return False

        label = "<unknown>"
        binary = self.tool_binary
        try:
            label = describe(checkpoint_input)
            payload = to_json(checkpoint_input)
            binary = resolve_tool_binary(self.tool_binary)
            logger.debug("Creating checkpoint", input_type=label, cwd=working_directory, payload=payload)
            result = subprocess.run(
                [binary, *CHECKPOINT_ARGS],
                cwd=working_directory,
                input=payload,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.checkpoint_timeout_s,
            )
        except subprocess.TimeoutExpired as e:
            logger.warning(
                "Checkpoint timed out",
                input_type=label,
                cwd=working_directory,
                timeout_s=self.checkpoint_timeout_s,
                output=_tail(e.output),
            )
            return False
        except Exception as e:
            logger.warning("Failed to create checkpoint", input_type=label, tool=binary, error=str(e))
            return False

        output = _tail(result.stdout)
        if result.returncode != 0:
            logger.warning(
                "Checkpoint failed",
                input_type=label,
                cwd=working_directory,
                exit_code=result.returncode,
                output=output,
            )
            return False

        logger.info("Checkpoint created", input_type=label, cwd=working_directory)
        if output:
            logger.debug("Checkpoint tool output", output=output)
        return True
