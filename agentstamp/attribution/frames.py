"""Stack snapshots: frame records, live capture and textual dump parsing."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Iterable, Optional

from agentstamp.constants import UNKNOWN_SOURCE

# at [module/]pkg.Type.method(Source) [trailing decoration such as ~[app.jar:?]]
_FRAME_LINE = re.compile(
    r"^\s*at\s+(?:[\w.@-]*/)*(?P<type>[\w$.]+)\.(?P<method>[\w$<>-]+)\((?P<source>[^()]*)\)(?:\s+\S.*)?\s*$"
)
_NO_FILE_SOURCES = frozenset({"Native Method", UNKNOWN_SOURCE, ""})


@dataclass(frozen=True)
class StackFrame:
    """One entry of a captured call stack."""

    type_name: str
    method_name: str
    file_name: Optional[str] = None
    line_number: Optional[int] = None

    def location(self) -> str:
        file_name = self.file_name or UNKNOWN_SOURCE
        if self.line_number is None:
            return file_name
        return f"{file_name}:{self.line_number}"

    def __str__(self) -> str:
        return f"{self.type_name}.{self.method_name}({self.location()})"


def capture_stack(skip: int = 0, limit: Optional[int] = None) -> list[StackFrame]:
    """Snapshot the current Python call stack, innermost frame first.

    The qualified type name is the defining module joined with the enclosing
    class/function path of the code object, so a method ``Foo.bar`` in module
    ``pkg.mod`` yields ``type_name="pkg.mod.Foo"`` and ``method_name="bar"``.

    Args:
        skip: Number of caller frames to drop in addition to this function's own.
            Negative values count as 0; a skip past the outermost frame yields [].
        limit: Maximum number of frames to return.
    """
    frames: list[StackFrame] = []
    try:
        frame = sys._getframe(max(skip, 0) + 1)
    except ValueError:
        # skip reaches past the outermost frame
        return frames
    while frame is not None and (limit is None or len(frames) < limit):
        code = frame.f_code
        module = str(frame.f_globals.get("__name__", "") or "")
        owner, _, method = code.co_qualname.rpartition(".")
        type_name = ".".join(part for part in (module, owner) if part)
        frames.append(
            StackFrame(
                type_name=type_name or "<unknown>",
                method_name=method,
                file_name=code.co_filename,
                line_number=frame.f_lineno,
            )
        )
        frame = frame.f_back
    return frames


def parse_frame_line(line: str) -> Optional[StackFrame]:
    """Parse a single ``at pkg.Type.method(File.kt:12)`` line, or return None."""
    match = _FRAME_LINE.match(line)
    if not match:
        return None

    source = match.group("source").strip()
    file_name: Optional[str] = source
    line_number: Optional[int] = None
    if source in _NO_FILE_SOURCES:
        file_name = None
    else:
        head, sep, tail = source.rpartition(":")
        if sep and tail.isdigit():
            file_name = head
            line_number = int(tail)

    return StackFrame(
        type_name=match.group("type"),
        method_name=match.group("method"),
        file_name=file_name,
        line_number=line_number,
    )


def parse_stack_text(text: str | Iterable[str]) -> list[StackFrame]:
    """Parse a textual stack dump into frames, keeping the dump's order.

    Header lines (``Exception in thread ...``), ``Caused by:`` markers and
    ``... 12 more`` elisions are skipped.
    """
    lines = text.splitlines() if isinstance(text, str) else text
    frames = []
    for line in lines:
        frame = parse_frame_line(line)
        if frame is not None:
            frames.append(frame)
    return frames
