"""Checkpoint tool version parsing and ordering."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

_QUALIFIER = re.compile(r"[-+]")


@dataclass(frozen=True, order=True)
class ToolVersion:
    """Semantic ``major.minor.patch`` triple, ordered lexicographically."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, text: str) -> Optional[ToolVersion]:
        """Parse free-form version output such as ``"1.0.39 (debug)"`` or ``"1.0.23-rc1"``.

        Only the first whitespace-delimited token is considered. Returns None when
        fewer than three numeric components are present.
        """
        tokens = (text or "").split()
        if not tokens:
            return None

        parts = tokens[0].split(".")
        if len(parts) < 3:
            return None

        major, minor = parts[0], parts[1]
        patch = _QUALIFIER.split(parts[2], maxsplit=1)[0]
        numbers = (major, minor, patch)
        # isdigit() rejects signs, so negatives never parse
        if not all(part.isascii() and part.isdigit() for part in numbers):
            return None
        return cls(int(major), int(minor), int(patch))
