"""
Position utilities for mapping byte offsets in DBC buffers to lines and columns.

The parsing core works on raw byte slices and never tracks where it is in a
file. The reader derives offsets from how much of the buffer each call
consumed, and this module turns those offsets into positions.

© 2024 Intel Corporation
SPDX-License-Identifier: Apache-2.0 and MIT
"""

from bisect import bisect_right
from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True, order=True)
class Position:
    """A zero-indexed position in a DBC buffer."""
    line: int
    column: int

    def __post_init__(self):
        if self.line < 0 or self.column < 0:
            raise ValueError(f"Invalid position: line={self.line}, column={self.column}")

    def to_one_indexed(self) -> 'Position':
        """Convert to the one-indexed form used in user-facing messages."""
        return Position(line=self.line + 1, column=self.column + 1)

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Location:
    """A position with optional file information."""
    file_path: Optional[str]
    position: Position

    def __str__(self) -> str:
        one = self.position.to_one_indexed()
        file_part = f"{self.file_path}:" if self.file_path else ""
        return f"{file_part}{one.line}:{one.column}"


class LineIndex:
    """Maps byte offsets of a buffer to zero-indexed positions."""

    def __init__(self, content: bytes):
        self._length = len(content)
        self._line_starts: List[int] = [0]
        start = content.find(b"\n")
        while start != -1:
            self._line_starts.append(start + 1)
            start = content.find(b"\n", start + 1)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def position_from_offset(self, offset: int) -> Position:
        """Convert a byte offset to a zero-indexed position."""
        if offset <= 0:
            return Position(0, 0)
        offset = min(offset, self._length)
        line = bisect_right(self._line_starts, offset) - 1
        return Position(line, offset - self._line_starts[line])

    def offset_from_position(self, position: Position) -> int:
        """Convert a zero-indexed position to a byte offset."""
        if position.line >= len(self._line_starts):
            return self._length
        line_start = self._line_starts[position.line]
        if position.line + 1 < len(self._line_starts):
            line_end = self._line_starts[position.line + 1] - 1
        else:
            line_end = self._length
        return min(line_start + position.column, line_end)


__all__ = [
    "Position",
    "Location",
    "LineIndex",
]
