"""
Records and error types produced by the DBC parsing core.

© 2024 Intel Corporation
SPDX-License-Identifier: Apache-2.0 and MIT
"""

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering
from typing import Any, Optional, Tuple


@total_ordering
class _OrderedEnum(Enum):
    """Enum whose members compare in declaration order."""

    def __lt__(self, other):
        if self.__class__ is not other.__class__:
            return NotImplemented
        members = list(self.__class__)
        return members.index(self) < members.index(other)


class Sign(_OrderedEnum):
    """Signedness of a signal, written as `-` or `+` after the byte order."""
    SIGNED = "-"
    UNSIGNED = "+"


class ByteOrder(_OrderedEnum):
    """Byte order of a signal, written as `@1` or `@0`."""
    LITTLE_ENDIAN = "1"
    BIG_ENDIAN = "0"


@dataclass(frozen=True, order=True)
class Signal:
    """A bit field inside a message payload (`SG_` line)."""
    name: str
    start_bit: int
    length: int
    byte_order: ByteOrder
    sign: Sign
    scale: float = 1.0
    offset: float = 0.0
    minimum: float = 0.0
    maximum: float = 0.0
    unit: str = ""
    receivers: Tuple[str, ...] = ()
    multiplexer: Optional[str] = None

    @property
    def is_multiplexer(self) -> bool:
        return self.multiplexer == "M"

    @property
    def multiplexer_value(self) -> Optional[int]:
        """Switch value selecting this signal, for `m<N>` signals."""
        if self.multiplexer and self.multiplexer.startswith("m"):
            return int(self.multiplexer[1:])
        return None


@dataclass(frozen=True, order=True)
class Definition:
    """A message record (`BO_` line) and the signals declared under it."""
    name: str
    id: str
    bytes: int
    sender: str
    signals: Tuple[Signal, ...] = ()

    @property
    def signed(self) -> Optional[Sign]:
        """Signedness of the first signal, or None for a message without signals."""
        if not self.signals:
            return None
        return self.signals[0].sign

    @property
    def frame_id(self) -> int:
        return int(self.id)

    def get_signal(self, name: str) -> Optional[Signal]:
        for signal in self.signals:
            if signal.name == name:
                return signal
        return None


class ErrorKind(Enum):
    """Closed set of reasons a parse step can fail."""
    EXPECTED_LITERAL = "expected_literal"
    DELIMITER_NOT_FOUND = "delimiter_not_found"
    EXPECTED_NEWLINE = "expected_newline"
    INVALID_NUMBER = "invalid_number"
    NO_ALTERNATIVE_MATCHED = "no_alternative_matched"


def _show(value: Any) -> str:
    if isinstance(value, bytes):
        return repr(value.decode("latin-1"))
    return repr(value)


class ParseError(Exception):
    """
    Raised by the parsing core when the input does not match the grammar.

    Attributes:
        kind: Which step failed
        context: The literal or delimiter that was expected (or the name
            of a required token that was empty), the offending number
            text, or the tuple of alternatives
        remaining: The input at the point of failure
    """

    def __init__(self, kind: ErrorKind, context: Any = None, remaining: bytes = b""):
        self.kind = kind
        self.context = context
        self.remaining = remaining
        super().__init__(self.describe())

    def describe(self) -> str:
        if self.kind == ErrorKind.EXPECTED_LITERAL:
            return f"expected {_show(self.context)}"
        if self.kind == ErrorKind.DELIMITER_NOT_FOUND:
            return f"delimiter {_show(self.context)} not found before end of input"
        if self.kind == ErrorKind.EXPECTED_NEWLINE:
            return "expected end of line"
        if self.kind == ErrorKind.INVALID_NUMBER:
            return f"invalid number {_show(self.context)}"
        choices = ", ".join(_show(alt) for alt in self.context or ())
        return f"expected one of {choices}"


__all__ = [
    "Sign",
    "ByteOrder",
    "Signal",
    "Definition",
    "ErrorKind",
    "ParseError",
]
