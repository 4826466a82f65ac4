"""
Leaf recognizers for the DBC grammar.

Every function takes the unconsumed input and returns a `(remaining,
matched)` pair, or raises ParseError. None of them keep state, so they
compose by threading `remaining` from one call into the next.

© 2024 Intel Corporation
SPDX-License-Identifier: Apache-2.0 and MIT
"""

import re
from typing import Callable, Sequence, Tuple

from .types import ErrorKind, ParseError

Result = Tuple[bytes, bytes]

NEWLINE = b"\n"

_UNSIGNED = re.compile(rb"[0-9]+")
_FLOAT = re.compile(rb"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def is_digit(byte: int) -> bool:
    return 0x30 <= byte <= 0x39


def is_space(byte: int) -> bool:
    return byte in b" \t\n"


def is_number_char(byte: int) -> bool:
    return is_digit(byte) or byte in b"+-.eE"


def is_name_char(byte: int) -> bool:
    return byte not in b" \t\n:"


def expect_literal(literal: bytes, data: bytes) -> Result:
    """Consume exactly `literal` from the front of `data`."""
    if not data.startswith(literal):
        raise ParseError(ErrorKind.EXPECTED_LITERAL, literal, data)
    return data[len(literal):], literal


def take_while(predicate: Callable[[int], bool], data: bytes) -> Result:
    """Consume the longest prefix whose bytes all satisfy `predicate`. May be empty."""
    end = 0
    while end < len(data) and predicate(data[end]):
        end += 1
    return data[end:], data[:end]


def take_until(delimiter: bytes, data: bytes) -> Result:
    """Consume everything before the first `delimiter`, leaving the delimiter in place."""
    end = data.find(delimiter)
    if end == -1:
        raise ParseError(ErrorKind.DELIMITER_NOT_FOUND, delimiter, data)
    return data[end:], data[:end]


def newline(data: bytes) -> Result:
    """Consume a single line feed."""
    if not data.startswith(NEWLINE):
        raise ParseError(ErrorKind.EXPECTED_NEWLINE, None, data)
    return data[1:], NEWLINE


def one_of(alternatives: Sequence[bytes], data: bytes) -> Result:
    """Consume the first alternative that matches, in the given order."""
    for literal in alternatives:
        if data.startswith(literal):
            return data[len(literal):], literal
    raise ParseError(ErrorKind.NO_ALTERNATIVE_MATCHED, tuple(alternatives), data)


def digits(data: bytes) -> Result:
    """Consume one or more ASCII digits."""
    remaining, matched = take_while(is_digit, data)
    if not matched:
        raise ParseError(ErrorKind.INVALID_NUMBER, "", data)
    return remaining, matched


def number_text(data: bytes) -> Result:
    """Consume the bytes of a (possibly signed, fractional or exponent) number."""
    return take_while(is_number_char, data)


def to_unsigned(text: bytes, data: bytes = b"") -> int:
    """Parse base-10 digits with no sign and no surrounding whitespace."""
    if not _UNSIGNED.fullmatch(text):
        raise ParseError(ErrorKind.INVALID_NUMBER, text.decode("latin-1"), data)
    return int(text)


def to_float(text: bytes, data: bytes = b"") -> float:
    if not _FLOAT.fullmatch(text):
        raise ParseError(ErrorKind.INVALID_NUMBER, text.decode("latin-1"), data)
    return float(text)


__all__ = [
    "NEWLINE",
    "is_digit",
    "is_space",
    "is_number_char",
    "is_name_char",
    "expect_literal",
    "take_while",
    "take_until",
    "newline",
    "one_of",
    "digits",
    "number_text",
    "to_unsigned",
    "to_float",
]
