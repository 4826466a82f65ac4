"""
Record grammar for DBC messages and signals.

A message record looks like:

    BO_ 500 IO_DEBUG: 4 IO
     SG_ IO_DEBUG_test_unsigned : 0|8@1+ (1,0) [0|0] "" DBG

The `BO_` line gives the frame id, the message name, the payload length in
bytes and the sending node. Each following `SG_` line describes one signal:
start bit and length, byte order (`@1` little endian, `@0` big endian),
sign (`+` unsigned, `-` signed), `(scale,offset)`, `[minimum|maximum]`,
the quoted unit and the comma separated receiving nodes.

Each step consumes a prefix of the input and hands the rest to the next
step. The first failing step raises ParseError; there is no backtracking
except between the literal alternatives of a single choice.

© 2024 Intel Corporation
SPDX-License-Identifier: Apache-2.0 and MIT
"""

import logging
from typing import List, Optional, Tuple

from .primitives import (
    NEWLINE,
    digits,
    expect_literal,
    is_digit,
    is_name_char,
    is_space,
    newline,
    number_text,
    one_of,
    take_until,
    take_while,
    to_float,
    to_unsigned,
)
from .types import ByteOrder, Definition, ErrorKind, ParseError, Sign, Signal

logger = logging.getLogger(__name__)

MESSAGE_TAG = b"BO_"
SIGNAL_TAG = b"SG_"

_BYTE_ORDERS = {b"1": ByteOrder.LITTLE_ENDIAN, b"0": ByteOrder.BIG_ENDIAN}
_SIGNS = {b"+": Sign.UNSIGNED, b"-": Sign.SIGNED}


def _text(raw: bytes, encoding: str) -> str:
    return raw.decode(encoding, errors="replace")


def _token(predicate, data: bytes, what: str) -> Tuple[bytes, bytes]:
    """Like take_while, but an empty match is reported as a missing `what`."""
    remaining, matched = take_while(predicate, data)
    if not matched:
        raise ParseError(ErrorKind.EXPECTED_LITERAL, what, data)
    return remaining, matched


def _float(data: bytes) -> Tuple[bytes, float]:
    remaining, text = number_text(data)
    return remaining, to_float(text, data)


def _unsigned(data: bytes) -> Tuple[bytes, int]:
    remaining, text = digits(data)
    return remaining, to_unsigned(text, data)


def _multiplexer(data: bytes) -> Tuple[bytes, Optional[bytes]]:
    """Optional ` M` or ` m<N>` between the signal name and ` : `."""
    if data.startswith(b" M "):
        return data[2:], b"M"
    if data.startswith(b" m") and len(data) > 2 and is_digit(data[2]):
        remaining, value = digits(data[2:])
        return remaining, b"m" + value
    return data, None


def _signal_follows(data: bytes) -> Optional[bytes]:
    """
    Return the input positioned at the next `SG_` tag if a signal line
    follows the current line, otherwise None.
    """
    if not data.startswith(NEWLINE):
        return None
    tail, _ = newline(data)
    tail, _ = take_while(is_space, tail)
    if tail.startswith(SIGNAL_TAG + b" "):
        return tail
    return None


def parse_signal(
    data: bytes,
    message_name: Optional[bytes] = None,
    encoding: str = "utf-8",
) -> Tuple[bytes, Signal]:
    """
    Parse one `SG_` clause, starting at the tag.

    Args:
        data: Input positioned at `SG_`
        message_name: When given, the signal name must start with
            `<message_name>_`
        encoding: Encoding of names, unit and receivers

    Returns:
        The unconsumed input (starting at the line feed, if any) and the signal
    """
    tail, _ = expect_literal(SIGNAL_TAG, data)
    tail, _ = expect_literal(b" ", tail)

    if message_name is not None:
        tail, prefix = expect_literal(message_name, tail)
        tail, underscore = expect_literal(b"_", tail)
        tail, suffix = _token(is_name_char, tail, "signal name")
        name = prefix + underscore + suffix
    else:
        tail, name = _token(is_name_char, tail, "signal name")

    tail, multiplexer = _multiplexer(tail)
    tail, _ = expect_literal(b" : ", tail)

    tail, start_bit = _unsigned(tail)
    tail, _ = expect_literal(b"|", tail)
    tail, length = _unsigned(tail)
    tail, _ = expect_literal(b"@", tail)
    tail, order = one_of(tuple(_BYTE_ORDERS), tail)
    tail, sign = one_of(tuple(_SIGNS), tail)

    tail, _ = expect_literal(b" (", tail)
    tail, scale = _float(tail)
    tail, _ = expect_literal(b",", tail)
    tail, offset = _float(tail)
    tail, _ = expect_literal(b")", tail)

    tail, _ = expect_literal(b" [", tail)
    tail, minimum = _float(tail)
    tail, _ = expect_literal(b"|", tail)
    tail, maximum = _float(tail)
    tail, _ = expect_literal(b"]", tail)

    tail, _ = expect_literal(b' "', tail)
    tail, unit = take_until(b'"', tail)
    tail, _ = expect_literal(b'"', tail)

    tail, _ = expect_literal(b" ", tail)
    tail, receivers = _receivers(tail, encoding)

    return tail, Signal(
        name=_text(name, encoding),
        start_bit=start_bit,
        length=length,
        byte_order=_BYTE_ORDERS[order],
        sign=_SIGNS[sign],
        scale=scale,
        offset=offset,
        minimum=minimum,
        maximum=maximum,
        unit=_text(unit, encoding),
        receivers=receivers,
        multiplexer=_text(multiplexer, encoding) if multiplexer else None,
    )


def _receivers(data: bytes, encoding: str) -> Tuple[bytes, Tuple[str, ...]]:
    tail, receiver = _token(lambda b: b not in b",\n", data, "receiver")
    receivers = [_text(receiver.strip(), encoding)]
    while tail.startswith(b","):
        tail, receiver = _token(lambda b: b not in b",\n", tail[1:], "receiver")
        receivers.append(_text(receiver.strip(), encoding))
    return tail, tuple(receivers)


def parse_signals(
    data: bytes,
    message_name: Optional[bytes] = None,
    encoding: str = "utf-8",
) -> Tuple[bytes, Tuple[Signal, ...]]:
    """Parse the signal lines that follow a message line, zero or more."""
    signals: List[Signal] = []
    tail = data
    while True:
        at_signal = _signal_follows(tail)
        if at_signal is None:
            return tail, tuple(signals)
        tail, signal = parse_signal(at_signal, message_name, encoding)
        signals.append(signal)


def parse_message(
    data: bytes,
    *,
    require_signal_prefix: bool = True,
    encoding: str = "utf-8",
) -> Tuple[bytes, Definition]:
    """
    Parse one message record: the `BO_` line and the `SG_` lines under it.

    The record must start at the front of `data`. Anything after it,
    starting with the line feed that ends its last line, is returned
    untouched.

    Args:
        data: Input positioned at `BO_`
        require_signal_prefix: Require every signal name to start with the
            message name followed by `_`
        encoding: Encoding of names, units and node names

    Returns:
        The unconsumed input and the parsed definition

    Raises:
        ParseError: If the input does not match the grammar
    """
    tail, _ = expect_literal(MESSAGE_TAG, data)
    tail, _ = expect_literal(b" ", tail)
    tail, frame_id = digits(tail)
    tail, _ = expect_literal(b" ", tail)

    # The name ends at the colon and never spans lines.
    tail, name = _token(lambda b: b not in b":\n", tail, "message name")
    tail, _ = expect_literal(b":", tail)
    tail, _ = expect_literal(b" ", tail)

    length_start = tail
    tail, length_text = take_until(b" ", tail)
    length = to_unsigned(length_text, length_start)
    tail, _ = expect_literal(b" ", tail)

    tail, sender = take_while(lambda b: b != NEWLINE[0], tail)

    tail, signals = parse_signals(
        tail,
        message_name=name if require_signal_prefix else None,
        encoding=encoding,
    )

    definition = Definition(
        name=_text(name, encoding),
        id=_text(frame_id, encoding),
        bytes=length,
        sender=_text(sender, encoding),
        signals=signals,
    )
    logger.debug(f"Parsed message {definition.name} ({definition.id}) with {len(signals)} signals")
    return tail, definition


__all__ = [
    "MESSAGE_TAG",
    "SIGNAL_TAG",
    "parse_message",
    "parse_signal",
    "parse_signals",
]
