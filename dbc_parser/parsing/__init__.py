"""
DBC parsing module.

Provides the byte-level recognizers and the message/signal record grammar.

© 2024 Intel Corporation
SPDX-License-Identifier: Apache-2.0 and MIT
"""

from .types import ByteOrder, Definition, ErrorKind, ParseError, Sign, Signal
from .grammar import MESSAGE_TAG, SIGNAL_TAG, parse_message, parse_signal, parse_signals

__all__ = [
    "ByteOrder",
    "Definition",
    "ErrorKind",
    "ParseError",
    "Sign",
    "Signal",
    "MESSAGE_TAG",
    "SIGNAL_TAG",
    "parse_message",
    "parse_signal",
    "parse_signals",
]
