"""
File management utilities for the DBC parser.

Walks a whole DBC buffer, hands every message record to the parsing core
and keeps track of where in the file each record and error is.

© 2024 Intel Corporation
SPDX-License-Identifier: Apache-2.0 and MIT
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .config import Config
from .parsing import MESSAGE_TAG, Definition, ParseError, parse_message
from .span import LineIndex, Location, Position

logger = logging.getLogger(__name__)


class RecordError(Exception):
    """A ParseError together with the location of the failure."""

    def __init__(self, error: ParseError, location: Location):
        self.error = error
        self.location = location
        super().__init__(f"{location}: {error}")

    @property
    def kind(self):
        return self.error.kind

    @property
    def line(self) -> int:
        """One-indexed line of the failure."""
        return self.location.position.line + 1

    @property
    def column(self) -> int:
        """One-indexed column of the failure."""
        return self.location.position.column + 1

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass
class ParsedDatabase:
    """Messages and errors collected from one DBC buffer."""
    file_path: Optional[str] = None
    messages: List[Definition] = field(default_factory=list)
    errors: List[RecordError] = field(default_factory=list)
    locations: Dict[str, Position] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def signal_count(self) -> int:
        return sum(len(message.signals) for message in self.messages)

    def get_message(self, name: str) -> Optional[Definition]:
        for message in self.messages:
            if message.name == name:
                return message
        return None

    def get_message_by_id(self, frame_id: int) -> Optional[Definition]:
        for message in self.messages:
            if message.frame_id == frame_id:
                return message
        return None


def normalize_newlines(content: bytes) -> bytes:
    """Rewrite CRLF and lone CR line endings to LF."""
    return content.replace(b"\r\n", b"\n").replace(b"\r", b"\n")


class DatabaseReader:
    """Feeds the message records of a DBC buffer to the parsing core."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    def parse(self, content: bytes, file_path: Optional[str] = None) -> ParsedDatabase:
        """
        Parse every `BO_` record in `content`.

        Lines that do not start a message record are skipped. In strict mode
        the first failing record raises RecordError; otherwise the error is
        recorded and reading resumes on the next line.

        Args:
            content: Raw DBC file content
            file_path: Name used in error locations

        Returns:
            ParsedDatabase with the messages in file order
        """
        options = self.config.options
        if options.normalize_newlines:
            content = normalize_newlines(content)

        index = LineIndex(content)
        result = ParsedDatabase(file_path=file_path)
        offset = 0

        while offset < len(content):
            rest = content[offset:]
            if not rest.startswith(MESSAGE_TAG + b" "):
                offset = self._next_line(content, offset)
                continue

            try:
                remaining, definition = parse_message(
                    rest,
                    require_signal_prefix=options.require_signal_prefix,
                    encoding=options.encoding,
                )
            except ParseError as e:
                failed_at = len(content) - len(e.remaining)
                error = RecordError(e, Location(file_path, index.position_from_offset(failed_at)))
                if options.strict:
                    raise error from e
                logger.warning(f"Skipping malformed record: {error}")
                result.errors.append(error)
                offset = self._next_line(content, offset)
                continue

            result.messages.append(definition)
            result.locations[definition.name] = index.position_from_offset(offset)
            offset = len(content) - len(remaining)

        logger.info(
            f"Parsed {len(result.messages)} messages with {result.signal_count} signals"
            f" from {file_path or '<buffer>'} ({len(result.errors)} errors)"
        )
        return result

    def parse_file(self, path: Path) -> ParsedDatabase:
        """Read and parse a DBC file from disk."""
        with open(path, 'rb') as f:
            content = f.read()
        return self.parse(content, str(path))

    @staticmethod
    def _next_line(content: bytes, offset: int) -> int:
        end = content.find(b"\n", offset)
        return len(content) if end == -1 else end + 1


def discover_dbc_files(root_directory: Path, recursive: bool = True) -> List[Path]:
    """
    Discover all DBC files in a directory.

    Args:
        root_directory: Directory to search in
        recursive: Whether to search recursively

    Returns:
        Sorted list of DBC file paths
    """
    if not root_directory.exists() or not root_directory.is_dir():
        logger.warning(f"Directory does not exist or is not a directory: {root_directory}")
        return []

    pattern = "**/*" if recursive else "*"
    dbc_files = sorted(
        path.resolve()
        for path in root_directory.glob(pattern)
        if path.is_file() and path.suffix.lower() == ".dbc"
    )
    logger.info(f"Discovered {len(dbc_files)} DBC files in {root_directory}")
    return dbc_files
