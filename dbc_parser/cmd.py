"""
Command line reporting for the DBC parser.

© 2024 Intel Corporation
SPDX-License-Identifier: Apache-2.0 and MIT
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

import click

from . import internal_error
from .config import Config
from .file_management import ParsedDatabase, RecordError, discover_dbc_files
from .parsing import Definition, Sign
from .vfs import VFS, load_database

logger = logging.getLogger(__name__)


def definition_to_dict(definition: Definition) -> Dict[str, Any]:
    """Convert a message definition to plain JSON-compatible data."""
    return {
        "name": definition.name,
        "id": definition.id,
        "bytes": definition.bytes,
        "sender": definition.sender,
        "signals": [
            {
                "name": signal.name,
                "start_bit": signal.start_bit,
                "length": signal.length,
                "byte_order": signal.byte_order.name.lower(),
                "signed": signal.sign.name.lower(),
                "scale": signal.scale,
                "offset": signal.offset,
                "minimum": signal.minimum,
                "maximum": signal.maximum,
                "unit": signal.unit,
                "receivers": list(signal.receivers),
                "multiplexer": signal.multiplexer,
            }
            for signal in definition.signals
        ],
    }


def format_definition(definition: Definition) -> List[str]:
    lines = [f"{definition.name} (id {definition.id}, {definition.bytes} bytes, sender {definition.sender})"]
    for signal in definition.signals:
        sign = "signed" if signal.sign is Sign.SIGNED else "unsigned"
        unit = f" [{signal.unit}]" if signal.unit else ""
        lines.append(
            f"  {signal.name}: {signal.start_bit}|{signal.length} {signal.byte_order.name.lower()} {sign}"
            f" x{signal.scale:g}{signal.offset:+g} in [{signal.minimum:g}, {signal.maximum:g}]{unit}"
            f" -> {','.join(signal.receivers)}"
        )
    return lines


def format_error(error: RecordError) -> str:
    return f"{error.location.file_path}:{error.line}:{error.column}: error: {error.message}"


def expand_paths(paths: Iterable[Path]) -> List[Path]:
    """Replace directories with the DBC files found below them."""
    files: List[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(discover_dbc_files(path))
        else:
            files.append(path)
    return files


async def _load_all(files: List[Path], config: Config) -> List[ParsedDatabase]:
    vfs = VFS()
    databases = [await load_database(path, config, vfs) for path in files]
    stats = vfs.get_cache_stats()
    logger.debug(f"Read {stats['cached_files']} files ({stats['cached_bytes']} bytes)")
    return databases


def run_cli(paths: Iterable[Path], config: Config, as_json: bool = False) -> int:
    """
    Parse DBC files and print the results.

    Args:
        paths: Files or directories to parse
        config: Parser configuration
        as_json: Print messages as JSON instead of text

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    files = expand_paths(paths)
    if not files:
        logger.warning("No DBC files found")
        return 0

    logger.info(f"Found {len(files)} DBC files to parse")

    try:
        databases = asyncio.run(_load_all(files, config))
    except RecordError as e:
        click.echo(format_error(e), err=True)
        return 1
    except OSError as e:
        logger.error(f"Failed to read DBC file: {e}")
        return 1
    except Exception as e:
        internal_error("DBC parsing failed: {}", e)
        logger.debug("Traceback", exc_info=True)
        return 1

    total_messages = 0
    total_errors = 0

    if as_json:
        click.echo(json.dumps({
            database.file_path: [definition_to_dict(m) for m in database.messages]
            for database in databases
        }, indent=2))

    for database in databases:
        if not as_json:
            click.echo(f"{database.file_path}:")
            for message in database.messages:
                for line in format_definition(message):
                    click.echo(f"  {line}")
        for error in database.errors:
            click.echo(format_error(error), err=True)
        total_messages += len(database.messages)
        total_errors += len(database.errors)

    summary = f"Summary: {total_messages} messages, {total_errors} errors in {len(databases)} files"
    click.echo(summary, err=as_json)

    return 1 if total_errors > 0 else 0
