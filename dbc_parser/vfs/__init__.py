"""
Virtual File System for the DBC parser.

Loads raw DBC bytes from disk or memory and caches them per path.

© 2024 Intel Corporation
SPDX-License-Identifier: Apache-2.0 and MIT
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

import aiofiles

from ..config import Config
from ..file_management import DatabaseReader, ParsedDatabase

logger = logging.getLogger(__name__)


class FileLoader(Protocol):
    """Protocol for loading files from different sources."""

    async def load_file(self, path: Path) -> bytes:
        """Load file content from the given path."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if a file exists."""
        ...


class RealFileLoader:
    """File loader that reads from the actual file system."""

    async def load_file(self, path: Path) -> bytes:
        """Load file content from disk."""
        try:
            async with aiofiles.open(path, 'rb') as f:
                return await f.read()
        except Exception as e:
            logger.error(f"Failed to read file {path}: {e}")
            raise

    def exists(self, path: Path) -> bool:
        """Check if file exists on disk."""
        return path.exists() and path.is_file()


class MemoryFileLoader:
    """File loader that reads from memory."""

    def __init__(self):
        self._files: Dict[Path, bytes] = {}

    async def load_file(self, path: Path) -> bytes:
        """Load file content from memory."""
        if path not in self._files:
            raise FileNotFoundError(f"File not found in memory: {path}")
        return self._files[path]

    def exists(self, path: Path) -> bool:
        return path in self._files

    def set_file(self, path: Path, content: bytes) -> None:
        """Store file content in memory."""
        self._files[path] = content


class VFS:
    """Cached access to DBC file content."""

    def __init__(self, loader: Optional[FileLoader] = None):
        self._file_cache: Dict[Path, bytes] = {}
        self._file_loader: FileLoader = loader if loader is not None else RealFileLoader()

    @property
    def loader(self) -> FileLoader:
        return self._file_loader

    async def read_file(self, path: Path) -> bytes:
        """
        Read file content, using cache if available.

        Args:
            path: Path to the file

        Returns:
            File content as bytes

        Raises:
            FileNotFoundError: If file doesn't exist
        """
        path = path.resolve()

        if path in self._file_cache:
            logger.debug(f"Reading {path} from cache")
            return self._file_cache[path]

        logger.debug(f"Loading {path}")
        content = await self._file_loader.load_file(path)
        self._file_cache[path] = content
        return content

    def file_exists(self, path: Path) -> bool:
        path = path.resolve()
        return path in self._file_cache or self._file_loader.exists(path)

    def get_cache_stats(self) -> Dict[str, int]:
        return {
            "cached_files": len(self._file_cache),
            "cached_bytes": sum(len(content) for content in self._file_cache.values()),
        }


async def load_database(
    path: Path,
    config: Optional[Config] = None,
    vfs: Optional[VFS] = None,
) -> ParsedDatabase:
    """
    Read a DBC file through the VFS and parse it.

    Args:
        path: Path to the DBC file
        config: Parser configuration
        vfs: VFS to read through; a fresh one reading from disk by default

    Returns:
        The parsed database

    Raises:
        FileNotFoundError: If the VFS has no such file
    """
    vfs = vfs or VFS()
    if not vfs.file_exists(path):
        raise FileNotFoundError(f"No such DBC file: {path}")
    content = await vfs.read_file(path)
    return DatabaseReader(config).parse(content, str(path))


__all__ = [
    "FileLoader",
    "RealFileLoader",
    "MemoryFileLoader",
    "VFS",
    "load_database",
]
