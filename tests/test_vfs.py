"""
Tests for file loading through the VFS.

© 2024 Intel Corporation
SPDX-License-Identifier: Apache-2.0 and MIT
"""

from pathlib import Path

import pytest

from dbc_parser.config import Config, ParserOptions
from dbc_parser.file_management import RecordError
from dbc_parser.vfs import VFS, MemoryFileLoader, RealFileLoader, load_database


class TestVFS:
    """Test VFS bookkeeping."""

    def test_vfs_creation(self):
        vfs = VFS()
        assert isinstance(vfs.loader, RealFileLoader)
        stats = vfs.get_cache_stats()
        assert stats["cached_files"] == 0
        assert stats["cached_bytes"] == 0

    def test_memory_file_exists(self):
        loader = MemoryFileLoader()
        path = Path("virtual.dbc").resolve()
        loader.set_file(path, b"BO_ 1 A: 1 N")

        vfs = VFS(loader)
        assert vfs.file_exists(path)
        assert not vfs.file_exists(Path("other.dbc"))

    def test_real_file_exists(self, dbc_file):
        vfs = VFS()
        assert vfs.file_exists(dbc_file)
        assert not vfs.file_exists(dbc_file.with_name("missing.dbc"))


@pytest.mark.asyncio
class TestAsyncOperations:
    """Test async file reading."""

    async def test_read_real_file(self, dbc_file, sample_dbc):
        vfs = VFS()
        content = await vfs.read_file(dbc_file)
        assert content == sample_dbc
        assert vfs.get_cache_stats()["cached_files"] == 1

    async def test_read_uses_cache(self, dbc_file, sample_dbc):
        vfs = VFS()
        await vfs.read_file(dbc_file)
        dbc_file.write_bytes(b"changed")

        assert await vfs.read_file(dbc_file) == sample_dbc
        assert vfs.get_cache_stats() == {"cached_files": 1, "cached_bytes": len(sample_dbc)}
        assert await VFS().read_file(dbc_file) == b"changed"

    async def test_read_memory_file(self, sample_dbc):
        loader = MemoryFileLoader()
        path = Path("memory.dbc").resolve()
        loader.set_file(path, sample_dbc)

        vfs = VFS(loader)
        assert await vfs.read_file(path) == sample_dbc

    async def test_missing_memory_file(self):
        vfs = VFS(MemoryFileLoader())
        with pytest.raises(FileNotFoundError):
            await vfs.read_file(Path("missing.dbc"))

    async def test_missing_real_file(self, tmp_path):
        vfs = VFS()
        with pytest.raises(FileNotFoundError):
            await vfs.read_file(tmp_path / "missing.dbc")

    async def test_load_database(self, dbc_file):
        database = await load_database(dbc_file)
        assert database.file_path == str(dbc_file)
        assert [m.name for m in database.messages] == ["IO_DEBUG", "ENGINE"]

    async def test_load_database_strict(self, tmp_path, broken_dbc):
        path = tmp_path / "broken.dbc"
        path.write_bytes(broken_dbc)

        with pytest.raises(RecordError):
            await load_database(path, Config(ParserOptions(strict=True)))

    async def test_load_database_missing_file(self, tmp_path):
        vfs = VFS(MemoryFileLoader())
        with pytest.raises(FileNotFoundError):
            await load_database(tmp_path / "missing.dbc", vfs=vfs)

    async def test_load_database_shares_cache(self, dbc_file):
        vfs = VFS()
        await load_database(dbc_file, vfs=vfs)
        dbc_file.write_bytes(b"")

        database = await load_database(dbc_file, vfs=vfs)
        assert [m.name for m in database.messages] == ["IO_DEBUG", "ENGINE"]
