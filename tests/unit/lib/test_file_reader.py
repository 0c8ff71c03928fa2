"""Tests for LocalFileReader and ContentCache."""

import os
from collections.abc import Callable
from pathlib import Path

import pytest

from inlined_copy.lib.errors import ErrorKind, ExpansionError
from inlined_copy.lib.file_reader import ContentCache, LocalFileReader


class TestContentCache:
    """Tests for the mtime-keyed content cache."""

    def test_hit_requires_same_mtime(self) -> None:
        """Test that an entry only matches the mtime it was stored with."""
        cache = ContentCache()
        cache.set("/a.md", 100, "old")
        assert cache.get("/a.md", 100) == "old"
        assert cache.get("/a.md", 200) is None
        assert cache.get("/b.md", 100) is None

    def test_clear(self) -> None:
        """Test that clear drops every entry."""
        cache = ContentCache()
        cache.set("/a.md", 1, "a")
        cache.set("/b.md", 1, "b")
        assert len(cache) == 2
        cache.clear()
        assert len(cache) == 0


class TestLocalFileReader:
    """Tests for filesystem reads."""

    @pytest.mark.asyncio
    async def test_stat_and_read(self, write_file: Callable[[str, str], Path]) -> None:
        """Test that size is reported in bytes and text decoded as UTF-8."""
        path = write_file("a.md", "héllo")
        reader = LocalFileReader()
        assert await reader.stat_size(str(path)) == len("héllo".encode())
        assert await reader.read_text(str(path)) == "héllo"

    @pytest.mark.asyncio
    async def test_missing_file(self, temp_dir: Path) -> None:
        """Test that a missing file raises a NOT_FOUND expansion error."""
        reader = LocalFileReader()
        with pytest.raises(ExpansionError) as exc_info:
            await reader.stat_size(str(temp_dir / "nope.md"))
        assert exc_info.value.kind is ErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_invalid_utf8(self, temp_dir: Path) -> None:
        """Test that undecodable content raises READ_FAILED."""
        path = temp_dir / "binary.md"
        path.write_bytes(b"\xff\xfe\xfa")
        reader = LocalFileReader()
        with pytest.raises(ExpansionError) as exc_info:
            await reader.read_text(str(path))
        assert exc_info.value.kind is ErrorKind.READ_FAILED
        assert str(exc_info.value).startswith(f"Failed to read file: {path}")

    @pytest.mark.asyncio
    async def test_cached_read(self, write_file: Callable[[str, str], Path]) -> None:
        """Test that an unchanged mtime serves content from the cache."""
        path = write_file("a.md", "first")
        cache = ContentCache()
        reader = LocalFileReader(cache)
        assert await reader.read_text(str(path)) == "first"

        mtime_ns = path.stat().st_mtime_ns
        path.write_text("second", encoding="utf-8")
        os.utime(path, ns=(mtime_ns, mtime_ns))
        assert await reader.read_text(str(path)) == "first"
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_modified_file_misses_cache(
        self, write_file: Callable[[str, str], Path]
    ) -> None:
        """Test that a changed mtime reads the file again."""
        path = write_file("a.md", "first")
        reader = LocalFileReader(ContentCache())
        await reader.read_text(str(path))

        mtime_ns = path.stat().st_mtime_ns
        path.write_text("second", encoding="utf-8")
        os.utime(path, ns=(mtime_ns + 1_000_000_000, mtime_ns + 1_000_000_000))
        assert await reader.read_text(str(path)) == "second"
