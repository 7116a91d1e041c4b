"""
Unit tests for file and directory operations.

Tests include:
- Text, bytes and JSON reads and writes (blocking and async)
- File creation, removal and symbolic links
- Directory creation and removal
- Temporary files and disk usage
"""

import os
from pathlib import Path

import pytest

from fskit.core.exceptions import (
    FileReadError,
    FileWriteError,
    NotAFileError,
    ParentNotADirectoryError,
    PathNotFoundError,
)
from fskit.core.files import (
    append_file,
    append_file_async,
    create_file,
    disk_usage,
    mkdir,
    mkdir_async,
    mktempdir,
    mktempdir_async,
    mktempfile,
    mktempfile_async,
    read_bytes,
    read_bytes_async,
    read_file,
    read_file_async,
    read_json,
    read_json_async,
    rmdir,
    rmdir_async,
    soft_link,
    unlink,
    write_file,
    write_file_async,
    write_json,
    write_json_async,
)
from fskit.core.paths import IS_WINDOWS


# ============================================================================
# Read/Write Tests
# ============================================================================


class TestReadWrite:
    """Tests for reading and writing file content."""

    def test_write_then_read_text(self, temp_dir):
        """Test writing and reading text."""
        path = temp_dir / "out.txt"
        write_file(path, "héllo")
        assert read_file(path) == "héllo"

    def test_write_bytes(self, temp_dir):
        """Test writing bytes content."""
        path = temp_dir / "out.bin"
        write_file(path, b"\x00\x01\x02")
        assert read_bytes(path) == b"\x00\x01\x02"

    def test_write_truncates(self, temp_dir):
        """Test that writing replaces existing content."""
        path = temp_dir / "out.txt"
        write_file(path, "long content")
        write_file(path, "short")
        assert read_file(path) == "short"

    def test_append_creates_and_appends(self, temp_dir):
        """Test that append creates a missing file and then appends."""
        path = temp_dir / "log.txt"
        append_file(path, "one\n")
        append_file(path, "two\n")
        assert read_file(path) == "one\ntwo\n"

    def test_read_missing(self, temp_dir):
        """Test that reading a missing file raises PathNotFoundError."""
        with pytest.raises(PathNotFoundError):
            read_file(temp_dir / "missing.txt")

    def test_read_invalid_utf8(self, temp_dir):
        """Test that undecodable content raises FileReadError."""
        path = temp_dir / "latin1.txt"
        path.write_bytes(b"\xff\xfe\xfa")
        with pytest.raises(FileReadError):
            read_file(path)

    @pytest.mark.skipif(IS_WINDOWS, reason="Unix-specific test")
    def test_read_directory(self, temp_dir):
        """Test that reading a directory raises NotAFileError."""
        with pytest.raises(NotAFileError):
            read_file(temp_dir)

    @pytest.mark.skipif(IS_WINDOWS, reason="Unix-specific test")
    def test_write_under_file_parent(self, sample_file):
        """Test that writing below a regular file fails."""
        with pytest.raises(ParentNotADirectoryError):
            write_file(sample_file / "child.txt", "x")

    def test_write_missing_parent(self, temp_dir):
        """Test that writing into a missing directory fails."""
        with pytest.raises(FileWriteError):
            write_file(temp_dir / "no" / "such" / "file.txt", "x")

    @pytest.mark.asyncio
    async def test_async_roundtrip(self, temp_dir):
        """Test async write, append and read."""
        path = temp_dir / "async.txt"
        await write_file_async(path, "a")
        await append_file_async(path, "b")
        assert await read_file_async(path) == "ab"
        assert await read_bytes_async(path) == b"ab"

    @pytest.mark.asyncio
    async def test_async_read_missing(self, temp_dir):
        """Test that async read of a missing file raises PathNotFoundError."""
        with pytest.raises(PathNotFoundError):
            await read_file_async(temp_dir / "missing.txt")


# ============================================================================
# JSON Tests
# ============================================================================


class TestJson:
    """Tests for JSON helpers."""

    def test_write_is_pretty_printed(self, temp_dir):
        """Test that JSON is written with two-space indentation."""
        path = temp_dir / "data.json"
        write_json(path, {"name": "fskit", "tags": ["a"]})

        text = path.read_text()
        assert '\n  "name": "fskit"' in text
        assert read_json(path) == {"name": "fskit", "tags": ["a"]}

    def test_read_invalid_json(self, temp_dir):
        """Test that malformed JSON raises FileReadError."""
        path = temp_dir / "bad.json"
        path.write_text("{not json")
        with pytest.raises(FileReadError):
            read_json(path)

    def test_write_unserializable(self, temp_dir):
        """Test that unserializable data raises FileWriteError."""
        path = temp_dir / "bad.json"
        with pytest.raises(FileWriteError):
            write_json(path, {"value": object()})
        assert not path.exists()

    @pytest.mark.asyncio
    async def test_async(self, temp_dir):
        """Test async JSON helpers."""
        path = temp_dir / "data.json"
        await write_json_async(path, [1, 2, 3])
        assert await read_json_async(path) == [1, 2, 3]


# ============================================================================
# File Management Tests
# ============================================================================


class TestCreateFile:
    """Tests for create_file."""

    def test_creates_parents(self, temp_dir):
        """Test that missing parent directories are created."""
        path = temp_dir / "a" / "b" / "new.txt"
        create_file(path)
        assert path.is_file()
        assert path.stat().st_size == 0

    def test_existing_file_untouched(self, sample_file):
        """Test that an existing file keeps its content."""
        create_file(sample_file)
        assert sample_file.read_bytes() == b"hello"

    def test_existing_directory(self, temp_dir):
        """Test that an existing directory raises NotAFileError."""
        with pytest.raises(NotAFileError):
            create_file(temp_dir)

    def test_parent_is_file(self, sample_file):
        """Test that a file parent raises ParentNotADirectoryError."""
        with pytest.raises(ParentNotADirectoryError):
            create_file(sample_file / "child.txt")

    def test_ancestor_is_file(self, sample_file):
        """Test that a file further up the tree is rejected."""
        with pytest.raises(ParentNotADirectoryError):
            create_file(sample_file / "deeper" / "child.txt")


class TestUnlink:
    """Tests for unlink."""

    def test_removes_file(self, sample_file):
        """Test removing a file."""
        unlink(sample_file)
        assert not sample_file.exists()

    def test_missing(self, temp_dir):
        """Test that a missing path raises PathNotFoundError."""
        with pytest.raises(PathNotFoundError):
            unlink(temp_dir / "missing")

    def test_directory(self, temp_dir):
        """Test that a directory raises NotAFileError."""
        with pytest.raises(NotAFileError):
            unlink(temp_dir)

    @pytest.mark.skipif(IS_WINDOWS, reason="Unix-specific test")
    def test_removes_link_not_target(self, temp_dir, sample_file):
        """Test that unlinking a link keeps its target."""
        link = temp_dir / "link.txt"
        link.symlink_to(sample_file)

        unlink(link)
        assert not os.path.lexists(link)
        assert sample_file.exists()


@pytest.mark.skipif(IS_WINDOWS, reason="Unix-specific test")
class TestSoftLink:
    """Tests for soft_link."""

    def test_file_link(self, temp_dir, sample_file):
        """Test linking to a file."""
        link = temp_dir / "link.txt"
        soft_link(sample_file, link)

        assert link.is_symlink()
        assert link.read_bytes() == b"hello"

    def test_directory_link(self, temp_dir, sample_directory):
        """Test linking to a directory."""
        link = temp_dir / "dir_link"
        soft_link(sample_directory, link)

        assert link.is_symlink()
        assert (link / "a.txt").read_bytes() == b"abc"

    def test_existing_link_path(self, temp_dir, sample_file):
        """Test that an occupied link path raises FileWriteError."""
        with pytest.raises(FileWriteError):
            soft_link(temp_dir, sample_file)


# ============================================================================
# Directory Tests
# ============================================================================


class TestDirectories:
    """Tests for mkdir and rmdir."""

    def test_mkdir(self, temp_dir):
        """Test creating a single directory."""
        mkdir(temp_dir / "new")
        assert (temp_dir / "new").is_dir()

    def test_mkdir_missing_parent(self, temp_dir):
        """Test that non-recursive mkdir needs an existing parent."""
        with pytest.raises(FileWriteError):
            mkdir(temp_dir / "a" / "b")

    def test_mkdir_recursive(self, temp_dir):
        """Test creating nested directories."""
        mkdir(temp_dir / "a" / "b" / "c", recursive=True)
        assert (temp_dir / "a" / "b" / "c").is_dir()

    def test_mkdir_recursive_existing(self, temp_dir):
        """Test that recursive mkdir accepts an existing directory."""
        mkdir(temp_dir, recursive=True)
        assert temp_dir.is_dir()

    def test_mkdir_existing(self, temp_dir):
        """Test that non-recursive mkdir rejects an existing directory."""
        with pytest.raises(FileWriteError):
            mkdir(temp_dir)

    @pytest.mark.skipif(IS_WINDOWS, reason="Unix-specific test")
    def test_mkdir_under_file(self, sample_file):
        """Test that a file parent raises ParentNotADirectoryError."""
        with pytest.raises(ParentNotADirectoryError):
            mkdir(sample_file / "sub")

    def test_rmdir_recursive(self, sample_directory):
        """Test removing a directory tree."""
        rmdir(sample_directory)
        assert not sample_directory.exists()

    def test_rmdir_non_recursive_requires_empty(self, sample_directory):
        """Test that non-recursive rmdir rejects a non-empty directory."""
        with pytest.raises(FileWriteError):
            rmdir(sample_directory, recursive=False)
        assert sample_directory.exists()

    def test_rmdir_missing(self, temp_dir):
        """Test that a missing directory raises PathNotFoundError."""
        with pytest.raises(PathNotFoundError):
            rmdir(temp_dir / "missing")

    @pytest.mark.asyncio
    async def test_async(self, temp_dir):
        """Test async mkdir and rmdir."""
        target = temp_dir / "x" / "y"
        await mkdir_async(target)
        assert target.is_dir()
        (target / "f.txt").write_text("data")

        await rmdir_async(temp_dir / "x")
        assert not (temp_dir / "x").exists()


# ============================================================================
# Temporary Files and Disk Usage Tests
# ============================================================================


class TestTemporary:
    """Tests for mktempdir and mktempfile."""

    def test_mktempdir(self):
        """Test creating a temporary directory."""
        path = Path(mktempdir())
        try:
            assert path.is_dir()
            assert path.name.startswith("fskit_")
        finally:
            rmdir(path)

    def test_mktempfile(self):
        """Test creating a temporary file with an extension."""
        path = Path(mktempfile(".txt"))
        try:
            assert path.is_file()
            assert path.suffix == ".txt"
            assert path.stat().st_size == 0
        finally:
            rmdir(path.parent)

    @pytest.mark.asyncio
    async def test_async(self):
        """Test the async temporary helpers."""
        directory = Path(await mktempdir_async(prefix="fskit_test_"))
        file_path = Path(await mktempfile_async(".log"))
        try:
            assert directory.is_dir()
            assert file_path.is_file()
        finally:
            rmdir(directory)
            rmdir(file_path.parent)


class TestDiskUsage:
    """Tests for disk_usage."""

    def test_used_bytes(self, temp_dir):
        """Test that used space is a non-negative integer."""
        used = disk_usage(temp_dir)
        assert isinstance(used, int)
        assert used >= 0

    def test_default_path(self):
        """Test that the default path is queryable."""
        assert disk_usage() >= 0

    def test_missing_path(self, temp_dir):
        """Test that a missing path raises an fskit error."""
        from fskit.core.exceptions import MetadataUnavailableError

        with pytest.raises(MetadataUnavailableError):
            disk_usage(temp_dir / "missing")
