"""
Unit tests for streaming content hashing.
"""

import asyncio
import builtins
import errno
import hashlib
import os

import aiofiles
import pytest

from fskit.core import hashing
from fskit.core.exceptions import FileReadError, NotAFileError, PathNotFoundError
from fskit.core.hashing import DEFAULT_CHUNK_SIZE, hash_file, hash_file_async

SHA256_EMPTY = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
SHA256_HELLO = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"


# ============================================================================
# Helpers
# ============================================================================


class _FailingReader:
    """File wrapper whose second read fails with EIO."""

    def __init__(self, f):
        self._f = f
        self.reads = 0

    @property
    def closed(self):
        return self._f.closed

    def read(self, size=-1):
        self.reads += 1
        if self.reads > 1:
            raise OSError(errno.EIO, "Input/output error")
        return self._f.read(size)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self._f.close()


class _FailingAsyncReader(_FailingReader):
    """Async counterpart of ``_FailingReader``."""

    async def read(self, size=-1):
        return _FailingReader.read(self, size)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self._f.close()


def _open_handles_to(path):
    """Return the descriptors of this process that point at ``path``."""
    fd_dir = "/proc/self/fd"
    target = os.path.realpath(path)
    handles = []
    for fd in os.listdir(fd_dir):
        try:
            if os.readlink(os.path.join(fd_dir, fd)) == target:
                handles.append(fd)
        except OSError:
            continue
    return handles


@pytest.fixture
def large_file(temp_dir):
    """Create a 1 MiB file."""
    path = temp_dir / "large.bin"
    path.write_bytes(os.urandom(1024 * 1024))
    return path


class TestHashFile:
    """Tests for hash_file."""

    def test_empty_file(self, temp_dir):
        """Test the SHA-256 vector for empty content."""
        path = temp_dir / "empty"
        path.write_bytes(b"")
        assert hash_file(path) == SHA256_EMPTY

    def test_hello(self, sample_file):
        """Test the SHA-256 vector for 'hello'."""
        digest = hash_file(sample_file)
        assert digest == SHA256_HELLO
        assert len(digest) == 64
        assert digest == digest.lower()

    def test_deterministic(self, sample_file):
        """Test that hashing twice yields the same digest."""
        assert hash_file(sample_file) == hash_file(sample_file)

    def test_chunk_size_does_not_change_digest(self, temp_dir):
        """Test that the digest is independent of the read chunk size."""
        path = temp_dir / "data.bin"
        data = bytes(range(256)) * 100
        path.write_bytes(data)
        expected = hashlib.sha256(data).hexdigest()

        for chunk_size in [1, 7, 256, DEFAULT_CHUNK_SIZE, len(data) + 1]:
            assert hash_file(path, chunk_size=chunk_size) == expected

    def test_content_larger_than_chunk(self, temp_dir):
        """Test a file spanning several chunks."""
        path = temp_dir / "large.bin"
        data = b"x" * (DEFAULT_CHUNK_SIZE * 3 + 17)
        path.write_bytes(data)
        assert hash_file(path) == hashlib.sha256(data).hexdigest()

    def test_other_algorithm(self, sample_file):
        """Test hashing with md5."""
        assert hash_file(sample_file, "md5") == hashlib.md5(b"hello").hexdigest()

    def test_unsupported_algorithm(self, sample_file):
        """Test that an unknown algorithm raises ValueError."""
        with pytest.raises(ValueError, match="Unsupported hash algorithm"):
            hash_file(sample_file, "not-a-hash")

    def test_invalid_chunk_size(self, sample_file):
        """Test that a non-positive chunk size raises ValueError."""
        with pytest.raises(ValueError):
            hash_file(sample_file, chunk_size=0)

    def test_missing_file(self, temp_dir):
        """Test that a missing file raises PathNotFoundError."""
        with pytest.raises(PathNotFoundError):
            hash_file(temp_dir / "missing.txt")

    def test_directory(self, temp_dir):
        """Test that a directory raises NotAFileError."""
        with pytest.raises(NotAFileError):
            hash_file(temp_dir)

    def test_embedded_nul_byte(self):
        """Test that an unrepresentable path raises PathNotFoundError."""
        with pytest.raises(PathNotFoundError):
            hash_file("a\0b")

    def test_read_failure_mid_stream(self, large_file, monkeypatch):
        """Test that a failing read raises FileReadError and closes the file."""
        real_open = builtins.open
        readers = []

        def failing_open(path, mode="r", *args, **kwargs):
            reader = _FailingReader(real_open(path, mode, *args, **kwargs))
            readers.append(reader)
            return reader

        monkeypatch.setattr(hashing, "open", failing_open, raising=False)

        with pytest.raises(FileReadError) as exc_info:
            hash_file(large_file, chunk_size=1024)

        assert isinstance(exc_info.value.__cause__, OSError)
        assert len(readers) == 1
        assert readers[0].reads == 2
        assert readers[0].closed


class TestHashFileAsync:
    """Tests for hash_file_async."""

    @pytest.mark.asyncio
    async def test_hello(self, sample_file):
        """Test the SHA-256 vector for 'hello'."""
        assert await hash_file_async(sample_file) == SHA256_HELLO

    @pytest.mark.asyncio
    async def test_matches_sync(self, temp_dir):
        """Test that async and blocking forms agree."""
        path = temp_dir / "data.bin"
        path.write_bytes(b"0123456789" * 5000)
        assert await hash_file_async(path, chunk_size=333) == hash_file(path)

    @pytest.mark.asyncio
    async def test_missing_file(self, temp_dir):
        """Test that a missing file raises PathNotFoundError."""
        with pytest.raises(PathNotFoundError):
            await hash_file_async(temp_dir / "missing.txt")

    @pytest.mark.asyncio
    async def test_directory(self, temp_dir):
        """Test that a directory raises NotAFileError."""
        with pytest.raises(NotAFileError):
            await hash_file_async(temp_dir)

    @pytest.mark.asyncio
    async def test_embedded_nul_byte(self):
        """Test that an unrepresentable path raises PathNotFoundError."""
        with pytest.raises(PathNotFoundError):
            await hash_file_async("a\0b")

    @pytest.mark.asyncio
    async def test_read_failure_mid_stream(self, large_file, monkeypatch):
        """Test that a failing async read raises FileReadError."""
        real_open = builtins.open
        readers = []

        def failing_open(path, mode="r", *args, **kwargs):
            reader = _FailingAsyncReader(real_open(path, mode, *args, **kwargs))
            readers.append(reader)
            return reader

        monkeypatch.setattr(aiofiles, "open", failing_open)

        with pytest.raises(FileReadError):
            await hash_file_async(large_file, chunk_size=1024)

        assert readers[0].reads == 2
        assert readers[0].closed

    @pytest.mark.asyncio
    async def test_cancellation(self, large_file):
        """Test that cancelling raises CancelledError and produces no digest."""
        task = asyncio.create_task(hash_file_async(large_file, chunk_size=1))
        await asyncio.sleep(0.05)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert task.cancelled()

    @pytest.mark.asyncio
    @pytest.mark.skipif(
        not os.path.isdir("/proc/self/fd"), reason="Needs /proc/self/fd"
    )
    async def test_cancellation_releases_handle(self, large_file):
        """Test that the file handle is closed once the task is cancelled."""
        task = asyncio.create_task(hash_file_async(large_file, chunk_size=1))
        for _ in range(500):
            if _open_handles_to(large_file):
                break
            await asyncio.sleep(0.01)
        assert _open_handles_to(large_file)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert _open_handles_to(large_file) == []
