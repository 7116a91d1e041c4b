"""
Streaming content hashing.

Files are read in fixed-size chunks and folded into a ``hashlib`` hasher, so
memory use is bounded by the chunk size regardless of file size. The digest
depends only on the file's bytes; chunk size never changes the result.
"""

import hashlib
import logging
import os

import aiofiles
import aiofiles.os

from fskit.core.exceptions import FileReadError, NotAFileError
from fskit.core.paths import PathInput, get_real_path, get_real_path_async

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "sha256"
DEFAULT_CHUNK_SIZE = 8192


def _new_hasher(algorithm: str, chunk_size: int):
    if chunk_size <= 0:
        raise ValueError(f"Chunk size must be positive: {chunk_size}")

    try:
        hasher = hashlib.new(algorithm.lower())
    except ValueError as e:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}") from e

    # Extendable-output functions (shake_*) have no fixed digest length
    if hasher.digest_size == 0:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")

    return hasher


def hash_file(
    path: PathInput,
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """
    Digest the content of a file.

    The path is canonicalized first, so links are followed and a missing
    path fails before any hashing starts. The file is streamed through the
    hasher ``chunk_size`` bytes at a time; the digest does not depend on it.

    Args:
        path: File to digest
        algorithm: Any name accepted by ``hashlib.new``
        chunk_size: Bytes per read, must be positive

    Returns:
        Lowercase hex digest (64 characters for sha256)

    Raises:
        PathNotFoundError: If the path does not exist or cannot be resolved
        NotAFileError: If the canonical path is a directory
        FileReadError: If a read fails; no digest is returned
        ValueError: If the algorithm or chunk size is not supported

    Example:
        >>> hash_file("empty.txt")
        'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'
    """
    hasher = _new_hasher(algorithm, chunk_size)
    real_path = get_real_path(path)

    if os.path.isdir(real_path):
        raise NotAFileError(real_path, f"Cannot hash a directory: {real_path}")

    try:
        with open(real_path, "rb") as f:
            while chunk := f.read(chunk_size):
                hasher.update(chunk)
    except OSError as e:
        raise FileReadError(
            real_path, f"Failed to read from file for hashing: {real_path}"
        ) from e

    logger.debug(f"{algorithm} of {real_path}: {hasher.hexdigest()}")
    return hasher.hexdigest()


async def hash_file_async(
    path: PathInput,
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """
    Async form of ``hash_file``.

    Suspends at the open and at every chunk read. If the task is cancelled
    the file handle is closed and no digest is produced.
    """
    hasher = _new_hasher(algorithm, chunk_size)
    real_path = await get_real_path_async(path)

    if await aiofiles.os.path.isdir(real_path):
        raise NotAFileError(real_path, f"Cannot hash a directory: {real_path}")

    try:
        async with aiofiles.open(real_path, "rb") as f:
            while chunk := await f.read(chunk_size):
                hasher.update(chunk)
    except OSError as e:
        raise FileReadError(
            real_path, f"Failed to read from file for async hashing: {real_path}"
        ) from e

    logger.debug(f"{algorithm} of {real_path}: {hasher.hexdigest()}")
    return hasher.hexdigest()


__all__ = [
    "DEFAULT_ALGORITHM",
    "DEFAULT_CHUNK_SIZE",
    "hash_file",
    "hash_file_async",
]
