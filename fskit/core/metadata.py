"""
File metadata and existence predicates.

``stat`` canonicalizes its argument first, so the target must exist. The
predicates (``exists``, ``is_file``, ``is_dir``, ``is_symlink``) never raise
and report ``False`` for anything they cannot inspect.
"""

import logging
import os
import stat as stat_module
from dataclasses import dataclass

import aiofiles.os

from fskit.core.exceptions import MetadataUnavailableError, PathNotFoundError
from fskit.core.paths import (
    PathInput,
    get_real_path,
    get_real_path_async,
    normalize_path,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Metadata:
    """
    Metadata of a filesystem entry.

    Attributes:
        path: Canonical path the metadata was read from
        is_file: Entry (or its link target) is a regular file
        is_dir: Entry (or its link target) is a directory
        is_symlink: Entry itself is a symbolic link
        length: Size in bytes of the entry (or its link target)
        mode: Platform permission bits
    """

    path: str
    is_file: bool
    is_dir: bool
    is_symlink: bool
    length: int
    mode: int

    @classmethod
    def from_stat(
        cls, path: str, st: os.stat_result, lst: os.stat_result
    ) -> "Metadata":
        return cls(
            path=path,
            is_file=stat_module.S_ISREG(st.st_mode),
            is_dir=stat_module.S_ISDIR(st.st_mode),
            is_symlink=stat_module.S_ISLNK(lst.st_mode),
            length=st.st_size,
            mode=stat_module.S_IMODE(st.st_mode),
        )


def _metadata_error(path: str, e: OSError) -> Exception:
    if isinstance(e, FileNotFoundError):
        return PathNotFoundError(path)
    return MetadataUnavailableError(path, f"Cannot read metadata of {path}: {e}")


def stat(path: PathInput) -> Metadata:
    """
    Get metadata of an existing path.

    Type and size follow symbolic links; ``is_symlink`` describes the
    entry itself.

    Args:
        path: Path to inspect (must exist)

    Returns:
        Metadata record

    Raises:
        PathNotFoundError: If the path does not exist
        MetadataUnavailableError: If metadata cannot be read

    Example:
        >>> stat("README.md").length
        1024
    """
    real_path = get_real_path(path)
    normalized = normalize_path(path)

    try:
        st = os.stat(real_path)
        lst = os.lstat(normalized)
    except OSError as e:
        raise _metadata_error(real_path, e) from e

    return Metadata.from_stat(real_path, st, lst)


async def stat_async(path: PathInput) -> Metadata:
    """Async form of ``stat``."""
    real_path = await get_real_path_async(path)
    normalized = normalize_path(path)

    try:
        st = await aiofiles.os.stat(real_path)
        lst = await aiofiles.os.stat(normalized, follow_symlinks=False)
    except OSError as e:
        raise _metadata_error(real_path, e) from e

    return Metadata.from_stat(real_path, st, lst)


def get_file_size(path: PathInput) -> int:
    """
    Get the size of a file in bytes, following symbolic links.

    Raises:
        PathNotFoundError: If the path does not exist
        MetadataUnavailableError: If metadata cannot be read
    """
    normalized = normalize_path(path)
    try:
        return os.stat(normalized).st_size
    except OSError as e:
        raise _metadata_error(normalized, e) from e


async def get_file_size_async(path: PathInput) -> int:
    """Async form of ``get_file_size``."""
    normalized = normalize_path(path)
    try:
        st = await aiofiles.os.stat(normalized)
    except OSError as e:
        raise _metadata_error(normalized, e) from e
    return st.st_size


# ============================================================================
# Predicates
# ============================================================================


def _try_stat(path: PathInput, follow_symlinks: bool = True):
    try:
        return os.stat(normalize_path(path), follow_symlinks=follow_symlinks)
    except (OSError, ValueError):
        return None


def exists(path: PathInput) -> bool:
    """Check if a file or directory exists."""
    return _try_stat(path) is not None


def is_file(path: PathInput) -> bool:
    """Check if path exists and is a regular file."""
    st = _try_stat(path)
    return st is not None and stat_module.S_ISREG(st.st_mode)


def is_dir(path: PathInput) -> bool:
    """Check if path exists and is a directory."""
    st = _try_stat(path)
    return st is not None and stat_module.S_ISDIR(st.st_mode)


def is_symlink(path: PathInput) -> bool:
    """Check if path is a symbolic link (dangling links included)."""
    st = _try_stat(path, follow_symlinks=False)
    return st is not None and stat_module.S_ISLNK(st.st_mode)


async def exists_async(path: PathInput) -> bool:
    return bool(await aiofiles.os.path.exists(normalize_path(path)))


async def is_file_async(path: PathInput) -> bool:
    return bool(await aiofiles.os.path.isfile(normalize_path(path)))


async def is_dir_async(path: PathInput) -> bool:
    return bool(await aiofiles.os.path.isdir(normalize_path(path)))


async def is_symlink_async(path: PathInput) -> bool:
    return bool(await aiofiles.os.path.islink(normalize_path(path)))


__all__ = [
    "Metadata",
    "stat",
    "stat_async",
    "get_file_size",
    "get_file_size_async",
    "exists",
    "is_file",
    "is_dir",
    "is_symlink",
    "exists_async",
    "is_file_async",
    "is_dir_async",
    "is_symlink_async",
]
