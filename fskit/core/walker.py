"""
Directory size aggregation.

Traversal uses an explicit worklist instead of recursion, so deeply nested
trees cannot exhaust the call stack. Symbolic links are handled according to
a caller-selected ``SymlinkPolicy``:

- ``SKIP`` (default): links are never followed and never counted. Contents
  reached only through a link are excluded from the total, which makes the
  result an undercount for trees that use links but guarantees termination.
- ``FOLLOW_ONCE``: links are followed, and every directory is visited at most
  once (keyed by device and inode), so link cycles still terminate.

Any failure to list a directory or read an entry's metadata aborts the whole
call; there are no partial results.
"""

import errno
import logging
import os
import stat
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set, Tuple

import aiofiles.os

from fskit.core.exceptions import (
    FileReadError,
    MetadataUnavailableError,
    PathNotFoundError,
)
from fskit.core.paths import PathInput

logger = logging.getLogger(__name__)


class SymlinkPolicy(str, Enum):
    """How ``get_directory_size`` treats symbolic links."""

    SKIP = "skip"
    FOLLOW_ONCE = "follow_once"


@dataclass
class _DirSizeAccumulator:
    """Worklist and running total for a single traversal."""

    policy: SymlinkPolicy
    pending: List[str] = field(default_factory=list)
    visited: Set[Tuple[int, int]] = field(default_factory=set)
    total: int = 0

    def push(self, path: str, st: Optional[os.stat_result] = None) -> None:
        if self.policy is SymlinkPolicy.FOLLOW_ONCE and st is not None:
            key = (st.st_dev, st.st_ino)
            if key in self.visited:
                return
            self.visited.add(key)
        self.pending.append(path)

    def add(self, path: str, st: os.stat_result) -> None:
        """Account for one directory entry."""
        if stat.S_ISREG(st.st_mode):
            self.total += st.st_size
        elif stat.S_ISDIR(st.st_mode):
            self.push(path, st)
        # Links (under SKIP), sockets, fifos and devices contribute nothing


def _listing_error(path: str, e: OSError) -> Exception:
    if isinstance(e, FileNotFoundError):
        return PathNotFoundError(path, f"Directory not found: {path}")
    return FileReadError(path, f"Failed to list directory {path}: {e}")


def _metadata_error(path: str, e: OSError) -> Exception:
    return MetadataUnavailableError(path, f"Cannot read metadata of {path}: {e}")


def _is_unresolvable_link(e: OSError) -> bool:
    return isinstance(e, FileNotFoundError) or e.errno == errno.ELOOP


# ============================================================================
# Blocking Form
# ============================================================================


def _follow_link(path: str) -> Optional[os.stat_result]:
    try:
        return os.stat(path)
    except OSError as e:
        if _is_unresolvable_link(e):
            logger.debug(f"Skipping dangling symlink: {path}")
            return None
        raise _metadata_error(path, e) from e


def get_directory_size(
    path: PathInput, policy: SymlinkPolicy = SymlinkPolicy.SKIP
) -> int:
    """
    Calculate the total size of all regular files under a directory.

    Args:
        path: Directory to measure (used as given, not canonicalized)
        policy: How symbolic links are treated

    Returns:
        Total size in bytes

    Raises:
        PathNotFoundError: If a directory disappears or ``path`` does not exist
        FileReadError: If a directory cannot be listed
        MetadataUnavailableError: If an entry's metadata cannot be read

    Example:
        >>> get_directory_size("sample_dir")
        18
        >>> get_directory_size("sample_dir", policy=SymlinkPolicy.FOLLOW_ONCE)
        118
    """
    root = os.fspath(path)
    policy = SymlinkPolicy(policy)
    acc = _DirSizeAccumulator(policy)

    root_stat = None
    if policy is SymlinkPolicy.FOLLOW_ONCE:
        try:
            root_stat = os.stat(root)
        except OSError as e:
            raise _listing_error(root, e) from e
    acc.push(root, root_stat)

    while acc.pending:
        current = acc.pending.pop()
        try:
            names = os.listdir(current)
        except OSError as e:
            raise _listing_error(current, e) from e

        for name in names:
            entry = os.path.join(current, name)
            try:
                st = os.lstat(entry)
            except OSError as e:
                raise _metadata_error(entry, e) from e

            if stat.S_ISLNK(st.st_mode) and policy is SymlinkPolicy.FOLLOW_ONCE:
                st = _follow_link(entry)
                if st is None:
                    continue

            acc.add(entry, st)

    logger.debug(f"Directory size of {root}: {acc.total} bytes")
    return acc.total


# ============================================================================
# Async Form
# ============================================================================


async def _follow_link_async(path: str) -> Optional[os.stat_result]:
    try:
        return await aiofiles.os.stat(path)
    except OSError as e:
        if _is_unresolvable_link(e):
            logger.debug(f"Skipping dangling symlink: {path}")
            return None
        raise _metadata_error(path, e) from e


async def get_directory_size_async(
    path: PathInput, policy: SymlinkPolicy = SymlinkPolicy.SKIP
) -> int:
    """
    Async form of ``get_directory_size``.

    Suspends at every directory listing and metadata fetch. Cancelling the
    task discards the partial total.
    """
    root = os.fspath(path)
    policy = SymlinkPolicy(policy)
    acc = _DirSizeAccumulator(policy)

    root_stat = None
    if policy is SymlinkPolicy.FOLLOW_ONCE:
        try:
            root_stat = await aiofiles.os.stat(root)
        except OSError as e:
            raise _listing_error(root, e) from e
    acc.push(root, root_stat)

    while acc.pending:
        current = acc.pending.pop()
        try:
            names = await aiofiles.os.listdir(current)
        except OSError as e:
            raise _listing_error(current, e) from e

        for name in names:
            entry = os.path.join(current, name)
            try:
                st = await aiofiles.os.stat(entry, follow_symlinks=False)
            except OSError as e:
                raise _metadata_error(entry, e) from e

            if stat.S_ISLNK(st.st_mode) and policy is SymlinkPolicy.FOLLOW_ONCE:
                st = await _follow_link_async(entry)
                if st is None:
                    continue

            acc.add(entry, st)

    logger.debug(f"Directory size of {root}: {acc.total} bytes")
    return acc.total


__all__ = [
    "SymlinkPolicy",
    "get_directory_size",
    "get_directory_size_async",
]
