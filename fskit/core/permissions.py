"""
Permission changes from octal mode strings.

The mode string (e.g. ``"755"``) is parsed once at the boundary into a
platform-specific ``PermissionMode``:

- POSIX: ``BitmaskMode`` applied verbatim with ``os.chmod``.
- Windows: ``ReadonlyFlagMode``. Windows has no per-bit permissions, so only
  the read-only/writable distinction survives. The file becomes read-only
  when none of the ``0o444`` read bits are set, and writable otherwise.

The two platforms therefore do not behave identically for the same mode
string: ``"600"`` restricts group/other access on POSIX but only means
"writable" on Windows.
"""

import logging
import os
import stat
from dataclasses import dataclass
from typing import Optional, Union

from fskit.core.exceptions import (
    FileWriteError,
    InvalidPermissionModeError,
    PathNotFoundError,
)
from fskit.core.paths import PathInput, PathStyle, resolve_style

logger = logging.getLogger(__name__)

_WRITE_BITS = stat.S_IWUSR | stat.S_IWGRP | stat.S_IWOTH


@dataclass(frozen=True)
class BitmaskMode:
    """POSIX permission bits."""

    value: int


@dataclass(frozen=True)
class ReadonlyFlagMode:
    """Windows read-only attribute."""

    readonly: bool


PermissionMode = Union[BitmaskMode, ReadonlyFlagMode]


def parse_mode(
    mode: str, style: Optional[PathStyle] = None, path: str = ""
) -> PermissionMode:
    """
    Parse an octal permission string for the target platform.

    Args:
        mode: Octal digits, e.g. "755" or "0644"
        style: 'posix' or 'windows' (default: current platform)
        path: Path the mode is meant for (used in error messages)

    Returns:
        BitmaskMode on POSIX, ReadonlyFlagMode on Windows

    Raises:
        InvalidPermissionModeError: If ``mode`` is not a valid octal mode

    Example:
        >>> parse_mode("755", style="posix")
        BitmaskMode(value=493)
        >>> parse_mode("444", style="windows")
        ReadonlyFlagMode(readonly=False)
    """
    text = mode.strip()
    if not text or any(c not in "01234567" for c in text):
        raise InvalidPermissionModeError(path, mode)

    value = int(text, 8)
    if value > 0o7777:
        raise InvalidPermissionModeError(path, mode)

    if resolve_style(style) == "windows":
        return ReadonlyFlagMode(readonly=(value & 0o444) == 0)
    return BitmaskMode(value)


def apply_mode(path: PathInput, permission: PermissionMode) -> None:
    """
    Apply a parsed permission mode to a path.

    Raises:
        PathNotFoundError: If the path does not exist
        FileWriteError: If permissions cannot be changed
    """
    target = os.fspath(path)

    try:
        if isinstance(permission, BitmaskMode):
            os.chmod(target, permission.value)
        else:
            current = stat.S_IMODE(os.stat(target).st_mode)
            if permission.readonly:
                os.chmod(target, current & ~_WRITE_BITS)
            else:
                os.chmod(target, current | stat.S_IWUSR)
    except FileNotFoundError as e:
        raise PathNotFoundError(target) from e
    except OSError as e:
        raise FileWriteError(
            target, f"Failed to set file permissions on {target}: {e}"
        ) from e

    logger.debug(f"Applied {permission} to {target}")


def chmod(mode: str, path: PathInput) -> None:
    """
    Change permissions of a file from an octal mode string.

    Args:
        mode: Octal permission mode string (e.g. "755")
        path: Path to the file to modify

    Raises:
        InvalidPermissionModeError: If ``mode`` is invalid
        PathNotFoundError: If the path does not exist
        FileWriteError: If permissions cannot be changed

    Example:
        >>> chmod("755", "build/run.sh")
    """
    target = os.fspath(path)
    apply_mode(target, parse_mode(mode, path=target))


__all__ = [
    "BitmaskMode",
    "ReadonlyFlagMode",
    "PermissionMode",
    "parse_mode",
    "apply_mode",
    "chmod",
]
