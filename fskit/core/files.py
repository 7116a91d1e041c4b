"""
File and directory operations.

Thin wrappers over the platform that translate ``OSError`` into the typed
fskit errors. Blocking forms use the builtin ``open``/``os``/``shutil``;
async forms use ``aiofiles`` and fall back to the default executor for calls
``aiofiles`` does not wrap (``shutil.rmtree``, ``tempfile``).
"""

import asyncio
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

import aiofiles
import aiofiles.os

from fskit.core.exceptions import (
    FileReadError,
    FileWriteError,
    MetadataUnavailableError,
    NotAFileError,
    ParentNotADirectoryError,
    PathNotFoundError,
)
from fskit.core.paths import PathInput, normalize_path

logger = logging.getLogger(__name__)

Content = Union[str, bytes]


def _read_error(path: str, e: Exception) -> Exception:
    if isinstance(e, FileNotFoundError):
        return PathNotFoundError(path)
    if isinstance(e, IsADirectoryError):
        return NotAFileError(path)
    return FileReadError(path, f"Failed to read file {path}: {e}")


def _write_error(path: str, e: Exception) -> Exception:
    if isinstance(e, NotADirectoryError):
        return ParentNotADirectoryError(path)
    if isinstance(e, IsADirectoryError):
        return NotAFileError(path)
    return FileWriteError(path, f"Failed to write {path}: {e}")


def _mode_for(content: Content, mode: str) -> str:
    return mode + "b" if isinstance(content, bytes) else mode


# ============================================================================
# Reading
# ============================================================================


def read_file(path: PathInput, encoding: str = "utf-8") -> str:
    """
    Read a text file.

    Raises:
        PathNotFoundError: If the file does not exist
        FileReadError: If reading or decoding fails
    """
    target = os.fspath(path)
    try:
        with open(target, "r", encoding=encoding) as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise _read_error(target, e) from e


async def read_file_async(path: PathInput, encoding: str = "utf-8") -> str:
    """Async form of ``read_file``."""
    target = os.fspath(path)
    try:
        async with aiofiles.open(target, "r", encoding=encoding) as f:
            return await f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise _read_error(target, e) from e


def read_bytes(path: PathInput) -> bytes:
    """Read a file as bytes."""
    target = os.fspath(path)
    try:
        with open(target, "rb") as f:
            return f.read()
    except OSError as e:
        raise _read_error(target, e) from e


async def read_bytes_async(path: PathInput) -> bytes:
    """Async form of ``read_bytes``."""
    target = os.fspath(path)
    try:
        async with aiofiles.open(target, "rb") as f:
            return await f.read()
    except OSError as e:
        raise _read_error(target, e) from e


# ============================================================================
# Writing
# ============================================================================


def write_file(path: PathInput, content: Content, encoding: str = "utf-8") -> None:
    """
    Write content to a file, creating or truncating it.

    Args:
        path: Path to write to
        content: Text or bytes to write
        encoding: Text encoding (used only for string content)

    Raises:
        FileWriteError: If the file cannot be written
        ParentNotADirectoryError: If a parent of the path is a file
    """
    target = os.fspath(path)
    mode = _mode_for(content, "w")
    try:
        if isinstance(content, bytes):
            with open(target, mode) as f:
                f.write(content)
        else:
            with open(target, mode, encoding=encoding) as f:
                f.write(content)
    except OSError as e:
        raise _write_error(target, e) from e

    logger.debug(f"Wrote file: {target}")


async def write_file_async(
    path: PathInput, content: Content, encoding: str = "utf-8"
) -> None:
    """Async form of ``write_file``."""
    target = os.fspath(path)
    mode = _mode_for(content, "w")
    try:
        if isinstance(content, bytes):
            async with aiofiles.open(target, mode) as f:
                await f.write(content)
        else:
            async with aiofiles.open(target, mode, encoding=encoding) as f:
                await f.write(content)
    except OSError as e:
        raise _write_error(target, e) from e


def append_file(path: PathInput, content: Content, encoding: str = "utf-8") -> None:
    """Append content to a file, creating it if missing."""
    target = os.fspath(path)
    mode = _mode_for(content, "a")
    try:
        if isinstance(content, bytes):
            with open(target, mode) as f:
                f.write(content)
        else:
            with open(target, mode, encoding=encoding) as f:
                f.write(content)
    except OSError as e:
        raise _write_error(target, e) from e


async def append_file_async(
    path: PathInput, content: Content, encoding: str = "utf-8"
) -> None:
    """Async form of ``append_file``."""
    target = os.fspath(path)
    mode = _mode_for(content, "a")
    try:
        if isinstance(content, bytes):
            async with aiofiles.open(target, mode) as f:
                await f.write(content)
        else:
            async with aiofiles.open(target, mode, encoding=encoding) as f:
                await f.write(content)
    except OSError as e:
        raise _write_error(target, e) from e


# ============================================================================
# JSON
# ============================================================================


def _parse_json(path: str, text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise FileReadError(path, f"Failed to parse JSON from file {path}: {e}") from e


def _dump_json(path: str, data: Any) -> str:
    try:
        return json.dumps(data, indent=2)
    except (TypeError, ValueError) as e:
        raise FileWriteError(
            path, f"Failed to serialize data to JSON for file {path}: {e}"
        ) from e


def read_json(path: PathInput) -> Any:
    """
    Read and parse a JSON file.

    Raises:
        PathNotFoundError: If the file does not exist
        FileReadError: If the file cannot be read or is not valid JSON

    Example:
        >>> read_json("package.json")["name"]
        'my-package'
    """
    target = os.fspath(path)
    return _parse_json(target, read_file(target))


async def read_json_async(path: PathInput) -> Any:
    """Async form of ``read_json``."""
    target = os.fspath(path)
    return _parse_json(target, await read_file_async(target))


def write_json(path: PathInput, data: Any) -> None:
    """
    Serialize ``data`` as pretty-printed JSON (2-space indent) into a file.

    Raises:
        FileWriteError: If serialization or writing fails
    """
    target = os.fspath(path)
    write_file(target, _dump_json(target, data))


async def write_json_async(path: PathInput, data: Any) -> None:
    """Async form of ``write_json``."""
    target = os.fspath(path)
    await write_file_async(target, _dump_json(target, data))


# ============================================================================
# Files
# ============================================================================


def create_file(path: PathInput) -> None:
    """
    Create an empty file if it does not exist, creating parent directories.

    An existing file is left untouched.

    Raises:
        NotAFileError: If the path exists but is not a file
        ParentNotADirectoryError: If an existing parent is not a directory
        FileWriteError: If creation fails
    """
    target = Path(normalize_path(path))

    if target.exists():
        if target.is_file():
            return
        raise NotAFileError(
            str(target), f"Path {target} already exists and is not a file"
        )

    parent = target.parent
    if parent.exists() and not parent.is_dir():
        raise ParentNotADirectoryError(
            str(target), f"Parent path {parent} for {target} is not a directory"
        )

    try:
        parent.mkdir(parents=True, exist_ok=True)
        target.touch()
    except (FileExistsError, NotADirectoryError) as e:
        raise ParentNotADirectoryError(
            str(target), f"A parent of {target} is not a directory"
        ) from e
    except OSError as e:
        raise FileWriteError(str(target), f"Unable to create file {target}: {e}") from e

    logger.debug(f"Created file: {target}")


def unlink(path: PathInput) -> None:
    """
    Delete a file or symbolic link.

    A symbolic link is removed itself; its target is left alone.

    Raises:
        PathNotFoundError: If nothing exists at the path
        NotAFileError: If the path is a directory
        FileWriteError: If removal fails
    """
    target = normalize_path(path)

    if not os.path.lexists(target):
        raise PathNotFoundError(target)
    if os.path.isdir(target) and not os.path.islink(target):
        raise NotAFileError(target, f"Cannot unlink a directory: {target}")

    try:
        os.remove(target)
    except OSError as e:
        raise FileWriteError(target, f"Failed to remove file {target}: {e}") from e


def soft_link(target: PathInput, link_path: PathInput) -> None:
    """
    Create a symbolic link at ``link_path`` pointing to ``target``.

    Raises:
        FileWriteError: If the link cannot be created
    """
    source = os.fspath(target)
    link = os.fspath(link_path)
    try:
        os.symlink(source, link, target_is_directory=os.path.isdir(source))
    except OSError as e:
        raise FileWriteError(
            link, f"Failed to create symlink from {source} to {link}: {e}"
        ) from e


# ============================================================================
# Directories
# ============================================================================


def _mkdir_error(path: str, e: OSError) -> Exception:
    if isinstance(e, NotADirectoryError):
        return ParentNotADirectoryError(path)
    return FileWriteError(path, f"Failed to create directory {path}: {e}")


def mkdir(path: PathInput, recursive: bool = False) -> None:
    """
    Create a directory.

    Args:
        path: Directory to create
        recursive: If True, create missing parents and accept an existing
            directory

    Raises:
        ParentNotADirectoryError: If a parent is a file
        FileWriteError: If creation fails (including an existing path when
            not recursive)
    """
    target = os.fspath(path)
    try:
        if recursive:
            os.makedirs(target, exist_ok=True)
        else:
            os.mkdir(target)
    except OSError as e:
        raise _mkdir_error(target, e) from e

    logger.debug(f"Created directory: {target}")


async def mkdir_async(path: PathInput, recursive: bool = True) -> None:
    """Async form of ``mkdir``; recursive by default."""
    target = os.fspath(path)
    try:
        if recursive:
            await aiofiles.os.makedirs(target, exist_ok=True)
        else:
            await aiofiles.os.mkdir(target)
    except OSError as e:
        raise _mkdir_error(target, e) from e


def _rmdir_error(path: str, e: OSError) -> Exception:
    if isinstance(e, FileNotFoundError):
        return PathNotFoundError(path)
    return FileWriteError(path, f"Failed to remove directory {path}: {e}")


def rmdir(path: PathInput, recursive: bool = True) -> None:
    """
    Remove a directory.

    Args:
        path: Directory to remove
        recursive: If True, remove the whole tree; otherwise the directory
            must be empty

    Raises:
        PathNotFoundError: If the directory does not exist
        FileWriteError: If removal fails
    """
    target = os.fspath(path)
    try:
        if recursive:
            shutil.rmtree(target)
        else:
            os.rmdir(target)
    except OSError as e:
        raise _rmdir_error(target, e) from e

    logger.debug(f"Removed directory: {target}")


async def rmdir_async(path: PathInput, recursive: bool = True) -> None:
    """Async form of ``rmdir``."""
    target = os.fspath(path)
    try:
        if recursive:
            # shutil.rmtree is blocking, run in executor
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, shutil.rmtree, target)
        else:
            await aiofiles.os.rmdir(target)
    except OSError as e:
        raise _rmdir_error(target, e) from e


# ============================================================================
# Temporary Files
# ============================================================================


def mktempdir(prefix: str = "fskit_") -> str:
    """
    Create a temporary directory that is kept after the call.

    Returns:
        Path of the new directory

    Raises:
        FileWriteError: If the directory cannot be created
    """
    try:
        return tempfile.mkdtemp(prefix=prefix)
    except OSError as e:
        raise FileWriteError(
            tempfile.gettempdir(), f"Failed to create temp directory: {e}"
        ) from e


def mktempfile(ext: str = "", prefix: str = "fskit_") -> str:
    """
    Create an empty temporary file inside a new temporary directory.

    Args:
        ext: Suffix appended to the generated file name (e.g. ".txt")
        prefix: Prefix for the directory and file names

    Returns:
        Path of the new file
    """
    directory = mktempdir(prefix)
    try:
        fd, file_path = tempfile.mkstemp(suffix=ext, prefix=prefix, dir=directory)
    except OSError as e:
        raise FileWriteError(directory, f"Failed to create temp file: {e}") from e
    os.close(fd)
    return file_path


async def mktempdir_async(prefix: str = "fskit_") -> str:
    """Async form of ``mktempdir``."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, mktempdir, prefix)


async def mktempfile_async(ext: str = "", prefix: str = "fskit_") -> str:
    """Async form of ``mktempfile``."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, mktempfile, ext, prefix)


# ============================================================================
# Disk Usage
# ============================================================================


def disk_usage(path: Optional[PathInput] = None) -> int:
    """
    Get used space in bytes on the filesystem holding ``path``.

    Args:
        path: Any path on the filesystem (default: root of the current drive)

    Raises:
        MetadataUnavailableError: If usage cannot be queried
    """
    target = os.fspath(path) if path is not None else os.path.abspath(os.sep)
    try:
        return shutil.disk_usage(target).used
    except OSError as e:
        raise MetadataUnavailableError(
            target, f"Failed to get disk info for {target}: {e}"
        ) from e


__all__ = [
    "read_file",
    "read_file_async",
    "read_bytes",
    "read_bytes_async",
    "write_file",
    "write_file_async",
    "append_file",
    "append_file_async",
    "read_json",
    "read_json_async",
    "write_json",
    "write_json_async",
    "create_file",
    "unlink",
    "soft_link",
    "mkdir",
    "mkdir_async",
    "rmdir",
    "rmdir_async",
    "mktempdir",
    "mktempfile",
    "mktempdir_async",
    "mktempfile_async",
    "disk_usage",
]
