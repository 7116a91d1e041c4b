"""
Path resolution and canonicalization for fskit.

This module provides:
- Component decomposition of path strings (POSIX and Windows styles)
- Node.js-style joining of a base path with a relative input (``resolve``)
- Separator normalization and canonicalization of existing paths
- Basename/dirname helpers and command lookup on PATH

``resolve`` and ``normalize_path`` are pure string operations and never touch
the filesystem. ``get_real_path`` requires the path to exist.
"""

import asyncio
import logging
import ntpath
import os
from dataclasses import dataclass
from pathlib import Path, PurePath, PurePosixPath, PureWindowsPath
from typing import List, Literal, Optional, Tuple, Union

from fskit.core.exceptions import (
    CommandNotFoundError,
    EmptyPathError,
    InvalidEncodingError,
    PathNotFoundError,
)

logger = logging.getLogger(__name__)

# Platform detection
IS_WINDOWS = os.name == "nt"
IS_UNIX = not IS_WINDOWS

PathStyle = Literal["posix", "windows"]
PathInput = Union[str, "os.PathLike[str]"]

# Marker Windows puts in front of long-path-safe absolute paths
LONG_PATH_PREFIX = "\\\\?\\"


# ============================================================================
# Path Components
# ============================================================================


@dataclass(frozen=True)
class Root:
    """Root separator of an absolute path."""


@dataclass(frozen=True)
class CurrentDir:
    """A ``.`` component."""


@dataclass(frozen=True)
class ParentDir:
    """A ``..`` component."""


@dataclass(frozen=True)
class Normal:
    """A regular named component."""

    segment: str


@dataclass(frozen=True)
class Prefix:
    """Drive or volume marker (Windows only), e.g. ``C:`` or ``//server/share``."""

    marker: str


PathComponent = Union[Root, CurrentDir, ParentDir, Normal, Prefix]


def _to_str(path: PathInput) -> str:
    value = os.fspath(path)
    if isinstance(value, bytes):
        value = os.fsdecode(value)
    return value


def resolve_style(style: Optional[PathStyle]) -> PathStyle:
    """Return the explicit style, or the current platform's style if None."""
    if style is None:
        return "windows" if IS_WINDOWS else "posix"
    if style not in ("posix", "windows"):
        raise ValueError(f"Unsupported path style: {style}")
    return style


def _ensure_text(path: str) -> str:
    """Return ``path`` unchanged if it can be encoded as UTF-8."""
    try:
        path.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidEncodingError(path) from e
    return path


def _is_absolute(path: str, style: PathStyle) -> bool:
    if style == "windows":
        return PureWindowsPath(path).is_absolute()
    return PurePosixPath(path).is_absolute()


def split_components(
    path: PathInput, style: Optional[PathStyle] = None
) -> List[PathComponent]:
    """
    Decompose a path string into its components.

    Windows style accepts both ``/`` and ``\\`` as separators and may yield a
    leading ``Prefix``. POSIX style only splits on ``/``. Empty components
    (from repeated separators) are dropped.

    Args:
        path: Path to decompose
        style: 'posix' or 'windows' (default: current platform)

    Returns:
        List of components, left to right

    Example:
        >>> split_components("/home/../user", style="posix")
        [Root(), Normal(segment='home'), ParentDir(), Normal(segment='user')]
    """
    text = _to_str(path)
    style = resolve_style(style)
    components: List[PathComponent] = []

    if style == "windows":
        drive, rest = ntpath.splitdrive(text)
        if drive:
            components.append(Prefix(normalize_path(drive)))
        rest = rest.replace("\\", "/")
    else:
        rest = text

    if rest.startswith("/"):
        components.append(Root())

    for part in rest.split("/"):
        if not part:
            continue
        if part == ".":
            components.append(CurrentDir())
        elif part == "..":
            components.append(ParentDir())
        else:
            components.append(Normal(part))

    return components


def _split_anchor(path: str, style: PathStyle) -> Tuple[str, List[str]]:
    """Split ``path`` into its anchor (prefix + root) and a segment stack."""
    anchor = ""
    segments: List[str] = []

    for component in split_components(path, style):
        if isinstance(component, Prefix):
            anchor = component.marker
        elif isinstance(component, Root):
            anchor += "/"
        elif isinstance(component, Normal):
            segments.append(component.segment)
        elif isinstance(component, ParentDir):
            segments.append("..")

    return anchor, segments


# ============================================================================
# Path Resolution
# ============================================================================


def resolve(
    base: PathInput, input_path: PathInput, style: Optional[PathStyle] = None
) -> str:
    """
    Join ``input_path`` onto ``base`` and interpret ``.`` and ``..``.

    Behaves like Node.js ``path.resolve`` for two arguments, without consulting
    the current working directory or the filesystem:

    - An absolute ``input_path`` replaces ``base`` entirely.
    - ``..`` removes the last segment; at the root it is a no-op.
    - ``.`` is ignored.

    Both arguments are separator-normalized first, so the result never
    contains a backslash.

    Args:
        base: Base path
        input_path: Path to resolve against ``base``
        style: 'posix' or 'windows' (default: current platform)

    Returns:
        Resolved path string

    Raises:
        InvalidEncodingError: If the result is not representable as UTF-8

    Example:
        >>> resolve("/home/user", "../test.txt")
        '/home/test.txt'
        >>> resolve("/home/user", "/absolute/path.txt")
        '/absolute/path.txt'
    """
    style = resolve_style(style)
    base_str = normalize_path(base)
    input_str = normalize_path(input_path)

    if _is_absolute(input_str, style):
        return _ensure_text(input_str)

    anchor, segments = _split_anchor(base_str, style)

    for component in split_components(input_str, style):
        if isinstance(component, Normal):
            segments.append(component.segment)
        elif isinstance(component, ParentDir):
            # Popping past the root leaves the accumulator where it is
            if segments:
                segments.pop()
        elif isinstance(component, CurrentDir):
            continue
        elif isinstance(component, Prefix):
            anchor, segments = component.marker, []
        elif isinstance(component, Root):
            anchor, segments = "/", []

    return _ensure_text(anchor + "/".join(segments))


# ============================================================================
# Canonicalization
# ============================================================================


def normalize_path(path: PathInput) -> str:
    """
    Replace every backslash with a forward slash.

    Args:
        path: Path to normalize

    Returns:
        Path string using only ``/`` as separator

    Example:
        >>> normalize_path("C:\\\\Users\\\\Example")
        'C:/Users/Example'
    """
    return _to_str(path).replace("\\", "/")


def strip_long_path_prefix(path: str) -> str:
    """
    Remove the Windows ``\\\\?\\`` long path prefix if present.

    Args:
        path: Path that might carry the prefix

    Returns:
        Path string without the prefix
    """
    if path.startswith(LONG_PATH_PREFIX):
        return path[len(LONG_PATH_PREFIX) :]
    return path


def _canonicalize(normalized: str) -> str:
    try:
        real_path = Path(normalized).resolve(strict=True)
    except (OSError, RuntimeError, ValueError) as e:
        raise PathNotFoundError(
            normalized, f"Failed to canonicalize path: {normalized}"
        ) from e

    return _ensure_text(normalize_path(strip_long_path_prefix(str(real_path))))


def get_real_path(path: PathInput) -> str:
    """
    Get the absolute, symlink-resolved form of an existing path.

    Separators are normalized before and after resolution, and the Windows
    long path prefix is stripped so results compare equal across platforms.

    Args:
        path: Path to canonicalize (must exist)

    Returns:
        Canonical path string

    Raises:
        EmptyPathError: If ``path`` is empty
        PathNotFoundError: If the path does not exist or cannot be resolved
        InvalidEncodingError: If the result is not representable as UTF-8

    Example:
        >>> get_real_path("./docs/../README.md")
        '/home/user/project/README.md'
    """
    normalized = normalize_path(path)
    if not normalized:
        raise EmptyPathError()

    return _canonicalize(normalized)


async def get_real_path_async(path: PathInput) -> str:
    """Async form of ``get_real_path``; resolution runs in the default executor."""
    normalized = normalize_path(path)
    if not normalized:
        raise EmptyPathError()

    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, _canonicalize, normalized)


# ============================================================================
# Path Helpers
# ============================================================================


def _pure_path(normalized: str, style: Optional[PathStyle]) -> PurePath:
    if resolve_style(style) == "windows":
        return PureWindowsPath(normalized)
    return PurePosixPath(normalized)


def basename(path: PathInput, style: Optional[PathStyle] = None) -> str:
    """
    Get the final component of a path (file name with extension).

    Raises:
        EmptyPathError: If the path is empty or has no final component
    """
    normalized = normalize_path(path)
    if not normalized:
        raise EmptyPathError()

    name = _pure_path(normalized, style).name
    if not name:
        raise EmptyPathError(
            normalized, f"Unable to get basename for path: {normalized}"
        )
    return name


def filename(path: PathInput, style: Optional[PathStyle] = None) -> str:
    """Get the file name of a path, including its extension."""
    return basename(path, style)


def dirname(path: PathInput, style: Optional[PathStyle] = None) -> str:
    """
    Get the directory portion of a path.

    A bare file name yields ``"."``; the root yields itself.

    Raises:
        EmptyPathError: If the path is empty
    """
    normalized = normalize_path(path)
    if not normalized:
        raise EmptyPathError()

    parent = normalize_path(str(_pure_path(normalized, style).parent))
    return parent or "."


# ============================================================================
# Command Lookup
# ============================================================================


def which(command: str, search_paths: Optional[List[PathInput]] = None) -> str:
    """
    Locate ``command`` in the directories listed on PATH.

    A candidate matches when it is a regular file the current process may
    execute (``os.X_OK``). On Windows ``.exe``, ``.bat`` and ``.cmd`` are
    tried after the bare name. The environment is only read.

    Args:
        command: Bare command name, without directory
        search_paths: Directories to scan instead of PATH, in order

    Returns:
        Path of the first match, joined from the search directory

    Raises:
        CommandNotFoundError: If no directory holds a matching file
    """
    # Suffixes tried after the bare name
    extensions = [""] if not IS_WINDOWS else ["", ".exe", ".bat", ".cmd"]

    if search_paths is None:
        path_env = os.environ.get("PATH", "")
        search_paths = [p for p in path_env.split(os.pathsep) if p]

    for directory in search_paths:
        for ext in extensions:
            exe_path = Path(directory) / f"{command}{ext}"
            if exe_path.is_file() and os.access(exe_path, os.X_OK):
                logger.debug(f"Found {command} at {exe_path}")
                return _ensure_text(str(exe_path))

    raise CommandNotFoundError(command)


__all__ = [
    "IS_WINDOWS",
    "IS_UNIX",
    "PathStyle",
    "resolve_style",
    "Root",
    "CurrentDir",
    "ParentDir",
    "Normal",
    "Prefix",
    "PathComponent",
    "split_components",
    "resolve",
    "normalize_path",
    "strip_long_path_prefix",
    "get_real_path",
    "get_real_path_async",
    "basename",
    "filename",
    "dirname",
    "which",
]
