"""
Centralized exception hierarchy for fskit.

Every error raised by the library is an ``FskitError``. Errors concerning a
path derive from ``FilesystemError`` and carry the path plus an ``ErrorKind``
so callers can branch on the category without string matching. The
underlying ``OSError`` (if any) is attached as ``__cause__``.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Category of a filesystem failure."""

    NOT_FOUND = "NotFound"
    NOT_A_FILE = "NotAFile"
    PARENT_NOT_A_DIRECTORY = "ParentNotADirectory"
    EMPTY_PATH = "EmptyPath"
    INVALID_ENCODING = "InvalidEncoding"
    INVALID_PERMISSION_MODE = "InvalidPermissionMode"
    METADATA_UNAVAILABLE = "MetadataUnavailable"
    READ_FAILURE = "ReadFailure"
    WRITE_FAILURE = "WriteFailure"
    COMMAND_NOT_FOUND = "CommandNotFound"


# ============================================================================
# Base Exceptions
# ============================================================================


class FskitError(Exception):
    """Base exception for all fskit errors."""

    pass


class FilesystemError(FskitError):
    """Base exception for errors concerning a single path."""

    kind: Optional[ErrorKind] = None

    def __init__(self, path: str, message: Optional[str] = None):
        self.path = path
        super().__init__(message or f"{self.kind.value}: {path}")


# ============================================================================
# Path Exceptions
# ============================================================================


class PathNotFoundError(FilesystemError):
    """Path does not exist or could not be resolved."""

    kind = ErrorKind.NOT_FOUND


class NotAFileError(FilesystemError):
    """Path exists but is not a regular file."""

    kind = ErrorKind.NOT_A_FILE


class ParentNotADirectoryError(FilesystemError):
    """An existing parent of the path is not a directory."""

    kind = ErrorKind.PARENT_NOT_A_DIRECTORY


class EmptyPathError(FilesystemError):
    """An empty path was given where a path is required."""

    kind = ErrorKind.EMPTY_PATH

    def __init__(self, path: str = "", message: Optional[str] = None):
        super().__init__(path, message or "Path cannot be empty")


class InvalidEncodingError(FilesystemError):
    """Path cannot be represented as UTF-8 text."""

    kind = ErrorKind.INVALID_ENCODING

    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(
            path, message or f"Path contains invalid Unicode characters: {path!r}"
        )


# ============================================================================
# Metadata and I/O Exceptions
# ============================================================================


class InvalidPermissionModeError(FilesystemError):
    """Permission mode string is not a valid octal number."""

    kind = ErrorKind.INVALID_PERMISSION_MODE

    def __init__(self, path: str, mode: str):
        self.mode = mode
        super().__init__(path, f"Invalid mode: {mode!r}")


class MetadataUnavailableError(FilesystemError):
    """Metadata for the path could not be read."""

    kind = ErrorKind.METADATA_UNAVAILABLE


class FileReadError(FilesystemError):
    """Reading from the path failed."""

    kind = ErrorKind.READ_FAILURE


class FileWriteError(FilesystemError):
    """Writing to the path failed."""

    kind = ErrorKind.WRITE_FAILURE


# ============================================================================
# Command Lookup Exceptions
# ============================================================================


class CommandNotFoundError(FskitError):
    """Command could not be found in any search path."""

    kind = ErrorKind.COMMAND_NOT_FOUND

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Command '{command}' not found in PATH")
