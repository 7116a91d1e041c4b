"""
Core functionality for fskit.

This package contains path resolution, canonicalization, directory size
aggregation, content hashing and the thin filesystem wrappers built on them.
"""

from .exceptions import (
    ErrorKind,
    FskitError,
    FilesystemError,
    PathNotFoundError,
    NotAFileError,
    ParentNotADirectoryError,
    EmptyPathError,
    InvalidEncodingError,
    InvalidPermissionModeError,
    MetadataUnavailableError,
    FileReadError,
    FileWriteError,
    CommandNotFoundError,
)

from .paths import (
    IS_WINDOWS,
    IS_UNIX,
    PathStyle,
    Root,
    CurrentDir,
    ParentDir,
    Normal,
    Prefix,
    PathComponent,
    split_components,
    resolve,
    normalize_path,
    strip_long_path_prefix,
    get_real_path,
    get_real_path_async,
    basename,
    filename,
    dirname,
    which,
)

from .walker import (
    SymlinkPolicy,
    get_directory_size,
    get_directory_size_async,
)

from .hashing import (
    DEFAULT_ALGORITHM,
    DEFAULT_CHUNK_SIZE,
    hash_file,
    hash_file_async,
)

from .metadata import (
    Metadata,
    stat,
    stat_async,
    get_file_size,
    get_file_size_async,
    exists,
    is_file,
    is_dir,
    is_symlink,
    exists_async,
    is_file_async,
    is_dir_async,
    is_symlink_async,
)

from .permissions import (
    BitmaskMode,
    ReadonlyFlagMode,
    PermissionMode,
    parse_mode,
    apply_mode,
    chmod,
)

from .files import (
    read_file,
    read_file_async,
    read_bytes,
    read_bytes_async,
    write_file,
    write_file_async,
    append_file,
    append_file_async,
    read_json,
    read_json_async,
    write_json,
    write_json_async,
    create_file,
    unlink,
    soft_link,
    mkdir,
    mkdir_async,
    rmdir,
    rmdir_async,
    mktempdir,
    mktempfile,
    mktempdir_async,
    mktempfile_async,
    disk_usage,
)

__all__ = [
    # Exceptions
    "ErrorKind",
    "FskitError",
    "FilesystemError",
    "PathNotFoundError",
    "NotAFileError",
    "ParentNotADirectoryError",
    "EmptyPathError",
    "InvalidEncodingError",
    "InvalidPermissionModeError",
    "MetadataUnavailableError",
    "FileReadError",
    "FileWriteError",
    "CommandNotFoundError",
    # Paths
    "IS_WINDOWS",
    "IS_UNIX",
    "PathStyle",
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
    # Directory size
    "SymlinkPolicy",
    "get_directory_size",
    "get_directory_size_async",
    # Hashing
    "DEFAULT_ALGORITHM",
    "DEFAULT_CHUNK_SIZE",
    "hash_file",
    "hash_file_async",
    # Metadata
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
    # Permissions
    "BitmaskMode",
    "ReadonlyFlagMode",
    "PermissionMode",
    "parse_mode",
    "apply_mode",
    "chmod",
    # Files and directories
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
