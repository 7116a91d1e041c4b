"""
fskit - filesystem utilities with blocking and asyncio call styles.

Path resolution, canonicalization, symlink-safe directory sizing and
streaming content hashing, plus thin typed wrappers for everyday file work.

Usage:
    import fskit

    fskit.resolve("/home/user", "../test.txt")   # '/home/test.txt'
    fskit.get_directory_size("build")
    fskit.hash_file("release.tar.gz")

    # asyncio
    digest = await fskit.hash_file_async("release.tar.gz")
"""

from fskit.core import *  # noqa: F401,F403
from fskit.core import __all__ as _core_all

__version__ = "0.1.2"

__all__ = ["__version__", *_core_all]
