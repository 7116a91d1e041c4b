"""
Stat command implementation.

Shows type, size and permission bits of a filesystem entry.
"""

import json
import logging
from dataclasses import asdict

from fskit.core.metadata import stat

logger = logging.getLogger(__name__)


def _entry_type(metadata) -> str:
    if metadata.is_dir:
        return "directory"
    if metadata.is_file:
        return "file"
    return "other"


def run(args) -> int:
    """
    Run the stat command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    metadata = stat(args.path)

    if args.json:
        print(json.dumps(asdict(metadata), indent=2))
        return 0

    print(f"Path: {metadata.path}")
    print(f"Type: {_entry_type(metadata)}")
    print(f"Symlink: {'yes' if metadata.is_symlink else 'no'}")
    print(f"Size: {metadata.length}")
    print(f"Mode: {metadata.mode:04o}")
    return 0
