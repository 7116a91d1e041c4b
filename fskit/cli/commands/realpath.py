"""
Realpath command implementation.

Prints the canonical, separator-normalized path of an existing entry.
"""

import logging

from fskit.core.paths import get_real_path

logger = logging.getLogger(__name__)


def run(args) -> int:
    """Run the realpath command."""
    print(get_real_path(args.path))
    return 0
