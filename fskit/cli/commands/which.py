"""
Which command implementation.

Locates a command on PATH.
"""

import logging

from fskit.core.paths import which

logger = logging.getLogger(__name__)


def run(args) -> int:
    """Run the which command."""
    print(which(args.name))
    return 0
