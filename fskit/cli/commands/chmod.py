"""
Chmod command implementation.

Applies an octal permission string to a path.
"""

import logging

from fskit.core.permissions import chmod

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the chmod command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    chmod(args.mode, args.path)
    logger.info(f"Changed mode of {args.path} to {args.mode}")
    return 0
