"""
Resolve command implementation.

Lexically resolves a path against a base directory.
"""

import logging

from fskit.core.paths import resolve

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the resolve command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    logger.debug(f"Resolving {args.input!r} against {args.base!r}")
    print(resolve(args.base, args.input, style=args.style))
    return 0
