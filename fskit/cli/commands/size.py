"""
Size command implementation.

Sums the sizes of regular files under a directory.
"""

import logging

from fskit.cli.utils import format_size, get_config
from fskit.core.walker import SymlinkPolicy, get_directory_size

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the size command.

    ``--symlinks`` and ``--human`` take precedence over the ``size`` section
    of the configuration file.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = get_config(args)

    policy = config.symlink_policy
    if args.symlinks:
        policy = SymlinkPolicy(args.symlinks)
    human = args.human or config.human_readable

    logger.debug(f"Measuring {args.path} (symlinks: {policy.value})")
    total = get_directory_size(args.path, policy=policy)

    print(format_size(total) if human else total)
    return 0
