"""
Hash command implementation.

Prints content digests of one or more files in ``<digest>  <path>`` form.
"""

import logging

from fskit.cli.utils import get_config, print_error
from fskit.core.hashing import hash_file

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the hash command.

    Stops at the first file that cannot be hashed.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for unsupported algorithm)
    """
    config = get_config(args)
    algorithm = args.algorithm or config.hash_algorithm

    for path in args.paths:
        try:
            digest = hash_file(path, algorithm=algorithm, chunk_size=config.chunk_size)
        except ValueError as e:
            print_error(str(e))
            return 1
        print(f"{digest}  {path}")

    return 0
