"""
Shared utilities for CLI commands.

Provides common functionality used across multiple CLI commands to
eliminate duplication and ensure consistent behavior.
"""

import logging
import sys
from typing import Optional

from fskit.config import FskitConfig, load_config

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Management
# ============================================================================


def get_config(args) -> FskitConfig:
    """
    Load the effective configuration for a command.

    Args:
        args: Parsed command-line arguments (uses ``args.config`` if set)

    Returns:
        Configuration with file values and environment overrides applied

    Raises:
        ConfigError: If the configuration file is missing or invalid
    """
    config_file = getattr(args, "config", None)
    config = load_config(config_file)
    logger.debug(f"Effective configuration: {config}")
    return config


# ============================================================================
# User Interface / Output Formatting
# ============================================================================

_SIZE_UNITS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB"]


def format_size(size: int) -> str:
    """
    Format a byte count using binary units.

    Args:
        size: Number of bytes

    Returns:
        Human-readable size string

    Example:
        >>> format_size(512)
        '512 B'
        >>> format_size(1536)
        '1.5 KiB'
    """
    if size < 1024:
        return f"{size} B"

    value = float(size)
    for unit in _SIZE_UNITS[1:]:
        value /= 1024
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            return f"{value:.1f} {unit}"

    return f"{size} B"


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)
