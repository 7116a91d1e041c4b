"""YAML configuration parser for fskit.

This module provides parsing and validation for fskit.yaml configuration files:

    version: 1
    hash:
      algorithm: sha256
      chunk_size: 8192
    size:
      symlinks: skip        # or follow_once
      human_readable: false

Environment variables override file values:
    FSKIT_HASH_ALGORITHM, FSKIT_CHUNK_SIZE
"""

import hashlib
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

import yaml

from fskit.core.exceptions import FskitError
from fskit.core.hashing import DEFAULT_ALGORITHM, DEFAULT_CHUNK_SIZE
from fskit.core.walker import SymlinkPolicy

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "fskit.yaml"


class ConfigError(FskitError):
    """Configuration parsing or validation error."""

    pass


@dataclass
class FskitConfig:
    """Complete fskit configuration."""

    hash_algorithm: str = DEFAULT_ALGORITHM
    chunk_size: int = DEFAULT_CHUNK_SIZE
    symlink_policy: SymlinkPolicy = SymlinkPolicy.SKIP
    human_readable: bool = False


def parse_config(config_path: Path) -> FskitConfig:
    """
    Parse fskit.yaml configuration file.

    Args:
        config_path: Path to fskit.yaml

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If configuration is missing or invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read configuration file {config_path}: {e}")

    if data is None:
        return FskitConfig()

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    return _parse_and_validate(data)


def _parse_and_validate(data: dict) -> FskitConfig:
    """Parse and validate configuration data."""
    version = data.get("version", 1)
    if version != 1:
        raise ConfigError(f"Unsupported version: {version} (expected 1)")

    config = FskitConfig()

    hash_section = _section(data, "hash")
    if "algorithm" in hash_section:
        config.hash_algorithm = _validate_algorithm(hash_section["algorithm"])
    if "chunk_size" in hash_section:
        config.chunk_size = _validate_chunk_size(hash_section["chunk_size"])

    size_section = _section(data, "size")
    if "symlinks" in size_section:
        try:
            config.symlink_policy = SymlinkPolicy(size_section["symlinks"])
        except ValueError:
            valid = ", ".join(p.value for p in SymlinkPolicy)
            raise ConfigError(
                f"Invalid size.symlinks: {size_section['symlinks']} "
                f"(must be one of: {valid})"
            )
    if "human_readable" in size_section:
        value = size_section["human_readable"]
        if not isinstance(value, bool):
            raise ConfigError(f"size.human_readable must be a boolean: {value}")
        config.human_readable = value

    return config


def _section(data: dict, name: str) -> dict:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{name}' must be a mapping")
    return section


def _validate_algorithm(value) -> str:
    algorithm = str(value).lower()
    if algorithm not in hashlib.algorithms_available:
        raise ConfigError(f"Unsupported hash algorithm: {value}")
    return algorithm


def _validate_chunk_size(value) -> int:
    try:
        chunk_size = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"chunk_size must be an integer: {value}")
    if chunk_size <= 0:
        raise ConfigError(f"chunk_size must be positive: {chunk_size}")
    return chunk_size


def apply_env_overrides(
    config: FskitConfig, env: Optional[Mapping[str, str]] = None
) -> FskitConfig:
    """
    Apply FSKIT_* environment variables on top of ``config``.

    Args:
        config: Configuration to update in place
        env: Environment mapping (default: os.environ)

    Returns:
        The updated configuration
    """
    env = os.environ if env is None else env

    if env.get("FSKIT_HASH_ALGORITHM"):
        config.hash_algorithm = _validate_algorithm(env["FSKIT_HASH_ALGORITHM"])
        logger.debug(f"Hash algorithm from environment: {config.hash_algorithm}")
    if env.get("FSKIT_CHUNK_SIZE"):
        config.chunk_size = _validate_chunk_size(env["FSKIT_CHUNK_SIZE"])
        logger.debug(f"Chunk size from environment: {config.chunk_size}")

    return config


def load_config(
    config_path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> FskitConfig:
    """
    Load configuration with defaults and environment overrides.

    An explicit ``config_path`` must exist. Without one, ``fskit.yaml`` in the
    current directory is used if present, otherwise defaults apply.

    Args:
        config_path: Optional explicit configuration file
        env: Environment mapping (default: os.environ)

    Returns:
        Effective configuration

    Raises:
        ConfigError: If configuration is missing (explicit path) or invalid

    Example:
        >>> config = load_config()
        >>> config.hash_algorithm
        'sha256'
    """
    if config_path is not None:
        config = parse_config(Path(config_path))
    else:
        default_config = Path.cwd() / DEFAULT_CONFIG_NAME
        if default_config.exists():
            logger.debug(f"Loading configuration from {default_config}")
            config = parse_config(default_config)
        else:
            logger.debug(f"Config file not found (optional): {default_config}")
            config = FskitConfig()

    return apply_env_overrides(config, env)
