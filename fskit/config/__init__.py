"""Configuration module for fskit.

This module provides YAML configuration parsing and validation for fskit.yaml.
"""

from fskit.config.parser import (
    DEFAULT_CONFIG_NAME,
    FskitConfig,
    ConfigError,
    parse_config,
    apply_env_overrides,
    load_config,
)

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "FskitConfig",
    "ConfigError",
    "parse_config",
    "apply_env_overrides",
    "load_config",
]
