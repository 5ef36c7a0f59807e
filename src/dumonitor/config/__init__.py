"""
Configuration management for the dumonitor package.

This module provides a clean interface for loading, validating, and accessing
configuration defaults from an optional TOML file.
"""

from .loader import load_monitor_section, load_toml_file
from .manager import (
    CONFIG_ENV_VAR,
    clear_config_cache,
    get_config,
    get_config_path,
    is_config_loaded,
    set_config_path,
)
from .validators import KNOWN_MONITOR_KEYS, validate_monitor_config

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_path",
    "CONFIG_ENV_VAR",
    # Advanced interface
    "load_toml_file",
    "load_monitor_section",
    "validate_monitor_config",
    "KNOWN_MONITOR_KEYS",
]
