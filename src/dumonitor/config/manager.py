"""
Configuration management and singleton pattern.

This module provides the main configuration loading interface, caching the
loaded MonitorConfig so the file is read only once per process.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from ..models.config import MonitorConfig
from .loader import load_monitor_section
from .validators import validate_monitor_config

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DUMONITOR_CONFIG"

# --- Global Singleton for Configuration ---

_CONFIG: Optional[MonitorConfig] = None

# None means "use DUMONITOR_CONFIG if set, otherwise built-in defaults".
_CONFIG_FILE_PATH: Optional[Path] = None


def set_config_path(config_path: Optional[Path]) -> None:
    """
    Set a custom configuration file path and drop any cached configuration.

    Args:
        config_path: Path to a TOML file, or None to fall back to the
                     environment variable / defaults.
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = config_path
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def get_config_path() -> Optional[Path]:
    """Return the configuration file that get_config() will read, if any."""
    if _CONFIG_FILE_PATH is not None:
        return _CONFIG_FILE_PATH
    env_value = os.environ.get(CONFIG_ENV_VAR)
    if env_value:
        return Path(env_value)
    return None


def _load_config(config_path: Optional[Path]) -> MonitorConfig:
    if config_path is None:
        logger.debug("No configuration file given, using defaults")
        return MonitorConfig()

    config = validate_monitor_config(load_monitor_section(config_path))
    logger.info(f"Successfully loaded configuration from {config_path}")
    return config


def get_config() -> MonitorConfig:
    """
    Get the configuration defaults, loading them if necessary.

    Returns:
        The cached MonitorConfig. Callers must treat it as read-only and use
        ``dataclasses.replace`` to derive per-run settings.

    Raises:
        ConfigError: If the configuration file is missing, malformed or invalid.
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(get_config_path())
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None
