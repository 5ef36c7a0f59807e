"""
Configuration file loading utilities.

This module handles the low-level loading and parsing of the optional
TOML configuration file.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..validation import ConfigError, ErrorSeverity, handle_config_error

logger = logging.getLogger(__name__)


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file with error handling.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for error messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        ConfigError: If the file doesn't exist, can't be read or is malformed
    """
    logger.info(f"Loading {description} from: {file_path}")

    if not file_path.is_file():
        logger.error(f"{description} not found: {file_path}")
        raise ConfigError(
            f"{description} not found: {file_path}",
            field_name="config",
            value=str(file_path),
        )

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as e:
        handle_config_error(
            error=e,
            context=f"parsing {description}",
            severity=ErrorSeverity.ERROR,
            reraise=False,
            logger=logger
        )
        raise ConfigError(
            f"Could not parse {description} {file_path}: {e}",
            field_name="config",
            value=str(file_path),
        ) from e


def load_monitor_section(config_path: Path) -> Dict[str, Any]:
    """
    Load the ``[monitor]`` table of a configuration file.

    Returns:
        The table contents, or an empty dict if the file has no such table.
    """
    data = load_toml_file(config_path, "configuration file")
    section = data.get("monitor", {})
    if not isinstance(section, dict):
        raise ConfigError(
            "[monitor] in the configuration file must be a table",
            field_name="monitor",
            value=section,
        )
    return section
