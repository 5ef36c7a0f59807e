"""
Validation of configuration file contents.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from ..models.config import MonitorConfig
from ..validation import (
    LOG_LEVEL_CHOICES,
    ConfigError,
    ValidationError,
    validate_enum_choice,
    validate_non_empty_string,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)

KNOWN_MONITOR_KEYS = frozenset(
    ["rate_ms", "path", "output", "log_level", "shell", "du_command"]
)


def validate_monitor_config(data: Dict[str, Any]) -> MonitorConfig:
    """
    Build a MonitorConfig from a parsed ``[monitor]`` table.

    Missing keys keep their defaults and unknown keys are ignored with a
    warning. The ``command`` is never read from the file.

    Raises:
        ConfigError: If any known key holds an invalid value.
    """
    config = MonitorConfig()

    for key in sorted(set(data) - KNOWN_MONITOR_KEYS):
        logger.warning(f"Ignoring unknown configuration key 'monitor.{key}'")

    try:
        if "rate_ms" in data:
            config.rate_ms = validate_positive_integer(
                data["rate_ms"], min_value=0, field_name="monitor.rate_ms"
            )
        if "path" in data:
            config.path = Path(
                validate_non_empty_string(data["path"], field_name="monitor.path")
            )
        if "output" in data:
            config.output = Path(
                validate_non_empty_string(data["output"], field_name="monitor.output")
            )
        if "log_level" in data:
            config.log_level = validate_enum_choice(
                data["log_level"],
                LOG_LEVEL_CHOICES,
                field_name="monitor.log_level",
                case_sensitive=False,
            )
        if "shell" in data:
            config.shell = validate_non_empty_string(data["shell"], field_name="monitor.shell")
        if "du_command" in data:
            config.du_command = validate_non_empty_string(
                data["du_command"], field_name="monitor.du_command"
            )
    except ConfigError:
        raise
    except ValidationError as e:
        raise ConfigError(str(e), field_name=e.field_name, value=e.value) from e

    return config
