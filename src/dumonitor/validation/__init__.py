"""
Validation and error handling for the dumonitor package.

This module provides the exception hierarchy, input validation
and consistent error reporting across the application.
"""

from .exceptions import (
    ChildSpawnError,
    ConfigError,
    DiskMonitorError,
    ErrorSeverity,
    MeasurementError,
    ValidationError,
    WriteError,
    handle_cli_error,
    handle_config_error,
    handle_error,
)
from .validators import (
    LOG_LEVEL_CHOICES,
    validate_directory,
    validate_enum_choice,
    validate_non_empty_string,
    validate_positive_integer,
)

__all__ = [
    # Exceptions
    "DiskMonitorError",
    "ValidationError",
    "ConfigError",
    "MeasurementError",
    "WriteError",
    "ChildSpawnError",
    "ErrorSeverity",
    # Error handling
    "handle_error",
    "handle_config_error",
    "handle_cli_error",
    # Validators
    "LOG_LEVEL_CHOICES",
    "validate_directory",
    "validate_enum_choice",
    "validate_non_empty_string",
    "validate_positive_integer",
]
