"""
Data models for the dumonitor package.
"""

from .config import (
    DEFAULT_DU_COMMAND,
    DEFAULT_LOG_LEVEL,
    DEFAULT_RATE_MS,
    DEFAULT_SHELL,
    MonitorConfig,
)
from .results import RECORD_FIELDS, MonitorState, Record, RunResult

__all__ = [
    "DEFAULT_DU_COMMAND",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_RATE_MS",
    "DEFAULT_SHELL",
    "MonitorConfig",
    "RECORD_FIELDS",
    "MonitorState",
    "Record",
    "RunResult",
]
