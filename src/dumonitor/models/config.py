"""
Configuration data models.

This module contains the configuration structure consumed by the run driver,
assembled from defaults, an optional TOML file and command-line arguments.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_RATE_MS = 100
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_SHELL = "sh"
DEFAULT_DU_COMMAND = "du"


@dataclass
class MonitorConfig:
    """
    Settings for a single monitoring run.

    Attributes:
        command: Shell command line executed as the monitored child.
        rate_ms: Sampling interval in milliseconds.
        path: Directory whose aggregate size is sampled.
        output: File receiving the record stream; None means standard output.
        log_level: Name of the logging level for the CLI.
        shell: Interpreter used as ``<shell> -c <command>``.
        du_command: Executable of the size-measurement utility.
    """

    command: str = ""
    rate_ms: int = DEFAULT_RATE_MS
    path: Path = Path(".")
    output: Optional[Path] = None
    log_level: str = DEFAULT_LOG_LEVEL
    shell: str = DEFAULT_SHELL
    du_command: str = DEFAULT_DU_COMMAND
