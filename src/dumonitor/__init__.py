"""
dumonitor: disk usage monitoring for arbitrary commands.

Runs a shell command and, for as long as it lives, samples the aggregate
size of a directory, emitting a tab-delimited time series of elapsed time,
usage, delta from the initial usage and running peak.

The package is organized into specialized modules:
- config: Optional TOML configuration defaults
- models: Data structures (MonitorConfig, Record, MonitorState, RunResult)
- validation: Exception hierarchy, validators and error handling
- collectors: Disk usage sources (``du``-backed)
- storage: Record sink and reader
- monitoring: Monitor and background sampling loop
- executor: Launching the monitored command
- cli: Command-line interface and run driver
- plotter: Charts of recorded runs

Usage:
    From command line:
        dumonitor -p build -o usage.tsv "make -j8"

    Programmatically:
        from dumonitor import DiskUsageRunner, MonitorConfig
        result = DiskUsageRunner(MonitorConfig(command="make", path=Path("build"))).run()
"""

from .cli import DiskUsageRunner, main_cli
from .collectors import DiskUsageSource, DuDiskUsageSource
from .config import clear_config_cache, get_config, set_config_path
from .models import MonitorConfig, MonitorState, Record, RunResult
from .monitoring import LoopState, Monitor, SamplingLoop
from .validation import (
    ChildSpawnError,
    ConfigError,
    DiskMonitorError,
    MeasurementError,
    ValidationError,
    WriteError,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "DiskUsageRunner",
    "main_cli",
    "get_config",
    "set_config_path",
    "clear_config_cache",
    # Core
    "DiskUsageSource",
    "DuDiskUsageSource",
    "Monitor",
    "SamplingLoop",
    "LoopState",
    # Models
    "MonitorConfig",
    "MonitorState",
    "Record",
    "RunResult",
    # Errors
    "DiskMonitorError",
    "ValidationError",
    "ConfigError",
    "MeasurementError",
    "WriteError",
    "ChildSpawnError",
]
