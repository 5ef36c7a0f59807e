"""
Command-line interface for the dumonitor package.
"""

from .main import main_cli
from .orchestrator import DiskUsageRunner

__all__ = [
    "DiskUsageRunner",
    "main_cli",
]
