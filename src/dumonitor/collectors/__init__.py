"""
Disk usage sources.
"""

from .base import DiskUsageSource
from .du_collector import DuDiskUsageSource, parse_du_output

__all__ = [
    "DiskUsageSource",
    "DuDiskUsageSource",
    "parse_du_output",
]
