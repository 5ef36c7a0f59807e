"""
Execution of the monitored command.
"""

from .child_process import ChildProcess

__all__ = [
    "ChildProcess",
]
