"""
Disk usage monitoring: record bookkeeping and the background sampling loop.
"""

from .monitor import Monitor
from .sampling_loop import LoopState, PollableProcess, SamplingLoop

__all__ = [
    "LoopState",
    "Monitor",
    "PollableProcess",
    "SamplingLoop",
]
