"""
Run-time data models for the disk usage time series.

Record is one emitted row, MonitorState is the bookkeeping owned by the
Monitor, and RunResult summarizes a completed run for logging.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

RECORD_FIELDS: Tuple[str, ...] = ("elapsed", "disk_usage", "delta", "peak")
"""Column order of the emitted stream."""


@dataclass(frozen=True)
class Record:
    """
    One row of the emitted time series.

    Attributes:
        elapsed: Milliseconds since the Monitor was created.
        disk_usage: The raw measurement.
        delta: ``disk_usage`` minus the initial (pre-execution) usage.
        peak: Running maximum of every usage seen so far, this one included.
    """

    elapsed: int
    disk_usage: int
    delta: int
    peak: int

    @classmethod
    def from_measurement(
        cls, elapsed: int, disk_usage: int, initial_disk_usage: int, peak: int
    ) -> "Record":
        return cls(
            elapsed=elapsed,
            disk_usage=disk_usage,
            delta=disk_usage - initial_disk_usage,
            peak=peak,
        )

    def as_row(self) -> Tuple[int, int, int, int]:
        return (self.elapsed, self.disk_usage, self.delta, self.peak)


@dataclass
class MonitorState:
    """
    Mutable bookkeeping for one run.

    ``start_time`` and ``initial_disk_usage`` are fixed at construction;
    ``peak_disk_usage`` only ever grows. Touched by one thread at a time.
    """

    start_time: float
    initial_disk_usage: int
    peak_disk_usage: int

    @classmethod
    def begin(cls, start_time: float, initial_disk_usage: int) -> "MonitorState":
        return cls(
            start_time=start_time,
            initial_disk_usage=initial_disk_usage,
            peak_disk_usage=initial_disk_usage,
        )

    def observe(self, disk_usage: int) -> int:
        """Fold a measurement into the running peak and return the new peak."""
        if disk_usage > self.peak_disk_usage:
            self.peak_disk_usage = disk_usage
        return self.peak_disk_usage


@dataclass
class RunResult:
    """Summary of a completed run."""

    records_written: int
    initial_disk_usage: int
    final_disk_usage: Optional[int]
    peak_disk_usage: int
    elapsed_ms: int
    child_returncode: Optional[int]

    @property
    def final_delta(self) -> Optional[int]:
        if self.final_disk_usage is None:
            return None
        return self.final_disk_usage - self.initial_disk_usage
