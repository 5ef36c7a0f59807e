"""
Turns raw disk usage measurements into records.

The Monitor owns the run's MonitorState and the output sink. It is driven
by exactly one thread of control and performs no locking.
"""

import logging
import time
from typing import Callable, Optional

from ..models.results import MonitorState, Record
from ..storage.tsv_sink import RecordSink

logger = logging.getLogger(__name__)


class Monitor:
    """
    Computes elapsed time, delta and running peak for each measurement and
    appends the resulting record to the sink.

    Construction fixes the start time and the initial usage, so it must
    happen right before the monitored command is launched.
    """

    def __init__(
        self,
        sink: RecordSink,
        initial_disk_usage: int,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Args:
            sink: Destination for the records.
            initial_disk_usage: The pre-execution measurement.
            clock: Monotonic clock in seconds, injectable for tests.
        """
        self._sink = sink
        self._clock = clock
        self._state = MonitorState.begin(clock(), initial_disk_usage)
        self._last_record: Optional[Record] = None

    @property
    def state(self) -> MonitorState:
        return self._state

    @property
    def records_written(self) -> int:
        return self._sink.records_written

    @property
    def last_record(self) -> Optional[Record]:
        return self._last_record

    def elapsed_ms(self) -> int:
        """Whole milliseconds since construction, never negative."""
        return max(0, int((self._clock() - self._state.start_time) * 1000))

    def record(self, disk_usage: int) -> Record:
        """
        Record one measurement.

        Args:
            disk_usage: The raw reading.

        Returns:
            The record that was written.

        Raises:
            WriteError: If the sink cannot accept or flush the row.
        """
        elapsed = self.elapsed_ms()
        peak = self._state.observe(disk_usage)
        record = Record.from_measurement(
            elapsed, disk_usage, self._state.initial_disk_usage, peak
        )
        self._sink.write(record)
        self._last_record = record
        return record
