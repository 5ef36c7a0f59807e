"""
Background sampling loop.

The loop polls the child process for liveness, and while it is alive takes
a measurement, records it and sleeps for the configured interval. Once the
child has exited it takes exactly one more measurement, so the last record
always reflects the directory after the command finished (temporary files
cleaned up, outputs flushed).

State machine::

    IDLE -> RUNNING -> DRAINING -> DONE
               \\          \\
                +-> FAILED <+
"""

import logging
import threading
import time
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Protocol, Union

from ..collectors.base import DiskUsageSource
from .monitor import Monitor

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """Lifecycle states of the sampling loop."""
    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"
    FAILED = "failed"


class PollableProcess(Protocol):
    """Anything with a non-blocking ``poll`` returning None while running."""

    def poll(self) -> Optional[int]:
        ...


class SamplingLoop:
    """
    Drives a Monitor from a DiskUsageSource for the lifetime of a child process.

    The loop is the only user of the Monitor (and through it the sink) once
    started. ``start``/``join`` run it on a dedicated thread; ``run`` executes
    it in the caller's thread.

    Attributes:
        state: Current LoopState.
        samples_taken: Number of measure+record cycles completed.
    """

    def __init__(
        self,
        source: DiskUsageSource,
        monitor: Monitor,
        child: PollableProcess,
        path: Union[str, Path],
        rate_ms: int,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.source = source
        self.monitor = monitor
        self.child = child
        self.path = path
        self.rate_ms = rate_ms
        self._sleep = sleep

        self.state = LoopState.IDLE
        self.samples_taken = 0
        self._error: Optional[BaseException] = None
        self._thread: Optional[threading.Thread] = None

    def _transition(self, new_state: LoopState) -> None:
        logger.debug(f"Sampling loop: {self.state.value} -> {new_state.value}")
        self.state = new_state

    def _sample(self) -> None:
        disk_usage = self.source.measure(self.path)
        self.monitor.record(disk_usage)
        self.samples_taken += 1

    def run(self) -> None:
        """
        Run the loop to completion in the current thread.

        Raises:
            RuntimeError: If the loop has already been run.
            MeasurementError: If a measurement fails (state becomes FAILED).
            WriteError: If a record cannot be written (state becomes FAILED).
        """
        if self.state is not LoopState.IDLE:
            raise RuntimeError(f"Sampling loop cannot run from state {self.state.value}")

        self._transition(LoopState.RUNNING)
        try:
            while self.child.poll() is None:
                self._sample()
                self._sleep(self.rate_ms / 1000.0)

            self._transition(LoopState.DRAINING)
            self._sample()
        except BaseException:
            self._transition(LoopState.FAILED)
            raise

        self._transition(LoopState.DONE)
        logger.debug(f"Sampling loop finished after {self.samples_taken} sample(s)")

    def _run_captured(self) -> None:
        try:
            self.run()
        except BaseException as e:
            # Handed to the driver thread by join()
            self._error = e

    def start(self) -> None:
        """Start the loop on a background thread."""
        if self._thread is not None:
            raise RuntimeError("Sampling loop already started")
        self._thread = threading.Thread(
            target=self._run_captured, name="dumonitor-sampler", daemon=True
        )
        self._thread.start()

    def join(self) -> None:
        """
        Block until the background loop finishes.

        Raises:
            RuntimeError: If the loop was never started.
            Exception: Whatever error terminated the loop.
        """
        if self._thread is None:
            raise RuntimeError("Sampling loop was not started")
        self._thread.join()
        if self._error is not None:
            error, self._error = self._error, None
            raise error
