"""
Run driver for the CLI.

DiskUsageRunner wires the pieces of one monitoring run together: it
validates the target directory, opens the record sink, takes the
pre-execution measurement, launches the command and then waits for the
background sampling loop to finish.
"""

import logging
import time
from contextlib import ExitStack
from typing import Callable, Optional

from ..collectors.base import DiskUsageSource
from ..collectors.du_collector import DuDiskUsageSource
from ..executor.child_process import ChildProcess
from ..models.config import MonitorConfig
from ..models.results import RunResult
from ..monitoring.monitor import Monitor
from ..monitoring.sampling_loop import SamplingLoop
from ..storage.tsv_sink import open_sink
from ..validation import validate_directory

logger = logging.getLogger(__name__)


class DiskUsageRunner:
    """
    Executes one monitoring run described by a MonitorConfig.

    Two threads take part: the caller's thread, which launches the command
    and blocks in ``run``, and the sampling thread, which is the only one
    to touch the Monitor and the sink once started.
    """

    def __init__(
        self,
        config: MonitorConfig,
        source: Optional[DiskUsageSource] = None,
        child_factory: Callable[[str, str], ChildProcess] = ChildProcess.spawn,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            config: Settings for the run.
            source: Disk usage source; defaults to ``du`` per the config.
            child_factory: Called as ``child_factory(command, shell)`` to
                           launch the command.
            sleep: Sleep function used between samples.
        """
        self.config = config
        self.source = source or DuDiskUsageSource(config.du_command)
        self.child_factory = child_factory
        self.sleep = sleep

        self.sampling_loop: Optional[SamplingLoop] = None

    def run(self) -> RunResult:
        """
        Run the command under observation until it exits.

        Returns:
            A RunResult summarizing the run.

        Raises:
            ConfigError: The target path is missing or not a directory. Raised
                         before any output is opened or command launched.
            WriteError: The output could not be created or written.
            MeasurementError: A disk usage reading failed.
            ChildSpawnError: The command could not be launched.
        """
        config = self.config
        path = validate_directory(config.path)

        with ExitStack() as stack:
            sink = stack.enter_context(open_sink(config.output))

            initial_disk_usage = self.source.measure(path)
            logger.info(f"Initial disk usage of {path}: {initial_disk_usage}")
            monitor = Monitor(sink, initial_disk_usage)

            child = stack.enter_context(self.child_factory(config.command, config.shell))

            self.sampling_loop = SamplingLoop(
                source=self.source,
                monitor=monitor,
                child=child,
                path=path,
                rate_ms=config.rate_ms,
                sleep=self.sleep,
            )
            self.sampling_loop.start()
            try:
                self.sampling_loop.join()
            except KeyboardInterrupt:
                # The command got the same signal; the sink stays open
                # until the sampler has taken its final reading.
                logger.warning("Interrupted, waiting for the command to exit")
                self.sampling_loop.join()
                raise

            last_record = monitor.last_record
            result = RunResult(
                records_written=monitor.records_written,
                initial_disk_usage=initial_disk_usage,
                final_disk_usage=last_record.disk_usage if last_record else None,
                peak_disk_usage=monitor.state.peak_disk_usage,
                elapsed_ms=last_record.elapsed if last_record else monitor.elapsed_ms(),
                child_returncode=child.returncode,
            )

        logger.info(
            f"Monitoring finished: {result.records_written} record(s), "
            f"peak {result.peak_disk_usage}, final delta {result.final_delta}, "
            f"command exit code {result.child_returncode}"
        )
        return result
