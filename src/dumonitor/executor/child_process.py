"""
Launching the monitored command.

The command runs as ``<shell> -c <command>`` with the caller's standard
streams. It is never signaled, paused or waited on with a timeout: the
only thing observed is whether it has exited.
"""

import logging
import subprocess
from typing import List, Optional

import psutil

from ..models.config import DEFAULT_SHELL
from ..validation import ChildSpawnError

logger = logging.getLogger(__name__)


class ChildProcess:
    """
    Handle on the monitored command.

    Use as a context manager; on exit the handle is released. A child that
    is still running at that point (the run failed) is left alone and a
    warning with its PID is logged.
    """

    def __init__(self, command: str, shell: str = DEFAULT_SHELL):
        self.command = command
        self.shell = shell
        self.process: Optional[psutil.Popen] = None

    @classmethod
    def spawn(cls, command: str, shell: str = DEFAULT_SHELL) -> "ChildProcess":
        """Create and start a child in one step."""
        child = cls(command, shell=shell)
        child.start()
        return child

    @property
    def argv(self) -> List[str]:
        return [self.shell, "-c", self.command]

    @property
    def pid(self) -> Optional[int]:
        return self.process.pid if self.process else None

    @property
    def returncode(self) -> Optional[int]:
        return self.process.returncode if self.process else None

    def start(self) -> None:
        """
        Launch the command.

        Raises:
            RuntimeError: If already started.
            ChildSpawnError: If the shell cannot be executed.
        """
        if self.process is not None:
            raise RuntimeError("Child process already started")
        try:
            self.process = psutil.Popen(self.argv)
        except (OSError, subprocess.SubprocessError) as e:
            raise ChildSpawnError(f"Failed to launch command {self.command!r}: {e}") from e
        logger.info(f"Started command with PID {self.process.pid}: {self.command}")

    def poll(self) -> Optional[int]:
        """Non-blocking liveness check: None while running, else the exit code."""
        if self.process is None:
            raise RuntimeError("Child process not started")
        return self.process.poll()

    def release(self) -> None:
        if self.process is None:
            return
        returncode = self.process.poll()
        if returncode is None:
            logger.warning(
                f"Command (PID {self.process.pid}) is still running and will not be monitored further"
            )
        else:
            logger.info(f"Command (PID {self.process.pid}) exited with code {returncode}")

    def __enter__(self) -> "ChildProcess":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()
