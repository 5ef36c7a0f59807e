"""
Disk usage source backed by the external ``du`` utility.

The directory is measured with ``du -d 0 <path>``, which prints a single
aggregate line: the size, a tab, then the path. Only the leading field up to
the first tab is parsed.
"""

import logging
import re
import subprocess
from pathlib import Path
from typing import List, Union

from ..models.config import DEFAULT_DU_COMMAND
from ..validation import MeasurementError
from .base import DiskUsageSource

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = b"\t"
SIZE_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_du_output(stdout: bytes) -> int:
    """
    Extract the size from raw ``du`` output.

    Args:
        stdout: Bytes written by ``du`` to standard output.

    Returns:
        The integer value of the leading field.

    Raises:
        MeasurementError: If the output has no tab delimiter, or the leading
                          field is empty or not an integer.

    Examples:
        >>> parse_du_output(b"1024\\t/tmp/build\\n")
        1024
    """
    separator_idx = stdout.find(FIELD_SEPARATOR)
    if separator_idx == -1:
        raise MeasurementError("Failed to find directory size in du output")

    try:
        size_text = stdout[:separator_idx].decode("utf-8")
    except UnicodeDecodeError as e:
        raise MeasurementError(f"du output is not valid UTF-8: {e}") from e

    # int() alone would also take whitespace, underscores and non-ASCII digits
    if not SIZE_PATTERN.fullmatch(size_text):
        raise MeasurementError(f"Invalid directory size in du output: {size_text!r}")
    return int(size_text)


class DuDiskUsageSource(DiskUsageSource):
    """
    Measures directories by invoking ``du -d 0``.

    Attributes:
        du_command: Executable name or path of the ``du`` utility.
    """

    def __init__(self, du_command: str = DEFAULT_DU_COMMAND):
        self.du_command = du_command

    def build_command(self, path: Union[str, Path]) -> List[str]:
        return [self.du_command, "-d", "0", str(path)]

    def measure(self, path: Union[str, Path]) -> int:
        command = self.build_command(path)
        try:
            process = subprocess.run(command, capture_output=True, check=False)
        except OSError as e:
            raise MeasurementError(
                f"Could not run '{self.du_command}' for {path}: {e}"
            ) from e

        try:
            size = parse_du_output(process.stdout)
        except MeasurementError as e:
            stderr = process.stderr.decode("utf-8", errors="replace").strip()
            if process.returncode != 0 and stderr:
                raise MeasurementError(
                    f"'{' '.join(command)}' exited with code {process.returncode}: {stderr}"
                ) from e
            raise

        if process.returncode != 0:
            # du still prints a total when some entries were unreadable
            logger.warning(
                f"'{' '.join(command)}' exited with code {process.returncode}, "
                f"using reported size {size}"
            )
        return size
