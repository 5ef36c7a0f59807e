"""
Defines the abstract interface for disk usage sources.

A source turns a directory path into a single point-in-time size reading.
The sampling loop only depends on this interface, so tests can drive it
with a deterministic fake instead of the external ``du`` utility.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


class DiskUsageSource(ABC):
    """
    Abstract base class for disk usage sources.

    Implementations must be stateless with respect to successive calls and
    must raise MeasurementError when no reading can be produced.
    """

    @abstractmethod
    def measure(self, path: Union[str, Path]) -> int:
        """
        Take one aggregate size reading of ``path``.

        Args:
            path: The directory to measure.

        Returns:
            The size reported for the whole subtree.

        Raises:
            MeasurementError: If the reading cannot be produced or parsed.
        """
        pass
