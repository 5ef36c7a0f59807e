"""
Tab-delimited record sink.

Rows are written one at a time and flushed immediately so a downstream
reader (``tail -f``, a pipe) sees every record as soon as it is produced.
The header row goes out together with the first record; a run that fails
before recording anything leaves the stream empty.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from ..models.results import RECORD_FIELDS, Record
from ..validation import WriteError

logger = logging.getLogger(__name__)

DELIMITER = "\t"
HEADER_LINE = DELIMITER.join(RECORD_FIELDS) + "\n"


def format_record(record: Record) -> str:
    """Render a record as one tab-delimited line, newline included."""
    return DELIMITER.join(str(value) for value in record.as_row()) + "\n"


class RecordSink:
    """
    Append-only writer for the record stream.

    Attributes:
        name: Human-readable destination used in log and error messages.
        records_written: Number of records successfully flushed.
    """

    def __init__(self, stream: TextIO, owns_stream: bool = False, name: str = "<stream>"):
        """
        Args:
            stream: Text stream receiving the rows.
            owns_stream: Close ``stream`` on release. False for stdout.
            name: Destination name for messages.
        """
        self._stream = stream
        self._owns_stream = owns_stream
        self._header_written = False
        self._closed = False
        self.name = name
        self.records_written = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, record: Record) -> None:
        """
        Write and flush one record.

        The full text (header included, on the first call) is assembled
        before a single write so a failure never leaves half a row behind
        in this object's buffer.

        Raises:
            WriteError: If the sink is closed or the stream rejects the data.
        """
        if self._closed:
            raise WriteError(f"Cannot write to closed output {self.name}")

        text = format_record(record)
        if not self._header_written:
            text = HEADER_LINE + text

        try:
            self._stream.write(text)
            self._stream.flush()
        except (OSError, ValueError) as e:
            raise WriteError(f"Failed to write record to {self.name}: {e}") from e

        self._header_written = True
        self.records_written += 1

    def close(self) -> None:
        """Flush and release the destination. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        try:
            if self._owns_stream:
                self._stream.close()
            else:
                self._stream.flush()
        except (OSError, ValueError) as e:
            raise WriteError(f"Failed to close output {self.name}: {e}") from e
        logger.debug(f"Released output {self.name} after {self.records_written} record(s)")

    def __enter__(self) -> "RecordSink":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        try:
            self.close()
        except WriteError:
            # Keep the original failure when already unwinding from one
            if exc_type is None:
                raise
            logger.warning(f"Ignoring error while releasing output {self.name}", exc_info=True)


def open_sink(output: Optional[Path] = None) -> RecordSink:
    """
    Open the record destination.

    Args:
        output: File to create (truncating any existing file), or None for
                standard output.

    Returns:
        A RecordSink; use it as a context manager to guarantee release.

    Raises:
        WriteError: If the output file cannot be created.
    """
    if output is None:
        return RecordSink(sys.stdout, owns_stream=False, name="<stdout>")

    try:
        stream = open(output, "w", encoding="utf-8", newline="")
    except OSError as e:
        raise WriteError(f"Cannot create output file {output}: {e}") from e
    logger.info(f"Writing records to {output}")
    return RecordSink(stream, owns_stream=True, name=str(output))
