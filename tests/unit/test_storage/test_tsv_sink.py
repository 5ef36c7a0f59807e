"""
Unit tests for the tab-delimited record sink.
"""

import io
import sys

import pytest

from dumonitor.models.results import Record
from dumonitor.storage.tsv_sink import HEADER_LINE, RecordSink, format_record, open_sink
from dumonitor.validation import WriteError


class FlushCountingStream(io.StringIO):
    def __init__(self):
        super().__init__()
        self.flushes = 0
        self.writes = []

    def write(self, s):
        self.writes.append(s)
        return super().write(s)

    def flush(self):
        self.flushes += 1
        super().flush()


class FailingFlushStream(io.StringIO):
    def flush(self):
        raise OSError("disk full")


@pytest.mark.unit
class TestRecordSink:

    def test_format_record(self):
        assert format_record(Record(5, 100, -20, 120)) == "5\t100\t-20\t120\n"

    def test_header_written_with_first_record_in_single_write(self):
        stream = FlushCountingStream()
        sink = RecordSink(stream)

        sink.write(Record(0, 1, 0, 1))
        sink.write(Record(3, 2, 1, 2))

        assert stream.writes == [HEADER_LINE + "0\t1\t0\t1\n", "3\t2\t1\t2\n"]
        assert stream.flushes == 2
        assert sink.records_written == 2

    def test_flush_failure_is_write_error(self):
        sink = RecordSink(FailingFlushStream(), name="full.tsv")
        with pytest.raises(WriteError, match="full.tsv"):
            sink.write(Record(0, 1, 0, 1))
        assert sink.records_written == 0

    def test_write_after_close(self):
        sink = RecordSink(io.StringIO())
        sink.close()
        with pytest.raises(WriteError, match="closed"):
            sink.write(Record(0, 1, 0, 1))

    def test_close_releases_owned_stream_only(self):
        owned, borrowed = io.StringIO(), io.StringIO()
        RecordSink(owned, owns_stream=True).close()
        RecordSink(borrowed, owns_stream=False).close()
        assert owned.closed
        assert not borrowed.closed

    def test_close_is_idempotent(self):
        sink = RecordSink(io.StringIO(), owns_stream=True)
        sink.close()
        sink.close()
        assert sink.closed

    def test_context_manager_keeps_original_error(self):
        stream = io.StringIO()
        with pytest.raises(KeyError):
            with RecordSink(stream, owns_stream=True):
                raise KeyError("original")
        assert stream.closed


@pytest.mark.unit
class TestOpenSink:

    def test_stdout_by_default(self):
        sink = open_sink(None)
        assert sink.name == "<stdout>"
        sink.close()
        assert not sys.stdout.closed

    def test_creates_file(self, tmp_path):
        output = tmp_path / "usage.tsv"
        with open_sink(output) as sink:
            sink.write(Record(0, 10, 0, 10))
            assert output.read_text() == HEADER_LINE + "0\t10\t0\t10\n"
        assert sink.closed

    def test_truncates_existing_file(self, tmp_path):
        output = tmp_path / "usage.tsv"
        output.write_text("stale contents\n")
        with open_sink(output):
            pass
        assert output.read_text() == ""

    def test_unwritable_location(self, tmp_path):
        with pytest.raises(WriteError, match="Cannot create output file"):
            open_sink(tmp_path / "missing_dir" / "usage.tsv")
