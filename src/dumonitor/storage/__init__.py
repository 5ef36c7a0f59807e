"""
Record stream storage: the streaming writer used during a run and the
Polars reader used for analysis afterwards.
"""

from .tsv_reader import RECORD_SCHEMA, load_records, summarize_records
from .tsv_sink import DELIMITER, HEADER_LINE, RecordSink, format_record, open_sink

__all__ = [
    "DELIMITER",
    "HEADER_LINE",
    "RECORD_SCHEMA",
    "RecordSink",
    "format_record",
    "load_records",
    "open_sink",
    "summarize_records",
]
