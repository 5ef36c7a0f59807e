"""
Reading recorded runs back with Polars.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Union

import polars as pl

from ..models.results import RECORD_FIELDS
from ..validation import ValidationError

logger = logging.getLogger(__name__)

RECORD_SCHEMA = {name: pl.Int64 for name in RECORD_FIELDS}


def load_records(path: Union[str, Path]) -> pl.DataFrame:
    """
    Load a tab-delimited record stream into a DataFrame.

    Args:
        path: File written by a monitoring run.

    Returns:
        DataFrame with Int64 columns ``elapsed, disk_usage, delta, peak``.
        An empty file yields an empty frame with the same schema.

    Raises:
        ValidationError: If the file is missing or its header does not match.
    """
    path = Path(path)
    if not path.is_file():
        raise ValidationError(f"Record file not found: {path}", field_name="input", value=str(path))

    with open(path, "r", encoding="utf-8") as f:
        header = f.readline().rstrip("\r\n")

    if not header:
        logger.warning(f"Record file {path} is empty")
        return pl.DataFrame(schema=RECORD_SCHEMA)

    columns = tuple(header.split("\t"))
    if columns != RECORD_FIELDS:
        raise ValidationError(
            f"Unexpected header in {path}: {list(columns)}, expected {list(RECORD_FIELDS)}",
            field_name="input",
            value=str(path),
        )

    try:
        df = pl.read_csv(path, separator="\t", has_header=True, schema=RECORD_SCHEMA)
    except pl.exceptions.PolarsError as e:
        raise ValidationError(f"Could not parse records in {path}: {e}", field_name="input", value=str(path)) from e

    logger.debug(f"Loaded {len(df)} record(s) from {path}")
    return df


def summarize_records(df: pl.DataFrame) -> Dict[str, Any]:
    """
    Compute headline numbers for a recorded run.

    Returns:
        Dict with ``samples``, ``duration_ms``, ``initial_disk_usage``,
        ``final_disk_usage``, ``peak_disk_usage`` and ``final_delta``.
        Values other than ``samples`` are None for an empty frame.
    """
    if df.is_empty():
        return {
            "samples": 0,
            "duration_ms": None,
            "initial_disk_usage": None,
            "final_disk_usage": None,
            "peak_disk_usage": None,
            "final_delta": None,
        }

    first = df.row(0, named=True)
    last = df.row(-1, named=True)
    return {
        "samples": len(df),
        "duration_ms": last["elapsed"],
        # delta is relative to the pre-execution reading
        "initial_disk_usage": first["disk_usage"] - first["delta"],
        "final_disk_usage": last["disk_usage"],
        "peak_disk_usage": last["peak"],
        "final_delta": last["delta"],
    }
