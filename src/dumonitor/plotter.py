"""
Generates plots from recorded disk usage runs.

Reads a tab-delimited record file with Polars and renders an interactive
Plotly chart of disk usage and running peak over elapsed time. The chart is
saved as HTML and, when Kaleido is installed, as a static PNG.

Usage:
    dumonitor-plot usage.tsv --output-dir plots --summary
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import plotly.graph_objects as go
import polars as pl

from .storage.tsv_reader import load_records, summarize_records
from .validation import ValidationError, handle_cli_error

logger = logging.getLogger(__name__)


def build_figure(df: pl.DataFrame, title: str) -> go.Figure:
    """
    Build a line chart of ``disk_usage`` and ``peak`` against elapsed seconds.

    The initial (pre-execution) level is drawn as a dotted horizontal line.
    """
    elapsed_s = (df["elapsed"] / 1000.0).to_list()

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(x=elapsed_s, y=df["disk_usage"].to_list(), mode="lines", name="Disk usage")
    )
    fig.add_trace(
        go.Scatter(
            x=elapsed_s,
            y=df["peak"].to_list(),
            mode="lines",
            name="Peak",
            line=dict(dash="dash"),
        )
    )

    if not df.is_empty():
        initial = df["disk_usage"][0] - df["delta"][0]
        fig.add_hline(y=initial, line_dash="dot", annotation_text="Initial")

    fig.update_layout(
        title=title,
        xaxis_title="Elapsed time (s)",
        yaxis_title="Disk usage",
        hovermode="x unified",
        legend_title_text="Series",
    )
    return fig


def save_plotly_figure(fig: go.Figure, base_filename: str, output_dir: Path) -> Path:
    """
    Saves a Plotly figure to HTML and, if possible, PNG.

    Returns:
        Path of the HTML file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    plot_filename_html = output_dir / f"{base_filename}.html"
    fig.write_html(plot_filename_html)
    logger.info(f"Interactive plot saved to: {plot_filename_html}")

    try:
        plot_filename_png = output_dir / f"{base_filename}.png"
        fig.write_image(plot_filename_png, width=1200, height=600)
        logger.info(f"Static plot saved to: {plot_filename_png}")
    except Exception as e_kaleido:
        # Optional export; the HTML plot is already written.
        logger.warning(
            f"Failed to save static plot to PNG (Kaleido might be missing or misconfigured): {e_kaleido}. "
            f"To enable PNG export, install Kaleido: `pip install dumonitor[export]`"
        )
    return plot_filename_html


def plot_records_file(
    input_path: Path, output_dir: Optional[Path] = None, title: Optional[str] = None
) -> Path:
    """
    Load a record file and write its chart next to it (or into ``output_dir``).

    Raises:
        ValidationError: If the file cannot be loaded or holds no records.
    """
    return plot_records(load_records(input_path), input_path, output_dir=output_dir, title=title)


def plot_records(
    df: pl.DataFrame, input_path: Path, output_dir: Optional[Path] = None, title: Optional[str] = None
) -> Path:
    """Chart already loaded records of ``input_path``."""
    if df.is_empty():
        raise ValidationError(f"No records to plot in {input_path}", field_name="input", value=str(input_path))

    fig = build_figure(df, title or f"Disk usage: {input_path.name}")
    return save_plotly_figure(fig, f"{input_path.stem}_disk_usage", output_dir or input_path.parent)


def format_summary(summary: Dict[str, Any]) -> str:
    return (
        f"samples={summary['samples']} duration_ms={summary['duration_ms']} "
        f"initial={summary['initial_disk_usage']} final={summary['final_disk_usage']} "
        f"peak={summary['peak_disk_usage']} final_delta={summary['final_delta']}"
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Command-line entry point for ``dumonitor-plot``."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    parser = argparse.ArgumentParser(
        prog="dumonitor-plot",
        description="Plot a disk usage record file produced by dumonitor.",
    )
    parser.add_argument("input", type=str, help="Tab-delimited record file.")
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for the generated plots (default: next to the input).",
    )
    parser.add_argument("--title", type=str, default=None, help="Chart title.")
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print a one-line summary of the run to stdout.",
    )
    args = parser.parse_args(argv)

    input_path = Path(args.input)
    output_dir = Path(args.output_dir) if args.output_dir else None
    try:
        df = load_records(input_path)
        plot_records(df, input_path, output_dir=output_dir, title=args.title)
        if args.summary:
            print(format_summary(summarize_records(df)))
    except (ValidationError, OSError) as e:
        handle_cli_error(error=e, context="plotting", exit_code=1, logger=logger)


if __name__ == "__main__":
    main()
