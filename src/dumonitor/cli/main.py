"""
Command-line interface for the dumonitor disk usage monitor.

Usage:
    dumonitor [-r RATE] [-p PATH] [-o OUTPUT] [--config FILE] COMMAND

Example:
    dumonitor -p build -r 250 -o usage.tsv "make -j8"
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from ..config import CONFIG_ENV_VAR, get_config, set_config_path
from ..models.config import MonitorConfig
from ..validation import (
    LOG_LEVEL_CHOICES,
    DiskMonitorError,
    ValidationError,
    handle_cli_error,
    validate_positive_integer,
)
from .orchestrator import DiskUsageRunner

# --- Logging Setup ---
# stderr: stdout may be carrying the record stream.
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dumonitor",
        description="Run a command and record the disk usage of a directory while it runs.",
    )
    parser.add_argument(
        "command",
        type=str,
        help="Shell command line to execute and monitor.",
    )
    parser.add_argument(
        "-r",
        "--rate",
        type=str,
        default=None,
        help="The rate at which to measure the directory disk usage, in milliseconds (default: 100).",
    )
    parser.add_argument(
        "-p",
        "--path",
        type=str,
        default=None,
        help="The path to the directory to measure disk usage for (default: current directory).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="The path to the output file (default: stdout).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"TOML file with a [monitor] table of defaults (default: ${CONFIG_ENV_VAR} if set).",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVEL_CHOICES,
        default=None,
        help="Logging verbosity on stderr (default: WARNING).",
    )
    return parser


def build_run_config(args: argparse.Namespace, defaults: MonitorConfig) -> MonitorConfig:
    """
    Merge parsed arguments over configuration defaults.

    Raises:
        ValidationError: If ``--rate`` is not a non-negative integer.
    """
    config = replace(defaults, command=args.command)
    if args.rate is not None:
        config.rate_ms = validate_positive_integer(args.rate, min_value=0, field_name="--rate")
    if args.path is not None:
        config.path = Path(args.path)
    if args.output is not None:
        config.output = Path(args.output)
    if args.log_level is not None:
        config.log_level = args.log_level
    return config


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for dumonitor.

    Exits with status 1 on invalid configuration or any failure during the
    run, with the error message logged to stderr.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        logging.getLogger().setLevel(args.log_level)

    try:
        if args.config:
            set_config_path(Path(args.config))
        config = build_run_config(args, get_config())
    except ValidationError as e:
        handle_cli_error(
            error=e,
            context="configuration",
            exit_code=1,
            include_traceback=False,
            logger=logger,
        )

    logging.getLogger().setLevel(config.log_level)
    logger.debug(f"Run configuration: {config}")

    runner = DiskUsageRunner(config)
    try:
        runner.run()
    except KeyboardInterrupt:
        logger.warning("Interrupted, monitoring stopped")
        sys.exit(130)
    except DiskMonitorError as e:
        handle_cli_error(
            error=e,
            context="monitoring run",
            exit_code=1,
            include_traceback=False,
            logger=logger,
        )


if __name__ == "__main__":
    main_cli()
