# src/marketpulse/app.py
"""
Application Entry Point - One-shot Snapshot From the Command Line

This module is the composition root for running the aggregator outside the
dashboard: it configures logging, collects one snapshot and prints it as
JSON on stdout. Logs go to stderr (and optionally a file).

Files that USE this module:
- python -m marketpulse (module entry point)
- marketpulse console script (pyproject.toml)

Files that this module USES:
- marketpulse.shared.logging_conf (setup_logging for logging configuration)
- marketpulse.config (settings for logging configuration)
- marketpulse.application.snapshot_service (get_snapshot)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import argparse  # Command-line argument parsing
import json  # Serialize the snapshot for stdout
import logging  # Standard library for logging messages
import sys  # Exit codes and stdout
from typing import Optional, Sequence

from marketpulse.config import settings  # Logging configuration values
from marketpulse.shared.logging_conf import setup_logging  # Configure logging with file rotation
from marketpulse.application.snapshot_service import get_snapshot  # Aggregation core


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marketpulse",
        description="Collect one market snapshot and print it as JSON.",
    )
    parser.add_argument("--pretty", action="store_true", help="indent the JSON output")
    parser.add_argument("--log-level", default=None, help="override LOG_LEVEL (DEBUG, INFO, ...)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Collect a snapshot and print it.

    Returns:
        0 when the snapshot was produced (even with failed sections),
        1 when the run itself failed
    """
    args = build_parser().parse_args(argv)

    setup_logging(
        level=args.log_level or settings.log_level,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    logger = logging.getLogger(__name__)

    payload = get_snapshot()
    json.dump(payload, sys.stdout, indent=2 if args.pretty else None)
    sys.stdout.write("\n")

    if "timestamp" not in payload:
        logger.error("Snapshot run failed: %s", payload.get("error"))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
