"""Batch-mode entry point.

Usage:
    file-data-batch <paths file> [--workers N] [--print-lines] [--timeout S]

Reads the manifest, scans every listed path concurrently and prints
each path with its matched files.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from config import SCAN_WORKERS, SORT_MATCHES
from core.cancellation import CancelToken
from core.errors import ManifestUnreadableError, ScanCancelledError
from core.logs import configure_logging
from scanning.orchestrator import ScanOrchestrator
from scanning.sinks import ConsoleSink
from sources.manifest_reader import ManifestReader
from sources.path_resolver import PathResolver

logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    if not args.paths_file.strip():
        logger.error("Must specify the name of file containing paths.")
        return 1

    print(f"Micro Service: {parser.prog}")
    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="file-data-batch",
        description="Read data lines from every flat file matched by the paths in a manifest.",
    )
    parser.add_argument("paths_file", help="Name of the file containing paths.")
    parser.add_argument(
        "--workers", type=int, default=SCAN_WORKERS,
        help="Maximum paths scanned at once (default: CPU count).",
    )
    parser.add_argument(
        "--print-lines", action="store_true",
        help="Print extracted lines under each file.",
    )
    parser.add_argument(
        "--timeout", type=float, default=None,
        help="Abort the scan after this many seconds.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    return parser


async def _run(args: argparse.Namespace) -> int:
    try:
        patterns = await asyncio.to_thread(ManifestReader().read, args.paths_file)
    except ManifestUnreadableError as e:
        logger.error("%s", e)
        return 1

    orchestrator = ScanOrchestrator(
        resolver=PathResolver(sort_matches=SORT_MATCHES),
        max_workers=args.workers,
    )
    print(f"Workers: {orchestrator.max_workers}")
    print("Processing the following path(s):")

    try:
        report = await orchestrator.run_batch(
            patterns,
            sink=ConsoleSink(print_lines=args.print_lines),
            token=CancelToken(timeout=args.timeout),
        )
    except ScanCancelledError as e:
        logger.error("Scan aborted: %s", e)
        return 1

    if report.failed:
        logger.warning("%d of %d path(s) could not be resolved", len(report.failed), len(report.results))
    print("Finished.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
