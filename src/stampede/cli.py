#!/usr/bin/env python3
# cli.py — command line entry point for stampede
#
# example: for x in $(seq 0 10); do echo /index.html; done | stampede http://192.168.2.176 10000

import argparse
import asyncio
import logging
import sys
from typing import BinaryIO, List

from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from stampede.core import StressRunner
from stampede.errors import ConfigError
from stampede.logging_config import console, setup_logging
from stampede.models import RunConfig

logger = logging.getLogger(__name__)


def non_negative_int(value: str) -> int:
    digits = value[1:] if value.startswith("+") else value
    if not (digits.isascii() and digits.isdigit()):
        raise argparse.ArgumentTypeError(f"invalid count: {value!r}")
    return int(digits)


def parse_args(argv: List[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="stampede",
        description="Concurrent HTTP GET load generator; reads target paths from stdin",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("url", help="url to connect to")
    parser.add_argument(
        "count",
        type=non_negative_int,
        help="number of times to send requests",
    )

    parser.add_argument(
        "--backoff-ms",
        type=int,
        default=100,
        help="Delay after a failed request before the next attempt",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Total per-request timeout in seconds (aiohttp default when unset)",
    )
    parser.add_argument(
        "--verify-tls",
        action="store_true",
        help="Validate HTTPS certificates",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar on stderr",
    )

    # Logging & Debugging
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug-level logging",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional file to write logs to (e.g., stampede.log)",
    )

    return parser.parse_args(argv)


def read_targets(stream: BinaryIO) -> List[str]:
    """Decode one UTF-8 target per line, dropping the line terminator."""
    try:
        return [line.decode("utf-8").rstrip("\n").rstrip("\r") for line in stream]
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"failed to read targets from stdin: {e}") from e


async def run(args, targets: List[str]) -> None:
    config = RunConfig(
        base_url=args.url,
        count=args.count,
        backoff_s=args.backoff_ms / 1000.0,
        timeout_s=args.timeout,
        verify_tls=args.verify_tls,
    )

    progress = None
    task_id = None
    on_advance = None
    if args.progress:
        progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console,
        )
        task_id = progress.add_task("[cyan]Stampeding...", total=len(targets) * args.count)
        on_advance = lambda: progress.advance(task_id)

    runner = StressRunner(targets, config, on_advance=on_advance)
    if progress:
        progress.start()
    try:
        await runner.run()
    finally:
        if progress:
            progress.stop()


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)

    log_level = "DEBUG" if args.debug else "INFO"
    setup_logging(level=log_level, log_file=args.log_file)

    try:
        targets = read_targets(sys.stdin.buffer)
        logger.info(f"Read {len(targets)} targets from stdin")
        asyncio.run(run(args, targets))
    except ConfigError as e:
        logger.error(f"exit on error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
