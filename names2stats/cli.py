"""Command-line entry point: names on stdin, JSONL on stdout."""

import argparse
import sys
from collections.abc import Sequence
from datetime import timezone

import anyio
from loguru import logger

from names2stats.config import ROOT_DIR_ENV, Settings
from names2stats.exceptions import Names2StatsError
from names2stats.names import reader_to_names
from names2stats.pipeline import names_to_jsonl


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="names2stats",
        description="Read file names from stdin and write their stats as JSON Lines.",
    )
    ap.add_argument("--root", default=settings.root_dir_name, help=f"Sandbox root directory (env: {ROOT_DIR_ENV})")
    ap.add_argument(
        "--follow-symlinks",
        action=argparse.BooleanOptionalAction,
        default=settings.follow_symlinks,
        help="Follow a symlink in the last path component",
    )
    ap.add_argument(
        "--local-time",
        action=argparse.BooleanOptionalAction,
        default=settings.local_time,
        help="Render modified_time in the local timezone instead of UTC",
    )
    ap.add_argument("--log-level", default=settings.log_level, help="Log level for stderr")
    return ap


def configure_logging(level: str) -> int:
    """Send log records to stderr. Returns the loguru handler id."""
    logger.remove()
    return logger.add(sys.stderr, level=level.upper())


async def _run(args: argparse.Namespace, buffer_size: int) -> int:
    stdin = anyio.wrap_file(sys.stdin.buffer)
    stdout = anyio.wrap_file(sys.stdout)
    return await names_to_jsonl(
        args.root,
        reader_to_names(stdin),
        stdout,
        follow_symlinks=args.follow_symlinks,
        tz=None if args.local_time else timezone.utc,
        buffer_size=buffer_size,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Run the pipeline and return the process exit code.

    Exit codes:
        0: all names written.
        1: any other names2stats error.
        65, 66, 73, 74, 77, 78: the ``exit_code`` of the error that stopped
            the run (see ``names2stats.exceptions``).
    """
    settings = Settings()
    args = build_parser(settings).parse_args(argv)
    handler_id = configure_logging(args.log_level)
    try:
        args.root = args.root or settings.require_root_dir()
        written = anyio.run(_run, args, settings.buffer_size)
        logger.debug(f"Wrote {written} records")
    except Names2StatsError as e:
        logger.error(f"{e}")
        return e.exit_code
    finally:
        logger.remove(handler_id)
    return 0
