#!/usr/bin/env python3
"""
Unified CLI for scope correction from target photos.

Usage:
    sec analyze <image>                   # Print the correction for one photo as JSON
    sec analyze <image> --overlay out.png # ...and save a debug overlay
    sec analyze <image> --distance-yards 200 --moa-per-click 0.1
    sec batch <dir>                       # One JSON line per photo, on a worker pool
    sec batch <dir> -j 4 -o results.jsonl

Exit codes: 0 correction, 2 rejected by a gate, 1 input or internal error.
"""

import argparse
import logging
import sys

from logging_utils import configure_logging, add_logging_args
from cli.analyze import add_analyze_subparser
from cli.batch import add_batch_subparser

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sec",
        description="Scope correction - turn a shot target photo into windage/elevation clicks",
    )
    add_logging_args(parser)
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_analyze_subparser(subparsers)
    add_batch_subparser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    cmd = getattr(args, "_cmd", None)
    if cmd is None:
        parser.print_help()
        return 1
    return cmd(args)


if __name__ == "__main__":
    sys.exit(main())
