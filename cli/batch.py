"""Batch command: analyze every photo in a directory on a worker pool."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from batch import analyze_files, find_images
from config import BATCH_TIMEOUT_SECONDS

from .options import add_config_args, configs_from_args

logger = logging.getLogger(__name__)


def add_batch_subparser(subparsers: argparse._SubParsersAction) -> None:
    batch_parser = subparsers.add_parser(
        "batch",
        help="Analyze a directory of target photos (one JSON line per photo)",
    )
    batch_parser.add_argument("source", help="Directory or single image file")
    add_config_args(batch_parser)
    batch_parser.add_argument(
        "--workers", "-j",
        type=int,
        default=None,
        help="Worker processes (default: CPU count, 1 = no pool)",
    )
    batch_parser.add_argument(
        "--timeout",
        type=float,
        default=BATCH_TIMEOUT_SECONDS,
        metavar="SECONDS",
        help=f"Give up on a photo after this long (default: {BATCH_TIMEOUT_SECONDS:g})",
    )
    batch_parser.add_argument(
        "--output", "-o",
        metavar="FILE",
        help="Write JSON lines to FILE instead of stdout",
    )
    batch_parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the progress bar",
    )
    batch_parser.set_defaults(_cmd=cmd_batch)


def cmd_batch(args: argparse.Namespace) -> int:
    try:
        analysis_config, preprocess_config = configs_from_args(args)
        paths = find_images(args.source)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("Found %s images in %s", len(paths), args.source)
    if not paths:
        logger.warning("No images found.")
        return 0

    reports = analyze_files(
        paths,
        analysis_config,
        preprocess_config,
        max_workers=args.workers,
        timeout=args.timeout,
        show_progress=not args.no_progress,
    )

    lines = [json.dumps(report.to_dict()) for report in reports]
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")
        logger.info("Results written to %s", args.output)
    else:
        for line in lines:
            sys.stdout.write(line + "\n")

    errors = sum(1 for r in reports if r.error)
    logger.info(
        "%s photos: %s corrections, %s rejected, %s errors",
        len(reports),
        sum(1 for r in reports if r.ok),
        len(reports) - errors - sum(1 for r in reports if r.ok),
        errors,
    )
    return 1 if errors else 0
