"""Analyze command: one photo in, one JSON correction (or rejection) out."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from analysis import analyze_grayscale
from preprocessing import preprocess_image_bytes
from utils import save_analysis_overlay

from .options import add_config_args, configs_from_args

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_REJECTED = 2


def add_analyze_subparser(subparsers: argparse._SubParsersAction) -> None:
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Compute the scope correction for one target photo",
    )
    analyze_parser.add_argument("image", help="Path to the target photo")
    add_config_args(analyze_parser)
    analyze_parser.add_argument(
        "--overlay",
        metavar="PATH",
        help="Save a debug image with the region, candidates and group drawn on it",
    )
    analyze_parser.add_argument(
        "--artifacts",
        metavar="DIR",
        help="Save intermediate preprocessing images (original, grayscale, resize) to DIR",
    )
    analyze_parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2, 0 for one line)",
    )
    analyze_parser.set_defaults(_cmd=cmd_analyze)


def cmd_analyze(args: argparse.Namespace) -> int:
    try:
        analysis_config, preprocess_config = configs_from_args(args)
        image_data = Path(args.image).read_bytes()
        preprocessed = preprocess_image_bytes(
            image_data, preprocess_config, artifact_dir=args.artifacts
        )
    except (ValueError, OSError) as exc:
        # ImageDecodeError is a ValueError
        logger.error("%s", exc)
        return EXIT_ERROR

    try:
        result = analyze_grayscale(preprocessed.processed, analysis_config)
    except Exception:
        logger.exception("Analysis failed for %s", args.image)
        return EXIT_ERROR
    result.scale_factor = preprocessed.scale_factor
    for name, path in preprocessed.artifact_paths.items():
        logger.info("Saved %s artifact: %s", name, path)

    if args.overlay:
        try:
            written = save_analysis_overlay(preprocessed.processed, result, Path(args.overlay))
        except OSError as exc:
            logger.error("Could not write overlay to %s: %s", args.overlay, exc)
            return EXIT_ERROR
        if not written:
            return EXIT_ERROR

    payload = result.to_dict()
    json.dump(payload, sys.stdout, indent=args.indent or None)
    sys.stdout.write("\n")
    return EXIT_OK if result.ok else EXIT_REJECTED
