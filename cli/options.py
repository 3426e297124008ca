"""Shooting-setup and preprocessing options shared by CLI commands."""

from __future__ import annotations

import argparse

from analysis import AnalysisConfig
from preprocessing import PreprocessConfig

# CLI flag dest -> AnalysisConfig field
CONFIG_OPTIONS = {
    "distance_yards": ("--distance-yards", float, "Distance to target in yards (default: 100)"),
    "moa_per_click": ("--moa-per-click", float, "Scope click value in MOA (default: 0.25)"),
    "target_width_in": ("--target-width-in", float, "Physical target width in inches (default: 23)"),
    "target_height_in": ("--target-height-in", float, "Physical target height in inches (optional)"),
    "min_shots": ("--min-shots", int, "Fewest holes needed for a correction (default: 3)"),
    "max_shots": ("--max-shots", int, "Most holes used for the group (default: 10)"),
    "max_abs_clicks": ("--max-abs-clicks", float, "Largest plausible correction per axis (default: 40)"),
}


def add_config_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("shooting setup")
    for dest, (flag, kind, help_text) in CONFIG_OPTIONS.items():
        group.add_argument(flag, dest=dest, type=kind, default=None, help=help_text)
    parser.add_argument(
        "--max-edge",
        type=int,
        default=None,
        metavar="PX",
        help="Downsample photos so the long edge is at most PX (default: 1200)",
    )


def configs_from_args(args: argparse.Namespace) -> tuple[AnalysisConfig, PreprocessConfig]:
    """Build validated configs from parsed args.

    Raises:
        ValueError: If any value is invalid.
    """
    overrides = {
        dest: getattr(args, dest)
        for dest in CONFIG_OPTIONS
        if getattr(args, dest, None) is not None
    }
    analysis_config = AnalysisConfig().with_overrides(**overrides)

    preprocess_config = PreprocessConfig()
    if args.max_edge is not None:
        preprocess_config = PreprocessConfig(max_edge=args.max_edge)
    preprocess_config.validate()
    return analysis_config, preprocess_config
