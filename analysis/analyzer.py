"""
Main analysis orchestration.

Ties the stages together in strict forward order:
region location -> plausibility gates -> binarization -> labeling ->
candidate filtering -> group selection -> correction.
The first stage that returns a Rejection ends the run.
"""

from __future__ import annotations

import logging

import numpy as np

from preprocessing import PreprocessConfig, preprocess_image_bytes

from .clustering import select_shot_group
from .config import AnalysisConfig
from .correction import compute_correction
from .filtering import filter_candidates
from .gates import check_target_plausibility
from .labeling import label_components
from .region import locate_region
from .threshold import binarize, clamped_threshold
from .types import AnalysisResult, GrayscaleImage, Region, Rejection

logger = logging.getLogger(__name__)


def _as_grayscale_image(image: GrayscaleImage | np.ndarray) -> GrayscaleImage:
    if isinstance(image, GrayscaleImage):
        return image
    return GrayscaleImage(image)


def _log_outcome(result: AnalysisResult) -> None:
    if result.ok:
        outcome = result.outcome
        logger.info(
            "Correction: windage %+.2f (%s), elevation %+.2f (%s), %s shots",
            outcome.windage_clicks, outcome.windage_direction or "-",
            outcome.elevation_clicks, outcome.elevation_direction or "-",
            len(result.group) if result.group else 0,
        )
    else:
        logger.info("Rejected: %s", result.code.value)


def analyze_region(
    image: GrayscaleImage | np.ndarray,
    region: Region,
    config: AnalysisConfig | None = None,
    ink_bounds: Region | None = None,
) -> AnalysisResult:
    """Run binarization through correction on a known analysis region.

    Use this when the target square is already known; analyze_grayscale()
    locates and gates the region first, then calls this.

    Raises:
        ValueError: If the config is invalid or the region lies outside the image.
    """
    if config is None:
        config = AnalysisConfig()
    config.validate()
    image = _as_grayscale_image(image)

    if not region.within(image):
        raise ValueError(
            f"Region {region.as_box()} outside {image.width}x{image.height} image"
        )

    crop = region.crop(image)
    threshold = clamped_threshold(crop, config.otsu_clamp_min, config.otsu_clamp_max)
    components = label_components(binarize(crop, threshold), origin=(region.min_x, region.min_y))
    logger.debug("Threshold %s, %s components", threshold, len(components))

    def finish(outcome, candidates=None, group=None) -> AnalysisResult:
        return AnalysisResult(
            outcome=outcome,
            image_dimensions=(image.width, image.height),
            region=region,
            ink_bounds=ink_bounds,
            threshold=threshold,
            components=len(components),
            candidates=candidates or [],
            group=group,
        )

    filtered = filter_candidates(components, region, config)
    if isinstance(filtered, Rejection):
        return finish(Rejection(filtered.code, {"thresholdUsed": threshold, **filtered.diagnostics}))

    group = select_shot_group(filtered, config.max_shots)
    outcome = compute_correction(
        group.centroid,
        region,
        config,
        diagnostics={
            "thresholdUsed": threshold,
            "candidatesFound": len(filtered),
            "shotsUsed": len(group),
            "groupCentroid": {"x": round(group.centroid[0], 3), "y": round(group.centroid[1], 3)},
            "region": region.to_dict(),
        },
    )
    return finish(outcome, candidates=filtered, group=group)


def analyze_grayscale(
    image: GrayscaleImage | np.ndarray,
    config: AnalysisConfig | None = None,
) -> AnalysisResult:
    """Turn a grayscale target photo into a scope correction.

    Args:
        image: GrayscaleImage or 2D uint8 array (already upright and bounded).
        config: Analysis configuration. If None, uses default settings.

    Returns:
        AnalysisResult whose outcome is a CorrectionResult or a Rejection.

    Raises:
        ValueError / TypeError: On an invalid image or config (input errors).
    """
    if config is None:
        config = AnalysisConfig()
    config.validate()
    image = _as_grayscale_image(image)

    located = locate_region(image, config)
    if isinstance(located, Rejection):
        result = AnalysisResult(outcome=located, image_dimensions=(image.width, image.height))
        _log_outcome(result)
        return result
    region, ink = located
    logger.debug("Region %s from ink %s", region.as_box(), ink.as_box())

    rejection = check_target_plausibility(image, region, ink, config)
    if rejection is not None:
        result = AnalysisResult(
            outcome=rejection,
            image_dimensions=(image.width, image.height),
            region=region,
            ink_bounds=ink,
        )
        _log_outcome(result)
        return result

    result = analyze_region(image, region, config, ink_bounds=ink)
    _log_outcome(result)
    return result


def analyze_image_bytes(
    image_data: bytes,
    config: AnalysisConfig | None = None,
    preprocess_config: PreprocessConfig | None = None,
) -> AnalysisResult:
    """Decode, preprocess and analyze an uploaded photo.

    Raises:
        ImageDecodeError: If the bytes are not a readable image.
        ValueError: If either config is invalid.
    """
    if config is None:
        config = AnalysisConfig()
    config.validate()

    preprocessed = preprocess_image_bytes(image_data, preprocess_config)
    result = analyze_grayscale(preprocessed.processed, config)
    result.scale_factor = preprocessed.scale_factor
    return result
