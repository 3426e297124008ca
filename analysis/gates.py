"""
Target plausibility gates.

Cheap statistics that reject photos which are not a legible, mostly
in-frame paper target before any labeling work is done.
"""

from __future__ import annotations

import logging

import numpy as np

from .config import AnalysisConfig
from .types import GrayscaleImage, Region, Rejection, RejectionCode

logger = logging.getLogger(__name__)


def region_statistics(
    image: GrayscaleImage,
    region: Region,
    ink: Region,
    config: AnalysisConfig,
) -> dict[str, float]:
    """Compute the numbers every gate looks at.

    Returns:
        Dict with areaFrac (region/image), inkAspect (ink box w/h),
        whiteFrac and darkFrac (pixel composition inside the region).
    """
    crop = region.crop(image)
    total = crop.size
    white = int(np.count_nonzero(crop >= config.paper_white_thresh))
    dark = int(np.count_nonzero(crop <= config.dark_thresh))
    return {
        "areaFrac": region.area / image.area,
        "inkAspect": ink.width / ink.height,
        "whiteFrac": white / total,
        "darkFrac": dark / total,
    }


def check_target_plausibility(
    image: GrayscaleImage,
    region: Region,
    ink: Region,
    config: AnalysisConfig,
) -> Rejection | None:
    """Reject photos that are not a full, paper-dominated target.

    Checks, in order:
    1. Region covers at least min_bbox_area_frac of the image
    2. Ink box aspect ratio is within [bbox_aspect_min, bbox_aspect_max]
       (the region itself is square by construction)
    3. Paper-white pixels dominate and dark pixels do not

    Returns:
        None if the photo passes, otherwise a Rejection whose diagnostics
        carry all computed statistics.
    """
    stats = region_statistics(image, region, ink, config)
    logger.debug(
        "Gate stats: area=%.3f aspect=%.2f white=%.3f dark=%.3f",
        stats["areaFrac"], stats["inkAspect"], stats["whiteFrac"], stats["darkFrac"],
    )

    reason = None
    code = None

    if stats["areaFrac"] < config.min_bbox_area_frac:
        code = RejectionCode.NOT_FULL_TARGET_IN_FRAME
        reason = f"areaFrac {stats['areaFrac']:.3f} below {config.min_bbox_area_frac}"
    elif not config.bbox_aspect_min <= stats["inkAspect"] <= config.bbox_aspect_max:
        code = RejectionCode.NOT_FULL_TARGET_IN_FRAME
        reason = (
            f"inkAspect {stats['inkAspect']:.2f} outside "
            f"[{config.bbox_aspect_min}, {config.bbox_aspect_max}]"
        )
    elif stats["whiteFrac"] < config.paper_white_frac_min:
        code = RejectionCode.NOT_PAPER_TARGET
        reason = f"whiteFrac {stats['whiteFrac']:.3f} below {config.paper_white_frac_min}"
    elif stats["darkFrac"] > config.dark_frac_max:
        code = RejectionCode.NOT_PAPER_TARGET
        reason = f"darkFrac {stats['darkFrac']:.3f} above {config.dark_frac_max}"

    if code is None:
        return None
    return Rejection(code, {**stats, "reason": reason})
