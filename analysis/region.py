"""
Target region location.

A paper target is printed in ink on a lighter backdrop. The tight box of
"ink" pixels is padded, clipped to the image and forced square, so the
physical target width maps onto both axes of the analysis region.
"""

from __future__ import annotations

import numpy as np

from geometry import clip_box, pad_box, square_box

from .config import AnalysisConfig
from .types import GrayscaleImage, Region, Rejection, RejectionCode


def find_ink_bounds(image: GrayscaleImage, not_white_threshold: int) -> Region | None:
    """Return the tight bounding box of pixels darker than not_white_threshold.

    Returns:
        Region around all ink pixels, or None if the image has none.
    """
    ink = image.pixels < not_white_threshold
    rows = np.flatnonzero(ink.any(axis=1))
    if rows.size == 0:
        return None
    cols = np.flatnonzero(ink.any(axis=0))
    return Region(
        min_x=int(cols[0]),
        min_y=int(rows[0]),
        max_x=int(cols[-1]),
        max_y=int(rows[-1]),
    )


def square_analysis_region(
    ink: Region,
    image: GrayscaleImage,
    pad_pct: float,
) -> Region:
    """Derive the square analysis region from the ink bounds.

    Pads by pad_pct of the ink box width/height, clips to the image, shrinks
    the longer side to the shorter one around the same center and clips again.
    """
    pad_x = int(round(ink.width * pad_pct))
    pad_y = int(round(ink.height * pad_pct))

    box = clip_box(pad_box(ink.as_box(), pad_x, pad_y), image.width, image.height)
    # square_box stays inside its input, so the second clip never unsquares it
    box = clip_box(square_box(box), image.width, image.height)
    return Region.from_box(box)


def locate_region(
    image: GrayscaleImage,
    config: AnalysisConfig,
) -> tuple[Region, Region] | Rejection:
    """Find the square analysis region of a target photo.

    Returns:
        (region, ink_bounds) on success, or a NO_TARGET_REGION rejection
        when the image contains no ink at all.
    """
    ink = find_ink_bounds(image, config.not_white_threshold)
    if ink is None:
        return Rejection(
            RejectionCode.NO_TARGET_REGION,
            {
                "notWhiteThreshold": config.not_white_threshold,
                "minIntensity": int(image.pixels.min()),
            },
        )
    region = square_analysis_region(ink, image, config.ink_pad_pct)
    return region, ink
