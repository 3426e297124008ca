"""
Pixel offset to scope clicks.

Sign convention, applied in exactly one place:
- Image offsets: dx > 0 is right of center, dy > 0 is below center.
- POIB (point of impact relative to bull) in inches, right/up positive:
  (dx_in, -dy_in). The y flip happens once, here.
- Windage clicks = -POIB.x (group right -> negative -> dial LEFT).
- Elevation clicks = +POIB.y (group above -> positive -> dial UP).
Dial directions are read off the signs of the rounded clicks and nothing else.

The elevation sign (group above center dials UP) is a deliberate decision,
recorded with its reasoning in DESIGN.md under "Sign convention". Do not
flip it to match other formulas without updating the tests that pin it.
"""

from __future__ import annotations

import logging
from typing import Any

from config import CLICK_DECIMALS, INCHES_PER_MOA_AT_100_YARDS

from .config import AnalysisConfig
from .types import CorrectionResult, Point, Region, Rejection, RejectionCode

logger = logging.getLogger(__name__)


def inches_per_moa(distance_yards: float) -> float:
    """Inches subtended by one MOA at the given distance."""
    return INCHES_PER_MOA_AT_100_YARDS * (distance_yards / 100.0)


def inches_per_pixel(region: Region, config: AnalysisConfig) -> tuple[float, float]:
    """(x, y) inches per pixel from the physical target size.

    The y scale only differs when the region is not square and a target
    height is configured.
    """
    per_px_x = config.target_width_in / region.width
    per_px_y = per_px_x
    if config.target_height_in is not None and region.width != region.height:
        per_px_y = config.target_height_in / region.height
    return per_px_x, per_px_y


def _round_clicks(value: float) -> float:
    # + 0.0 turns -0.0 into 0.0
    return round(value, CLICK_DECIMALS) + 0.0


def compute_correction(
    group_centroid: Point,
    region: Region,
    config: AnalysisConfig,
    diagnostics: dict[str, Any] | None = None,
) -> CorrectionResult | Rejection:
    """Convert the group's offset from the region center into scope clicks.

    Args:
        group_centroid: Mean shot centroid (image coordinates).
        region: Analysis region whose center is the aim point.
        config: Distance, click value, target size and max_abs_clicks.
        diagnostics: Extra fields to carry into the result (threshold, counts).

    Returns:
        CorrectionResult, or OUT_OF_RANGE when either axis exceeds
        max_abs_clicks. Out-of-range values are never clamped.
    """
    center_x, center_y = region.center
    dx_px = group_centroid[0] - center_x
    dy_px = group_centroid[1] - center_y

    per_px_x, per_px_y = inches_per_pixel(region, config)
    dx_in = dx_px * per_px_x
    dy_in = dy_px * per_px_y

    poib_x = dx_in
    poib_y = -dy_in

    inches_per_click = inches_per_moa(config.distance_yards) * config.moa_per_click
    windage = _round_clicks(-poib_x / inches_per_click)
    elevation = _round_clicks(poib_y / inches_per_click)

    stats = dict(diagnostics or {})
    stats.update({
        "dxPx": round(dx_px, 3),
        "dyPx": round(dy_px, 3),
        "dxIn": round(dx_in, 3),
        "dyIn": round(dy_in, 3),
        "poibXIn": round(poib_x, 3),
        "poibYIn": round(poib_y, 3),
        "inchesPerPixel": per_px_x,
        "inchesPerMoa": inches_per_moa(config.distance_yards),
    })

    if abs(windage) > config.max_abs_clicks or abs(elevation) > config.max_abs_clicks:
        logger.info(
            "Correction out of range: windage=%s elevation=%s (max %s)",
            windage, elevation, config.max_abs_clicks,
        )
        return Rejection(
            RejectionCode.OUT_OF_RANGE,
            {
                **stats,
                "windageClicks": windage,
                "elevationClicks": elevation,
                "maxAbsClicks": config.max_abs_clicks,
            },
        )

    return CorrectionResult(
        windage_clicks=windage,
        elevation_clicks=elevation,
        diagnostics=stats,
    )
