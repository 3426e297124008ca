"""
Candidate filtering.

Keeps components shaped like bullet holes and drops grid lines, scoring
rings, specks of noise and anything touching the region border.
"""

from __future__ import annotations

import logging

from geometry import box_inside

from .config import AnalysisConfig
from .types import Component, Region, Rejection, RejectionCode

logger = logging.getLogger(__name__)


def area_bounds(region: Region, config: AnalysisConfig) -> tuple[int, int]:
    """Hole area band in pixels, relative to the region area (min is at least 1)."""
    min_area = max(1, int(round(region.area * config.min_area_pct)))
    max_area = max(min_area, int(round(region.area * config.max_area_pct)))
    return min_area, max_area


def edge_margin(region: Region, config: AnalysisConfig) -> int:
    """Border margin in pixels: edge_margin_pct of the region width, at least edge_margin_min_px."""
    return max(config.edge_margin_min_px, int(round(region.width * config.edge_margin_pct)))


def rejection_reason(
    component: Component,
    region: Region,
    config: AnalysisConfig,
    bounds: tuple[int, int] | None = None,
    margin: int | None = None,
) -> str | None:
    """Explain why a component is not a shot hole (None if it is one)."""
    if bounds is None:
        bounds = area_bounds(region, config)
    if margin is None:
        margin = edge_margin(region, config)
    min_area, max_area = bounds

    if not min_area <= component.area <= max_area:
        return f"area {component.area} outside [{min_area}, {max_area}]"
    if component.aspect > config.max_aspect:
        return f"aspect {component.aspect:.2f} above {config.max_aspect}"
    if component.fill < config.min_fill:
        return f"fill {component.fill:.2f} below {config.min_fill}"
    if not box_inside(component.bbox, region.as_box(), margin):
        return f"within {margin}px of the region border"
    return None


def is_shot_candidate(component: Component, region: Region, config: AnalysisConfig) -> bool:
    """Check whether a component passes every shot-hole filter."""
    return rejection_reason(component, region, config) is None


def filter_candidates(
    components: list[Component],
    region: Region,
    config: AnalysisConfig,
) -> list[Component] | Rejection:
    """Keep hole-like components and check the candidate count.

    Returns:
        Candidates in discovery order, or a TOO_NOISY rejection when there
        are more than max_candidates, or NOT_ENOUGH_SHOTS when there are
        fewer than min_shots.
    """
    bounds = area_bounds(region, config)
    margin = edge_margin(region, config)

    candidates = [
        c for c in components
        if rejection_reason(c, region, config, bounds=bounds, margin=margin) is None
    ]
    logger.debug(
        "Kept %s of %s components (area %s, margin %spx)",
        len(candidates), len(components), bounds, margin,
    )

    diagnostics = {
        "componentsFound": len(components),
        "candidatesFound": len(candidates),
        "minArea": bounds[0],
        "maxArea": bounds[1],
        "marginPx": margin,
    }

    if len(candidates) > config.max_candidates:
        return Rejection(
            RejectionCode.TOO_NOISY,
            {**diagnostics, "maxCandidates": config.max_candidates},
        )
    if len(candidates) < config.min_shots:
        return Rejection(
            RejectionCode.NOT_ENOUGH_SHOTS,
            {**diagnostics, "minShots": config.min_shots},
        )
    return candidates
