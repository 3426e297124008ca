"""Debug overlay rendering for analysis results."""

import logging
from pathlib import Path

import cv2
import numpy as np

from analysis import AnalysisResult

logger = logging.getLogger(__name__)

# BGR colors
REGION_COLOR = (255, 128, 0)
CANDIDATE_COLOR = (0, 200, 255)
SHOT_COLOR = (0, 255, 0)
CENTER_COLOR = (255, 0, 255)
GROUP_COLOR = (0, 0, 255)


def _label_for(result: AnalysisResult) -> str:
    if result.ok:
        outcome = result.outcome
        return (
            f"W {outcome.windage_clicks:+.2f} {outcome.windage_direction or ''}  "
            f"E {outcome.elevation_clicks:+.2f} {outcome.elevation_direction or ''}"
        )
    return result.code.value


def draw_analysis_overlay(gray_image: np.ndarray, result: AnalysisResult) -> np.ndarray:
    """Draw the analysis region, candidates and group on a grayscale image.

    Candidates get a thin orange box, selected shots a green one. The region
    center (aim point) is a magenta cross and the group centroid a red dot.

    Args:
        gray_image: Working grayscale image the result was computed on.
        result: Analysis result for that image.

    Returns:
        Annotated BGR image (the input is not modified).
    """
    image = cv2.cvtColor(gray_image, cv2.COLOR_GRAY2BGR)

    if result.region is not None:
        region = result.region
        cv2.rectangle(
            image,
            (region.min_x, region.min_y),
            (region.max_x, region.max_y),
            REGION_COLOR,
            2,
        )
        cx, cy = region.center
        cv2.drawMarker(
            image, (int(round(cx)), int(round(cy))), CENTER_COLOR,
            markerType=cv2.MARKER_CROSS, markerSize=20, thickness=2,
        )

    shot_indices = {s.index for s in result.group.shots} if result.group else set()
    for candidate in result.candidates:
        x0, y0, x1, y1 = candidate.bbox
        selected = candidate.index in shot_indices
        cv2.rectangle(
            image,
            (x0 - 2, y0 - 2),
            (x1 + 2, y1 + 2),
            SHOT_COLOR if selected else CANDIDATE_COLOR,
            2 if selected else 1,
        )

    if result.group is not None:
        gx, gy = result.group.centroid
        cv2.circle(image, (int(round(gx)), int(round(gy))), 5, GROUP_COLOR, -1)

    label = _label_for(result)
    font = cv2.FONT_HERSHEY_SIMPLEX
    (text_width, text_height), _ = cv2.getTextSize(label, font, 0.7, 2)
    cv2.rectangle(image, (5, 5), (15 + text_width, 15 + text_height), (0, 0, 0), -1)
    cv2.putText(image, label, (10, 10 + text_height), font, 0.7, (255, 255, 255), 2)

    return image


def save_analysis_overlay(
    gray_image: np.ndarray,
    result: AnalysisResult,
    output_path: Path,
) -> bool:
    """Draw the overlay and write it to output_path. Returns True on success."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    written = cv2.imwrite(str(output_path), draw_analysis_overlay(gray_image, result))
    if not written:
        logger.error("Could not write overlay to %s", output_path)
    return bool(written)
