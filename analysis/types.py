"""
Type definitions for the analysis module.

This module defines the core data structures passed between pipeline stages.
All of them are created fresh for every analysis and never mutated after
creation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np

from geometry import Box

# Sub-pixel point (x, y) in image coordinates, y pointing down
Point = tuple[float, float]


@dataclass(frozen=True)
class GrayscaleImage:
    """Row-major 8-bit intensity buffer (0=black..255=white).

    The pixel array is copied and marked read-only on construction, so the
    caller's array is never shared with the pipeline.
    """

    pixels: np.ndarray

    def __post_init__(self) -> None:
        pixels = self.pixels
        if not isinstance(pixels, np.ndarray):
            raise TypeError(f"Expected numpy.ndarray, got {type(pixels).__name__}")
        if pixels.ndim != 2:
            raise ValueError(
                f"Grayscale image must be a 2D array, got shape {pixels.shape}"
            )
        if pixels.size == 0:
            raise ValueError("Image array is empty")
        if pixels.dtype != np.uint8:
            raise ValueError(f"Grayscale image must be uint8, got {pixels.dtype}")

        frozen = np.array(pixels, copy=True, order="C")
        frozen.setflags(write=False)
        object.__setattr__(self, "pixels", frozen)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Region:
    """Axis-aligned box inside a GrayscaleImage, with inclusive corners."""

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    def __post_init__(self) -> None:
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(f"Empty region: {self.as_box()}")

    @classmethod
    def from_box(cls, box: Box) -> Region:
        x0, y0, x1, y1 = box
        return cls(min_x=int(x0), min_y=int(y0), max_x=int(x1), max_y=int(y1))

    def as_box(self) -> Box:
        return self.min_x, self.min_y, self.max_x, self.max_y

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def center(self) -> Point:
        """Center in pixel-index space, comparable with Component centroids."""
        return (
            self.min_x + (self.width - 1) / 2.0,
            self.min_y + (self.height - 1) / 2.0,
        )

    def within(self, image: GrayscaleImage) -> bool:
        """Check 0 <= min <= max < size on both axes."""
        return (
            0 <= self.min_x <= self.max_x < image.width
            and 0 <= self.min_y <= self.max_y < image.height
        )

    def crop(self, image: GrayscaleImage) -> np.ndarray:
        """Return the region's pixels as a read-only view."""
        return image.pixels[self.min_y:self.max_y + 1, self.min_x:self.max_x + 1]

    def to_dict(self) -> dict:
        return {
            "minX": self.min_x,
            "minY": self.min_y,
            "maxX": self.max_x,
            "maxY": self.max_y,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class Component:
    """A 4-connected blob of foreground (dark) pixels.

    Attributes:
        index: Discovery order during labeling (row-major seed order).
        area: Pixel count.
        centroid: Mean (x, y) of member pixels, in image coordinates.
        bbox: Inclusive bounding box (x0, y0, x1, y1) in image coordinates.
        fill: area / bbox area.
        aspect: max(w/h, h/w) of the bounding box, always >= 1.
    """

    index: int
    area: int
    centroid: Point
    bbox: Box
    fill: float
    aspect: float

    @classmethod
    def from_sums(
        cls,
        index: int,
        area: int,
        sum_x: float,
        sum_y: float,
        bbox: Box,
    ) -> Component:
        """Build a component from flood-fill accumulators."""
        x0, y0, x1, y1 = bbox
        w = x1 - x0 + 1
        h = y1 - y0 + 1
        return cls(
            index=index,
            area=area,
            centroid=(sum_x / area, sum_y / area),
            bbox=bbox,
            fill=area / (w * h),
            aspect=max(w / h, h / w),
        )

    def to_dict(self) -> dict:
        return {
            "area": self.area,
            "centroid": {"x": self.centroid[0], "y": self.centroid[1]},
            "bbox": {"x0": self.bbox[0], "y0": self.bbox[1], "x1": self.bbox[2], "y1": self.bbox[3]},
            "fill": self.fill,
            "aspect": self.aspect,
        }


@dataclass(frozen=True)
class ShotGroup:
    """Candidates chosen to represent the shot group, in discovery order."""

    shots: tuple[Component, ...]
    centroid: Point

    @classmethod
    def from_shots(cls, shots: list[Component] | tuple[Component, ...]) -> ShotGroup:
        if not shots:
            raise ValueError("A shot group needs at least one shot")
        n = len(shots)
        cx = sum(s.centroid[0] for s in shots) / n
        cy = sum(s.centroid[1] for s in shots) / n
        return cls(shots=tuple(shots), centroid=(cx, cy))

    def __len__(self) -> int:
        return len(self.shots)


class RejectionCode(str, Enum):
    """Why an analysis stopped before producing a correction."""

    NO_TARGET_REGION = "NO_TARGET_REGION"
    NOT_FULL_TARGET_IN_FRAME = "NOT_FULL_TARGET_IN_FRAME"
    NOT_PAPER_TARGET = "NOT_PAPER_TARGET"
    TOO_NOISY = "TOO_NOISY"
    NOT_ENOUGH_SHOTS = "NOT_ENOUGH_SHOTS"
    OUT_OF_RANGE = "OUT_OF_RANGE"


@dataclass(frozen=True)
class Rejection:
    """A gate failure: an expected, user-actionable outcome.

    Attributes:
        code: Which gate failed.
        diagnostics: Numbers explaining the failure (fractions, counts, limits).
    """

    code: RejectionCode
    diagnostics: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"code": self.code.value, "diagnostics": dict(self.diagnostics)}


def dial_direction(clicks: float, positive: str, negative: str) -> str | None:
    """Name the dial direction from the sign of computed clicks (None for zero)."""
    if clicks > 0:
        return positive
    if clicks < 0:
        return negative
    return None


@dataclass(frozen=True)
class CorrectionResult:
    """Signed scope correction in clicks.

    Windage > 0 means dial RIGHT, < 0 dial LEFT. Elevation > 0 means dial UP,
    < 0 dial DOWN. Directions are derived only from these signs.
    """

    windage_clicks: float
    elevation_clicks: float
    diagnostics: dict[str, Any] = field(default_factory=dict)

    @property
    def windage_direction(self) -> str | None:
        return dial_direction(self.windage_clicks, "RIGHT", "LEFT")

    @property
    def elevation_direction(self) -> str | None:
        return dial_direction(self.elevation_clicks, "UP", "DOWN")

    def to_dict(self) -> dict:
        return {
            "windageClicks": self.windage_clicks,
            "elevationClicks": self.elevation_clicks,
            "windageDirection": self.windage_direction,
            "elevationDirection": self.elevation_direction,
            "diagnostics": dict(self.diagnostics),
        }


@dataclass
class AnalysisResult:
    """Complete result from the analysis pipeline.

    Bundles the outcome with the intermediate artifacts so a rejected or
    surprising result can be inspected (and drawn) after the fact.

    Attributes:
        outcome: CorrectionResult on success, Rejection otherwise.
        image_dimensions: (width, height) of the analyzed working image.
        region: Square analysis region (None if none was found).
        ink_bounds: Tight box of ink pixels before padding/squaring.
        threshold: Dark/light cutoff used for labeling.
        components: Number of connected components labeled.
        candidates: Components that passed the shot-hole filters.
        group: Shots selected for the correction.
        scale_factor: Working-to-original coordinate scale (1.0 if not resized).
    """

    outcome: CorrectionResult | Rejection
    image_dimensions: tuple[int, int]
    region: Region | None = None
    ink_bounds: Region | None = None
    threshold: int | None = None
    components: int = 0
    candidates: list[Component] = field(default_factory=list)
    group: ShotGroup | None = None
    scale_factor: float = 1.0

    @property
    def ok(self) -> bool:
        return isinstance(self.outcome, CorrectionResult)

    @property
    def code(self) -> RejectionCode | None:
        if isinstance(self.outcome, Rejection):
            return self.outcome.code
        return None

    def to_dict(self) -> dict:
        """Wire representation of the outcome, tagged with ok."""
        payload = {"ok": self.ok}
        payload.update(self.outcome.to_dict())
        return payload
