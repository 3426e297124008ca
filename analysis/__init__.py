"""
Target photo analysis: from grayscale pixels to a scope correction.

Follows the same design philosophy as the preprocessing module: pure
functions, early validation and clear separation of concerns. Gate failures
are returned as Rejection values, never raised.

Key components:
- types: Core data structures (GrayscaleImage, Region, Component, ShotGroup,
  CorrectionResult, Rejection, AnalysisResult)
- config: AnalysisConfig, the immutable per-request configuration
- region: Ink bounding box and the square analysis region
- gates: Area, aspect and paper-composition plausibility checks
- threshold: Otsu threshold and binarization
- labeling: 4-connected component labeling with an explicit stack
- filtering: Shot-hole candidate filters
- clustering: Tightest-group selection
- correction: Pixel offset -> inches -> MOA -> clicks
- analyzer: Orchestration

The main entry points are `analyze_grayscale()` and `analyze_image_bytes()`.
"""

from .types import (
    AnalysisResult,
    Component,
    CorrectionResult,
    GrayscaleImage,
    Region,
    Rejection,
    RejectionCode,
    ShotGroup,
    dial_direction,
)
from .config import AnalysisConfig
from .region import find_ink_bounds, square_analysis_region, locate_region
from .gates import check_target_plausibility, region_statistics
from .threshold import otsu_threshold, clamped_threshold, binarize
from .labeling import label_components
from .filtering import area_bounds, edge_margin, is_shot_candidate, filter_candidates
from .clustering import select_shot_group
from .correction import compute_correction, inches_per_moa, inches_per_pixel
from .analyzer import analyze_grayscale, analyze_region, analyze_image_bytes

__all__ = [
    "AnalysisResult",
    "Component",
    "CorrectionResult",
    "GrayscaleImage",
    "Region",
    "Rejection",
    "RejectionCode",
    "ShotGroup",
    "dial_direction",
    "AnalysisConfig",
    "find_ink_bounds",
    "square_analysis_region",
    "locate_region",
    "check_target_plausibility",
    "region_statistics",
    "otsu_threshold",
    "clamped_threshold",
    "binarize",
    "label_components",
    "area_bounds",
    "edge_margin",
    "is_shot_candidate",
    "filter_candidates",
    "select_shot_group",
    "compute_correction",
    "inches_per_moa",
    "inches_per_pixel",
    "analyze_grayscale",
    "analyze_region",
    "analyze_image_bytes",
]
