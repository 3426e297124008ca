"""
Configuration for the analysis pipeline.

AnalysisConfig is immutable and passed explicitly into every stage. Its
defaults come from the central `config` module; per-request values are
applied with `with_overrides()` or `from_mapping()`, which always return a
new, validated instance.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional

import config as defaults


@dataclass(frozen=True)
class AnalysisConfig:
    """Every tunable of the image-to-correction pipeline.

    Shooting setup:
        distance_yards, moa_per_click, target_width_in, target_height_in

    Group and correction:
        min_shots, max_shots, max_abs_clicks

    Region location and plausibility gates:
        not_white_threshold, ink_pad_pct, min_bbox_area_frac,
        bbox_aspect_min, bbox_aspect_max, paper_white_thresh,
        paper_white_frac_min, dark_thresh, dark_frac_max

    Binarization:
        otsu_clamp_min, otsu_clamp_max

    Candidate filtering:
        min_area_pct, max_area_pct, max_aspect, min_fill,
        edge_margin_pct, edge_margin_min_px, max_candidates

    See config.py for what each default means.
    """

    distance_yards: float = defaults.DISTANCE_YARDS
    moa_per_click: float = defaults.MOA_PER_CLICK
    target_width_in: float = defaults.TARGET_WIDTH_IN
    target_height_in: Optional[float] = defaults.TARGET_HEIGHT_IN

    min_shots: int = defaults.MIN_SHOTS
    max_shots: int = defaults.MAX_SHOTS
    max_abs_clicks: float = defaults.MAX_ABS_CLICKS

    not_white_threshold: int = defaults.NOT_WHITE_THRESHOLD
    ink_pad_pct: float = defaults.INK_PAD_PCT
    min_bbox_area_frac: float = defaults.MIN_BBOX_AREA_FRAC
    bbox_aspect_min: float = defaults.BBOX_ASPECT_MIN
    bbox_aspect_max: float = defaults.BBOX_ASPECT_MAX
    paper_white_thresh: int = defaults.PAPER_WHITE_THRESH
    paper_white_frac_min: float = defaults.PAPER_WHITE_FRAC_MIN
    dark_thresh: int = defaults.DARK_THRESH
    dark_frac_max: float = defaults.DARK_FRAC_MAX

    otsu_clamp_min: int = defaults.OTSU_CLAMP_MIN
    otsu_clamp_max: int = defaults.OTSU_CLAMP_MAX

    min_area_pct: float = defaults.MIN_AREA_PCT
    max_area_pct: float = defaults.MAX_AREA_PCT
    max_aspect: float = defaults.MAX_ASPECT
    min_fill: float = defaults.MIN_FILL
    edge_margin_pct: float = defaults.EDGE_MARGIN_PCT
    edge_margin_min_px: int = defaults.EDGE_MARGIN_MIN_PX
    max_candidates: int = defaults.MAX_CANDIDATES

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid (the message names it).
        """
        for name in ("distance_yards", "moa_per_click", "target_width_in", "max_abs_clicks"):
            value = getattr(self, name)
            if not value > 0:
                raise ValueError(f"{name} must be positive, got {value}")

        if self.target_height_in is not None and not self.target_height_in > 0:
            raise ValueError(
                f"target_height_in must be positive or None, got {self.target_height_in}"
            )

        if self.min_shots < 1:
            raise ValueError(f"min_shots must be at least 1, got {self.min_shots}")
        if self.max_shots < self.min_shots:
            raise ValueError(
                f"max_shots ({self.max_shots}) must be >= min_shots ({self.min_shots})"
            )
        if self.max_candidates < self.min_shots:
            raise ValueError(
                f"max_candidates ({self.max_candidates}) must be >= min_shots ({self.min_shots})"
            )

        for name in (
            "not_white_threshold",
            "paper_white_thresh",
            "dark_thresh",
            "otsu_clamp_min",
            "otsu_clamp_max",
        ):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be within [0, 255], got {value}")
        if self.otsu_clamp_min > self.otsu_clamp_max:
            raise ValueError(
                f"otsu_clamp_min ({self.otsu_clamp_min}) must be <= "
                f"otsu_clamp_max ({self.otsu_clamp_max})"
            )

        for name in (
            "ink_pad_pct",
            "min_bbox_area_frac",
            "paper_white_frac_min",
            "dark_frac_max",
            "min_area_pct",
            "max_area_pct",
            "min_fill",
            "edge_margin_pct",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.min_area_pct > self.max_area_pct:
            raise ValueError(
                f"min_area_pct ({self.min_area_pct}) must be <= max_area_pct ({self.max_area_pct})"
            )

        if not 0 < self.bbox_aspect_min <= self.bbox_aspect_max:
            raise ValueError(
                "bbox aspect window must satisfy 0 < min <= max, "
                f"got [{self.bbox_aspect_min}, {self.bbox_aspect_max}]"
            )
        if self.max_aspect < 1.0:
            raise ValueError(f"max_aspect must be >= 1, got {self.max_aspect}")
        if self.edge_margin_min_px < 0:
            raise ValueError(
                f"edge_margin_min_px must be non-negative, got {self.edge_margin_min_px}"
            )

    def with_overrides(self, **overrides: Any) -> AnalysisConfig:
        """Return a validated copy with some fields replaced.

        Raises:
            ValueError: On unknown field names or invalid values.
        """
        unknown = set(overrides) - _FIELD_NAMES
        if unknown:
            raise ValueError(f"Unknown config field(s): {', '.join(sorted(unknown))}")
        updated = replace(self, **overrides)
        updated.validate()
        return updated

    @classmethod
    def from_mapping(
        cls,
        mapping: Mapping[str, Any],
        base: AnalysisConfig | None = None,
    ) -> AnalysisConfig:
        """Build a config from request parameters.

        Keys may be snake_case or camelCase (distanceYards, moaPerClick,
        targetWidthIn, ...). Values may be numbers or numeric strings;
        None and empty strings leave the default in place.

        Raises:
            ValueError: On unknown keys or non-numeric values.
        """
        base = base if base is not None else cls()
        overrides: dict[str, Any] = {}
        for key, raw in mapping.items():
            name = _snake_case(key)
            if name not in _FIELD_NAMES:
                raise ValueError(f"Unknown config field: {key}")
            if raw is None or (isinstance(raw, str) and not raw.strip()):
                continue
            overrides[name] = _coerce(name, raw, _FIELD_TYPES[name])
        return base.with_overrides(**overrides)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


_FIELD_NAMES = {f.name for f in fields(AnalysisConfig)}

_INT_FIELDS = {
    "min_shots",
    "max_shots",
    "not_white_threshold",
    "paper_white_thresh",
    "dark_thresh",
    "otsu_clamp_min",
    "otsu_clamp_max",
    "edge_margin_min_px",
    "max_candidates",
}

_FIELD_TYPES = {name: (int if name in _INT_FIELDS else float) for name in _FIELD_NAMES}


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


def _coerce(name: str, raw: Any, kind: type) -> int | float:
    if isinstance(raw, bool):
        raise ValueError(f"{name} must be numeric, got {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be numeric, got {raw!r}")
    if kind is int:
        if not value.is_integer():
            raise ValueError(f"{name} must be a whole number, got {raw!r}")
        return int(value)
    return value
