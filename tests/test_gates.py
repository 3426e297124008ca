"""Tests for the target plausibility gates."""

import pytest

from analysis import (
    AnalysisConfig,
    GrayscaleImage,
    RejectionCode,
    check_target_plausibility,
    locate_region,
    region_statistics,
)
from conftest import blank_image, draw_outline, make_target_photo, quincunx


def _gate(img, config=None):
    config = config or AnalysisConfig()
    image = GrayscaleImage(img)
    region, ink = locate_region(image, config)
    return check_target_plausibility(image, region, ink, config)


class TestRegionStatistics:
    def test_clean_target_statistics(self):
        image = GrayscaleImage(make_target_photo(quincunx(200, 200)))
        config = AnalysisConfig()
        region, ink = locate_region(image, config)
        stats = region_statistics(image, region, ink, config)
        assert stats["areaFrac"] == pytest.approx(332 * 332 / 400 / 400)
        assert stats["inkAspect"] == 1.0
        assert stats["whiteFrac"] + stats["darkFrac"] == pytest.approx(1.0)
        assert stats["darkFrac"] < 0.1


class TestCheckTargetPlausibility:
    def test_clean_target_passes(self):
        assert _gate(make_target_photo(quincunx(200, 200))) is None

    def test_small_target_is_not_full_in_frame(self):
        img = blank_image(400, 400)
        draw_outline(img, 150, 150, 199, 199)
        rejection = _gate(img)
        assert rejection.code == RejectionCode.NOT_FULL_TARGET_IN_FRAME
        assert "areaFrac" in rejection.diagnostics["reason"]

    def test_elongated_ink_is_not_full_in_frame(self):
        img = blank_image(400, 200)
        draw_outline(img, 10, 10, 389, 189)
        rejection = _gate(img)
        assert rejection.code == RejectionCode.NOT_FULL_TARGET_IN_FRAME
        assert "inkAspect" in rejection.diagnostics["reason"]
        assert rejection.diagnostics["inkAspect"] == pytest.approx(380 / 180)

    def test_gray_photo_is_not_paper(self):
        rejection = _gate(blank_image(200, 200, value=150))
        assert rejection.code == RejectionCode.NOT_PAPER_TARGET
        assert rejection.diagnostics["whiteFrac"] == 0.0

    def test_mostly_dark_target_is_not_paper(self):
        img = make_target_photo([], with_crosshair=False)
        img[100:300, 100:300] = 0
        rejection = _gate(img)
        assert rejection.code == RejectionCode.NOT_PAPER_TARGET
        assert "darkFrac" in rejection.diagnostics["reason"]
        assert rejection.diagnostics["darkFrac"] > 0.35

    def test_area_gate_runs_before_paper_gate(self):
        img = blank_image(400, 400)
        img[150:200, 150:200] = 0
        rejection = _gate(img)
        assert rejection.code == RejectionCode.NOT_FULL_TARGET_IN_FRAME

    def test_thresholds_come_from_config(self):
        img = blank_image(400, 400)
        draw_outline(img, 150, 150, 199, 199)
        assert _gate(img, AnalysisConfig(min_bbox_area_frac=0.0)) is None
