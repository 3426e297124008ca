"""Tests for the image and region types and for target region location."""

import numpy as np
import pytest

from analysis import (
    AnalysisConfig,
    GrayscaleImage,
    Region,
    Rejection,
    RejectionCode,
    find_ink_bounds,
    locate_region,
    square_analysis_region,
)
from conftest import blank_image, draw_outline


class TestGrayscaleImage:
    def test_copies_and_freezes_pixels(self):
        pixels = blank_image(10, 8)
        image = GrayscaleImage(pixels)
        pixels[0, 0] = 0
        assert image.pixels[0, 0] == 255
        assert not image.pixels.flags.writeable
        assert (image.width, image.height, image.area) == (10, 8, 80)

    def test_rejects_color(self):
        with pytest.raises(ValueError, match="2D"):
            GrayscaleImage(np.zeros((4, 4, 3), dtype=np.uint8))

    def test_rejects_empty(self):
        with pytest.raises(ValueError, match="empty"):
            GrayscaleImage(np.zeros((0, 4), dtype=np.uint8))

    def test_rejects_non_uint8(self):
        with pytest.raises(ValueError, match="uint8"):
            GrayscaleImage(np.zeros((4, 4), dtype=np.float32))

    def test_rejects_non_array(self):
        with pytest.raises(TypeError):
            GrayscaleImage([[0, 1], [2, 3]])


class TestRegion:
    def test_inclusive_size_and_center(self):
        region = Region(0, 0, 99, 99)
        assert region.width == region.height == 100
        assert region.area == 10000
        assert region.center == (49.5, 49.5)

    def test_empty_region_raises(self):
        with pytest.raises(ValueError, match="Empty region"):
            Region(10, 0, 5, 5)

    def test_within(self):
        image = GrayscaleImage(blank_image(100, 50))
        assert Region(0, 0, 99, 49).within(image)
        assert not Region(0, 0, 100, 49).within(image)
        assert not Region(-1, 0, 10, 10).within(image)

    def test_crop_matches_region(self):
        image = GrayscaleImage(blank_image(100, 50))
        assert Region(10, 5, 19, 24).crop(image).shape == (20, 10)

    def test_to_dict_is_camel_case(self):
        assert Region(1, 2, 3, 4).to_dict() == {
            "minX": 1, "minY": 2, "maxX": 3, "maxY": 4, "width": 3, "height": 3,
        }


class TestFindInkBounds:
    def test_all_white_has_no_ink(self):
        assert find_ink_bounds(GrayscaleImage(blank_image(50, 50)), 235) is None

    def test_tight_box_around_ink(self):
        img = blank_image(100, 80)
        img[10, 20] = 0
        img[60, 70] = 100
        assert find_ink_bounds(GrayscaleImage(img), 235) == Region(20, 10, 70, 60)

    def test_threshold_is_strict(self):
        img = blank_image(20, 20)
        img[5, 5] = 235
        assert find_ink_bounds(GrayscaleImage(img), 235) is None
        img[5, 5] = 234
        assert find_ink_bounds(GrayscaleImage(img), 235) == Region(5, 5, 5, 5)


class TestSquareAnalysisRegion:
    def test_pads_and_stays_square(self):
        image = GrayscaleImage(blank_image(400, 400))
        region = square_analysis_region(Region(40, 40, 359, 359), image, 0.02)
        assert region == Region(34, 34, 365, 365)

    def test_clipped_to_image(self):
        image = GrayscaleImage(blank_image(100, 100))
        region = square_analysis_region(Region(0, 0, 99, 99), image, 0.05)
        assert region == Region(0, 0, 99, 99)

    def test_wide_ink_box_is_squared_on_its_center(self):
        image = GrayscaleImage(blank_image(400, 200))
        region = square_analysis_region(Region(10, 10, 389, 189), image, 0.0)
        assert region.width == region.height == 180
        assert region.center == pytest.approx((199.5, 99.5))

    @pytest.mark.parametrize("box", [(0, 0, 399, 10), (5, 3, 6, 199), (100, 20, 390, 30)])
    def test_region_is_always_square_and_inside(self, box):
        image = GrayscaleImage(blank_image(400, 200))
        region = square_analysis_region(Region.from_box(box), image, 0.02)
        assert region.width == region.height
        assert region.within(image)


class TestLocateRegion:
    def test_blank_image_is_rejected(self):
        result = locate_region(GrayscaleImage(blank_image(64, 64)), AnalysisConfig())
        assert isinstance(result, Rejection)
        assert result.code == RejectionCode.NO_TARGET_REGION
        assert result.diagnostics["minIntensity"] == 255

    def test_returns_region_and_ink(self):
        img = blank_image(400, 400)
        draw_outline(img, 40, 40, 359, 359)
        region, ink = locate_region(GrayscaleImage(img), AnalysisConfig())
        assert ink == Region(40, 40, 359, 359)
        assert region == Region(34, 34, 365, 365)
        assert region.center == (199.5, 199.5)
