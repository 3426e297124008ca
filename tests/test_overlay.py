"""Tests for the debug overlay."""

import cv2
import numpy as np

from analysis import analyze_grayscale
from conftest import blank_image
from utils import SHOT_COLOR, draw_analysis_overlay, save_analysis_overlay


class TestAnalysisOverlay:
    def test_overlay_is_bgr_and_input_untouched(self, low_right_group_photo):
        before = low_right_group_photo.copy()
        result = analyze_grayscale(low_right_group_photo)
        overlay = draw_analysis_overlay(low_right_group_photo, result)
        assert overlay.shape == (400, 400, 3)
        assert np.array_equal(before, low_right_group_photo)

    def test_selected_shots_are_boxed(self, low_right_group_photo):
        result = analyze_grayscale(low_right_group_photo)
        overlay = draw_analysis_overlay(low_right_group_photo, result)
        x0, y0, x1, _ = result.group.shots[0].bbox
        assert tuple(int(v) for v in overlay[y0 - 2, (x0 + x1) // 2]) == SHOT_COLOR

    def test_rejection_without_region(self):
        result = analyze_grayscale(blank_image(100, 100))
        overlay = draw_analysis_overlay(blank_image(100, 100), result)
        assert overlay.shape == (100, 100, 3)

    def test_save_creates_parent_dirs(self, low_right_group_photo, tmp_path):
        result = analyze_grayscale(low_right_group_photo)
        path = tmp_path / "nested" / "overlay.png"
        assert save_analysis_overlay(low_right_group_photo, result, path)
        assert cv2.imread(str(path)).shape == (400, 400, 3)
