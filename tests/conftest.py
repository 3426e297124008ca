"""Pytest configuration and synthetic target builders.

Synthetic photos are plain numpy arrays: white paper (255), a printed square
outline in ink, and square dark "holes" of odd size so each hole's centroid
lands exactly on its requested center.
"""

import cv2
import numpy as np
import pytest

from analysis import AnalysisConfig


def blank_image(width: int, height: int, value: int = 255) -> np.ndarray:
    return np.full((height, width), value, dtype=np.uint8)


def draw_hole(img: np.ndarray, cx: int, cy: int, size: int = 5, value: int = 0) -> None:
    half = size // 2
    img[cy - half:cy + half + 1, cx - half:cx + half + 1] = value


def draw_outline(img: np.ndarray, x0: int, y0: int, x1: int, y1: int, thickness: int = 3) -> None:
    img[y0:y0 + thickness, x0:x1 + 1] = 0
    img[y1 - thickness + 1:y1 + 1, x0:x1 + 1] = 0
    img[y0:y1 + 1, x0:x0 + thickness] = 0
    img[y0:y1 + 1, x1 - thickness + 1:x1 + 1] = 0


def quincunx(cx: int, cy: int, spread: int = 8) -> list[tuple[int, int]]:
    """Five hole centers whose mean is exactly (cx, cy)."""
    return [
        (cx - spread, cy - spread),
        (cx + spread, cy - spread),
        (cx, cy),
        (cx - spread, cy + spread),
        (cx + spread, cy + spread),
    ]


def make_target_photo(
    holes: list[tuple[int, int]],
    size: int = 400,
    margin: int = 40,
    hole_size: int = 7,
    with_crosshair: bool = True,
) -> np.ndarray:
    """A square photo of a paper target with a printed outline and holes.

    With the default 400px photo the ink box is 40..359, the analysis region
    is 34..365 and its center is (199.5, 199.5).
    """
    img = blank_image(size, size)
    draw_outline(img, margin, margin, size - margin - 1, size - margin - 1)
    if with_crosshair:
        mid = size // 2
        img[mid - 1:mid + 1, mid - 30:mid + 30] = 0
        img[mid - 30:mid + 30, mid - 1:mid + 1] = 0
    for cx, cy in holes:
        draw_hole(img, cx, cy, size=hole_size)
    return img


def encode_png(img: np.ndarray) -> bytes:
    ok, buf = cv2.imencode(".png", img)
    assert ok
    return buf.tobytes()


@pytest.fixture
def default_config() -> AnalysisConfig:
    return AnalysisConfig()


@pytest.fixture
def target_photo():
    """Factory fixture: target_photo(holes, **kwargs) -> uint8 array."""
    return make_target_photo


@pytest.fixture
def low_right_group_photo() -> np.ndarray:
    """Five-shot group centered 40px right of and 40px below the aim point."""
    return make_target_photo(quincunx(240, 240, spread=12))


@pytest.fixture
def png_bytes():
    """Factory fixture: png_bytes(array) -> encoded PNG bytes."""
    return encode_png


@pytest.fixture
def hole_drawer():
    """Factory fixture exposing the raw drawing helpers."""
    return {
        "blank": blank_image,
        "hole": draw_hole,
        "outline": draw_outline,
        "quincunx": quincunx,
    }
