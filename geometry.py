"""Shared geometry utilities for inclusive, axis-aligned pixel boxes.

A box is a tuple (x0, y0, x1, y1) where both corners are pixel indices
included in the box, so width = x1 - x0 + 1.
"""

from __future__ import annotations

# Inclusive pixel box (x0, y0, x1, y1)
Box = tuple[int, int, int, int]


def box_size(box: Box) -> tuple[int, int]:
    """Return (width, height) of an inclusive box."""
    x0, y0, x1, y1 = box
    return x1 - x0 + 1, y1 - y0 + 1


def pad_box(box: Box, pad_x: int, pad_y: int) -> Box:
    """Grow a box by pad_x / pad_y pixels on each side (may leave the image)."""
    x0, y0, x1, y1 = box
    return x0 - pad_x, y0 - pad_y, x1 + pad_x, y1 + pad_y


def clip_box(box: Box, width: int, height: int) -> Box:
    """Clip a box to the bounds of a width x height image."""
    x0, y0, x1, y1 = box
    return (
        max(0, x0),
        max(0, y0),
        min(width - 1, x1),
        min(height - 1, y1),
    )


def square_box(box: Box) -> Box:
    """Shrink the longer side of a box to the shorter one, keeping it centered.

    The shrunken box always lies inside the input box.
    """
    x0, y0, x1, y1 = box
    w, h = box_size(box)
    side = min(w, h)
    x0 += (w - side) // 2
    y0 += (h - side) // 2
    return x0, y0, x0 + side - 1, y0 + side - 1


def box_inside(inner: Box, outer: Box, margin: int = 0) -> bool:
    """Check that inner lies strictly inside outer shrunk by margin pixels."""
    ix0, iy0, ix1, iy1 = inner
    ox0, oy0, ox1, oy1 = outer
    return (
        ix0 > ox0 + margin
        and iy0 > oy0 + margin
        and ix1 < ox1 - margin
        and iy1 < oy1 - margin
    )
