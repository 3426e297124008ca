"""
Connected-component labeling of the dark-pixel mask.

Flood fill runs on an explicit stack preallocated to the mask's pixel count,
so a large dark blob never hits a recursion limit and memory use is fixed
up front. Every pixel is pushed at most once.
"""

from __future__ import annotations

import numpy as np

from .types import Component


def label_components(
    mask: np.ndarray,
    origin: tuple[int, int] = (0, 0),
) -> list[Component]:
    """Label 4-connected foreground components of a binary mask.

    Seeds are taken in row-major order, so component indices (discovery
    order) are deterministic.

    Args:
        mask: 2D boolean (or 0/1) array, True = foreground.
        origin: (x, y) of the mask's top-left pixel in image coordinates.
                Centroids and bboxes are reported in image coordinates.

    Returns:
        Components in discovery order.
    """
    if not isinstance(mask, np.ndarray) or mask.ndim != 2:
        raise ValueError("mask must be a 2D numpy array")

    height, width = mask.shape
    ox, oy = origin
    flat = np.ascontiguousarray(mask, dtype=bool).ravel()
    if not flat.any():
        return []

    visited = np.zeros(flat.size, dtype=bool)
    stack = np.empty(flat.size, dtype=np.int64)
    components: list[Component] = []

    for seed in np.flatnonzero(flat):
        seed = int(seed)
        if visited[seed]:
            continue

        visited[seed] = True
        stack[0] = seed
        top = 1

        area = 0
        sum_x = 0
        sum_y = 0
        min_x = max_x = seed % width
        min_y = max_y = seed // width

        while top:
            top -= 1
            p = int(stack[top])
            y, x = divmod(p, width)

            area += 1
            sum_x += x
            sum_y += y
            if x < min_x:
                min_x = x
            elif x > max_x:
                max_x = x
            if y < min_y:
                min_y = y
            elif y > max_y:
                max_y = y

            if x > 0:
                q = p - 1
                if flat[q] and not visited[q]:
                    visited[q] = True
                    stack[top] = q
                    top += 1
            if x < width - 1:
                q = p + 1
                if flat[q] and not visited[q]:
                    visited[q] = True
                    stack[top] = q
                    top += 1
            if y > 0:
                q = p - width
                if flat[q] and not visited[q]:
                    visited[q] = True
                    stack[top] = q
                    top += 1
            if y < height - 1:
                q = p + width
                if flat[q] and not visited[q]:
                    visited[q] = True
                    stack[top] = q
                    top += 1

        components.append(
            Component.from_sums(
                index=len(components),
                area=area,
                sum_x=sum_x + area * ox,
                sum_y=sum_y + area * oy,
                bbox=(min_x + ox, min_y + oy, max_x + ox, max_y + oy),
            )
        )

    return components
