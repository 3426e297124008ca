"""
Shot group selection.

Keeps the candidates nearest to the mean of all candidate centroids. Stray
marks are rare next to a real group, so k-nearest-to-centroid is enough.
"""

from __future__ import annotations

from .types import Component, ShotGroup


def select_shot_group(candidates: list[Component], max_shots: int) -> ShotGroup:
    """Choose at most max_shots candidates forming the tightest group.

    All candidates are kept when there are no more than max_shots. Otherwise
    they are ranked by squared distance to the mean centroid; the sort is
    stable, so the first-discovered candidate wins a tie.

    Returns:
        ShotGroup whose members keep their discovery order.

    Raises:
        ValueError: If candidates is empty or max_shots < 1.
    """
    if not candidates:
        raise ValueError("No candidates to group")
    if max_shots < 1:
        raise ValueError(f"max_shots must be at least 1, got {max_shots}")

    if len(candidates) <= max_shots:
        return ShotGroup.from_shots(candidates)

    n = len(candidates)
    mean_x = sum(c.centroid[0] for c in candidates) / n
    mean_y = sum(c.centroid[1] for c in candidates) / n

    def squared_distance(c: Component) -> float:
        dx = c.centroid[0] - mean_x
        dy = c.centroid[1] - mean_y
        return dx * dx + dy * dy

    ranked = sorted(range(n), key=lambda i: squared_distance(candidates[i]))
    keep = sorted(ranked[:max_shots])
    return ShotGroup.from_shots([candidates[i] for i in keep])
