"""Tests for shot-hole candidate filtering and group selection."""

import pytest

from analysis import (
    AnalysisConfig,
    Component,
    Region,
    Rejection,
    RejectionCode,
    area_bounds,
    edge_margin,
    filter_candidates,
    is_shot_candidate,
    select_shot_group,
)

REGION = Region(0, 0, 99, 99)


def hole(cx, cy, size=5, index=0):
    half = size // 2
    return Component.from_sums(
        index=index,
        area=size * size,
        sum_x=cx * size * size,
        sum_y=cy * size * size,
        bbox=(cx - half, cy - half, cx + half, cy + half),
    )


def holes(points, size=5):
    return [hole(x, y, size=size, index=i) for i, (x, y) in enumerate(points)]


class TestThresholdHelpers:
    def test_area_bounds_scale_with_region(self, default_config):
        assert area_bounds(REGION, default_config) == (1, 100)
        assert area_bounds(Region(0, 0, 1199, 1199), default_config) == (1, 14400)
        assert area_bounds(Region(0, 0, 3999, 3999), default_config) == (5, 160000)

    def test_edge_margin_has_floor(self, default_config):
        assert edge_margin(REGION, default_config) == 10
        assert edge_margin(Region(0, 0, 1999, 1999), default_config) == 20


class TestIsShotCandidate:
    def test_round_hole_passes(self, default_config):
        assert is_shot_candidate(hole(50, 50), REGION, default_config)

    def test_too_large_fails(self, default_config):
        assert not is_shot_candidate(hole(50, 50, size=11), REGION, default_config)

    def test_line_fails_on_aspect(self, default_config):
        line = Component.from_sums(0, 20, 20 * 49.5, 20 * 50.0, (40, 50, 59, 50))
        assert not is_shot_candidate(line, REGION, default_config)

    def test_ring_fails_on_fill(self, default_config):
        ring = Component.from_sums(0, 36, 36 * 50.0, 36 * 50.0, (45, 45, 54, 54))
        assert ring.fill == pytest.approx(0.36)
        assert not is_shot_candidate(ring, REGION, default_config)

    def test_hole_near_border_fails(self, default_config):
        assert not is_shot_candidate(hole(12, 50), REGION, default_config)
        assert is_shot_candidate(hole(13, 50), REGION, default_config)


class TestFilterCandidates:
    def test_keeps_holes_in_discovery_order(self, default_config):
        components = holes([(30, 30), (70, 30), (50, 50)])
        components.append(hole(5, 5, index=3))
        candidates = filter_candidates(components, REGION, default_config)
        assert [c.index for c in candidates] == [0, 1, 2]

    def test_too_few_candidates(self, default_config):
        result = filter_candidates(holes([(30, 30), (70, 70)]), REGION, default_config)
        assert isinstance(result, Rejection)
        assert result.code == RejectionCode.NOT_ENOUGH_SHOTS
        assert result.diagnostics["candidatesFound"] == 2
        assert result.diagnostics["minShots"] == 3

    def test_too_many_candidates(self, default_config):
        points = [(x, y) for x in range(15, 90, 5) for y in range(15, 90, 5)]
        result = filter_candidates(holes(points, size=1), REGION, default_config)
        assert result.code == RejectionCode.TOO_NOISY
        assert result.diagnostics["candidatesFound"] > 40
        assert result.diagnostics["maxCandidates"] == 40

    def test_exactly_max_candidates_is_accepted(self):
        config = AnalysisConfig(max_candidates=4)
        candidates = filter_candidates(
            holes([(30, 30), (70, 30), (30, 70), (70, 70)]), REGION, config
        )
        assert len(candidates) == 4


class TestSelectShotGroup:
    def test_keeps_everything_up_to_max_shots(self):
        group = select_shot_group(holes([(30, 30), (40, 30), (35, 40)]), max_shots=3)
        assert len(group) == 3
        assert group.centroid == pytest.approx((35.0, 100 / 3))

    def test_drops_flyers_far_from_the_mean(self):
        points = [(50, 50), (52, 50), (50, 52), (52, 52), (90, 10)]
        group = select_shot_group(holes(points), max_shots=4)
        assert [s.index for s in group.shots] == [0, 1, 2, 3]
        assert group.centroid == (51.0, 51.0)

    def test_ties_keep_earlier_candidates(self):
        points = [(40, 50), (60, 50), (50, 40), (50, 60)]
        group = select_shot_group(holes(points), max_shots=2)
        assert [s.index for s in group.shots] == [0, 1]

    def test_members_keep_discovery_order(self):
        points = [(90, 90), (50, 50), (51, 50), (50, 51)]
        group = select_shot_group(holes(points), max_shots=3)
        assert [s.index for s in group.shots] == [1, 2, 3]

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="No candidates"):
            select_shot_group([], max_shots=3)

    def test_bad_max_shots_raises(self):
        with pytest.raises(ValueError, match="max_shots"):
            select_shot_group(holes([(50, 50)]), max_shots=0)
