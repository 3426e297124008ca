"""Tests for inclusive box helpers."""

from geometry import box_inside, box_size, clip_box, pad_box, square_box


class TestBoxHelpers:
    def test_box_size_is_inclusive(self):
        assert box_size((0, 0, 0, 0)) == (1, 1)
        assert box_size((10, 20, 19, 24)) == (10, 5)

    def test_pad_then_clip(self):
        padded = pad_box((2, 3, 50, 60), 5, 5)
        assert padded == (-3, -2, 55, 65)
        assert clip_box(padded, 52, 100) == (0, 0, 51, 65)

    def test_square_box_shrinks_longer_side_around_center(self):
        assert square_box((0, 0, 99, 49)) == (25, 0, 74, 49)
        assert square_box((10, 0, 19, 29)) == (10, 10, 19, 19)

    def test_square_box_of_square_is_unchanged(self):
        assert square_box((5, 5, 14, 14)) == (5, 5, 14, 14)

    def test_square_box_stays_inside_input(self):
        box = (3, 7, 40, 19)
        x0, y0, x1, y1 = square_box(box)
        w, h = box_size((x0, y0, x1, y1))
        assert w == h == 13
        assert x0 >= 3 and x1 <= 40 and y0 >= 7 and y1 <= 19


class TestBoxInside:
    def test_strictly_inside(self):
        assert box_inside((11, 11, 88, 88), (0, 0, 99, 99), margin=10)

    def test_touching_margin_is_outside(self):
        assert not box_inside((10, 11, 20, 20), (0, 0, 99, 99), margin=10)
        assert not box_inside((50, 50, 89, 60), (0, 0, 99, 99), margin=10)

    def test_zero_margin(self):
        assert box_inside((1, 1, 98, 98), (0, 0, 99, 99))
        assert not box_inside((0, 1, 98, 98), (0, 0, 99, 99))
