"""
Tests for viewport bounds computation.
"""

import random

import pytest

from shape_selectors.core.selection import Point, compute_bounds


class TestComputeBounds:
    def test_anchor_only(self):
        bounds = compute_bounds(Point(5, 7), [])
        assert (bounds.top, bounds.left, bounds.bottom, bounds.right) == (7, 5, 7, 5)
        assert bounds.width == 0 and bounds.height == 0

    def test_includes_anchor(self):
        bounds = compute_bounds(Point(0, 0), [Point(10, 5), Point(8, 6)])
        assert bounds.left == 0 and bounds.top == 0
        assert bounds.right == 10 and bounds.bottom == 6

    def test_negative_quadrant(self):
        bounds = compute_bounds(Point(10, 10), [Point(-5, 20), Point(30, -2)])
        assert bounds.to_dict() == {"top": -2, "left": -5, "bottom": 20, "right": 30}

    def test_contains_every_point(self):
        rng = random.Random(1234)
        for _ in range(50):
            anchor = Point(rng.uniform(-100, 100), rng.uniform(-100, 100))
            points = [
                Point(rng.uniform(-100, 100), rng.uniform(-100, 100))
                for _ in range(rng.randint(1, 20))
            ]
            bounds = compute_bounds(anchor, points)
            for p in [anchor, *points]:
                assert bounds.contains(p)

    def test_recomputed_after_append(self):
        points = [Point(1, 1)]
        first = compute_bounds(Point(0, 0), points)
        points.append(Point(50, 50))
        second = compute_bounds(Point(0, 0), points)
        assert first.right == 1
        assert second.right == 50

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            compute_bounds(None, [])
