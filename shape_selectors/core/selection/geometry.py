"""
Pure geometry functions for directed rectangles.

These functions have no side effects and can be tested in isolation.
Points and scales are both carried as ``Point`` values.
"""

import math
from typing import List, Optional, Sequence

from .state import Point, RectParameters


def rotate(theta: float, pt: Point) -> Point:
    """Rotate ``pt`` counter-clockwise (y-down: clockwise) by ``theta`` radians."""
    ct, st = math.cos(theta), math.sin(theta)
    return Point(ct * pt.x - st * pt.y, st * pt.x + ct * pt.y)


def scale(s: Point, pt: Point) -> Point:
    return Point(pt.x * s.x, pt.y * s.y)


def shift(delta: Point, pt: Point) -> Point:
    return Point(delta.x + pt.x, delta.y + pt.y)


def reciprocal(s: Point) -> Point:
    """Componentwise inverse. Callers must ensure neither component is zero."""
    return Point(1 / s.x, 1 / s.y)


def distance(a: Point, b: Point) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


def compute_parameters(
    anchor: Point, control_points: Sequence[Point], last: Optional[Point]
) -> RectParameters:
    """
    Derive directed rectangle parameters from the gesture points.

    The anchor fixes the rectangle center. The first control point (or the
    tracking point while none is recorded) fixes the aspect ratio, and the
    tracking point fixes direction and size.

    Args:
        anchor: Gesture start
        control_points: Points recorded by previous pointer-ups
        last: Current tracking point; defaults to the anchor

    Returns:
        RectParameters with theta in radians and half-extents as scale
    """
    if last is None:
        last = anchor
    p0 = anchor
    p1 = control_points[0] if control_points else last
    p2 = last

    rx = abs(p1.x - p0.x)
    ry = abs(p1.y - p0.y)

    if control_points and rx > 0 and ry > 0:
        hyp = distance(p2, p0)
        theta = math.atan2(p2.y - p0.y, p2.x - p0.x)
        return RectParameters(theta, Point(hyp, hyp * ry / rx), p0)

    # No control point yet, or degenerate aspect: axis aligned
    return RectParameters(0.0, Point(rx, ry), p0)


def compute_rectangle_corners(theta: float, s: Point, center: Point) -> List[Point]:
    """
    Corners of the rectangle described by (theta, scale, center).

    The order is fixed: (+major,+minor), (-major,+minor), (-major,-minor),
    (+major,-minor). Preview drawing and shape expansion rely on it.
    """
    major = rotate(theta, Point(s.x, 0))
    minor = rotate(theta, Point(0, s.y))
    return [
        Point(center.x + major.x + minor.x, center.y + major.y + minor.y),
        Point(center.x - major.x + minor.x, center.y - major.y + minor.y),
        Point(center.x - major.x - minor.x, center.y - major.y - minor.y),
        Point(center.x + major.x - minor.x, center.y + major.y - minor.y),
    ]


def midpoint(a: Point, b: Point) -> Point:
    return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def centroid(points: Sequence[Point]) -> Optional[Point]:
    """Mean of the vertices, or None for an empty sequence."""
    if not points:
        return None
    n = len(points)
    return Point(sum(p.x for p in points) / n, sum(p.y for p in points) / n)


def expand_polygon(points: Sequence[Point], delta: float) -> List[Point]:
    """
    Push every vertex ``delta`` units away from the centroid.

    Vertices lying on the centroid are left in place.
    """
    center = centroid(points)
    if center is None:
        return []
    expanded = []
    for pt in points:
        d = distance(pt, center)
        if d == 0:
            expanded.append(pt)
            continue
        k = delta / d
        expanded.append(Point(pt.x + (pt.x - center.x) * k, pt.y + (pt.y - center.y) * k))
    return expanded


def direction_path(corners: Sequence[Point]) -> List[Point]:
    """
    Outline of a directed rectangle with a tick from its center.

    The path starts at the centroid, runs to the middle of the leading edge
    (between corners 0 and 3), around the four corners and back to that
    midpoint.
    """
    lead = midpoint(corners[0], corners[3])
    return [centroid(corners), lead, *corners, lead]
