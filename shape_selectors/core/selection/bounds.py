"""
Viewport bounds over recorded gesture points.
"""

from typing import Iterable, Optional

import numpy as np

from .state import Point, ViewportBounds


def compute_bounds(anchor: Optional[Point], points: Iterable[Point]) -> ViewportBounds:
    """
    Axis-aligned box over the anchor and all points.

    Recomputed on every call; the point sequence changes between calls.

    Args:
        anchor: Gesture start, always included when set
        points: Further viewport points

    Returns:
        ViewportBounds in viewport space

    Raises:
        ValueError: If there is neither an anchor nor any point
    """
    coords = [(p.x, p.y) for p in points]
    if anchor is not None:
        coords.insert(0, (anchor.x, anchor.y))
    if not coords:
        raise ValueError("Cannot compute bounds of an empty point set")

    arr = np.asarray(coords, dtype=np.float64)
    left, top = arr.min(axis=0)
    right, bottom = arr.max(axis=0)
    return ViewportBounds(
        top=float(top), left=float(left), bottom=float(bottom), right=float(right)
    )
