"""
Directed rectangle selector.

The pointer is pressed at the rectangle center, the first release fixes
the aspect ratio and the second release fixes direction and size.
"""

from typing import Optional

from ..selection import CapturePolicy, DrawingSurface, Shape, ShapeType
from ..selection.geometry import (
    compute_parameters,
    compute_rectangle_corners,
    direction_path,
    expand_polygon,
)
from ..selection.state import GestureCapture, Point
from .base import BaseSelector


def draw_directed_outline(surface: DrawingSurface, corners, color, line_width):
    surface.stroke_polyline(direction_path(corners), color, line_width)


class DirectedRectCapture(CapturePolicy):
    """Two pointer-ups: the first records the aspect point, the second commits."""

    def __init__(self, config):
        self.config = config

    def corners(self, capture: GestureCapture, last: Optional[Point] = None):
        if last is None:
            last = capture.control_points[-1] if capture.control_points else capture.tracking
        params = compute_parameters(capture.anchor, capture.snapshot(), last)
        return compute_rectangle_corners(params.theta, params.scale, params.center)

    def on_up(self, capture: GestureCapture, point: Point) -> bool:
        finished = len(capture.control_points) == 1
        capture.record(point)
        return finished

    def build_shape(self, capture: GestureCapture, host) -> Shape:
        return Shape.polygon(host.to_item_coordinates(p) for p in self.corners(capture))

    def draw_preview(self, surface: DrawingSurface, capture: GestureCapture):
        last = capture.tracking
        if last is None and capture.control_points:
            last = capture.control_points[-1]
        if last is None:
            return

        style = self.config.style
        corners = self.corners(capture, last)
        draw_directed_outline(surface, corners, style.outer_color, style.outer_width)
        draw_directed_outline(surface, corners, style.inner_color, style.inner_width)

        if len(capture.control_points) == 1:
            marker = self.config.marker
            surface.draw_marker(
                last, marker.radius, marker.fill, marker.outline, marker.line_width
            )


class DirectedRectSelector(BaseSelector):
    name = "directed_rect"
    shape_type = ShapeType.POLYGON
    policy_class = DirectedRectCapture

    def draw_shape(self, surface: DrawingSurface, shape: Shape, highlight: bool = False):
        if shape.type is not ShapeType.POLYGON or len(shape.points) != 4:
            return
        corners = expand_polygon(shape.points, self.config.highlight.expand)
        draw_directed_outline(
            surface, corners, self.config.style.outer_color, self.config.style.outer_width
        )
        draw_directed_outline(
            surface, corners, self._shape_color(highlight), self.config.style.inner_width
        )
