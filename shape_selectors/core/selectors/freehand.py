"""
Free-form selector: every pointer-move extends the trace.
"""

from ..selection import CapturePolicy, DrawingSurface, Shape, ShapeType
from ..selection.state import GestureCapture, Point
from .base import BaseSelector


class FreehandCapture(CapturePolicy):
    def __init__(self, config):
        self.config = config

    def on_move(self, capture: GestureCapture, point: Point):
        capture.tracking = point
        capture.record(point)

    def on_up(self, capture: GestureCapture, point: Point) -> bool:
        return True

    def build_shape(self, capture: GestureCapture, host) -> Shape:
        # Converted at commit like the other selectors
        return Shape.polygon(host.to_item_coordinates(p) for p in capture.snapshot())

    def draw_preview(self, surface: DrawingSurface, capture: GestureCapture):
        if len(capture.control_points) < 2:
            return
        surface.stroke_polyline(
            capture.snapshot(),
            self.config.style.inner_color,
            self.config.style.freehand_width,
        )


class FreehandSelector(BaseSelector):
    name = "freehand"
    shape_type = ShapeType.POLYGON
    policy_class = FreehandCapture

    def draw_shape(self, surface: DrawingSurface, shape: Shape, highlight: bool = False):
        if shape.type is ShapeType.RECT or len(shape.points) < 2:
            return
        closed = shape.type is ShapeType.POLYGON
        style = self.config.style
        surface.stroke_polyline(shape.points, style.outer_color, style.outer_width, closed)
        surface.stroke_polyline(
            shape.points, self._shape_color(highlight), style.inner_width, closed
        )
