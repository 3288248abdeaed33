"""
Box selector that masks out the rest of the image while dragging.
"""

from typing import List, Optional

from ..selection import CapturePolicy, DrawingSurface, Shape, ShapeType
from ..selection.bounds import compute_bounds
from ..selection.state import GestureCapture, Point
from .base import BaseSelector


class FancyBoxCapture(CapturePolicy):
    """Single pointer-up; the box must exceed ``fancybox.min_size`` on both axes."""

    def __init__(self, config):
        self.config = config

    def is_valid(self, capture: GestureCapture) -> bool:
        opposite = capture.tracking
        if opposite is None:
            return False
        min_size = self.config.fancybox.min_size
        return (
            abs(opposite.x - capture.anchor.x) > min_size
            and abs(opposite.y - capture.anchor.y) > min_size
        )

    def on_up(self, capture: GestureCapture, point: Point) -> bool:
        return True

    def bounds_points(self, capture: GestureCapture) -> List[Point]:
        return [] if capture.tracking is None else [capture.tracking]

    def build_shape(self, capture: GestureCapture, host) -> Optional[Shape]:
        if not self.is_valid(capture):
            return None
        bounds = compute_bounds(capture.anchor, self.bounds_points(capture))
        item_anchor = host.to_item_coordinates(Point(bounds.left, bounds.top))
        item_opposite = host.to_item_coordinates(Point(bounds.right - 1, bounds.bottom - 1))
        return Shape.rect(
            item_anchor.x,
            item_anchor.y,
            item_opposite.x - item_anchor.x,
            item_opposite.y - item_anchor.y,
        )

    def draw_preview(self, surface: DrawingSurface, capture: GestureCapture):
        if capture.tracking is None:
            return
        b = compute_bounds(capture.anchor, [capture.tracking])
        w, h = surface.width, surface.height
        mask = self.config.fancybox.mask_color

        surface.fill_rect(0, 0, w, b.top, mask)
        surface.fill_rect(0, b.bottom, w, h - b.bottom, mask)
        surface.fill_rect(0, b.top, b.left, b.height, mask)
        surface.fill_rect(b.right, b.top, w - b.right, b.height, mask)
        surface.stroke_rect(
            b.left + 0.5,
            b.top + 0.5,
            b.width,
            b.height,
            self.config.style.outer_color,
            self.config.fancybox.line_width,
        )


class FancyBoxSelector(BaseSelector):
    name = "fancybox"
    shape_type = ShapeType.RECT
    policy_class = FancyBoxCapture

    def draw_shape(self, surface: DrawingSurface, shape: Shape, highlight: bool = False):
        if shape.type is not ShapeType.RECT:
            return
        cfg = self.config.fancybox
        line_width = cfg.highlight_line_width if highlight else cfg.line_width

        g = shape.geometry
        surface.stroke_rect(
            g.x + 0.5, g.y + 0.5, g.width + 1, g.height + 1,
            self.config.style.outer_color, line_width,
        )
        surface.stroke_rect(
            g.x + 1.5, g.y + 1.5, g.width - 1, g.height - 1,
            self._shape_color(highlight), line_width,
        )
