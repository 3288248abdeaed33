"""
Numpy/OpenCV drawing surface.

Keeps an RGBA overlay the size of the viewport. Selectors draw into the
overlay and the host composites it onto the displayed image.
"""

import itertools
import re
from typing import Callable, Dict, Hashable, Optional, Sequence, Tuple

import cv2
import numpy as np

from ..core.selection import POINTER_MOVE, POINTER_UP, DrawingSurface, Point, PointerEvent


_RGBA_RE = re.compile(
    r"^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([0-9.]+)\s*)?\)$"
)


def parse_color(color: str) -> Tuple[int, int, int, int]:
    """
    Parse a CSS-like colour into an RGBA tuple of 0-255 ints.

    Accepts ``#rgb``, ``#rrggbb``, ``#rrggbbaa``, ``rgb(r,g,b)`` and
    ``rgba(r,g,b,a)`` with ``a`` in [0, 1].

    Raises:
        ValueError: If the colour cannot be parsed
    """
    text = color.strip().lower()
    if text.startswith("#"):
        digits = text[1:]
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        if len(digits) == 6:
            digits += "ff"
        if len(digits) != 8:
            raise ValueError(f"Invalid colour: {color}")
        try:
            return tuple(int(digits[i:i + 2], 16) for i in range(0, 8, 2))
        except ValueError as e:
            raise ValueError(f"Invalid colour: {color}") from e

    match = _RGBA_RE.match(text)
    if match is None:
        raise ValueError(f"Invalid colour: {color}")
    r, g, b, a = match.groups()
    alpha = 255 if a is None else int(round(float(a) * 255))
    return (int(r), int(g), int(b), alpha)


def _thickness(line_width: float) -> int:
    return max(1, int(round(line_width)))


class ImageSurface(DrawingSurface):
    """
    Drawing surface backed by an RGBA numpy array.

    Pointer events are delivered through ``dispatch`` (or the
    ``pointer_move``/``pointer_up`` shortcuts) by whatever UI hosts it.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self.overlay = np.zeros((self._height, self._width, 4), dtype=np.uint8)

        self._listeners: Dict[int, Tuple[str, Callable]] = {}
        self._handles = itertools.count(1)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    # Drawing

    def clear(self, rect: Optional[Tuple[float, float, float, float]] = None):
        if rect is None:
            self.overlay[:] = 0
            return
        region = self._clip(*rect)
        if region is not None:
            x0, y0, x1, y1 = region
            self.overlay[y0:y1, x0:x1] = 0

    def stroke_polyline(
        self, points: Sequence[Point], color: str, line_width: float, closed: bool = False
    ):
        if len(points) < 2:
            return
        pts = np.round([[p.x, p.y] for p in points]).astype(np.int32).reshape(-1, 1, 2)
        cv2.polylines(
            self.overlay, [pts], closed, parse_color(color), _thickness(line_width)
        )

    def stroke_rect(self, x, y, w, h, color: str, line_width: float):
        x0, x1 = sorted((x, x + w))
        y0, y1 = sorted((y, y + h))
        cv2.rectangle(
            self.overlay,
            (int(round(x0)), int(round(y0))),
            (int(round(x1)), int(round(y1))),
            parse_color(color),
            _thickness(line_width),
        )

    def fill_rect(self, x, y, w, h, color: str):
        region = self._clip(x, y, w, h)
        if region is None:
            return
        x0, y0, x1, y1 = region
        rgba = np.array(parse_color(color), dtype=np.float32)
        src_a = rgba[3] / 255.0

        dst = self.overlay[y0:y1, x0:x1].astype(np.float32)
        dst_a = dst[..., 3:] / 255.0
        out_a = src_a + dst_a * (1 - src_a)
        safe_a = np.where(out_a > 0, out_a, 1.0)
        out_rgb = (rgba[:3] * src_a + dst[..., :3] * dst_a * (1 - src_a)) / safe_a

        self.overlay[y0:y1, x0:x1, :3] = np.clip(np.round(out_rgb), 0, 255).astype(np.uint8)
        self.overlay[y0:y1, x0:x1, 3:] = np.clip(np.round(out_a * 255), 0, 255).astype(
            np.uint8
        )

    def draw_marker(self, center: Point, radius: float, fill: str, outline: str, line_width: float):
        c = (int(round(center.x)), int(round(center.y)))
        r = max(1, int(round(radius)))
        cv2.circle(self.overlay, c, r, parse_color(fill), -1)
        cv2.circle(self.overlay, c, r, parse_color(outline), _thickness(line_width))

    def is_blank(self) -> bool:
        return not self.overlay.any()

    def composite(self, image: np.ndarray) -> np.ndarray:
        """
        Blend the overlay onto an RGB image of the same size.

        Raises:
            ValueError: If the image does not match the surface
        """
        if image is None or image.ndim != 3 or image.shape[2] != 3:
            raise ValueError("Image must be an RGB array of shape (H, W, 3)")
        if image.shape[:2] != (self._height, self._width):
            raise ValueError(
                f"Image shape {image.shape[:2]} doesn't match surface "
                f"{(self._height, self._width)}"
            )
        alpha = self.overlay[..., 3:].astype(np.float32) / 255.0
        blended = self.overlay[..., :3] * alpha + image.astype(np.float32) * (1 - alpha)
        return np.clip(np.round(blended), 0, 255).astype(np.uint8)

    def _clip(self, x, y, w, h):
        x0, x1 = sorted((x, x + w))
        y0, y1 = sorted((y, y + h))
        x0 = max(0, int(np.floor(x0)))
        y0 = max(0, int(np.floor(y0)))
        x1 = min(self._width, int(np.ceil(x1)))
        y1 = min(self._height, int(np.ceil(y1)))
        if x1 <= x0 or y1 <= y0:
            return None
        return x0, y0, x1, y1

    # Pointer listeners

    def add_listener(self, kind: str, callback: Callable[[PointerEvent], None]) -> Hashable:
        handle = next(self._handles)
        self._listeners[handle] = (kind, callback)
        return handle

    def remove_listener(self, handle: Hashable):
        self._listeners.pop(handle, None)

    def listener_count(self, kind: Optional[str] = None) -> int:
        return sum(1 for k, _ in self._listeners.values() if kind is None or k == kind)

    def dispatch(self, kind: str, event: PointerEvent):
        for handle, (k, callback) in list(self._listeners.items()):
            # A previous callback may have unregistered this one
            if k == kind and handle in self._listeners:
                callback(event)

    def pointer_move(self, x: float, y: float):
        self.dispatch(POINTER_MOVE, PointerEvent(x, y))

    def pointer_up(self, x: float, y: float):
        self.dispatch(POINTER_UP, PointerEvent(x, y))
