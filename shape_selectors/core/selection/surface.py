"""
Drawing surface contract.

Selectors draw previews and committed shapes through this interface and
register their pointer listeners on it. Concrete surfaces live in
``shape_selectors.interfaces``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Hashable, Optional, Sequence, Tuple

from .state import Point

POINTER_MOVE = "pointermove"
POINTER_UP = "pointerup"

Color = str


@dataclass(frozen=True)
class PointerEvent:
    """Pointer position in viewport pixels."""

    x: float
    y: float

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    @classmethod
    def from_dict(cls, data: dict):
        """
        Create from a browser-style event dict.

        ``offsetX``/``offsetY`` are preferred, falling back to
        ``layerX``/``layerY`` and then plain ``x``/``y``.
        """
        for kx, ky in (("offsetX", "offsetY"), ("layerX", "layerY"), ("x", "y")):
            if data.get(kx) is not None and data.get(ky) is not None:
                return cls(x=data[kx], y=data[ky])
        raise ValueError(f"Pointer event has no coordinates: {data}")


class DrawingSurface(ABC):
    """Raster surface with stroke/fill primitives and pointer listeners."""

    @property
    @abstractmethod
    def width(self) -> int: pass

    @property
    @abstractmethod
    def height(self) -> int: pass

    @abstractmethod
    def clear(self, rect: Optional[Tuple[float, float, float, float]] = None) -> None:
        """Clear ``rect`` (x, y, w, h), or the whole surface."""

    @abstractmethod
    def stroke_polyline(
        self, points: Sequence[Point], color: Color, line_width: float, closed: bool = False
    ) -> None: pass

    @abstractmethod
    def stroke_rect(
        self, x: float, y: float, w: float, h: float, color: Color, line_width: float
    ) -> None: pass

    @abstractmethod
    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color) -> None: pass

    @abstractmethod
    def draw_marker(
        self, center: Point, radius: float, fill: Color, outline: Color, line_width: float
    ) -> None: pass

    @abstractmethod
    def add_listener(self, kind: str, callback: Callable[[PointerEvent], None]) -> Hashable:
        """Register a pointer listener and return its handle."""

    @abstractmethod
    def remove_listener(self, handle: Hashable) -> None:
        """Unregister by handle. Unknown handles are ignored."""

    @abstractmethod
    def dispatch(self, kind: str, event: PointerEvent) -> None:
        """Deliver a pointer event to the listeners registered for ``kind``."""
