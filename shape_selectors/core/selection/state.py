"""
State and data model for selection gestures.

Contains data classes for points, derived rectangle parameters, committed
shapes and viewport bounds, plus the mutable capture of a live gesture.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class Point:
    """A 2D point. Viewport pixels or item units depending on context."""

    x: float
    y: float

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict):
        """Create from dictionary."""
        return cls(x=data["x"], y=data["y"])


@dataclass(frozen=True)
class RectParameters:
    """Rotation, half-extents and center of a directed rectangle."""

    theta: float
    scale: Point
    center: Point


@dataclass(frozen=True)
class ViewportBounds:
    """Axis-aligned box in viewport space."""

    top: float
    left: float
    bottom: float
    right: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def contains(self, point: Point) -> bool:
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom

    def to_dict(self):
        return {
            "top": self.top,
            "left": self.left,
            "bottom": self.bottom,
            "right": self.right,
        }


class ShapeType(Enum):
    """Kinds of shapes a selector can produce."""

    RECT = "rect"
    POLYGON = "polygon"
    LINESTRING = "linestring"


@dataclass(frozen=True)
class RectGeometry:
    x: float
    y: float
    width: float
    height: float

    def to_dict(self):
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


Geometry = Union[RectGeometry, Tuple[Point, ...]]


@dataclass(frozen=True)
class Shape:
    """
    Committed selection result.

    Coordinates are in item space once returned from a selector's
    ``get_shape``. Instances are immutable.
    """

    type: ShapeType
    geometry: Geometry

    @classmethod
    def rect(cls, x: float, y: float, width: float, height: float) -> "Shape":
        return cls(ShapeType.RECT, RectGeometry(x, y, width, height))

    @classmethod
    def polygon(cls, points) -> "Shape":
        return cls(ShapeType.POLYGON, tuple(points))

    @classmethod
    def linestring(cls, points) -> "Shape":
        return cls(ShapeType.LINESTRING, tuple(points))

    @property
    def points(self) -> Tuple[Point, ...]:
        """Vertices of a polygon/linestring, or the four corners of a rect."""
        if self.type is ShapeType.RECT:
            g = self.geometry
            return (
                Point(g.x, g.y),
                Point(g.x + g.width, g.y),
                Point(g.x + g.width, g.y + g.height),
                Point(g.x, g.y + g.height),
            )
        return self.geometry

    def to_dict(self):
        """Convert to the wire format consumed by hosts and renderers."""
        if self.type is ShapeType.RECT:
            geometry = self.geometry.to_dict()
        else:
            geometry = {"points": [p.to_dict() for p in self.geometry]}
        return {"type": self.type.value, "geometry": geometry}

    @classmethod
    def from_dict(cls, data: dict):
        """
        Create from the wire format.

        Raises:
            ValueError: If the shape type is unknown or geometry is malformed
        """
        shape_type = ShapeType(data["type"])
        geometry = data.get("geometry") or {}
        if shape_type is ShapeType.RECT:
            try:
                return cls.rect(
                    geometry["x"], geometry["y"], geometry["width"], geometry["height"]
                )
            except KeyError as e:
                raise ValueError(f"Rect geometry is missing {e}") from e
        if "points" not in geometry:
            raise ValueError(f"{shape_type.value} geometry has no points")
        return cls(shape_type, tuple(Point.from_dict(p) for p in geometry["points"]))


class GestureState(Enum):
    """Lifecycle of a selection gesture."""

    IDLE = "idle"
    ARMED = "armed"
    COMPLETED = "completed"
    CANCELED = "canceled"


@dataclass
class GestureCapture:
    """
    Points recorded during the live gesture.

    ``control_points`` is append-only while armed; shapes are derived from
    a snapshot of it.
    """

    anchor: Optional[Point] = None
    control_points: List[Point] = field(default_factory=list)
    tracking: Optional[Point] = None

    def record(self, point: Point):
        self.control_points.append(point)

    def snapshot(self) -> Tuple[Point, ...]:
        return tuple(self.control_points)

    def recorded_points(self) -> List[Point]:
        """Anchor plus every recorded point, in capture order."""
        points = [] if self.anchor is None else [self.anchor]
        points.extend(self.control_points)
        return points

    def reset(self, anchor: Optional[Point] = None):
        self.anchor = anchor
        self.control_points = []
        self.tracking = None
