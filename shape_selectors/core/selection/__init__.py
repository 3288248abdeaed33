"""
Core selection module - UI-agnostic gesture and geometry logic.

This module provides the gesture state machine, the geometry used to
derive shapes and the data model shared by every selector.
"""

from .bounds import compute_bounds
from .events import EventEmitter, EventType, SelectionEvent
from .gesture import CapturePolicy, SelectionGestureMachine
from .state import (
    GestureCapture,
    GestureState,
    Point,
    RectGeometry,
    RectParameters,
    Shape,
    ShapeType,
    ViewportBounds,
)
from .surface import POINTER_MOVE, POINTER_UP, DrawingSurface, PointerEvent

__all__ = [
    "compute_bounds",
    "EventEmitter",
    "EventType",
    "SelectionEvent",
    "CapturePolicy",
    "SelectionGestureMachine",
    "GestureCapture",
    "GestureState",
    "Point",
    "RectGeometry",
    "RectParameters",
    "Shape",
    "ShapeType",
    "ViewportBounds",
    "POINTER_MOVE",
    "POINTER_UP",
    "DrawingSurface",
    "PointerEvent",
]
