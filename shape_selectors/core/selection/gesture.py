"""
Selection gesture state machine.

One machine drives every selector variant. The variant supplies a
``CapturePolicy`` that decides what a pointer event records, when a
gesture is finished, what shape it yields and how the preview looks.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from .bounds import compute_bounds
from .events import EventType
from .state import GestureCapture, GestureState, Point, Shape, ViewportBounds
from .surface import POINTER_MOVE, POINTER_UP, DrawingSurface, PointerEvent

logger = logging.getLogger(__name__)


class CapturePolicy(ABC):
    """Variant-specific behaviour plugged into ``SelectionGestureMachine``."""

    def on_move(self, capture: GestureCapture, point: Point):
        """Record a pointer-move. Default: update the tracking point."""
        capture.tracking = point

    @abstractmethod
    def on_up(self, capture: GestureCapture, point: Point) -> bool:
        """Record a pointer-up. Return True when the gesture is finished."""

    @abstractmethod
    def build_shape(self, capture: GestureCapture, host) -> Optional[Shape]:
        """Item-space shape for the capture, or None if it is not valid."""

    def bounds_points(self, capture: GestureCapture) -> List[Point]:
        """Points besides the anchor covered by the viewport bounds."""
        return list(capture.control_points)

    @abstractmethod
    def draw_preview(self, surface: DrawingSurface, capture: GestureCapture):
        """Draw the live preview on an already cleared surface."""


class SelectionGestureMachine:
    """
    Turns pointer events on a drawing surface into a selection.

    States go Idle -> Armed -> Completed or Canceled. ``stop_selection``
    returns to Idle from anywhere.

    The host must provide ``fire_event(name, payload)`` and
    ``to_item_coordinates(point)``. Only one gesture may be armed per
    surface; the host is responsible for not starting a second one.
    """

    def __init__(self, surface: DrawingSurface, host, policy: CapturePolicy):
        self.surface = surface
        self.host = host
        self.policy = policy

        self.state = GestureState.IDLE
        self.capture = GestureCapture()

        # Last committed shape
        self.result: Optional[Shape] = None

        self._move_handle = None
        self._up_handle = None

    @property
    def is_armed(self) -> bool:
        return self.state is GestureState.ARMED

    def start_selection(self, x: float, y: float) -> bool:
        """
        Arm a new gesture anchored at (x, y).

        Returns:
            False if the machine is not idle; nothing is changed then
        """
        if self.state is not GestureState.IDLE:
            logger.warning(
                "Ignoring selection start at (%s, %s): gesture is %s",
                x,
                y,
                self.state.value,
            )
            return False

        self.capture.reset(Point(x, y))
        self.result = None
        self._attach_listeners()
        self.state = GestureState.ARMED
        logger.debug("Selection armed at (%s, %s)", x, y)

        self.host.fire_event(EventType.SELECTION_STARTED, {"offsetX": x, "offsetY": y})
        return True

    def stop_selection(self):
        """Release listeners, clear the preview and reset. Safe in any state."""
        self._detach_listeners()
        self.surface.clear()
        self.capture.reset()
        self.state = GestureState.IDLE

    def get_viewport_bounds(self) -> Optional[ViewportBounds]:
        """Bounds of the recorded points, or None before any gesture."""
        if self.capture.anchor is None:
            return None
        return compute_bounds(self.capture.anchor, self.policy.bounds_points(self.capture))

    def redraw(self):
        self.surface.clear()
        self.policy.draw_preview(self.surface, self.capture)

    def _attach_listeners(self):
        self._detach_listeners()
        self._move_handle = self.surface.add_listener(POINTER_MOVE, self._on_pointer_move)
        self._up_handle = self.surface.add_listener(POINTER_UP, self._on_pointer_up)

    def _detach_listeners(self):
        if self._move_handle is not None:
            self.surface.remove_listener(self._move_handle)
            self._move_handle = None
        if self._up_handle is not None:
            self.surface.remove_listener(self._up_handle)
            self._up_handle = None

    def _on_pointer_move(self, event: PointerEvent):
        if not self.is_armed:
            return
        self.policy.on_move(self.capture, event.point)
        self.redraw()

    def _on_pointer_up(self, event: PointerEvent):
        if not self.is_armed:
            return
        if self.policy.on_up(self.capture, event.point):
            self._finalize()
        else:
            logger.debug(
                "Recorded control point %d at (%s, %s)",
                len(self.capture.control_points),
                event.x,
                event.y,
            )
            self.redraw()

    def _finalize(self):
        self._detach_listeners()
        self.surface.clear()

        try:
            shape = self.policy.build_shape(self.capture, self.host)
        except Exception:
            self.state = GestureState.CANCELED
            logger.exception("Failed to build the selection shape")
            raise
        if shape is None:
            self.state = GestureState.CANCELED
            logger.debug("Selection canceled")
            self.host.fire_event(EventType.SELECTION_CANCELED, {})
            return

        self.result = shape
        self.state = GestureState.COMPLETED
        logger.debug("Selection completed with %s", shape.type.value)
        self.host.fire_event(
            EventType.SELECTION_COMPLETED,
            {"shape": shape, "viewportBounds": self.get_viewport_bounds()},
        )
