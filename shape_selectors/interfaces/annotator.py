"""
Host annotator for selectors.

Owns the event bus, the selector registry and the viewport <-> item
coordinate transform. Selectors receive it at construction.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from easydict import EasyDict as edict

from ..core.selection import (
    DrawingSurface,
    EventEmitter,
    EventType,
    GestureState,
    Point,
    SelectionEvent,
    Shape,
    ShapeType,
)
from ..core.selectors import BaseSelector, create_selector
from ..utils.config import default_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewportTransform:
    """Pan and zoom of the displayed image. ``viewport = item * zoom + offset``."""

    offset_x: float = 0.0
    offset_y: float = 0.0
    zoom: float = 1.0

    def __post_init__(self):
        if self.zoom <= 0:
            raise ValueError(f"Zoom must be positive, got {self.zoom}")

    def to_item(self, point: Point) -> Point:
        return Point((point.x - self.offset_x) / self.zoom, (point.y - self.offset_y) / self.zoom)

    def to_viewport(self, point: Point) -> Point:
        return Point(point.x * self.zoom + self.offset_x, point.y * self.zoom + self.offset_y)

    @classmethod
    def from_dict(cls, data: Optional[dict]):
        data = data or {}
        offset = data.get("offset", (0.0, 0.0))
        return cls(offset_x=offset[0], offset_y=offset[1], zoom=data.get("zoom", 1.0))


class Annotator:
    """
    Host collaborator consumed by selectors.

    This class handles:
    - Event dispatch to subscribers
    - Selector registration and activation
    - Coordinate transforms between viewport and item space

    Only one gesture may be armed at a time: ``start_selection`` refuses
    to start while the current selector is armed.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        transform: Optional[ViewportTransform] = None,
        config: Optional[edict] = None,
    ):
        """
        Initialize annotator.

        Args:
            surface: Surface selectors draw and listen on
            transform: Viewport transform, identity by default
            config: Configuration handed to selectors
        """
        self.surface = surface
        self.transform = transform if transform is not None else ViewportTransform()
        self.config = config if config is not None else default_config()

        self.events = EventEmitter()

        self._selectors: Dict[str, BaseSelector] = {}
        self._current: Optional[str] = None

        # The host stops a selector whose gesture was canceled
        self.events.on(EventType.SELECTION_CANCELED, self._on_selection_canceled)

    # Coordinate transform

    def to_item_coordinates(self, point: Point) -> Point:
        return self.transform.to_item(point)

    def to_viewport_coordinates(self, point: Point) -> Point:
        return self.transform.to_viewport(point)

    def to_viewport_shape(self, shape: Shape) -> Shape:
        """Map an item-space shape back to viewport space for drawing."""
        if shape.type is ShapeType.RECT:
            g = shape.geometry
            tl = self.to_viewport_coordinates(Point(g.x, g.y))
            br = self.to_viewport_coordinates(Point(g.x + g.width, g.y + g.height))
            return Shape.rect(tl.x, tl.y, br.x - tl.x, br.y - tl.y)
        return Shape(shape.type, tuple(self.to_viewport_coordinates(p) for p in shape.points))

    # Events

    def fire_event(self, name: Union[EventType, str], payload: Optional[dict] = None):
        """
        Emit an event on the bus.

        Raises:
            ValueError: If ``name`` is not a known event name
        """
        event_type = name if isinstance(name, EventType) else EventType(name)
        self.events.emit(SelectionEvent(event_type, dict(payload or {})))

    # Selector registry

    def add_selector(self, selector: BaseSelector, name: Optional[str] = None):
        name = name or selector.get_name()
        self._selectors[name] = selector
        if self._current is None:
            self._current = name
        logger.debug("Registered selector '%s'", name)

    def set_current_selector(self, name: str):
        """
        Make ``name`` the active selector, stopping the previous one.

        Raises:
            KeyError: If no selector is registered under ``name``
        """
        if name not in self._selectors:
            raise KeyError(f"No selector registered as '{name}'")
        previous = self.get_current_selector()
        if previous is not None and self._current != name:
            previous.stop_selection()
        self._current = name

    def get_current_selector(self) -> Optional[BaseSelector]:
        if self._current is None:
            return None
        return self._selectors[self._current]

    @property
    def selector_names(self) -> List[str]:
        return list(self._selectors)

    # Gesture control

    def start_selection(self, x: float, y: float) -> bool:
        """
        Start a gesture with the current selector.

        A finished (completed or canceled) selector is reset first.

        Returns:
            False if there is no current selector or it is already armed
        """
        selector = self.get_current_selector()
        if selector is None:
            logger.warning("No current selector, ignoring selection start")
            return False
        if selector.state is GestureState.ARMED:
            logger.warning("Selector '%s' is already armed", self._current)
            return False
        if selector.state is not GestureState.IDLE:
            selector.stop_selection()
        return selector.start_selection(x, y)

    def stop_selection(self):
        selector = self.get_current_selector()
        if selector is not None:
            selector.stop_selection()

    def draw_shape(self, shape: Shape, highlight: bool = False, selector_name: Optional[str] = None):
        """Draw an item-space shape on the surface with a selector's style."""
        selector = (
            self._selectors[selector_name] if selector_name else self.get_current_selector()
        )
        if selector is None:
            return
        selector.draw_shape(self.surface, self.to_viewport_shape(shape), highlight)

    def _on_selection_canceled(self, event: SelectionEvent):
        self.stop_selection()


def install_selector(
    annotator: Annotator, name: str, activate: bool = False, config: Optional[edict] = None
) -> BaseSelector:
    """
    Create a registered selector, add it to the annotator and optionally
    make it current.
    """
    selector = create_selector(
        name, annotator, annotator.surface, config if config is not None else annotator.config
    )
    annotator.add_selector(selector, name)
    if activate:
        annotator.set_current_selector(name)
    return selector
