"""
Shared selector contract.
"""

from abc import ABC, abstractmethod
from typing import Optional, Type

from easydict import EasyDict as edict

from ...utils.config import default_config
from ..selection import (
    CapturePolicy,
    DrawingSurface,
    GestureState,
    SelectionGestureMachine,
    Shape,
    ShapeType,
    ViewportBounds,
)


class BaseSelector(ABC):
    """
    A selector the host can register and activate.

    Subclasses set ``name``, ``shape_type`` and ``policy_class`` and
    implement ``draw_shape``. Gesture handling is delegated to a
    ``SelectionGestureMachine`` driven by the variant's capture policy.
    """

    name: str = ""
    shape_type: ShapeType = ShapeType.POLYGON
    policy_class: Type[CapturePolicy] = None

    def __init__(self, annotator, surface: DrawingSurface, config: Optional[edict] = None):
        """
        Initialize selector.

        Args:
            annotator: Host providing fire_event and to_item_coordinates
            surface: Surface for previews and pointer listeners
            config: Selector configuration, defaults to ``default_config()``
        """
        self.annotator = annotator
        self.surface = surface
        self.config = config if config is not None else default_config()
        self.policy = self.policy_class(self.config)
        self.machine = SelectionGestureMachine(surface, annotator, self.policy)

    @property
    def state(self) -> GestureState:
        return self.machine.state

    def get_name(self) -> str:
        return self.name

    def get_supported_shape_type(self) -> ShapeType:
        return self.shape_type

    def start_selection(self, x: float, y: float) -> bool:
        return self.machine.start_selection(x, y)

    def stop_selection(self):
        self.machine.stop_selection()

    def get_shape(self) -> Optional[Shape]:
        """Item-space shape for the current capture, or None."""
        capture = self.machine.capture
        if capture.anchor is None:
            return None
        return self.policy.build_shape(capture, self.annotator)

    def get_viewport_bounds(self) -> Optional[ViewportBounds]:
        return self.machine.get_viewport_bounds()

    @abstractmethod
    def draw_shape(self, surface: DrawingSurface, shape: Shape, highlight: bool = False):
        """Render a committed shape given in viewport coordinates."""

    def _shape_color(self, highlight: bool) -> str:
        if highlight:
            return self.config.highlight.color
        return self.config.highlight.normal_color

    def __repr__(self):
        return f"<{type(self).__name__} name={self.name!r} state={self.state.value}>"
