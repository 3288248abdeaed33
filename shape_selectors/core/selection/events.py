"""
Event system for selection gestures.

Provides a decoupled way for selectors to notify the host about gesture
progress without depending on a specific UI framework.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Events emitted to the host event bus. Values are the wire names."""

    SELECTION_STARTED = "onSelectionStarted"
    SELECTION_COMPLETED = "onSelectionCompleted"
    SELECTION_CANCELED = "onSelectionCanceled"


@dataclass
class SelectionEvent:
    """Event that occurs during a selection gesture."""

    event_type: EventType
    data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if self.data is None:
            self.data = {}

    def to_dict(self):
        """Convert to dictionary, serializing shapes and bounds."""
        data = {}
        for key, value in self.data.items():
            data[key] = value.to_dict() if hasattr(value, "to_dict") else value
        return {"event": self.event_type.value, "data": data}


class EventEmitter:
    """
    Simple event emitter for pub/sub pattern.

    Allows components to subscribe to events without tight coupling.
    """

    def __init__(self):
        self._listeners: Dict[EventType, List[Callable]] = {}

    def on(self, event_type: EventType, callback: Callable[[SelectionEvent], None]):
        """Subscribe to an event type."""
        if event_type not in self._listeners:
            self._listeners[event_type] = []
        self._listeners[event_type].append(callback)

    def off(self, event_type: EventType, callback: Callable[[SelectionEvent], None]):
        """Unsubscribe from an event type."""
        if event_type in self._listeners:
            self._listeners[event_type].remove(callback)

    def emit(self, event: SelectionEvent):
        """Emit an event to all subscribers."""
        for callback in list(self._listeners.get(event.event_type, [])):
            try:
                callback(event)
            except Exception:
                # Log but don't crash on listener errors
                logger.exception("Error in event listener for %s", event.event_type.value)

    def clear(self):
        """Clear all event listeners."""
        self._listeners.clear()
