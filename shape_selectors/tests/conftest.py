"""
Test fixtures for shape_selectors tests.

Provides surfaces, hosts and event recorders shared by the test modules.
"""

import pytest

from shape_selectors.core.selection import EventType, Point
from shape_selectors.interfaces import Annotator, ImageSurface, ViewportTransform


class RecordingHost:
    """Minimal host: identity transform, records fired events."""

    def __init__(self, transform=None):
        self.transform = transform
        self.fired = []

    def to_item_coordinates(self, point):
        if self.transform is None:
            return point
        return self.transform.to_item(point)

    def fire_event(self, name, payload=None):
        event_type = name if isinstance(name, EventType) else EventType(name)
        self.fired.append((event_type, payload or {}))

    def names(self):
        return [event_type for event_type, _ in self.fired]


@pytest.fixture
def surface():
    """A 200x200 drawing surface."""
    return ImageSurface(200, 200)


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def zoomed_host():
    """Host whose viewport shows the item at 2x zoom, panned by (10, 20)."""
    return RecordingHost(ViewportTransform(offset_x=10, offset_y=20, zoom=2.0))


@pytest.fixture
def annotator(surface):
    return Annotator(surface)


@pytest.fixture
def event_log(annotator):
    """List collecting every event the annotator emits."""
    received = []
    for event_type in EventType:
        annotator.events.on(event_type, received.append)
    return received


def assert_point_close(actual: Point, expected, tol=1e-9):
    ex, ey = expected
    assert abs(actual.x - ex) < tol and abs(actual.y - ey) < tol, (
        f"Point ({actual.x}, {actual.y}) != ({ex}, {ey})"
    )
