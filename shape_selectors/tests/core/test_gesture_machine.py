"""
Tests for SelectionGestureMachine.

The machine is driven through an ImageSurface with a recording host so
that transitions, emitted events and listener bookkeeping can be checked
without any UI.
"""

import pytest

from shape_selectors.core.selection import (
    POINTER_MOVE,
    POINTER_UP,
    EventType,
    GestureState,
    Point,
)
from shape_selectors.core.selectors import (
    DirectedRectSelector,
    FancyBoxSelector,
    FreehandSelector,
)
from shape_selectors.tests.conftest import RecordingHost


class TestLifecycle:
    """State transitions shared by every variant."""

    def test_starts_idle(self, surface, host):
        selector = DirectedRectSelector(host, surface)
        assert selector.state is GestureState.IDLE
        assert surface.listener_count() == 0

    def test_start_arms_and_emits(self, surface, host):
        selector = DirectedRectSelector(host, surface)

        assert selector.start_selection(10, 20)

        assert selector.state is GestureState.ARMED
        assert surface.listener_count(POINTER_MOVE) == 1
        assert surface.listener_count(POINTER_UP) == 1
        assert host.fired == [
            (EventType.SELECTION_STARTED, {"offsetX": 10, "offsetY": 20})
        ]

    def test_start_rejected_while_armed(self, surface, host):
        selector = FancyBoxSelector(host, surface)
        selector.start_selection(10, 10)

        assert not selector.start_selection(50, 50)

        assert selector.machine.capture.anchor == Point(10, 10)
        assert surface.listener_count() == 2
        assert host.names().count(EventType.SELECTION_STARTED) == 1

    def test_stop_is_idempotent(self, surface, host):
        selector = DirectedRectSelector(host, surface)

        # Before any start
        selector.stop_selection()
        selector.stop_selection()
        assert surface.is_blank()

        selector.start_selection(50, 50)
        surface.pointer_move(60, 70)
        assert not surface.is_blank()

        selector.stop_selection()
        selector.stop_selection()

        assert selector.state is GestureState.IDLE
        assert surface.is_blank()
        assert surface.listener_count() == 0
        assert selector.machine.capture.anchor is None
        assert host.names() == [EventType.SELECTION_STARTED]

    def test_events_ignored_after_stop(self, surface, host):
        selector = FreehandSelector(host, surface)
        selector.start_selection(0, 0)
        selector.stop_selection()

        surface.pointer_move(5, 5)
        surface.pointer_up(5, 5)

        assert surface.is_blank()
        assert host.names() == [EventType.SELECTION_STARTED]

    def test_listeners_released_after_completion(self, surface, host):
        selector = FreehandSelector(host, surface)
        for _ in range(3):
            selector.start_selection(0, 0)
            surface.pointer_move(1, 1)
            surface.pointer_up(1, 1)
            assert selector.state is GestureState.COMPLETED
            assert surface.listener_count() == 0
            selector.stop_selection()

        assert host.names().count(EventType.SELECTION_COMPLETED) == 3

    def test_restart_requires_stop(self, surface, host):
        selector = FreehandSelector(host, surface)
        selector.start_selection(0, 0)
        surface.pointer_up(0, 0)

        assert selector.state is GestureState.COMPLETED
        assert not selector.start_selection(5, 5)

        selector.stop_selection()
        assert selector.start_selection(5, 5)


class TestDirectedRectGesture:
    """Two pointer-ups are needed to finish a directed rectangle."""

    def test_single_finalize_event(self, surface, host):
        selector = DirectedRectSelector(host, surface)
        selector.start_selection(100, 100)

        for x, y in [(105, 102), (108, 104), (110, 105)]:
            surface.pointer_move(x, y)
        surface.pointer_up(110, 105)

        assert selector.state is GestureState.ARMED
        assert EventType.SELECTION_COMPLETED not in host.names()

        for x, y in [(106, 104), (107, 105), (108, 106)]:
            surface.pointer_move(x, y)
        surface.pointer_up(108, 106)

        names = host.names()
        assert names.count(EventType.SELECTION_COMPLETED) == 1
        assert names.count(EventType.SELECTION_CANCELED) == 0
        assert selector.state is GestureState.COMPLETED

        # Further events are ignored
        surface.pointer_up(120, 120)
        assert host.names().count(EventType.SELECTION_COMPLETED) == 1

    def test_completed_payload(self, surface, host):
        selector = DirectedRectSelector(host, surface)
        selector.start_selection(100, 100)
        surface.pointer_move(110, 105)
        surface.pointer_up(110, 105)
        surface.pointer_move(108, 106)
        surface.pointer_up(108, 106)

        _, payload = host.fired[-1]
        shape = payload["shape"]
        bounds = payload["viewportBounds"]

        assert shape.type.value == "polygon"
        assert len(shape.points) == 4
        assert (bounds.left, bounds.top, bounds.right, bounds.bottom) == (100, 100, 110, 106)
        assert selector.machine.result is shape

    def test_preview_cleared_on_finalize(self, surface, host):
        selector = DirectedRectSelector(host, surface)
        selector.start_selection(100, 100)
        surface.pointer_move(110, 105)
        surface.pointer_up(110, 105)
        surface.pointer_move(108, 106)
        assert not surface.is_blank()

        surface.pointer_up(108, 106)
        assert surface.is_blank()

    def test_marker_after_first_release(self, surface, host):
        selector = DirectedRectSelector(host, surface)
        selector.start_selection(100, 100)
        surface.pointer_move(130, 120)
        surface.pointer_up(130, 120)
        surface.pointer_move(150, 150)
        # White marker fill at the tracking point
        assert tuple(surface.overlay[150, 150]) == (255, 255, 255, 255)


class TestFancyBoxGesture:
    def test_small_box_cancels(self, surface, host):
        selector = FancyBoxSelector(host, surface)
        selector.start_selection(10, 10)
        surface.pointer_move(12, 12)
        surface.pointer_up(12, 12)

        assert selector.state is GestureState.CANCELED
        assert host.fired[-1] == (EventType.SELECTION_CANCELED, {})
        assert EventType.SELECTION_COMPLETED not in host.names()
        assert surface.listener_count() == 0

    def test_click_without_move_cancels(self, surface, host):
        selector = FancyBoxSelector(host, surface)
        selector.start_selection(10, 10)
        surface.pointer_up(10, 10)
        assert selector.state is GestureState.CANCELED

    def test_large_box_completes(self, surface, host):
        selector = FancyBoxSelector(host, surface)
        selector.start_selection(10, 10)
        surface.pointer_move(20, 25)
        surface.pointer_up(20, 25)

        assert selector.state is GestureState.COMPLETED
        event_type, payload = host.fired[-1]
        assert event_type is EventType.SELECTION_COMPLETED
        assert payload["shape"].to_dict() == {
            "type": "rect",
            "geometry": {"x": 10, "y": 10, "width": 9, "height": 14},
        }

    def test_preview_masks_outside(self, surface, host):
        selector = FancyBoxSelector(host, surface)
        selector.start_selection(50, 50)
        surface.pointer_move(100, 120)

        # Outside the box is dimmed, inside is left clear
        assert surface.overlay[10, 10, 3] > 0
        assert surface.overlay[80, 75, 3] == 0


class TestFreehandGesture:
    def test_trace_accumulates(self, surface, host):
        selector = FreehandSelector(host, surface)
        selector.start_selection(0, 0)
        for i in range(1, 6):
            surface.pointer_move(i * 10, i * 5)

        assert len(selector.machine.capture.control_points) == 5
        assert not surface.is_blank()

        surface.pointer_up(50, 25)
        assert selector.state is GestureState.COMPLETED
        _, payload = host.fired[-1]
        assert len(payload["shape"].points) == 5
        assert payload["viewportBounds"].right == 50


class FailingHost(RecordingHost):
    """Host whose coordinate conversion raises."""

    def to_item_coordinates(self, point):
        raise RuntimeError("viewport detached")


class TestBuildFailure:
    def test_failure_cancels_and_propagates(self, surface):
        host = FailingHost()
        selector = FancyBoxSelector(host, surface)
        selector.start_selection(10, 10)
        surface.pointer_move(40, 40)

        with pytest.raises(RuntimeError):
            surface.pointer_up(40, 40)

        assert selector.state is GestureState.CANCELED
        assert surface.listener_count() == 0
        assert surface.is_blank()
        assert host.names() == [EventType.SELECTION_STARTED]

    def test_restart_after_failure(self, surface):
        host = FailingHost()
        selector = DirectedRectSelector(host, surface)
        selector.start_selection(100, 100)
        surface.pointer_up(110, 105)
        with pytest.raises(RuntimeError):
            surface.pointer_up(108, 106)

        assert not selector.start_selection(50, 50)
        selector.stop_selection()
        assert selector.start_selection(50, 50)
        assert selector.state is GestureState.ARMED
