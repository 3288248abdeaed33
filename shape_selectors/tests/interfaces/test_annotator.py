"""
Tests for the Annotator host.
"""

import pytest

from shape_selectors.core.selection import EventType, GestureState, Point, Shape
from shape_selectors.interfaces import Annotator, ViewportTransform, install_selector


class TestViewportTransform:
    def test_round_trip(self):
        transform = ViewportTransform(offset_x=10, offset_y=20, zoom=2.0)
        item = transform.to_item(Point(30, 40))
        assert item == Point(10, 10)
        assert transform.to_viewport(item) == Point(30, 40)

    def test_invalid_zoom(self):
        with pytest.raises(ValueError):
            ViewportTransform(zoom=0)

    def test_from_dict(self):
        transform = ViewportTransform.from_dict({"offset": [5, 6], "zoom": 4})
        assert (transform.offset_x, transform.offset_y, transform.zoom) == (5, 6, 4)
        assert ViewportTransform.from_dict(None) == ViewportTransform()


class TestRegistry:
    def test_first_selector_becomes_current(self, annotator):
        selector = install_selector(annotator, "fancybox")
        install_selector(annotator, "freehand")

        assert annotator.get_current_selector() is selector
        assert annotator.selector_names == ["fancybox", "freehand"]

    def test_activate(self, annotator):
        install_selector(annotator, "fancybox")
        freehand = install_selector(annotator, "freehand", activate=True)
        assert annotator.get_current_selector() is freehand

    def test_unknown_selector(self, annotator):
        with pytest.raises(KeyError):
            annotator.set_current_selector("missing")

    def test_switch_stops_armed_selector(self, annotator, surface):
        fancybox = install_selector(annotator, "fancybox")
        install_selector(annotator, "freehand")

        annotator.start_selection(10, 10)
        assert fancybox.state is GestureState.ARMED

        annotator.set_current_selector("freehand")
        assert fancybox.state is GestureState.IDLE
        assert surface.listener_count() == 0

    def test_custom_name(self, annotator, surface):
        from shape_selectors.core.selectors import FreehandSelector

        annotator.add_selector(FreehandSelector(annotator, surface), "pen")
        annotator.set_current_selector("pen")
        assert annotator.get_current_selector().get_name() == "freehand"


class TestGestureControl:
    def test_no_selector(self, annotator):
        assert not annotator.start_selection(1, 1)
        annotator.stop_selection()

    def test_rejects_second_start_while_armed(self, annotator, event_log):
        install_selector(annotator, "directed_rect")

        assert annotator.start_selection(10, 10)
        assert not annotator.start_selection(20, 20)

        started = [e for e in event_log if e.event_type is EventType.SELECTION_STARTED]
        assert len(started) == 1

    def test_restart_after_completion(self, annotator, surface, event_log):
        selector = install_selector(annotator, "fancybox")

        annotator.start_selection(10, 10)
        surface.pointer_move(40, 40)
        surface.pointer_up(40, 40)
        assert selector.state is GestureState.COMPLETED

        assert annotator.start_selection(50, 50)
        assert selector.state is GestureState.ARMED
        assert surface.listener_count() == 2

    def test_canceled_selection_is_stopped(self, annotator, surface, event_log):
        selector = install_selector(annotator, "fancybox")

        annotator.start_selection(10, 10)
        surface.pointer_move(11, 11)
        surface.pointer_up(11, 11)

        assert event_log[-1].event_type is EventType.SELECTION_CANCELED
        assert event_log[-1].data == {}
        assert selector.state is GestureState.IDLE
        assert surface.is_blank()

    def test_item_space_shape(self, surface):
        annotator = Annotator(surface, ViewportTransform(offset_x=10, offset_y=20, zoom=2.0))
        install_selector(annotator, "fancybox")
        shapes = []
        annotator.events.on(
            EventType.SELECTION_COMPLETED, lambda e: shapes.append(e.data["shape"])
        )

        annotator.start_selection(10, 20)
        surface.pointer_move(30, 40)
        surface.pointer_up(30, 40)

        assert shapes == [Shape.rect(0, 0, 9.5, 9.5)]

    def test_fire_event_by_name(self, annotator, event_log):
        annotator.fire_event("onSelectionStarted", {"offsetX": 1, "offsetY": 2})
        assert event_log[0].event_type is EventType.SELECTION_STARTED
        assert event_log[0].to_dict() == {
            "event": "onSelectionStarted",
            "data": {"offsetX": 1, "offsetY": 2},
        }

        with pytest.raises(ValueError):
            annotator.fire_event("onSomethingElse")


class TestDrawing:
    def test_to_viewport_shape(self, surface):
        annotator = Annotator(surface, ViewportTransform(offset_x=10, offset_y=20, zoom=2.0))
        rect = annotator.to_viewport_shape(Shape.rect(0, 0, 10, 5))
        assert rect == Shape.rect(10, 20, 20, 10)

        poly = annotator.to_viewport_shape(Shape.polygon([Point(1, 1)]))
        assert poly.points == (Point(12, 22),)

    def test_draw_shape(self, annotator, surface):
        install_selector(annotator, "fancybox")
        annotator.draw_shape(Shape.rect(10, 10, 40, 40), highlight=True)
        assert not surface.is_blank()


class TestEventEmitter:
    def test_listener_error_does_not_stop_dispatch(self, annotator):
        received = []

        def broken(event):
            raise RuntimeError("boom")

        annotator.events.on(EventType.SELECTION_STARTED, broken)
        annotator.events.on(EventType.SELECTION_STARTED, received.append)
        annotator.fire_event(EventType.SELECTION_STARTED, {})

        assert len(received) == 1

    def test_unsubscribe(self, annotator):
        received = []
        annotator.events.on(EventType.SELECTION_STARTED, received.append)
        annotator.events.off(EventType.SELECTION_STARTED, received.append)
        annotator.fire_event(EventType.SELECTION_STARTED)
        assert received == []
