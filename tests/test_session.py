"""Tests for ColorMapEditorSession."""

import logging

import pytest

from color_mapping_editor.core.colormap import ColorMap, InterpolationMethod
from color_mapping_editor.core.color_scale import ColorScale
from color_mapping_editor.editor.session import ColorMapEditorSession


@pytest.fixture
def session(four_stop_map):
    return ColorMapEditorSession(four_stop_map)


@pytest.fixture
def events(session):
    seen = []
    session.subscribe(seen.append)
    return seen


class TestSessionInit:
    def test_default_map(self):
        s = ColorMapEditorSession()
        assert [cp.color.hex for cp in s.color_map.control_points] == [
            "#008000", "#ffff00", "#ff0000",
        ]
        assert s.color_map.interpolation_method is InterpolationMethod.LAB

    def test_from_dict(self):
        s = ColorMapEditorSession({
            "controlPoints": [
                {"position": 0, "color": "#000"},
                {"position": 1, "color": "#fff"},
            ],
            "interpolationMethod": "RGB",
        })
        assert s.color_map.positions == [0.0, 1.0]

    def test_rejects_other_types(self):
        with pytest.raises(TypeError, match="ColorMap"):
            ColorMapEditorSession([1, 2, 3])

    def test_defaults(self, session):
        assert session.discrete is False
        assert session.bins == 7
        assert not session.is_dragging

    def test_bins_coerced(self, four_stop_map):
        assert ColorMapEditorSession(four_stop_map, bins=-3).bins == 0


class TestSessionEdits:
    def test_insert_notifies(self, session, events):
        session.insert(0.5)
        assert len(events) == 1
        assert events[0].positions == [0.0, 0.3, 0.5, 0.6, 1.0]

    def test_callback_receives_color_map(self, session, events):
        session.insert(0.25)
        session.set_discrete(True)
        assert all(isinstance(cm, ColorMap) for cm in events)
        assert events[-1] is session.color_map

    def test_rejected_edit_is_silent(self, session, events):
        before = session.color_map
        session.insert(float("nan"))
        session.remove(42)
        session.set_color(0, "not a color")
        assert events == []
        assert session.color_map is before

    def test_remove(self, session):
        session.remove(1)
        assert session.color_map.positions == [0.0, 0.6, 1.0]

    def test_set_color(self, session):
        session.set_color(0, "#123456")
        assert session.color_map.control_points[0].color.hex == "#123456"

    def test_set_interpolation_method(self, session, events):
        session.set_interpolation_method("HSV")
        assert session.color_map.interpolation_method is InterpolationMethod.HSV
        assert len(events) == 1

    def test_load(self, session, blue_red_map):
        session.load(blue_red_map)
        assert session.color_map is blue_red_map

    def test_unsubscribe(self, session):
        seen = []
        handle = session.subscribe(lambda s: seen.append(1))
        session.insert(0.5)
        session.unsubscribe(handle)
        session.insert(0.8)
        assert seen == [1]

    def test_serializable(self, session):
        data = session.to_serializable()
        assert [p["position"] for p in data["controlPoints"]] == [0.0, 0.3, 0.6, 1.0]


class TestSessionDrag:
    def test_drag_gesture(self, session):
        assert session.begin_drag(1)
        assert session.is_dragging
        assert session.drag_to(0.45, timestamp=0.0)
        session.end_drag()
        assert not session.is_dragging
        assert session.color_map.positions == [0.0, 0.45, 0.6, 1.0]

    def test_begin_drag_bad_index(self, session):
        assert not session.begin_drag(17)
        assert not session.is_dragging

    def test_drag_without_gesture(self, session, caplog):
        with caplog.at_level(logging.WARNING, logger="color_mapping_editor"):
            assert not session.drag_to(0.5)
        assert "without an active drag" in caplog.text

    def test_throttle(self, session):
        session.begin_drag(1)
        assert session.drag_to(0.35, timestamp=1.000)
        assert not session.drag_to(0.40, timestamp=1.005)
        assert session.color_map.positions[1] == 0.35
        assert session.drag_to(0.40, timestamp=1.020)
        assert session.color_map.positions[1] == 0.40

    def test_zero_throttle(self, four_stop_map):
        s = ColorMapEditorSession(four_stop_map, throttle_interval=0)
        s.begin_drag(1)
        assert s.drag_to(0.35, timestamp=1.0)
        assert s.drag_to(0.40, timestamp=1.0)

    def test_drag_onto_neighbor_keeps_step(self, session):
        session.begin_drag(1)
        session.drag_to(0.9, timestamp=0.0)
        session.end_drag()
        assert session.color_map.positions == [0.0, 0.6, 0.6, 1.0]
        assert [cp.color.hex for cp in session.color_map.control_points[1:3]] == [
            "#ff0000", "#00ff00",
        ]

    def test_drag_onto_start_consolidates(self, session):
        session.begin_drag(1)
        session.drag_to(-1.0, timestamp=0.0)
        assert session.color_map.positions == [0.0, 0.0, 0.6, 1.0]
        session.end_drag()
        assert session.color_map.positions == [0.0, 0.6, 1.0]
        # the dragged red point survives at the start
        assert session.color_map.control_points[0].color.hex == "#ff0000"

    def test_cancel_consolidates(self, session):
        session.begin_drag(2)
        session.drag_to(2.0, timestamp=0.0)
        session.cancel_drag()
        assert session.color_map.positions == [0.0, 0.3, 1.0]
        assert session.color_map.control_points[2].color.hex == "#00ff00"
        assert not session.is_dragging

    def test_split_tie_then_release(self, tied_map):
        s = ColorMapEditorSession(tied_map)
        s.begin_drag(1)
        s.drag_to(0.8, timestamp=0.0)
        s.end_drag()
        assert s.color_map.positions == [0.0, 0.5, 0.8, 1.0]

    def test_release_on_tie_keeps_pair(self, tied_map):
        s = ColorMapEditorSession(tied_map)
        s.begin_drag(2)
        s.end_drag()
        assert s.color_map is tied_map

    def test_new_gesture_ends_previous(self, session):
        session.begin_drag(1)
        session.drag_to(-1.0, timestamp=0.0)
        session.begin_drag(1)
        assert session.color_map.positions == [0.0, 0.6, 1.0]
        assert session.drag_state.index == 1
        assert session.drag_state.anchor_position == 0.6

    def test_end_without_gesture(self, session):
        before = session.color_map
        assert session.end_drag() is before

    def test_remove_mid_gesture_ends_it(self, make_map):
        s = ColorMapEditorSession(make_map([
            (0.0, "#000000"), (0.5, "#ff0000"), (0.5, "#0000ff"),
            (0.9, "#00ff00"), (1.0, "#ffffff"),
        ]))
        s.begin_drag(1)
        s.remove(1)
        assert not s.is_dragging
        assert not s.drag_to(0.2, timestamp=0.0)
        assert s.color_map.positions == [0.0, 0.5, 0.9, 1.0]
        assert s.color_map.control_points[2].color.hex == "#00ff00"

    def test_insert_mid_gesture_ends_it(self, session):
        session.begin_drag(2)
        session.insert(0.1)
        assert not session.is_dragging
        assert session.color_map.positions == [0.0, 0.1, 0.3, 0.6, 1.0]

    def test_recolor_mid_gesture_keeps_it(self, session):
        session.begin_drag(1)
        session.set_color(3, "#123456")
        assert session.is_dragging
        assert session.drag_to(0.5, timestamp=0.0)
        assert session.color_map.positions == [0.0, 0.5, 0.6, 1.0]

    def test_replaced_map_ends_gesture(self, session, caplog):
        session.begin_drag(1)
        session.color_map = session.color_map.with_points(
            session.color_map.control_points[:3]
        )
        with caplog.at_level(logging.WARNING, logger="color_mapping_editor"):
            assert not session.drag_to(0.5, timestamp=0.0)
        assert "changed under the drag gesture" in caplog.text
        assert not session.is_dragging
        assert session.color_map.positions == [0.0, 0.3, 0.6]


class TestSessionDiscrete:
    def test_lookup_table_empty_when_continuous(self, session):
        assert session.lookup_table().entry_count == 0

    def test_lookup_table_when_discrete(self, session):
        session.set_discrete(True)
        session.set_bins(4)
        assert session.lookup_table().entry_count == 4

    def test_set_bins_coerces(self, session, caplog):
        with caplog.at_level(logging.WARNING, logger="color_mapping_editor"):
            assert session.set_bins(-2) == 0
        assert session.bins == 0
        assert "Negative bin count" in caplog.text

    def test_discrete_change_notifies(self, session):
        seen = []
        session.subscribe(lambda cm: seen.append((session.discrete, session.bins)))
        session.set_discrete(True)
        session.set_bins(3)
        assert seen == [(True, 7), (True, 3)]

    def test_color_scale(self, session):
        assert isinstance(session.color_scale(), ColorScale)
        assert session.color_scale().bins is None
        session.set_discrete(True)
        assert session.color_scale().bins == 7

    def test_color_at(self, session):
        assert session.color_at(0.3).hex == "#ff0000"

    def test_repr(self, session):
        assert "points=4" in repr(session)
        assert isinstance(session.color_map, ColorMap)
