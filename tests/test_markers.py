"""Tests for single-marker operations in huewheel.app.markers."""

import numpy as np
import pytest

from huewheel import defaults
from huewheel.app import markers as ops
from huewheel.app.core import Marker, MarkerKind
from huewheel.app.events import EventType
from huewheel.colorspace import Color, hue_temp_to_rgb
from huewheel.types import PickerContext, Point, WheelMode
from huewheel.wheel import coordinate_to_value

CENTER = Point(200, 200)


@pytest.fixture
def marker():
    return Marker(name="m1", position=CENTER)


# ---------------------------------------------------------------------------
# Clamping
# ---------------------------------------------------------------------------

class TestLimitCoordinates:

    def test_inside_unchanged(self):
        assert ops.limit_coordinates(Point(250, 150), 200) == Point(250, 150)

    def test_projects_onto_rim(self):
        assert ops.limit_coordinates(Point(500, 200), 200) == Point(400, 200)

    def test_center_offset(self, marker):
        marker.position = Point(250, 150)
        assert ops.center_offset(marker, 200) == Point(50, -50)
        assert Point(50, -50).offset(200, 200) == Point(250, 150)

    def test_non_positive_radius_passthrough(self):
        assert ops.limit_coordinates(Point(500, 500), 0) == Point(500, 500)

    def test_far_points_land_on_wheel(self, marker, ctx):
        rng = np.random.default_rng(3)
        angles = rng.uniform(-np.pi, np.pi, 200)
        distances = rng.uniform(201, 2000, 200)
        for angle, dist in zip(angles, distances):
            pos = Point(200 + dist * np.cos(angle), 200 + dist * np.sin(angle))
            ops.apply_position(marker, ctx, pos)
            assert marker.position.distance(CENTER) <= ctx.radius + 1e-9


# ---------------------------------------------------------------------------
# Position -> value
# ---------------------------------------------------------------------------

class TestApplyPosition:

    def test_color_mode(self, marker, ctx):
        update = ops.apply_position(marker, ctx, Point(300, 200))
        assert update.changed
        assert update.forced_mode is None
        assert marker.mode is WheelMode.COLOR
        expected = coordinate_to_value(100, 0, ctx).color
        assert marker.color == expected

    def test_temp_mode(self, marker, temp_ctx):
        ops.apply_position(marker, temp_ctx, Point(200, 0))
        assert marker.mode is WheelMode.TEMP
        assert marker.temp == 2000
        assert marker.color == Color(255, 180, 55)
        assert not marker.is_off_mode

    def test_fixed_mode_evaluates_under_fixed_wheel(self, marker, ctx):
        marker.fixed_mode = WheelMode.TEMP
        update = ops.apply_position(marker, ctx, Point(200, 400))
        assert update.forced_mode is WheelMode.TEMP
        assert marker.mode is WheelMode.TEMP
        assert marker.temp == 6535

    def test_drag_turns_light_on(self, marker, ctx):
        marker.is_off = True
        marker.is_drag = True
        ops.apply_position(marker, ctx, Point(250, 200))
        assert marker.is_off is False

    def test_not_dragging_keeps_off(self, marker, ctx):
        marker.is_off = True
        ops.apply_position(marker, ctx, Point(250, 200))
        assert marker.is_off is True

    def test_zero_radius_not_changed(self, marker):
        update = ops.apply_position(marker, PickerContext(radius=0), Point(10, 10))
        assert not update.changed
        assert marker.position == Point(10, 10)


# ---------------------------------------------------------------------------
# Explicit values
# ---------------------------------------------------------------------------

class TestApplyColor:

    def test_keeps_given_color(self, marker, ctx):
        color = Color(10, 20, 30)
        assert ops.apply_color(marker, ctx, color)
        assert marker.color == color
        assert marker.mode is WheelMode.COLOR

    def test_places_by_saturation(self, marker, ctx):
        ops.apply_color(marker, ctx, Color(255, 0, 0))
        assert marker.position.distance(CENTER) == pytest.approx(200)
        offset = ops.center_offset(marker, 200)
        hue = coordinate_to_value(offset.x, offset.y, ctx).hue
        # Red sits on the 0/360 seam
        assert min(hue, 360 - hue) == pytest.approx(0.0, abs=1e-6)

    def test_rejected_when_fixed_to_temp(self, marker, ctx):
        marker.fixed_mode = WheelMode.TEMP
        before = (marker.mode, marker.color, marker.position)
        assert not ops.apply_color(marker, ctx, Color(255, 0, 0))
        assert (marker.mode, marker.color, marker.position) == before

    def test_off_mode_flag(self, marker, temp_ctx):
        ops.apply_color(marker, temp_ctx, Color(0, 255, 0))
        assert marker.is_off_mode


class TestApplyTemp:

    def test_rounds_and_places(self, marker, temp_ctx):
        assert ops.apply_temp(marker, temp_ctx, 1999.6)
        assert marker.temp == 2000
        assert marker.mode is WheelMode.TEMP
        assert marker.position == Point(200, 0)

    def test_out_of_range_kept_but_clamped_for_placement(self, marker, temp_ctx):
        ops.apply_temp(marker, temp_ctx, 9000)
        assert marker.temp == 9000
        assert marker.position == Point(200, 400)
        assert marker.color == Color(*(int(c) for c in hue_temp_to_rgb(6535)))

    def test_keeps_x_when_already_in_temp_mode(self, marker, temp_ctx):
        ops.apply_position(marker, temp_ctx, Point(250, 200))
        ops.apply_temp(marker, temp_ctx, 4000)
        assert marker.position.x == pytest.approx(250)

    def test_centers_x_when_coming_from_color(self, marker, temp_ctx):
        marker.position = Point(250, 200)
        ops.apply_temp(marker, temp_ctx, 4000)
        assert marker.position.x == pytest.approx(200)

    def test_rejected_when_fixed_to_color(self, marker, ctx):
        marker.fixed_mode = WheelMode.COLOR
        ops.apply_position(marker, ctx, Point(260, 170))
        before = (marker.mode, marker.color, marker.position, marker.temp)
        assert not ops.apply_temp(marker, ctx, 3000)
        assert (marker.mode, marker.color, marker.position, marker.temp) == before


class TestApplyMode:

    def test_switch(self, marker, temp_ctx):
        assert ops.apply_mode(marker, temp_ctx, WheelMode.TEMP)
        assert marker.mode is WheelMode.TEMP
        assert not marker.is_off_mode

    def test_rejected_against_fixed_mode(self, marker, ctx):
        marker.fixed_mode = WheelMode.COLOR
        assert not ops.apply_mode(marker, ctx, WheelMode.TEMP)
        assert marker.mode is WheelMode.COLOR

    def test_same_as_fixed_mode_allowed(self, marker, ctx):
        marker.fixed_mode = WheelMode.COLOR
        assert ops.apply_mode(marker, ctx, WheelMode.COLOR)


class TestRefresh:

    def test_replaces_from_temp_after_resize(self, marker, temp_ctx):
        ops.apply_temp(marker, temp_ctx, 2000)
        ops.refresh(marker, PickerContext(radius=100, mode=WheelMode.TEMP))
        assert marker.position == Point(100, 0)
        assert marker.temp == 2000


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class TestEvents:

    def test_change_event_payload(self, marker, temp_ctx):
        ops.apply_temp(marker, temp_ctx, 3000)
        event = ops.change_event(marker, immediate=False)
        assert event.type is EventType.CHANGE
        assert event.marker == "m1"
        assert event.mode is WheelMode.TEMP
        assert event.new_temp == 3000
        assert event.new_color == marker.color

    def test_color_mode_has_no_temp(self, marker, ctx):
        marker.temp = 3000
        event = ops.change_event(marker, immediate=True)
        assert event.type is EventType.IMMEDIATE_VALUE_CHANGE
        assert event.new_temp is None

    def test_pulse_scale(self, marker):
        assert ops.pulse_event(marker).scale == defaults.PULSE_SCALE
        marker.is_drag = True
        assert ops.pulse_event(marker).scale == defaults.BIG_PULSE_SCALE

    def test_haptic(self, marker):
        event = ops.haptic_event(marker)
        assert event.type is EventType.HAPTIC
        assert event.duration_ms == defaults.HAPTIC_DURATION_MS


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------

class TestMarkerView:

    def test_active_anchor_at_tip(self, marker):
        view = ops.marker_view(marker, is_active=True)
        assert (view.x, view.y, view.width, view.height) == (176, 140, 48, 60)

    def test_inactive_anchor_at_center(self, marker):
        view = ops.marker_view(marker, is_active=False)
        assert (view.x, view.y, view.width, view.height) == (194, 194, 12, 12)

    def test_preview_uses_active_glyph(self, marker):
        marker.is_preview = True
        assert ops.marker_view(marker, is_active=False).height == 60

    def test_off_marker(self, marker):
        marker.color = Color(255, 255, 255)
        marker.off_color = Color(40, 40, 40)
        marker.is_off = True
        view = ops.marker_view(marker, is_active=False)
        assert view.color == Color(40, 40, 40)
        assert view.icon_foreground == defaults.LIGHT_FOREGROUND

    def test_multi_shows_child_count(self):
        multi = Marker(name="mm1", kind=MarkerKind.MULTI, children=["a", "b", "c"])
        view = ops.marker_view(multi, is_active=True)
        assert view.icon == "3"
        assert view.icon_is_text
        assert view.icon_path is None

    def test_foreground_offset_in_temp_mode(self, marker):
        marker.color = Color(200, 200, 200)
        assert ops.icon_foreground(marker) == defaults.DARK_FOREGROUND
        marker.mode = WheelMode.TEMP
        assert ops.icon_foreground(marker) == defaults.LIGHT_FOREGROUND
