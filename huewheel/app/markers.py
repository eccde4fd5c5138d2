"""Operations on a single marker entity.

Every function takes the picker context explicitly; markers never hold a
reference to their picker. Fan-out across merged markers lives in the registry.
"""

from __future__ import annotations

import dataclasses
import math
from typing import Optional

from huewheel import defaults
from huewheel.app.core import Marker, MarkerView, PositionUpdate
from huewheel.app.events import EventType, PickerEvent
from huewheel.colorspace import Color, hue_temp_to_rgb
from huewheel.types import HsvResult, PickerContext, Point, WheelMode
from huewheel.wheel import color_to_coordinate, coordinate_to_value, temp_to_coordinate


def limit_coordinates(point: Point, radius: float) -> Point:
    """Project a top-left based point onto the wheel if it lies outside.

    The center-relative vector is scaled by ``radius / |v|``. With a
    non-positive radius the point is returned unchanged.
    """
    if radius <= 0:
        return point

    x1 = point.x - radius
    y1 = point.y - radius
    length = math.hypot(x1, y1)
    if length > radius:
        coef = radius / length
        return Point(x1 * coef + radius, y1 * coef + radius)
    return point


def center_offset(marker: Marker, radius: float) -> Point:
    """Marker position relative to the wheel center."""
    return marker.position.offset(-radius, -radius)


def _set_center_offset(marker: Marker, offset: Point, radius: float) -> None:
    marker.position = limit_coordinates(offset.offset(radius, radius), radius)


def effective_context(marker: Marker, ctx: PickerContext) -> tuple[PickerContext, Optional[WheelMode]]:
    """Context a marker is evaluated in, and the mode it forces (if any)."""
    if marker.fixed_mode is not None and marker.fixed_mode is not ctx.mode:
        return dataclasses.replace(ctx, mode=marker.fixed_mode), marker.fixed_mode
    return ctx, None


def apply_position(marker: Marker, ctx: PickerContext, pos: Point) -> PositionUpdate:
    """Move a marker and re-derive its color/temp from the new position.

    The caller turns a changed update into an immediate-value-change event.
    """
    if marker.is_drag:
        marker.is_off = False

    ctx, forced = effective_context(marker, ctx)
    marker.position = limit_coordinates(pos, ctx.radius)

    offset = center_offset(marker, ctx.radius)
    result = coordinate_to_value(offset.x, offset.y, ctx)
    if result is None:
        return PositionUpdate(marker.name, changed=False, forced_mode=forced)

    if isinstance(result, HsvResult):
        marker.color = result.color
        marker.mode = WheelMode.COLOR
    else:
        marker.color = result.rgb
        marker.temp = result.kelvin
        marker.mode = WheelMode.TEMP
    marker.is_off_mode = marker.mode is not ctx.mode

    return PositionUpdate(marker.name, changed=True, forced_mode=forced)


def apply_color(marker: Marker, ctx: PickerContext, color: Color) -> bool:
    """Set color explicitly and place the marker on the color wheel.

    The color is kept as given (not re-derived from the new position).

    Returns:
        False if the marker is fixed to the temp wheel.
    """
    if marker.fixed_mode is not None and marker.fixed_mode is not WheelMode.COLOR:
        return False

    marker.color = color
    marker.mode = WheelMode.COLOR
    marker.is_off_mode = marker.mode is not ctx.mode

    hue, saturation, _ = color.to_hsv()
    _set_center_offset(marker, color_to_coordinate(hue, saturation, ctx), ctx.radius)
    return True


def apply_temp(marker: Marker, ctx: PickerContext, kelvin: float) -> bool:
    """Set temperature explicitly and place the marker on the temp wheel.

    A marker that was already in temp mode keeps its horizontal offset.

    Returns:
        False if the marker is fixed to the color wheel.
    """
    if marker.fixed_mode is not None and marker.fixed_mode is not WheelMode.TEMP:
        return False

    was_color_mode = marker.mode is WheelMode.COLOR
    marker.temp = int(math.floor(kelvin + 0.5))
    marker.mode = WheelMode.TEMP
    marker.is_off_mode = marker.mode is not ctx.mode

    current = None if was_color_mode else center_offset(marker, ctx.radius)
    _set_center_offset(marker, temp_to_coordinate(kelvin, ctx, current), ctx.radius)

    clamped = min(max(kelvin, ctx.temp_min), ctx.temp_max)
    r, g, b = hue_temp_to_rgb(clamped)
    marker.color = Color(int(r), int(g), int(b))
    return True


def apply_mode(marker: Marker, ctx: PickerContext, mode: WheelMode) -> bool:
    """Switch the marker's wheel. Ignored against a different fixed mode."""
    if marker.fixed_mode is not None and marker.fixed_mode is not mode:
        return False
    marker.mode = mode
    marker.is_off_mode = mode is not ctx.mode
    return True


def refresh(marker: Marker, ctx: PickerContext) -> None:
    """Re-place the marker from its authoritative value (after a resize)."""
    if marker.mode is WheelMode.TEMP:
        apply_temp(marker, ctx, marker.temp)
    else:
        apply_color(marker, ctx, marker.color)


# === Events ===

def change_event(marker: Marker, immediate: bool) -> PickerEvent:
    return PickerEvent(
        type=EventType.IMMEDIATE_VALUE_CHANGE if immediate else EventType.CHANGE,
        marker=marker.name,
        mode=marker.mode,
        new_color=marker.color,
        new_temp=marker.temp if marker.mode is WheelMode.TEMP else None,
    )


def pulse_event(marker: Marker) -> PickerEvent:
    """Short scale pulse; bigger while dragged or previewed."""
    big = marker.is_drag or marker.is_preview
    return PickerEvent(
        type=EventType.PULSE,
        marker=marker.name,
        scale=defaults.BIG_PULSE_SCALE if big else defaults.PULSE_SCALE,
        duration_ms=defaults.PULSE_DURATION_MS,
    )


def haptic_event(marker: Marker) -> PickerEvent:
    return PickerEvent(type=EventType.HAPTIC, marker=marker.name, duration_ms=defaults.HAPTIC_DURATION_MS)


# === Rendering ===

def icon_foreground(marker: Marker) -> str:
    """Icon fill that stays readable on the marker's color."""
    if marker.is_off:
        return defaults.LIGHT_FOREGROUND
    # On the temp wheel the switch should happen once, near the middle
    offset = defaults.TEMP_LUMINANCE_OFFSET if marker.mode is WheelMode.TEMP else 0.0
    return marker.color.foreground(defaults.LIGHT_FOREGROUND, defaults.DARK_FOREGROUND, offset)


def marker_view(marker: Marker, is_active: bool) -> MarkerView:
    """Build the render snapshot, anchoring active pins at their tip."""
    if is_active or marker.is_preview:
        width, height = defaults.ACTIVE_MARKER_SIZE
        anchor = Point(width / 2, height)
    else:
        width, height = defaults.INACTIVE_MARKER_SIZE
        anchor = Point(width / 2, height / 2)

    return MarkerView(
        name=marker.name,
        position=marker.position,
        x=marker.position.x - anchor.x,
        y=marker.position.y - anchor.y,
        width=width,
        height=height,
        color=marker.render_color,
        icon=marker.display_icon,
        icon_path=None if marker.is_multi else marker.icon_path,
        icon_is_text=marker.is_multi,
        icon_foreground=icon_foreground(marker),
        is_active=is_active,
        is_preview=marker.is_preview,
        is_drag=marker.is_drag,
        is_off=marker.is_off,
        is_off_mode=marker.is_off_mode,
    )
