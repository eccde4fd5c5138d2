"""Color/temperature picker: the surface collaborators talk to.

The ``Picker`` owns the wheel settings, the marker registry, drag sessions and
the background cache. Collaborators get ``MarkerHandle`` objects, which expose
marker state as properties and route every change back through the picker so
events are delivered.

Example:
    picker = Picker(width=400, height=400, mode=WheelMode.TEMP)
    picker.subscribe(EventType.CHANGE, lambda ev: print(ev.marker, ev.new_temp))

    lamp = picker.add_marker("living_room")
    lamp.temp = 2700

    picker.on_drag_start("living_room", Point(200, 250))
    picker.on_drag_move("living_room", Point(200, 120))
    picker.on_drag_end("living_room")
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from huewheel import defaults
from huewheel.app.core import Marker, MarkerView, PickerSettings
from huewheel.app.drag import DragTracker, PointerKind
from huewheel.app.events import Callback, EventHub, EventType, PickerEvent
from huewheel.app.registry import MarkerRegistry
from huewheel.colorspace import Color
from huewheel.icons import HttpIconResolver, IconLoader
from huewheel.types import PickerContext, Point, WheelMode
from huewheel.wheel import WheelCache, WheelImage

logger = logging.getLogger(__name__)

MarkerRef = Union[str, "MarkerHandle"]


class Picker:
    """One picker surface: wheel mode, Kelvin range, markers and background."""

    def __init__(
        self,
        width: float = defaults.DEFAULT_WIDTH,
        height: float = defaults.DEFAULT_HEIGHT,
        mode: WheelMode = WheelMode.COLOR,
        settings: Optional[PickerSettings] = None,
        icon_loader: Optional[IconLoader] = None,
    ):
        self.settings = settings if settings is not None else PickerSettings()
        self._width = width
        self._height = height
        self._mode = WheelMode(mode)

        self._registry = MarkerRegistry()
        self._drags = DragTracker(self._registry)
        self._hub = EventHub()
        self._wheels = WheelCache(self.settings.wheel_cache_size)

        if icon_loader is None and self.settings.icon_base_url:
            icon_loader = IconLoader(
                HttpIconResolver(self.settings.icon_base_url, timeout=self.settings.icon_timeout)
            )
        self._icons = icon_loader

    # ------------------------------------------------------------------
    # Geometry and mode
    # ------------------------------------------------------------------

    @property
    def width(self) -> float:
        return self._width

    @width.setter
    def width(self, value: float) -> None:
        self.resize(value, self._height)

    @property
    def height(self) -> float:
        return self._height

    @height.setter
    def height(self, value: float) -> None:
        self.resize(self._width, value)

    @property
    def radius(self) -> float:
        return min(self._width, self._height) / 2

    def resize(self, width: float, height: float) -> None:
        """Change the picker size and re-place every marker from its value."""
        if (width, height) == (self._width, self._height):
            return
        self._width = width
        self._height = height
        logger.debug("Picker resized to %sx%s", width, height)
        self._registry.refresh_all(self.context)

    @property
    def mode(self) -> WheelMode:
        return self._mode

    @mode.setter
    def mode(self, value: WheelMode) -> None:
        value = WheelMode(value)
        if value is self._mode:
            return
        self._mode = value
        logger.debug("Wheel mode changed to %s", value.value)
        self._registry.sync_modes(self.context)
        self._emit([PickerEvent(type=EventType.MODE_CHANGED, mode=value)])

    @property
    def temp_min(self) -> float:
        return self.settings.temp_min

    @temp_min.setter
    def temp_min(self, value: float) -> None:
        self.set_temp_range(value, self.settings.temp_max)

    @property
    def temp_max(self) -> float:
        return self.settings.temp_max

    @temp_max.setter
    def temp_max(self, value: float) -> None:
        self.set_temp_range(self.settings.temp_min, value)

    def set_temp_range(self, min_kelvin: float, max_kelvin: float) -> None:
        """Change the Kelvin range; the temp background is re-rendered on next use."""
        self.settings.temp_min = min_kelvin
        self.settings.temp_max = max_kelvin

    @property
    def context(self) -> PickerContext:
        """Mapping context for marker math at the current size."""
        return PickerContext(
            radius=self.radius,
            mode=self._mode,
            temp_min=self.settings.temp_min,
            temp_max=self.settings.temp_max,
            over_render=self.settings.over_render,
        )

    @property
    def background(self) -> WheelImage:
        """Rasterized wheel for the current mode, at the configured render size."""
        render_size = self.settings.render_size
        radius = render_size // 2 if render_size else int(self.radius)
        ctx = PickerContext(
            radius=radius,
            mode=self._mode,
            temp_min=self.settings.temp_min,
            temp_max=self.settings.temp_max,
            over_render=self.settings.over_render,
        )
        return self._wheels.get(ctx)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def subscribe(self, event_type: EventType, callback: Callback) -> None:
        self._hub.subscribe(event_type, callback)

    def unsubscribe(self, event_type: EventType, callback: Callback) -> None:
        self._hub.unsubscribe(event_type, callback)

    def _emit(self, events: Iterable[PickerEvent]) -> None:
        self._hub.emit(events)

    # ------------------------------------------------------------------
    # Markers
    # ------------------------------------------------------------------

    def add_marker(self, name: Optional[str] = None, activate: bool = True) -> MarkerHandle:
        """Add a marker at the wheel center and return a handle to it."""
        marker, events = self._registry.add(self.context, name, activate)
        self._emit(events)
        return MarkerHandle(self, marker.name)

    def marker(self, name: str) -> MarkerHandle:
        self._registry.get(name)
        return MarkerHandle(self, name)

    @property
    def markers(self) -> list[MarkerHandle]:
        """Top-level markers in render order."""
        return [MarkerHandle(self, name) for name in self._registry.top_level]

    def remove_marker(self, ref: MarkerRef) -> None:
        name = _name(ref)
        for leaf in self._registry.leaves(name):
            self._drags.discard(leaf.name)
        self._drags.discard(name)
        self._emit(self._registry.remove(name))

    def clear_markers(self) -> None:
        self._drags.clear()
        self._emit(self._registry.clear())

    @property
    def active_marker(self) -> Optional[MarkerHandle]:
        active = self._registry.active
        return MarkerHandle(self, active.name) if active is not None else None

    def get_active_markers(self) -> list[MarkerHandle]:
        """Active single markers; the children when a merged marker is active."""
        return [MarkerHandle(self, m.name) for m in self._registry.active_markers()]

    def activate_marker(self, ref: MarkerRef, pulse: bool = True) -> None:
        self._emit(self._registry.activate(_name(ref), pulse))

    def search_merge_target(self, ref: MarkerRef) -> Optional[MarkerHandle]:
        target = self._registry.search_merge_target(_name(ref), self.merge_range)
        return MarkerHandle(self, target) if target is not None else None

    def merge_markers(self, target: MarkerRef, *others: MarkerRef) -> MarkerHandle:
        """Merge markers at the position of ``target``.

        Raises:
            MergeError: If fewer than two markers are given
        """
        multi, events = self._registry.merge(self.context, _name(target), *[_name(m) for m in others])
        self._emit(events)
        return MarkerHandle(self, multi.name)

    @property
    def merge_range(self) -> float:
        return self.settings.merge_range(self.radius)

    def render_markers(self) -> list[MarkerView]:
        return self._registry.views()

    # ------------------------------------------------------------------
    # Drag input
    # ------------------------------------------------------------------

    def on_drag_start(self, ref: MarkerRef, point: Point, pointer: PointerKind = PointerKind.MOUSE) -> None:
        self._emit(self._drags.start(_name(ref), point, pointer))

    def on_drag_move(self, ref: MarkerRef, point: Point, pointer: PointerKind = PointerKind.MOUSE) -> None:
        name = _name(ref)
        if not self._drags.is_dragging(name):
            return
        self._enforce_fixed_mode(name)
        self._emit(self._drags.move(name, point, self.context, self.merge_range, pointer))

    def on_drag_end(self, ref: MarkerRef, pointer: PointerKind = PointerKind.MOUSE) -> None:
        self._emit(self._drags.end(_name(ref), self.context, pointer))

    def is_dragging(self, ref: MarkerRef) -> bool:
        return self._drags.is_dragging(_name(ref))

    # ------------------------------------------------------------------
    # Icons
    # ------------------------------------------------------------------

    def poll_icons(self) -> None:
        """Apply finished icon lookups. Call from the UI loop."""
        if self._icons is None:
            return
        events = []
        for result in self._icons.poll():
            if result.marker not in self._registry:
                continue
            marker = self._registry.get(result.marker)
            if marker.icon != result.icon:
                continue  # superseded by a newer request
            if result.path:
                marker.icon_path = result.path
            else:
                _use_default_icon(marker)
            events.append(PickerEvent(type=EventType.ICON_CHANGED, marker=marker.name))
        self._emit(events)

    def close(self) -> None:
        if self._icons is not None:
            self._icons.shutdown()

    # ------------------------------------------------------------------
    # Marker state plumbing (used by MarkerHandle)
    # ------------------------------------------------------------------

    def _enforce_fixed_mode(self, name: str) -> None:
        """A marker fixed to the other wheel switches the picker to it first."""
        fixed = self._registry.get(name).fixed_mode
        if fixed is not None and fixed is not self._mode:
            self.mode = fixed

    def _set_position(self, name: str, pos: Point) -> None:
        self._enforce_fixed_mode(name)
        self._emit(self._registry.set_position(name, self.context, pos))

    def _set_color(self, name: str, color: Color) -> bool:
        return self._registry.set_color(name, self.context, color)

    def _set_temp(self, name: str, kelvin: float) -> bool:
        return self._registry.set_temp(name, self.context, kelvin)

    def _set_mode(self, name: str, mode: WheelMode) -> bool:
        return self._registry.set_mode(name, self.context, mode)

    def _set_icon(self, name: str, icon: str) -> None:
        marker = self._registry.get(name)
        if marker.is_multi:
            return  # merged markers show their child count
        marker.icon = icon
        if self._icons is None or not icon or icon == defaults.DEFAULT_ICON:
            _use_default_icon(marker)
            self._emit([PickerEvent(type=EventType.ICON_CHANGED, marker=name)])
            return
        self._icons.request(name, icon)

    def _dispatch_change(self, name: str, immediate: bool) -> None:
        self._emit(self._registry.dispatch_change(name, immediate))


def _name(ref: MarkerRef) -> str:
    return ref.name if isinstance(ref, MarkerHandle) else ref


def _use_default_icon(marker: Marker) -> None:
    marker.icon = defaults.DEFAULT_ICON
    marker.icon_path = defaults.DEFAULT_ICON_PATH


class MarkerHandle:
    """Property view of one marker, bound to its picker."""

    __slots__ = ("_picker", "name")

    def __init__(self, picker: Picker, name: str):
        self._picker = picker
        self.name = name

    @property
    def _marker(self) -> Marker:
        return self._picker._registry.get(self.name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MarkerHandle):
            return NotImplemented
        return self._picker is other._picker and self.name == other.name

    def __hash__(self) -> int:
        return hash((id(self._picker), self.name))

    def __repr__(self) -> str:
        return f"MarkerHandle({self.name!r})"

    # --- values ---

    @property
    def position(self) -> Point:
        return self._marker.position

    @position.setter
    def position(self, pos: Point) -> None:
        self._picker._set_position(self.name, pos)

    @property
    def color(self) -> Color:
        return self._marker.color

    @color.setter
    def color(self, color: Union[Color, str]) -> None:
        if isinstance(color, str):
            color = Color.parse(color)
        self._picker._set_color(self.name, color)

    @property
    def temp(self) -> int:
        return self._marker.temp

    @temp.setter
    def temp(self, kelvin: float) -> None:
        self._picker._set_temp(self.name, kelvin)

    @property
    def mode(self) -> WheelMode:
        return self._marker.mode

    @mode.setter
    def mode(self, mode: WheelMode) -> None:
        self._picker._set_mode(self.name, WheelMode(mode))

    @property
    def fixed_mode(self) -> Optional[WheelMode]:
        return self._marker.fixed_mode

    @fixed_mode.setter
    def fixed_mode(self, mode: Optional[WheelMode]) -> None:
        self._marker.fixed_mode = WheelMode(mode) if mode is not None else None

    # --- appearance ---

    @property
    def is_off(self) -> bool:
        return self._marker.is_off

    @is_off.setter
    def is_off(self, value: bool) -> None:
        self._marker.is_off = bool(value)

    @property
    def off_color(self) -> Color:
        return self._marker.off_color

    @off_color.setter
    def off_color(self, color: Union[Color, str]) -> None:
        self._marker.off_color = Color.parse(color) if isinstance(color, str) else color

    @property
    def icon(self) -> str:
        return self._marker.display_icon

    @icon.setter
    def icon(self, icon: str) -> None:
        self._picker._set_icon(self.name, icon)

    @property
    def icon_path(self) -> Optional[str]:
        marker = self._marker
        return None if marker.is_multi else marker.icon_path

    # --- read-only state ---

    @property
    def is_active(self) -> bool:
        return self._picker._registry.is_active(self.name)

    @property
    def is_drag(self) -> bool:
        return self._marker.is_drag

    @property
    def is_preview(self) -> bool:
        return self._marker.is_preview

    @property
    def is_off_mode(self) -> bool:
        return self._marker.is_off_mode

    @property
    def is_multi(self) -> bool:
        return self._marker.is_multi

    @property
    def markers(self) -> list[MarkerHandle]:
        """Children of a merged marker (empty for a single marker)."""
        return [MarkerHandle(self._picker, child) for child in self._marker.children]

    # --- actions ---

    def set_active(self, pulse: bool = True) -> None:
        self._picker.activate_marker(self.name, pulse)

    def refresh(self) -> None:
        """Re-place the marker from its current temp or color."""
        marker = self._marker
        if marker.mode is WheelMode.TEMP:
            self._picker._set_temp(self.name, marker.temp)
        else:
            self._picker._set_color(self.name, marker.color)

    def dispatch_change(self, immediate: bool = False) -> None:
        self._picker._dispatch_change(self.name, immediate)
