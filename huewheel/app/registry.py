"""Marker registry: owns every marker of one picker.

Markers are stored by name in a single dict; merged markers reference their
children (and children their aggregate) by name. ``_order`` holds the
top-level markers in render order, with the active marker last so it is drawn
on top. Every mutating method returns the events it produced.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterator, Optional

from huewheel.app import markers as ops
from huewheel.app.core import Marker, MarkerKind, MarkerView
from huewheel.app.events import EventType, PickerEvent
from huewheel.colorspace import Color
from huewheel.errors import DuplicateMarkerError, MergeError, UnknownMarkerError
from huewheel.types import PickerContext, Point, WheelMode

logger = logging.getLogger(__name__)


class MarkerRegistry:
    """Live set of markers for one picker, with merge and activation logic."""

    def __init__(self) -> None:
        self._markers: dict[str, Marker] = {}
        self._order: list[str] = []
        self._active: Optional[str] = None
        self._counter = 0
        self._multi_counter = 0

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> Marker:
        try:
            return self._markers[name]
        except KeyError:
            raise UnknownMarkerError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._markers

    def __len__(self) -> int:
        """Number of top-level markers."""
        return len(self._order)

    def __iter__(self) -> Iterator[Marker]:
        """Top-level markers in render order."""
        return iter([self._markers[name] for name in self._order])

    @property
    def top_level(self) -> list[str]:
        return list(self._order)

    @property
    def active(self) -> Optional[Marker]:
        if self._active is None:
            return None
        return self._markers.get(self._active)

    def is_active(self, name: str) -> bool:
        return self._active == name

    def children(self, name: str) -> list[Marker]:
        return [self._markers[child] for child in self.get(name).children]

    def leaves(self, name: str) -> list[Marker]:
        """The single markers behind ``name`` (its children when merged)."""
        marker = self.get(name)
        if marker.is_multi:
            return self.children(name)
        return [marker]

    def top_level_of(self, name: str) -> Optional[str]:
        """Top-level marker that currently holds ``name``, or None if it is gone."""
        marker = self._markers.get(name)
        if marker is None:
            return None
        return marker.parent if marker.parent is not None else marker.name

    def active_markers(self) -> list[Marker]:
        """Single markers that are currently active (children of an active aggregate)."""
        active = self.active
        if active is None:
            return []
        return self.leaves(active.name)

    # ------------------------------------------------------------------
    # Collection changes
    # ------------------------------------------------------------------

    def add(
        self,
        ctx: PickerContext,
        name: Optional[str] = None,
        activate: bool = True,
    ) -> tuple[Marker, list[PickerEvent]]:
        """Create a marker at the wheel center.

        Raises:
            DuplicateMarkerError: If ``name`` is already used
        """
        if name is None:
            name = self._next_name()
        elif name in self._markers:
            raise DuplicateMarkerError(f"Marker {name!r} already exists")

        marker = Marker(name=name)
        self._markers[name] = marker
        self._order.append(name)

        events = self._place(marker, ctx, ctx.center)
        if activate:
            events += self.activate(name, pulse=False)
        return marker, events

    def remove(self, name: str) -> list[PickerEvent]:
        """Remove a marker; removing an aggregate also removes its children."""
        marker = self.get(name)
        before = self._active
        removed = {name}

        if marker.parent is not None:
            self._detach_child(marker)
        else:
            self._order.remove(name)
            for child in marker.children:
                removed.add(child)
                del self._markers[child]
        del self._markers[name]

        if self._active in removed:
            self._active = None
        if self._active != before:
            return [PickerEvent(type=EventType.ACTIVE_MARKERS_CHANGED)]
        return []

    def clear(self) -> list[PickerEvent]:
        had_active = self._active is not None
        self._markers.clear()
        self._order.clear()
        self._active = None
        if had_active:
            return [PickerEvent(type=EventType.ACTIVE_MARKERS_CHANGED)]
        return []

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    def activate(self, name: str, pulse: bool = True) -> list[PickerEvent]:
        """Make ``name`` the active marker.

        The active marker moves to the end of the render order. A merged
        child that gets activated is pulled out of its aggregate.
        """
        marker = self.get(name)
        if self._active == name:
            return []

        self._active = name
        if marker.parent is not None:
            self._detach_child(marker)
            self._order.append(name)
        else:
            self._order.remove(name)
            self._order.append(name)

        logger.debug("Activated marker %s", name)
        events = [ops.pulse_event(marker)] if pulse else []
        events.append(PickerEvent(type=EventType.ACTIVE_MARKERS_CHANGED))
        return events

    def _detach_child(self, marker: Marker) -> None:
        """Take a child out of its aggregate, dissolving the aggregate if needed."""
        multi = self._markers[marker.parent]
        multi.children.remove(marker.name)
        marker.parent = None

        idx = self._order.index(multi.name)
        if len(multi.children) == 1:
            remaining = self._markers[multi.children[0]]
            remaining.parent = None
            self._order[idx] = remaining.name
            del self._markers[multi.name]
            if self._active == multi.name:
                self._active = remaining.name
            logger.debug("Dissolved %s into %s", multi.name, remaining.name)
        elif not multi.children:
            del self._order[idx]
            del self._markers[multi.name]
            if self._active == multi.name:
                self._active = None

    # ------------------------------------------------------------------
    # Merging
    # ------------------------------------------------------------------

    def search_merge_target(self, name: str, max_distance: float) -> Optional[str]:
        """Nearest other top-level marker in the same mode within ``max_distance``.

        Ties go to the marker earlier in render order.
        """
        marker = self.get(name)
        best: Optional[str] = None
        best_distance = float("inf")
        for other_name in self._order:
            if other_name == name:
                continue
            other = self._markers[other_name]
            if other.mode is not marker.mode:
                continue
            distance = other.position.distance(marker.position)
            if distance <= max_distance and distance < best_distance:
                best, best_distance = other_name, distance
        return best

    def merge(self, ctx: PickerContext, target: str, *others: str) -> tuple[Marker, list[PickerEvent]]:
        """Merge markers into a new aggregate placed where ``target`` is.

        Aggregates among the inputs are flattened, so an aggregate never
        contains another one. Every absorbed marker is snapped to the target's
        mode and position and reports its own immediate change.

        Raises:
            MergeError: If fewer than two distinct top-level markers are given
        """
        names = [target, *others]
        if target is None or not others or len(set(names)) != len(names):
            raise MergeError("At least two markers need to be passed to create a merged marker")
        for name in names:
            if self.get(name).parent is not None:
                raise MergeError(f"Marker {name!r} is already merged into another marker")

        source = self.get(target)
        self._multi_counter += 1
        multi = Marker(name=self._unique(f"mm{self._multi_counter}"), kind=MarkerKind.MULTI)
        self._apply_state(source, multi, ctx)

        children = list(source.children) if source.is_multi else [source.name]
        events: list[PickerEvent] = []
        for name in others:
            for child in self.leaves(name):
                children.append(child.name)
                events += self._apply_state(source, child, ctx)

        multi.children = children
        for child in children:
            self._markers[child].parent = multi.name

        for name in names:
            self._order.remove(name)
            if self._markers[name].is_multi:
                del self._markers[name]
                if self._active == name:
                    self._active = None

        self._markers[multi.name] = multi
        self._order.append(multi.name)
        logger.debug("Merged %s into %s", ", ".join(children), multi.name)

        events += self.activate(multi.name)
        return multi, events

    def _apply_state(self, source: Marker, target: Marker, ctx: PickerContext) -> list[PickerEvent]:
        """Snap ``target`` to the mode and position of ``source``, whatever wheel is shown."""
        if target.mode is not source.mode:
            ops.apply_mode(target, ctx, source.mode)
        update = ops.apply_position(target, dataclasses.replace(ctx, mode=source.mode), source.position)
        target.is_off_mode = target.mode is not ctx.mode
        if update.changed and not target.is_multi:
            return [ops.change_event(target, immediate=True)]
        return []

    # ------------------------------------------------------------------
    # Value changes (fan out to children of an aggregate)
    # ------------------------------------------------------------------

    def set_position(self, name: str, ctx: PickerContext, pos: Point) -> list[PickerEvent]:
        marker = self.get(name)
        return self._place(marker, ctx, pos)

    def _place(self, marker: Marker, ctx: PickerContext, pos: Point) -> list[PickerEvent]:
        update = ops.apply_position(marker, ctx, pos)
        if not marker.is_multi:
            return [ops.change_event(marker, immediate=True)] if update.changed else []

        # The aggregate's own immediate event is replaced by one per child
        events: list[PickerEvent] = []
        for child in self.children(marker.name):
            events += self._apply_state(marker, child, ctx)
        return events

    def set_color(self, name: str, ctx: PickerContext, color: Color) -> bool:
        marker = self.get(name)
        applied = ops.apply_color(marker, ctx, color)
        if applied:
            for child in self.children(name):
                ops.apply_color(child, ctx, color)
        return applied

    def set_temp(self, name: str, ctx: PickerContext, kelvin: float) -> bool:
        marker = self.get(name)
        applied = ops.apply_temp(marker, ctx, kelvin)
        if applied:
            for child in self.children(name):
                ops.apply_temp(child, ctx, kelvin)
        return applied

    def set_mode(self, name: str, ctx: PickerContext, mode: WheelMode) -> bool:
        marker = self.get(name)
        applied = ops.apply_mode(marker, ctx, mode)
        if applied:
            for child in self.children(name):
                ops.apply_mode(child, ctx, mode)
        return applied

    def set_drag(self, name: str, value: bool) -> None:
        marker = self.get(name)
        marker.is_drag = value
        for child in self.children(name):
            child.is_drag = value

    def set_preview(self, name: str, value: bool) -> list[PickerEvent]:
        """Mark ``name`` as merge candidate; pulses on change, haptic hint when set."""
        marker = self.get(name)
        if marker.is_preview == value:
            return []
        marker.is_preview = value
        events = [ops.haptic_event(marker)] if value else []
        events.append(ops.pulse_event(marker))
        return events

    def dispatch_change(self, name: str, immediate: bool) -> list[PickerEvent]:
        """Change events for ``name``.

        Aggregates only forward committed events, one per child; their
        immediate events are already sent per child when they move.
        """
        marker = self.get(name)
        if not marker.is_multi:
            return [ops.change_event(marker, immediate)]
        if immediate:
            return []
        return [ops.change_event(child, immediate=False) for child in self.children(name)]

    def sync_modes(self, ctx: PickerContext) -> None:
        """Update off-mode flags after the picker switched wheels."""
        for marker in self._markers.values():
            marker.is_off_mode = marker.mode is not ctx.mode

    def refresh_all(self, ctx: PickerContext) -> None:
        for marker in self._markers.values():
            ops.refresh(marker, ctx)

    def views(self) -> list[MarkerView]:
        """Render snapshots of the top-level markers, in render order."""
        return [ops.marker_view(marker, self._active == marker.name) for marker in self]

    # ------------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------------

    def _next_name(self) -> str:
        self._counter += 1
        return self._unique(f"m{self._counter}")

    def _unique(self, name: str) -> str:
        base, suffix = name, 1
        while name in self._markers:
            suffix += 1
            name = f"{base}_{suffix}"
        return name
