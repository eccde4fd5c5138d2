"""Drag handling for markers.

The hosting surface reports pointer down/move/up in picker coordinates; the
tracker turns them into marker moves, merge previews and, on release, merges.
Each marker runs at most one drag at a time: a second start is ignored until
the first one ends, and moves/ends from the other pointer kind are ignored.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from huewheel.app import markers as ops
from huewheel.app.events import PickerEvent
from huewheel.app.registry import MarkerRegistry
from huewheel.types import PickerContext, Point

logger = logging.getLogger(__name__)


class PointerKind(str, enum.Enum):
    MOUSE = "mouse"
    TOUCH = "touch"


@dataclass
class DragSession:
    """State of one in-progress drag.

    ``offset`` is the pointer position relative to the marker at drag start,
    so the marker does not jump to the pointer.
    """

    marker: str
    pointer: PointerKind
    offset: Point
    merge_target: Optional[str] = None


class DragTracker:
    """Per-marker drag sessions over a registry."""

    def __init__(self, registry: MarkerRegistry) -> None:
        self._registry = registry
        self._sessions: dict[str, DragSession] = {}

    def is_dragging(self, name: str) -> bool:
        return name in self._sessions

    def session(self, name: str) -> Optional[DragSession]:
        return self._sessions.get(name)

    def start(
        self,
        name: str,
        pointer_pos: Point,
        pointer: PointerKind = PointerKind.MOUSE,
    ) -> list[PickerEvent]:
        if name in self._sessions:
            logger.debug("Ignoring drag start on %s, already dragging", name)
            return []

        marker = self._registry.get(name)
        self._sessions[name] = DragSession(
            marker=name,
            pointer=pointer,
            offset=pointer_pos.diff(marker.position),
        )
        self._registry.set_drag(name, True)
        return self._registry.activate(name)

    def move(
        self,
        name: str,
        pointer_pos: Point,
        ctx: PickerContext,
        merge_range: float,
        pointer: PointerKind = PointerKind.MOUSE,
    ) -> list[PickerEvent]:
        """Move the dragged marker and update the merge preview."""
        session = self._sessions.get(name)
        if session is None or session.pointer is not pointer:
            return []

        pos = pointer_pos.diff(session.offset)
        events = self._registry.set_position(name, ctx, pos)

        target = self._registry.search_merge_target(name, merge_range)
        previous = session.merge_target
        if previous is not None and previous != target and previous in self._registry:
            events += self._registry.set_preview(previous, False)
        if target is not None:
            events += self._registry.set_preview(target, True)
        session.merge_target = target
        return events

    def end(
        self,
        name: str,
        ctx: PickerContext,
        pointer: PointerKind = PointerKind.MOUSE,
    ) -> list[PickerEvent]:
        """Finish the drag: merge into the previewed marker, then commit."""
        session = self._sessions.get(name)
        if session is None or session.pointer is not pointer:
            return []
        del self._sessions[name]

        self._registry.set_drag(name, False)
        leaves = self._registry.leaves(name)

        events: list[PickerEvent] = []
        target = self._resolve_target(name, session.merge_target)
        if session.merge_target in self._registry:
            events += self._registry.set_preview(session.merge_target, False)
        if target is not None:
            _, merge_events = self._registry.merge(ctx, target, name)
            events += merge_events

        events += [ops.change_event(leaf, immediate=False) for leaf in leaves]
        return events

    def _resolve_target(self, name: str, target: Optional[str]) -> Optional[str]:
        """Current merge partner for a released marker.

        Another drag may have merged the previewed marker (or the dragged
        one) since the preview was set; the preview then follows its
        aggregate. No merge when either side is gone or both already share
        an aggregate.
        """
        if target is None or self._registry.top_level_of(name) != name:
            return None
        resolved = self._registry.top_level_of(target)
        if resolved is None or resolved == name:
            return None
        if resolved != target:
            logger.debug("Merge target %s of %s is now part of %s", target, name, resolved)
        return resolved

    def discard(self, name: str) -> None:
        """Forget a session without side effects (marker was removed)."""
        self._sessions.pop(name, None)

    def clear(self) -> None:
        self._sessions.clear()
