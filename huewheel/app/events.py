"""Picker notifications.

Mutating registry and drag calls return lists of ``PickerEvent`` instead of
firing callbacks themselves. The ``Picker`` hands those lists to an
``EventHub``, which delivers them to subscribers registered per event type.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from huewheel.colorspace import Color
from huewheel.types import WheelMode

logger = logging.getLogger(__name__)


class EventType(enum.Enum):
    """Kinds of notifications a picker emits."""

    # Committed value (drag finished, explicit commit)
    CHANGE = "change"
    # Live value, fired on every position update
    IMMEDIATE_VALUE_CHANGE = "immediate-value-change"
    ACTIVE_MARKERS_CHANGED = "active-markers-changed"
    MODE_CHANGED = "mode-change"

    # Visual/haptic hints for the hosting surface
    PULSE = "pulse"
    HAPTIC = "haptic"
    ICON_CHANGED = "icon-change"


@dataclass(frozen=True)
class PickerEvent:
    """One notification.

    ``marker``/``mode``/``new_color``/``new_temp`` carry the change payload;
    ``new_temp`` is None unless the marker is in temp mode. ``scale`` and
    ``duration_ms`` are set for pulse and haptic hints.
    """

    type: EventType
    marker: Optional[str] = None
    mode: Optional[WheelMode] = None
    new_color: Optional[Color] = None
    new_temp: Optional[int] = None
    scale: Optional[float] = None
    duration_ms: Optional[int] = None


Callback = Callable[[PickerEvent], None]


class EventHub:
    """Per-type subscriber lists with isolated callbacks."""

    def __init__(self) -> None:
        self._subscribers: dict[EventType, list[Callback]] = {}

    def subscribe(self, event_type: EventType, callback: Callback) -> None:
        """Register *callback* for *event_type*. Signature: ``(event)``."""
        self._subscribers.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: EventType, callback: Callback) -> None:
        """Remove a previously registered callback."""
        callbacks = self._subscribers.get(event_type)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)

    def emit(self, events: Iterable[PickerEvent]) -> None:
        """Deliver events in order."""
        for event in events:
            self._notify(event)

    def _notify(self, event: PickerEvent) -> None:
        """Call all subscribers for the event's type, isolating exceptions."""
        callbacks = self._subscribers.get(event.type)
        if not callbacks:
            return
        for cb in list(callbacks):
            try:
                cb(event)
            except Exception:
                logger.warning(
                    "Subscriber %r raised for %s", cb, event.type, exc_info=True,
                )
