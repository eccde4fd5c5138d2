"""Test configuration for huewheel."""

import pytest

from huewheel.app.events import EventType
from huewheel.app.picker import Picker
from huewheel.app.registry import MarkerRegistry
from huewheel.types import PickerContext, WheelMode


class EventRecorder:
    """Subscribes to every event type and keeps what it receives."""

    def __init__(self, picker: Picker):
        self.events = []
        for event_type in EventType:
            picker.subscribe(event_type, self.events.append)

    def of(self, event_type):
        return [ev for ev in self.events if ev.type is event_type]

    def types(self):
        return [ev.type for ev in self.events]

    def clear(self):
        self.events.clear()


class FakeResolver:
    """Icon resolver answering from a dict; missing names raise."""

    def __init__(self, paths=None):
        self.paths = dict(paths or {})
        self.calls = []

    def resolve(self, name):
        self.calls.append(name)
        if name not in self.paths:
            raise LookupError(name)
        return self.paths[name]


@pytest.fixture
def ctx():
    return PickerContext(radius=200)


@pytest.fixture
def temp_ctx():
    return PickerContext(radius=200, mode=WheelMode.TEMP)


@pytest.fixture
def registry():
    return MarkerRegistry()


@pytest.fixture
def picker():
    p = Picker(width=400, height=400)
    yield p
    p.close()


@pytest.fixture
def recorder(picker):
    return EventRecorder(picker)


@pytest.fixture
def fake_resolver():
    return FakeResolver({"mdi:lamp": "M0 0L1 1"})
