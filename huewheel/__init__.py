"""Color and color-temperature wheel picker engine.

Example:
    from huewheel import Picker, WheelMode

    picker = Picker(width=400, height=400, mode=WheelMode.TEMP)
    lamp = picker.add_marker("lamp")
    lamp.temp = 2700
    image = picker.background.to_image()
"""

__version__ = "0.1.0"

from huewheel.types import HsvResult, PickerContext, Point, TempResult, WheelMode
from huewheel.colorspace import Color
from huewheel.errors import (
    DuplicateMarkerError,
    IconFetchError,
    InvalidRadiusError,
    MergeError,
    PreconditionError,
    UnknownMarkerError,
    WheelError,
)
from huewheel.app.core import MarkerView, PickerSettings
from huewheel.app.drag import PointerKind
from huewheel.app.events import EventType, PickerEvent
from huewheel.app.picker import MarkerHandle, Picker

__all__ = [
    'Picker',
    'MarkerHandle',
    'PickerSettings',
    'MarkerView',
    'PointerKind',
    'EventType',
    'PickerEvent',
    'Color',
    'Point',
    'WheelMode',
    'PickerContext',
    'HsvResult',
    'TempResult',
    'WheelError',
    'PreconditionError',
    'MergeError',
    'InvalidRadiusError',
    'DuplicateMarkerError',
    'UnknownMarkerError',
    'IconFetchError',
]
