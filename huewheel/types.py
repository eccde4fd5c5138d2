"""Core data types for huewheel - framework-agnostic."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Union

from huewheel import defaults
from huewheel.colorspace import Color


class WheelMode(str, enum.Enum):
    """Which wheel is shown and how a marker position is interpreted."""

    COLOR = "color"
    TEMP = "temp"

    @property
    def other(self) -> WheelMode:
        return WheelMode.TEMP if self is WheelMode.COLOR else WheelMode.COLOR


@dataclass(frozen=True)
class Point:
    """Immutable (x, y) pair. NaN coordinates are replaced by 0."""

    x: float = 0.0
    y: float = 0.0

    def __post_init__(self):
        if math.isnan(self.x):
            object.__setattr__(self, "x", 0.0)
        if math.isnan(self.y):
            object.__setattr__(self, "y", 0.0)

    def diff(self, start: Point) -> Point:
        """Vector from ``start`` to this point."""
        return Point(self.x - start.x, self.y - start.y)

    def offset(self, dx: float, dy: float) -> Point:
        return Point(self.x + dx, self.y + dy)

    def distance(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def __str__(self) -> str:
        return f"[{self.x},{self.y}]"


@dataclass(frozen=True)
class HsvResult:
    """Color-wheel mapping result. Hue in degrees [0, 360), saturation/value in [0, 1]."""

    hue: float
    saturation: float
    value: float

    @property
    def color(self) -> Color:
        return Color.from_hsv(self.hue, self.saturation, self.value)


@dataclass(frozen=True)
class TempResult:
    """Temperature-wheel mapping result."""

    kelvin: int
    rgb: Color

    @property
    def color(self) -> Color:
        return self.rgb


MappingResult = Union[HsvResult, TempResult]


@dataclass(frozen=True)
class PickerContext:
    """Everything the mapping needs to know about the picker.

    Passed explicitly into every marker operation instead of markers holding a
    reference back to their picker.
    """

    radius: float
    mode: WheelMode = WheelMode.COLOR
    temp_min: float = defaults.DEFAULT_TEMP_MIN
    temp_max: float = defaults.DEFAULT_TEMP_MAX
    over_render: float = defaults.OVER_RENDER

    @property
    def center(self) -> Point:
        return Point(self.radius, self.radius)
