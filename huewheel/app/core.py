"""Toolkit-neutral picker state: marker entities, settings and render views."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

from huewheel import defaults
from huewheel.colorspace import BLACK, Color
from huewheel.types import Point, WheelMode


class MarkerKind(enum.Enum):
    """Single light marker, or an aggregate of merged markers."""

    SINGLE = "single"
    MULTI = "multi"


@dataclass
class Marker:
    """A draggable selection point on the wheel.

    Markers live in a ``MarkerRegistry`` and refer to each other by name only.
    ``color`` and ``temp`` are kept in sync with ``position``; which of them is
    authoritative depends on ``mode``. Whether a marker is active is owned by
    the registry, not stored here.

    Attributes:
        name: Identifier, unique within one picker
        kind: SINGLE or MULTI
        children: Names of merged markers (MULTI only, first-seen order)
        parent: Name of the MULTI marker this one was merged into
        position: Top-left based coordinates, always within the wheel
        fixed_mode: When set, mode changes to the other wheel are ignored
        is_off: Light is off; renders with ``off_color``
        is_off_mode: Marker belongs to the wheel that is not shown
    """

    name: str
    kind: MarkerKind = MarkerKind.SINGLE
    children: list[str] = field(default_factory=list)
    parent: Optional[str] = None

    position: Point = field(default_factory=Point)
    color: Color = BLACK
    temp: int = 0
    mode: WheelMode = WheelMode.COLOR
    fixed_mode: Optional[WheelMode] = None

    is_off: bool = False
    off_color: Color = BLACK
    is_preview: bool = False
    is_drag: bool = False
    is_off_mode: bool = False

    icon: str = defaults.DEFAULT_ICON
    icon_path: str = defaults.DEFAULT_ICON_PATH

    @property
    def is_multi(self) -> bool:
        return self.kind is MarkerKind.MULTI

    @property
    def display_icon(self) -> str:
        """Icon name, or the live child count for merged markers."""
        if self.is_multi:
            return str(len(self.children))
        return self.icon

    @property
    def render_color(self) -> Color:
        return self.off_color if self.is_off else self.color

    def __repr__(self) -> str:
        return (
            f"Marker(name={self.name!r}, kind={self.kind.value}, mode={self.mode.value}, "
            f"position={self.position}, color={self.color}, temp={self.temp})"
        )


@dataclass
class PickerSettings:
    """User-configurable picker parameters."""

    temp_min: float = defaults.DEFAULT_TEMP_MIN
    temp_max: float = defaults.DEFAULT_TEMP_MAX
    over_render: float = defaults.OVER_RENDER
    # Pixel distance for merge previews; None = MERGE_RANGE_FACTOR * radius
    merge_distance: Optional[float] = None
    # Background raster size; None = follow the picker's own size
    render_size: Optional[int] = defaults.DEFAULT_RENDER_SIZE
    wheel_cache_size: int = defaults.DEFAULT_WHEEL_CACHE_SIZE
    # Icon service; None disables remote icon lookups
    icon_base_url: Optional[str] = None
    icon_timeout: float = defaults.DEFAULT_ICON_TIMEOUT

    def merge_range(self, radius: float) -> float:
        if self.merge_distance is not None:
            return self.merge_distance
        return radius * defaults.MERGE_RANGE_FACTOR


@dataclass(frozen=True)
class PositionUpdate:
    """Outcome of placing a marker.

    ``changed`` is False when the position could not be mapped (radius not
    positive). ``forced_mode`` names the wheel the picker must switch to
    because the marker has a fixed mode.
    """

    marker: str
    changed: bool
    forced_mode: Optional[WheelMode] = None


@dataclass(frozen=True)
class MarkerView:
    """Render-ready snapshot of one marker.

    ``x``/``y`` is the top-left corner of the glyph; ``position`` is the
    point the marker samples (its tip when active, its center otherwise).
    """

    name: str
    position: Point
    x: float
    y: float
    width: int
    height: int
    color: Color
    icon: str
    icon_path: Optional[str]
    icon_is_text: bool
    icon_foreground: str
    is_active: bool
    is_preview: bool
    is_drag: bool
    is_off: bool
    is_off_mode: bool
