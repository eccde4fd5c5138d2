"""Wheel mapping: coordinates <-> color or temperature, and background rasterization.

Coordinates handed to the mapping functions are offsets from the wheel center,
x to the right and y downwards. The array helpers below are shared by the
single-point mapping and the rasterizer so both always agree.

Example:
    from huewheel.types import PickerContext, WheelMode
    from huewheel.wheel import coordinate_to_value, paint_background

    ctx = PickerContext(radius=200, mode=WheelMode.TEMP)
    result = coordinate_to_value(0, -150, ctx)   # TempResult near the warm end
    image = paint_background(ctx)                # 400x400 RGBA
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

import numpy as np
from PIL import Image

from huewheel import defaults
from huewheel.colorspace import (
    Color,
    deg2rad,
    hsv2rgb,
    hue_temp_to_rgb,
    inverse_logarithmic_scale,
    logarithmic_scale,
    polar2xy,
    rad2deg,
    round_half_up,
    seam_corrected_value,
    xy2polar,
)
from huewheel.errors import InvalidRadiusError
from huewheel.types import HsvResult, MappingResult, PickerContext, Point, TempResult, WheelMode

logger = logging.getLogger(__name__)


# === Array mapping ===

def _color_field(x, y, radius: float):
    """Return (r, hue, saturation, value) arrays for center-relative coordinates."""
    r, phi = xy2polar(x, y)
    hue = (rad2deg(phi) - defaults.HUE_ROTATION_DEG) % 360.0
    # Quadratic falloff so the perceived saturation gradient is even
    saturation = np.minimum((r * r) / (radius * radius), 1.0)
    value = seam_corrected_value(hue, r, radius)
    return r, hue, saturation, value


def _temp_field(y, radius: float, temp_min: float, temp_max: float):
    """Return kelvin for center-relative y (only the vertical offset matters)."""
    n = np.clip((np.asarray(y, dtype=np.float64) + radius) / (2 * radius), 0.0, 1.0)
    return round_half_up(logarithmic_scale(n, temp_min, temp_max))


def _inside(x, y, radius: float, over_render: float):
    r, _ = xy2polar(x, y)
    return (r - over_render) <= radius


# === Single-point mapping ===

def coordinate_to_value(x: float, y: float, ctx: PickerContext) -> Optional[MappingResult]:
    """Map a center-relative coordinate to the value under it for ``ctx.mode``.

    Returns:
        HsvResult in color mode, TempResult in temp mode, or None when the
        point lies outside the wheel (past the over-render band) or the
        radius is not positive.
    """
    radius = ctx.radius
    if radius <= 0:
        return None
    if not _inside(x, y, radius, ctx.over_render):
        return None

    if ctx.mode is WheelMode.TEMP:
        kelvin = int(_temp_field(y, radius, ctx.temp_min, ctx.temp_max))
        r, g, b = hue_temp_to_rgb(kelvin)
        return TempResult(kelvin=kelvin, rgb=Color(int(r), int(g), int(b)))

    _, hue, saturation, value = _color_field(x, y, radius)
    return HsvResult(hue=float(hue), saturation=float(saturation), value=float(value))


def color_to_coordinate(hue: float, saturation: float, ctx: PickerContext) -> Point:
    """Center-relative position of (hue, saturation) on the color wheel."""
    saturation = min(max(saturation, 0.0), 1.0)
    r = np.sqrt(saturation) * ctx.radius
    phi = deg2rad((hue + defaults.HUE_ROTATION_DEG) % 360.0)
    x, y = polar2xy(r, phi)
    return Point(float(x), float(y))


def temp_to_coordinate(
    kelvin: float,
    ctx: PickerContext,
    current: Optional[Point] = None,
) -> Point:
    """Center-relative position of ``kelvin`` on the temperature wheel.

    Args:
        kelvin: Color temperature, clamped to the picker's range first
        ctx: Picker context (radius and Kelvin range)
        current: Previous center-relative position. Its X is kept (clamped to
            the chord at the new Y) so the marker only moves vertically.
            Without it X is 0.
    """
    radius = ctx.radius
    kelvin = min(max(kelvin, ctx.temp_min), ctx.temp_max)
    n = float(inverse_logarithmic_scale(kelvin, ctx.temp_min, ctx.temp_max))
    y = n * 2 * radius - radius

    x = 0.0
    if current is not None:
        max_x = float(np.sqrt(max(radius * radius - y * y, 0.0)))
        x = min(max(current.x, -max_x), max_x)

    return Point(x, y)


# === Rasterization ===

@dataclass(frozen=True)
class WheelImage:
    """Ready-to-draw RGBA background.

    Attributes:
        mode: Wheel mode the image shows
        radius: Radius it was computed for
        pixels: uint8 array of shape (2*radius, 2*radius, 4); transparent
            outside the wheel
    """

    mode: WheelMode
    radius: int
    pixels: np.ndarray

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    def to_bytes(self) -> bytes:
        """Flat RGBA buffer, row-major (index ((x+R) + (y+R)*2R) * 4)."""
        return self.pixels.tobytes()

    def to_image(self) -> Image.Image:
        # (H, W, 4) uint8 is read as RGBA
        return Image.fromarray(self.pixels)

    def to_png_bytes(self) -> bytes:
        buffer = BytesIO()
        self.to_image().save(buffer, format="PNG")
        return buffer.getvalue()


def paint_background(ctx: PickerContext) -> WheelImage:
    """Rasterize the wheel for ``ctx.mode`` at ``ctx.radius``.

    Every integer (x, y) in [-R, R)^2 inside the wheel gets the forward-mapped
    color with alpha 255; the rest stays transparent.

    Raises:
        InvalidRadiusError: If the radius is not positive
    """
    radius = int(ctx.radius)
    if radius <= 0:
        raise InvalidRadiusError(f"Cannot rasterize a wheel with radius {ctx.radius!r}")

    coords = np.arange(-radius, radius, dtype=np.float64)
    y, x = np.meshgrid(coords, coords, indexing="ij")
    inside = _inside(x, y, radius, ctx.over_render)

    if ctx.mode is WheelMode.TEMP:
        kelvin = _temp_field(y, radius, ctx.temp_min, ctx.temp_max)
        r, g, b = hue_temp_to_rgb(kelvin)
    else:
        _, hue, saturation, value = _color_field(x, y, radius)
        r, g, b = hsv2rgb(hue, saturation, value)

    pixels = np.zeros((2 * radius, 2 * radius, 4), dtype=np.uint8)
    pixels[..., 0] = np.where(inside, r, 0)
    pixels[..., 1] = np.where(inside, g, 0)
    pixels[..., 2] = np.where(inside, b, 0)
    pixels[..., 3] = np.where(inside, 255, 0)

    return WheelImage(mode=ctx.mode, radius=radius, pixels=pixels)


# === Background cache ===

def wheel_cache_key(ctx: PickerContext) -> tuple:
    """Key identifying a rendered wheel. The Kelvin range only matters in temp mode."""
    if ctx.mode is WheelMode.TEMP:
        return (ctx.mode.value, int(ctx.radius), ctx.temp_min, ctx.temp_max, defaults.WHEEL_CACHE_VERSION)
    return (ctx.mode.value, int(ctx.radius), defaults.WHEEL_CACHE_VERSION)


class WheelCache:
    """Bounded LRU of rasterized wheels, so switching modes back and forth is cheap."""

    def __init__(self, max_entries: int = defaults.DEFAULT_WHEEL_CACHE_SIZE):
        self.max_entries = max(int(max_entries), 1)
        self._entries: OrderedDict[tuple, WheelImage] = OrderedDict()

    def get(self, ctx: PickerContext) -> WheelImage:
        """Return the cached wheel for ``ctx`` or rasterize and store it."""
        key = wheel_cache_key(ctx)
        image = self._entries.get(key)
        if image is not None:
            self._entries.move_to_end(key)
            logger.debug("Wheel cache hit for %s", key)
            return image

        logger.debug("Wheel cache miss for %s, rasterizing", key)
        image = paint_background(ctx)
        self._entries[key] = image
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return image

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, ctx: PickerContext) -> bool:
        return wheel_cache_key(ctx) in self._entries
