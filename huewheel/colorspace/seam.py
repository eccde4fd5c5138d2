"""Brightness seam correction for the color wheel.

At a few hues the rendered wheel looks visibly brighter or darker than its
neighbours. These corrections nudge HSV value near those hues. The constants
live in ``defaults.SEAM_FIX_POINTS`` and are calibration values.
"""

import numpy as np
from numpy.typing import ArrayLike

from huewheel import defaults


def fix_saturation_and_value(
    value: ArrayLike,
    r: ArrayLike,
    radius: float,
    hue: ArrayLike,
    fix_point: float,
    lower: bool,
    max_offset: float = defaults.SEAM_MAX_OFFSET,
) -> np.ndarray:
    """Nudge ``value`` near ``fix_point`` with a linear falloff over +-``max_offset`` degrees.

    Lowering applies only in the outer half of the wheel (r > R/2);
    raising only in the middle ring (R/4 < r < 3R/4).
    """
    value = np.asarray(value, dtype=np.float64)
    r = np.asarray(r, dtype=np.float64)
    hue = np.asarray(hue, dtype=np.float64)

    if lower:
        precondition = r > (radius / 2)
    else:
        precondition = (r < (3 * radius / 4)) & (r > (radius / 4))

    in_window = (hue >= fix_point - max_offset) & (hue <= fix_point + max_offset)
    offset = (max_offset - np.abs(fix_point - hue)) / 360.0
    nudged = value - offset if lower else value + offset
    return np.where(precondition & in_window, nudged, value)


def seam_corrected_value(hue: ArrayLike, r: ArrayLike, radius: float) -> np.ndarray:
    """Nominal value with all seam corrections applied in order, capped at 1."""
    hue = np.asarray(hue, dtype=np.float64)
    value = np.full(np.broadcast(hue, np.asarray(r)).shape, defaults.NOMINAL_VALUE)
    for fix_point, lower in defaults.SEAM_FIX_POINTS:
        value = fix_saturation_and_value(value, r, radius, hue, fix_point, lower)
    return np.minimum(value, 1.0)
