"""Color temperature (Kelvin) to display RGB.

Piecewise-linear interpolation between three hand-picked stops, matching how
the Hue app paints its temperature wheel rather than a black-body curve.
"""

import numpy as np
from numpy.typing import ArrayLike

from huewheel import defaults
from .hsv import round_half_up

_STOP_KELVIN = np.array([k for k, _ in defaults.TEMP_STOPS], dtype=np.float64)
_STOP_RGB = np.array([rgb for _, rgb in defaults.TEMP_STOPS], dtype=np.float64)


def hue_temp_to_rgb(kelvin: ArrayLike) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Kelvin -> (r, g, b) in [0, 255].

    Values outside the first/last stop clamp to the end colors.
    """
    kelvin = np.clip(np.asarray(kelvin, dtype=np.float64), _STOP_KELVIN[0], _STOP_KELVIN[-1])
    r = round_half_up(np.interp(kelvin, _STOP_KELVIN, _STOP_RGB[:, 0]))
    g = round_half_up(np.interp(kelvin, _STOP_KELVIN, _STOP_RGB[:, 1]))
    b = round_half_up(np.interp(kelvin, _STOP_KELVIN, _STOP_RGB[:, 2]))
    return r, g, b
