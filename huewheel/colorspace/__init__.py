"""Color math for the wheel: HSV, polar transforms, temperature and seam fixes.

This module provides:
- RGB <-> HSV conversions
- Polar helpers and linear/logarithmic scaling
- Kelvin -> RGB for the temperature wheel
- Seam correction constants for the color wheel
- Color: immutable 8-bit RGB value

All numeric functions accept scalars or numpy arrays.
"""

from .hsv import rgb2hsv, hsv2rgb, round_half_up
from .polar import (
    xy2polar,
    polar2xy,
    rad2deg,
    deg2rad,
    linear_scale,
    logarithmic_scale,
    inverse_logarithmic_scale,
)
from .temperature import hue_temp_to_rgb
from .seam import fix_saturation_and_value, seam_corrected_value
from .color import Color, BLACK, WHITE

__all__ = [
    # Value type
    'Color',
    'BLACK',
    'WHITE',
    # HSV
    'rgb2hsv',
    'hsv2rgb',
    'round_half_up',
    # Polar / scaling
    'xy2polar',
    'polar2xy',
    'rad2deg',
    'deg2rad',
    'linear_scale',
    'logarithmic_scale',
    'inverse_logarithmic_scale',
    # Temperature
    'hue_temp_to_rgb',
    # Seam correction
    'fix_saturation_and_value',
    'seam_corrected_value',
]
