"""Polar transforms and scaling helpers used by the wheel mapping.

Angles follow the wheel's own convention: ``rad2deg`` maps [-pi, pi] onto
[0, 360] by shifting half a turn, and ``deg2rad`` is its exact inverse.
"""

from math import pi

import numpy as np
from numpy.typing import ArrayLike


def xy2polar(x: ArrayLike, y: ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    """(x, y) -> (distance from origin, angle in radians [-pi, pi])."""
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    return np.hypot(x, y), np.arctan2(y, x)


def polar2xy(r: ArrayLike, phi: ArrayLike) -> tuple[np.ndarray, np.ndarray]:
    r = np.asarray(r, dtype=np.float64)
    phi = np.asarray(phi, dtype=np.float64)
    return r * np.cos(phi), r * np.sin(phi)


def rad2deg(phi: ArrayLike) -> np.ndarray:
    """Radians in [-pi, pi] -> degrees in [0, 360]."""
    return ((np.asarray(phi, dtype=np.float64) + pi) / (2 * pi)) * 360.0


def deg2rad(deg: ArrayLike) -> np.ndarray:
    """Degrees in [0, 360] -> radians in [-pi, pi]."""
    return (np.asarray(deg, dtype=np.float64) / 360.0) * 2 * pi - pi


def linear_scale(t: ArrayLike, lo: float, hi: float) -> np.ndarray:
    """Map normalized ``t`` onto [lo, hi] linearly."""
    return (hi - lo) * np.asarray(t, dtype=np.float64) + lo


def logarithmic_scale(t: ArrayLike, lo: float, hi: float) -> np.ndarray:
    """Map normalized ``t`` onto [lo, hi] so equal steps give equal ratios.

    Used for color temperature, where perceived change is logarithmic.
    """
    return lo * np.power(hi / lo, np.asarray(t, dtype=np.float64))


def inverse_logarithmic_scale(value: ArrayLike, lo: float, hi: float) -> np.ndarray:
    """Inverse of :func:`logarithmic_scale`. Returns 0.5 for a degenerate range."""
    value = np.asarray(value, dtype=np.float64)
    if hi == lo:
        return np.full_like(value, 0.5)
    return np.log(value / lo) / np.log(hi / lo)
