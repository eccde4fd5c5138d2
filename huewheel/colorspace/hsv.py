"""RGB <-> HSV conversions.

Functions accept Python scalars or numpy arrays of any (matching) shape.
Scalar inputs come back as 0-d arrays; wrap in ``float()``/``int()`` as needed.

Reference: https://en.wikipedia.org/wiki/HSL_and_HSV#From_HSV
"""

import numpy as np
from numpy.typing import ArrayLike


def round_half_up(x: ArrayLike) -> np.ndarray:
    """Round .5 away from zero for positive values (numpy rounds half to even)."""
    return np.floor(np.asarray(x, dtype=np.float64) + 0.5)


def rgb2hsv(r: ArrayLike, g: ArrayLike, b: ArrayLike) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """RGB (0-255) -> HSV.

    Returns:
        (hue, saturation, value) with hue in degrees [0, 360) and
        saturation, value in [0, 1]
    """
    r = np.clip(np.asarray(r, dtype=np.float64), 0, 255) / 255.0
    g = np.clip(np.asarray(g, dtype=np.float64), 0, 255) / 255.0
    b = np.clip(np.asarray(b, dtype=np.float64), 0, 255) / 255.0

    mx = np.maximum(np.maximum(r, g), b)
    mn = np.minimum(np.minimum(r, g), b)
    delta = mx - mn

    # Avoid division by zero for grays; hue is 0 there anyway
    safe = np.where(delta > 0, delta, 1.0)
    h_r = ((g - b) / safe) % 6
    h_g = (b - r) / safe + 2
    h_b = (r - g) / safe + 4

    hue = np.where(mx == r, h_r, np.where(mx == g, h_g, h_b)) * 60.0
    hue = np.where(delta > 0, hue, 0.0) % 360.0

    saturation = np.where(mx > 0, delta / np.where(mx > 0, mx, 1.0), 0.0)
    return hue, saturation, mx


def hsv2rgb(hue: ArrayLike, saturation: ArrayLike, value: ArrayLike) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """HSV -> RGB.

    Args:
        hue: Degrees, wrapped to [0, 360)
        saturation: [0, 1], clamped
        value: [0, 1], clamped

    Returns:
        (r, g, b) rounded half-up and clamped to [0, 255] (float arrays)
    """
    hue = np.asarray(hue, dtype=np.float64) % 360.0
    saturation = np.clip(np.asarray(saturation, dtype=np.float64), 0.0, 1.0)
    value = np.clip(np.asarray(value, dtype=np.float64), 0.0, 1.0)

    chroma = value * saturation
    hue1 = hue / 60.0
    x = chroma * (1 - np.abs((hue1 % 2) - 1))
    zero = np.zeros_like(chroma)

    sector = np.clip(np.floor(hue1), 0, 5).astype(np.int64)
    r1 = np.choose(sector, [chroma, x, zero, zero, x, chroma])
    g1 = np.choose(sector, [x, chroma, chroma, x, zero, zero])
    b1 = np.choose(sector, [zero, zero, x, chroma, chroma, x])

    m = value - chroma
    r = np.clip(round_half_up((r1 + m) * 255), 0, 255)
    g = np.clip(round_half_up((g1 + m) * 255), 0, 255)
    b = np.clip(round_half_up((b1 + m) * 255), 0, 255)
    return r, g, b
