"""Immutable 8-bit RGB color value."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from huewheel import defaults
from .hsv import hsv2rgb, rgb2hsv

_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,?\s*(\d*(?:\.\d+)?)\s*\)$"
)


def _channel(value: float) -> int:
    if value != value:  # NaN
        return 0
    return int(min(max(math.floor(value + 0.5), 0), 255))


@dataclass(frozen=True)
class Color:
    """RGB color with integer channels clamped to [0, 255]."""

    red: int = 0
    green: int = 0
    blue: int = 0

    def __post_init__(self):
        object.__setattr__(self, "red", _channel(self.red))
        object.__setattr__(self, "green", _channel(self.green))
        object.__setattr__(self, "blue", _channel(self.blue))

    @classmethod
    def parse(cls, text: str) -> Color:
        """Parse ``#rgb``, ``#rrggbb`` (optionally with alpha) or ``rgb(...)``/``rgba(...)``.

        Alpha is accepted and dropped.

        Raises:
            ValueError: If the format is not recognized
        """
        text = text.strip()
        if text.startswith("#"):
            digits = text[1:]
            if len(digits) not in (3, 4, 6, 8):
                raise ValueError(
                    "Hex color format should have 3/6 letters or 4/8 letters for transparency."
                )
            try:
                values = [int(ch, 16) for ch in digits]
            except ValueError:
                raise ValueError(f"Hex color format contains non hex characters: {text!r}") from None
            if len(digits) in (3, 4):
                return cls(values[0] * 17, values[1] * 17, values[2] * 17)
            return cls(
                values[0] * 16 + values[1],
                values[2] * 16 + values[3],
                values[4] * 16 + values[5],
            )

        if text.startswith("rgb"):
            match = _RGB_RE.match(text)
            if not match:
                raise ValueError(f"Unrecognized color format rgb[a](...): {text}")
            return cls(int(match.group(1)), int(match.group(2)), int(match.group(3)))

        raise ValueError(f"Unrecognized color format: {text}")

    @classmethod
    def from_hsv(cls, hue: float, saturation: float, value: float) -> Color:
        r, g, b = hsv2rgb(hue, saturation, value)
        return cls(int(r), int(g), int(b))

    def to_hsv(self) -> tuple[float, float, float]:
        """Return (hue degrees [0, 360), saturation [0, 1], value [0, 1])."""
        h, s, v = rgb2hsv(self.red, self.green, self.blue)
        return float(h), float(s), float(v)

    @property
    def hue(self) -> float:
        return self.to_hsv()[0]

    @property
    def saturation(self) -> float:
        return self.to_hsv()[1]

    @property
    def luminance(self) -> float:
        """Relative luminance on the 0-255 scale."""
        return self.red * 0.299 + self.green * 0.587 + self.blue * 0.114

    def foreground(self, light, dark, offset: float = 0.0):
        """Pick ``light`` or ``dark`` content to draw on top of this color.

        A positive ``offset`` switches to ``dark`` sooner.
        """
        if self.luminance + offset < defaults.LUMINANCE_BREAKING_POINT:
            return light
        return dark

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def to_hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def __str__(self) -> str:
        return f"rgb({self.red},{self.green},{self.blue})"


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
