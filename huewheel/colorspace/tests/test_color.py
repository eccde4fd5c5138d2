"""Tests for the Color value type."""

import math

import pytest

from huewheel.colorspace import BLACK, WHITE, Color


class TestConstruction:

    def test_channels_clamped_and_rounded(self):
        assert Color(300, -5, 12.5).as_tuple() == (255, 0, 13)

    def test_nan_channel_becomes_zero(self):
        assert Color(math.nan, 10, 20).as_tuple() == (0, 10, 20)

    def test_frozen(self):
        with pytest.raises(AttributeError):
            WHITE.red = 0

    def test_str_and_hex(self):
        color = Color(255, 128, 0)
        assert str(color) == "rgb(255,128,0)"
        assert color.to_hex() == "#ff8000"


class TestParse:

    @pytest.mark.parametrize("text, rgb", [
        ("#fff", (255, 255, 255)),
        ("#f80a", (255, 136, 0)),
        ("#ff8000", (255, 128, 0)),
        ("#FF800080", (255, 128, 0)),
        ("rgb(1, 2, 3)", (1, 2, 3)),
        ("rgba(10,20,30,0.5)", (10, 20, 30)),
        ("  #000000 ", (0, 0, 0)),
    ])
    def test_valid(self, text, rgb):
        assert Color.parse(text).as_tuple() == rgb

    @pytest.mark.parametrize("text", ["#12", "#ggg", "hsl(10, 20%, 30%)", "rgb(1,2)", "red"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            Color.parse(text)


class TestHsv:

    def test_from_hsv(self):
        assert Color.from_hsv(0, 1, 1) == Color(255, 0, 0)

    def test_to_hsv(self):
        h, s, v = Color(0, 0, 255).to_hsv()
        assert (h, s, v) == pytest.approx((240.0, 1.0, 1.0))
        assert Color(0, 0, 255).hue == pytest.approx(240.0)
        assert Color(0, 0, 255).saturation == pytest.approx(1.0)


class TestForeground:

    def test_luminance(self):
        assert WHITE.luminance == pytest.approx(255.0)
        assert BLACK.luminance == 0.0

    def test_light_on_dark_and_dark_on_light(self):
        assert BLACK.foreground("light", "dark") == "light"
        assert WHITE.foreground("light", "dark") == "dark"

    def test_offset_moves_breaking_point(self):
        gray = Color(200, 200, 200)
        assert gray.foreground("light", "dark") == "dark"
        assert gray.foreground("light", "dark", offset=-25) == "light"
