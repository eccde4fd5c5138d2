"""Tests for huewheel.wheel: mapping, inverse mapping and rasterization."""

import numpy as np
import pytest

from huewheel.colorspace import Color, hue_temp_to_rgb
from huewheel.errors import InvalidRadiusError
from huewheel.types import HsvResult, PickerContext, Point, TempResult, WheelMode
from huewheel.wheel import (
    WheelCache,
    color_to_coordinate,
    coordinate_to_value,
    paint_background,
    temp_to_coordinate,
    wheel_cache_key,
)


# ---------------------------------------------------------------------------
# Forward mapping, color wheel
# ---------------------------------------------------------------------------

class TestColorForward:

    def test_center_is_unsaturated(self, ctx):
        result = coordinate_to_value(0, 0, ctx)
        assert isinstance(result, HsvResult)
        assert result.saturation == 0.0
        assert result.value == pytest.approx(0.95)
        assert result.color == Color(242, 242, 242)

    @pytest.mark.parametrize("x, y, hue", [
        (0, -100, 10.0),
        (100, 0, 100.0),
        (0, 100, 190.0),
        (-100, 0, 280.0),
    ])
    def test_hue_rotation(self, ctx, x, y, hue):
        assert coordinate_to_value(x, y, ctx).hue == pytest.approx(hue)

    def test_saturation_is_quadratic(self, ctx):
        assert coordinate_to_value(100, 0, ctx).saturation == pytest.approx(0.25)
        assert coordinate_to_value(200, 0, ctx).saturation == pytest.approx(1.0)

    def test_over_render_band(self, ctx):
        rim = coordinate_to_value(202, 0, ctx)
        assert rim is not None
        assert rim.saturation == 1.0
        assert coordinate_to_value(203, 0, ctx) is None

    def test_non_positive_radius(self):
        assert coordinate_to_value(0, 0, PickerContext(radius=0)) is None
        assert coordinate_to_value(0, 0, PickerContext(radius=-10)) is None


# ---------------------------------------------------------------------------
# Forward mapping, temperature wheel
# ---------------------------------------------------------------------------

class TestTempForward:

    def test_top_is_warm_end(self, temp_ctx):
        result = coordinate_to_value(0, -200, temp_ctx)
        assert isinstance(result, TempResult)
        assert result.kelvin == 2000

    def test_bottom_is_cool_end(self, temp_ctx):
        assert coordinate_to_value(0, 200, temp_ctx).kelvin == 6535

    def test_center_is_geometric_mean(self, temp_ctx):
        # sqrt(2000 * 6535) = 3615.2
        assert coordinate_to_value(0, 0, temp_ctx).kelvin == 3615

    def test_horizontal_offset_ignored(self, temp_ctx):
        left = coordinate_to_value(-100, 50, temp_ctx)
        right = coordinate_to_value(100, 50, temp_ctx)
        assert left == right

    def test_rgb_follows_kelvin(self, temp_ctx):
        result = coordinate_to_value(0, 80, temp_ctx)
        expected = Color(*(int(c) for c in hue_temp_to_rgb(result.kelvin)))
        assert result.rgb == expected
        assert result.color == expected

    def test_custom_range(self):
        ctx = PickerContext(radius=100, mode=WheelMode.TEMP, temp_min=2700, temp_max=5000)
        assert coordinate_to_value(0, -100, ctx).kelvin == 2700
        assert coordinate_to_value(0, 100, ctx).kelvin == 5000


# ---------------------------------------------------------------------------
# Inverse mapping
# ---------------------------------------------------------------------------

class TestInverse:

    def test_temperature_round_trip(self, temp_ctx):
        for y in np.linspace(-200, 200, 81):
            kelvin = coordinate_to_value(0, y, temp_ctx).kelvin
            point = temp_to_coordinate(kelvin, temp_ctx)
            assert abs(point.y - y) <= 1.0
            assert point.x == 0.0

    def test_color_round_trip(self, ctx):
        tolerance = 0.005 * ctx.radius
        for x in np.linspace(-200, 200, 21):
            for y in np.linspace(-200, 200, 21):
                if np.hypot(x, y) > ctx.radius:
                    continue
                result = coordinate_to_value(x, y, ctx)
                point = color_to_coordinate(result.hue, result.saturation, ctx)
                assert point.distance(Point(x, y)) <= tolerance

    def test_color_saturation_clamped(self, ctx):
        point = color_to_coordinate(100, 4.0, ctx)
        assert point.distance(Point(0, 0)) == pytest.approx(ctx.radius)

    def test_temp_out_of_range_clamps(self, temp_ctx):
        assert temp_to_coordinate(10000, temp_ctx).y == pytest.approx(200)
        assert temp_to_coordinate(100, temp_ctx).y == pytest.approx(-200)

    def test_temp_keeps_hint_x(self, temp_ctx):
        point = temp_to_coordinate(3615, temp_ctx, current=Point(150, 0))
        assert point.x == 150

    def test_temp_hint_x_clamped_to_chord(self, temp_ctx):
        point = temp_to_coordinate(3615, temp_ctx, current=Point(-250, 0))
        assert point.x == pytest.approx(-200, abs=0.01)
        at_rim = temp_to_coordinate(6535, temp_ctx, current=Point(150, 0))
        assert at_rim.x == pytest.approx(0.0, abs=1e-6)


# ---------------------------------------------------------------------------
# Rasterization
# ---------------------------------------------------------------------------

class TestPaintBackground:

    @pytest.fixture
    def small(self):
        return PickerContext(radius=50)

    def test_shape_and_dtype(self, small):
        image = paint_background(small)
        assert image.pixels.shape == (100, 100, 4)
        assert image.pixels.dtype == np.uint8
        assert (image.width, image.height) == (100, 100)
        assert image.radius == 50
        assert image.mode is WheelMode.COLOR

    def test_outside_is_transparent(self, small):
        pixels = paint_background(small).pixels
        np.testing.assert_array_equal(pixels[0, 0], [0, 0, 0, 0])

    def test_center_and_rim_are_opaque(self, small):
        pixels = paint_background(small).pixels
        np.testing.assert_array_equal(pixels[50, 50], [242, 242, 242, 255])
        assert pixels[50, 0, 3] == 255

    def test_buffer_layout_matches_forward_mapping(self, small):
        x, y, radius = 10, -20, 50
        buffer = paint_background(small).to_bytes()
        idx = ((x + radius) + (y + radius) * 2 * radius) * 4
        expected = coordinate_to_value(x, y, small).color.as_tuple()
        np.testing.assert_allclose(list(buffer[idx:idx + 3]), expected, atol=1)
        assert buffer[idx + 3] == 255

    def test_temp_wheel(self):
        image = paint_background(PickerContext(radius=50, mode=WheelMode.TEMP))
        np.testing.assert_array_equal(image.pixels[0, 50], [255, 180, 55, 255])
        # Rows are uniform inside the circle
        row = image.pixels[60, 20:80, :3]
        assert np.all(row == row[0])

    @pytest.mark.parametrize("radius", [0, -5, 0.5])
    def test_invalid_radius(self, radius):
        with pytest.raises(InvalidRadiusError):
            paint_background(PickerContext(radius=radius))

    def test_invalid_radius_is_value_error(self):
        with pytest.raises(ValueError):
            paint_background(PickerContext(radius=0))

    def test_image_export(self, small):
        image = paint_background(small)
        pil = image.to_image()
        assert pil.size == (100, 100)
        assert pil.mode == "RGBA"
        png = image.to_png_bytes()
        assert png.startswith(b"\x89PNG")


# ---------------------------------------------------------------------------
# Background cache
# ---------------------------------------------------------------------------

class TestWheelCache:

    def test_hit_returns_same_image(self):
        cache = WheelCache()
        ctx = PickerContext(radius=20)
        first = cache.get(ctx)
        assert cache.get(ctx) is first
        assert len(cache) == 1
        assert ctx in cache

    def test_modes_cached_separately(self):
        cache = WheelCache()
        color = cache.get(PickerContext(radius=20))
        temp = cache.get(PickerContext(radius=20, mode=WheelMode.TEMP))
        assert color is not temp
        assert len(cache) == 2

    def test_lru_eviction(self):
        cache = WheelCache(max_entries=1)
        a = PickerContext(radius=20)
        b = PickerContext(radius=21)
        cache.get(a)
        cache.get(b)
        assert len(cache) == 1
        assert a not in cache
        assert b in cache

    def test_temp_range_only_keys_temp_mode(self):
        assert wheel_cache_key(PickerContext(radius=20, temp_min=2500)) == wheel_cache_key(
            PickerContext(radius=20)
        )
        assert wheel_cache_key(PickerContext(radius=20, mode=WheelMode.TEMP, temp_min=2500)) != wheel_cache_key(
            PickerContext(radius=20, mode=WheelMode.TEMP)
        )

    def test_clear(self):
        cache = WheelCache()
        cache.get(PickerContext(radius=20))
        cache.clear()
        assert len(cache) == 0
