"""Central place for huewheel default settings and calibration constants."""

# Wheel geometry
OVER_RENDER: int = 2  # px drawn past the rim to avoid a hard edge
DEFAULT_RENDER_SIZE: int = 600  # background raster is 600x600 (radius 300)
DEFAULT_WIDTH: int = 400
DEFAULT_HEIGHT: int = 400

# Color wheel
HUE_ROTATION_DEG: float = 80.0
NOMINAL_VALUE: float = 0.95
# Seam correction: (fix point in degrees, lower value?) applied in this order.
# Hand-tuned for visual parity with the Hue app, not derived from a color model.
SEAM_FIX_POINTS: tuple[tuple[float, bool], ...] = (
    (60.0, True),
    (180.0, True),
    (240.0, False),
    (300.0, True),
)
SEAM_MAX_OFFSET: float = 5.0

# Temperature wheel
DEFAULT_TEMP_MIN: int = 2000
DEFAULT_TEMP_MAX: int = 6535
TEMP_STOPS: tuple[tuple[int, tuple[int, int, int]], ...] = (
    (2000, (255, 180, 55)),   # warm
    (5300, (255, 255, 255)),  # white
    (6500, (190, 228, 243)),  # cool
)

# Background cache
WHEEL_CACHE_VERSION: int = 2  # bump when the mapping functions change
DEFAULT_WHEEL_CACHE_SIZE: int = 8

# Marker interaction
MERGE_RANGE_FACTOR: float = 0.1  # merge distance as a fraction of radius
PULSE_SCALE: float = 1.05
BIG_PULSE_SCALE: float = 1.15
PULSE_DURATION_MS: int = 150
HAPTIC_DURATION_MS: int = 20

# Marker glyphs (width, height)
ACTIVE_MARKER_SIZE: tuple[int, int] = (48, 60)
INACTIVE_MARKER_SIZE: tuple[int, int] = (12, 12)

# Marker colors / foregrounds
LUMINANCE_BREAKING_POINT: float = 192.0
TEMP_LUMINANCE_OFFSET: float = -25.0
LIGHT_FOREGROUND: str = "#ffffff"
DARK_FOREGROUND: str = "rgba(0,0,0,0.7)"

# Icons
DEFAULT_ICON: str = "default"
DEFAULT_ICON_PATH: str = "M12,2A10,10 0 0,0 2,12A10,10 0 0,0 12,22A10,10 0 0,0 22,12A10,10 0 0,0 12,2Z"
DEFAULT_ICON_TIMEOUT: float = 5.0
DEFAULT_ICON_WORKERS: int = 2
