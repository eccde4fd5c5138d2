"""Errors raised by the wheel engine."""


class WheelError(Exception):
    """Base class for wheel engine errors."""
    pass


class PreconditionError(WheelError):
    """Caller violated a documented precondition."""
    pass


class MergeError(PreconditionError):
    """Merging needs at least two markers."""
    pass


class InvalidRadiusError(PreconditionError, ValueError):
    """Rasterization requested with a non-positive radius."""
    pass


class DuplicateMarkerError(PreconditionError, ValueError):
    """Marker name already used in this picker."""
    pass


class UnknownMarkerError(WheelError, KeyError):
    """Reference to a marker that is not in the registry."""
    pass


class IconFetchError(WheelError):
    """Icon service did not return usable icon data."""
    pass
