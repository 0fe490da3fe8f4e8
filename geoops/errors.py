"""
Error taxonomy for geoops.

Read paths recover parse failures into ``None`` and only raise ``ParseError``
when called with ``strict=True``. Structural preconditions fail fast.
Kernel failures are retried once, then raised as ``KernelOperationError``.
"""


class GeoError(Exception):
    """Base class for all geoops errors."""


class NullInputError(GeoError, TypeError):
    """Raised when a required argument is None."""


class InvalidArgumentError(GeoError, ValueError):
    """Raised when an argument is present but unusable."""


class ParseError(GeoError, ValueError):
    """Raised when WKT, WKB or GeoJSON input cannot be parsed."""


class UnsupportedShapeError(GeoError, ValueError):
    """Raised when a shape cannot be represented in the requested format."""

    def __init__(self, message: str = "holes unsupported"):
        super().__init__(message)


class CoordinateRangeError(GeoError, ValueError):
    """Raised when a latitude or longitude is outside its valid range."""


class KernelOperationError(GeoError):
    """Raised when a boolean operation fails even after normalization."""


def require(value, name: str):
    """Return ``value`` or raise NullInputError when it is None."""
    if value is None:
        raise NullInputError(f"{name} must not be None")
    return value
