"""
geoops - robust 2-D geometry operations for location and mapping services.

Format conversion (WKT, WKB, GeoJSON, nested coordinate lists, H3 cells),
best-effort boolean operations that survive GEOS topology exceptions,
tolerance-based predicates and naive spatial clustering.
"""

import logging

from geoops.config import DEFAULT_POLICY, PrecisionPolicy
from geoops.errors import (
    CoordinateRangeError,
    GeoError,
    InvalidArgumentError,
    KernelOperationError,
    NullInputError,
    ParseError,
    UnsupportedShapeError,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_POLICY",
    "PrecisionPolicy",
    "GeoError",
    "NullInputError",
    "InvalidArgumentError",
    "ParseError",
    "UnsupportedShapeError",
    "CoordinateRangeError",
    "KernelOperationError",
]
