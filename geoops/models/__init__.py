"""
Models package for geoops.
Contains Pydantic models for points and polygons plus JSON mapping helpers.
"""

from geoops.models.points import BasePoint

from geoops.models.polygons import (
    BasePolygon,
    BaseMultiPolygon,
)

from geoops.models.serialization import (
    to_json,
    from_json,
)

__all__ = [
    "BasePoint",
    "BasePolygon",
    "BaseMultiPolygon",
    "to_json",
    "from_json",
]
