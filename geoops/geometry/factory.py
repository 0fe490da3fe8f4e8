"""
Geometry construction under the shared precision model.

Every new geometry built from raw coordinates goes through a GeometryFactory,
which snaps coordinates to the fixed-point grid of its PrecisionPolicy.
"""

import logging
from typing import Iterable, Optional, Sequence

import numpy as np
import shapely
from shapely.errors import ShapelyError
from shapely.geometry import (
    GeometryCollection,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from shapely.geometry.base import BaseGeometry

from geoops.config import DEFAULT_POLICY, PrecisionPolicy
from geoops.errors import require

logger = logging.getLogger(__name__)

# Multi-geometry type built from a homogeneous list of simple geometries
_MULTI_TYPES = {
    "Point": MultiPoint,
    "LineString": MultiLineString,
    "Polygon": MultiPolygon,
}


def _lon_lat(point) -> tuple[float, float]:
    """Coordinates of a BasePoint-like (lon/lat) or shapely Point (x/y)."""
    if isinstance(point, Point):
        return point.x, point.y
    return point.lon, point.lat


class GeometryFactory:
    """
    Builds shapely geometries on the fixed-point grid of a precision policy.

    The factory holds no mutable state and may be shared freely.
    """

    def __init__(self, policy: PrecisionPolicy = DEFAULT_POLICY):
        self._policy = policy

    @property
    def policy(self) -> PrecisionPolicy:
        return self._policy

    def make_precise(self, geometry: Optional[BaseGeometry]) -> Optional[BaseGeometry]:
        """
        Snap all coordinates of a geometry to the precision grid.

        Uses correctly rounded decimal rounding, so applying it twice gives
        the same coordinates as applying it once. Only x and y are kept: a Z
        coordinate on the input is dropped, since geoops works in 2-D.

        Args:
            geometry: Input geometry (None and empty geometries pass through)

        Returns:
            A new geometry with rounded coordinates
        """
        if geometry is None or geometry.is_empty:
            return geometry
        decimals = self._policy.decimals

        def snap(coords: np.ndarray) -> np.ndarray:
            snapped = np.empty_like(coords)
            for index, value in np.ndenumerate(coords):
                snapped[index] = round(float(value), decimals)
            return snapped

        return shapely.transform(geometry, snap)

    def _round(self, value: float) -> float:
        return round(float(value), self._policy.decimals)

    def _ring(self, coords: Iterable[Sequence[float]]) -> list[tuple[float, float]]:
        return [(self._round(c[0]), self._round(c[1])) for c in coords]

    def create_point(self, lon: float, lat: float) -> Point:
        """Create a point from longitude and latitude."""
        return Point(self._round(lon), self._round(lat))

    def to_point(self, lat: float, lon: float) -> Point:
        """Create a point from latitude and longitude (note the argument order)."""
        return self.create_point(lon, lat)

    def create_ring_polygon(self, coords: Iterable[Sequence[float]]) -> Polygon:
        """Create a hole-free polygon from one ring of (lon, lat) pairs."""
        return Polygon(self._ring(coords))

    def create_polygon(self, coordinates: Optional[list]) -> Optional[Polygon]:
        """
        Create a polygon from nested coordinate lists.

        ``coordinates[0]`` is the outer ring, later rings are holes; each ring
        is a list of ``[lon, lat]`` pairs.

        Args:
            coordinates: List of rings

        Returns:
            Polygon, or None if no rings were given
        """
        if not coordinates:
            logger.warning("create_polygon coordinates is empty")
            return None
        shell = self._ring(coordinates[0])
        holes = [self._ring(ring) for ring in coordinates[1:]]
        return Polygon(shell, holes)

    def create_multi_polygon(self, coordinates: Optional[list]) -> Optional[MultiPolygon]:
        """Create a multipolygon from a list of polygon coordinate lists."""
        if not coordinates:
            logger.warning("create_multi_polygon coordinates is empty")
            return None
        return MultiPolygon([self.create_polygon(polygon) for polygon in coordinates])

    def create_multi_point(self, points: Optional[list]) -> Optional[MultiPoint]:
        """Create a multipoint from BasePoints or shapely Points."""
        if not points:
            logger.warning("create_multi_point points is empty")
            return None
        return MultiPoint([self.create_point(*_lon_lat(p)) for p in points])

    def create_collection(self, *geometries: BaseGeometry) -> GeometryCollection:
        return GeometryCollection(list(geometries))

    def build_geometry(self, geometries: Iterable[BaseGeometry]) -> BaseGeometry:
        """
        Build the most specific geometry that holds all inputs.

        A single input is returned unchanged. Inputs that are all Points,
        LineStrings or Polygons become the matching Multi type. Anything
        else becomes a GeometryCollection.
        """
        geometries = list(geometries)
        if not geometries:
            return GeometryCollection()
        if len(geometries) == 1:
            return geometries[0]
        kinds = {geometry.geom_type for geometry in geometries}
        if len(kinds) == 1:
            multi_type = _MULTI_TYPES.get(kinds.pop())
            if multi_type is not None:
                return multi_type(geometries)
        return GeometryCollection(geometries)

    def from_point_list(self, point_list: list) -> Optional[Polygon]:
        """
        Convert a list of points (one ring) into a polygon.

        Returns:
            Polygon, or None if the points do not form a valid ring
        """
        require(point_list, "point_list")
        try:
            return self.create_ring_polygon(_lon_lat(p) for p in point_list)
        except (ValueError, ShapelyError):
            logger.error("from_point_list error, input=%r", point_list, exc_info=True)
            return None

    def from_multi_point_list(self, multi_point_list: list) -> Optional[MultiPolygon]:
        """Convert several point rings into a multipolygon, or None on failure."""
        require(multi_point_list, "multi_point_list")
        try:
            polygons = [
                self.create_ring_polygon(_lon_lat(p) for p in point_list)
                for point_list in multi_point_list
            ]
            return MultiPolygon(polygons)
        except (ValueError, ShapelyError):
            logger.error("from_multi_point_list error, input=%r", multi_point_list, exc_info=True)
            return None


DEFAULT_FACTORY = GeometryFactory(DEFAULT_POLICY)
