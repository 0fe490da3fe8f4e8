"""
Polygon models for geoops.

A polygon is a list of closed rings: ring 0 is the outer boundary and any
further rings are holes. The geo-indexing service and single-ring point
lists cannot carry holes, so converting a hole-bearing polygon to those
forms raises UnsupportedShapeError instead of dropping the holes.
"""

from typing import Optional

from pydantic import BaseModel, Field
from shapely.geometry import MultiPolygon, Polygon

from geoops.errors import InvalidArgumentError, UnsupportedShapeError, require
from geoops.geometry.factory import DEFAULT_FACTORY
from geoops.geometry.formats import geojson_to_polygon, write_geojson
from geoops.models.points import BasePoint

# (lon, lat) pair as used by the geo-indexing service
EsCoordinate = tuple[float, float]


def _ring_from_pairs(pairs) -> list[BasePoint]:
    return [BasePoint(lon=pair[0], lat=pair[1]) for pair in pairs]


def _rings_from_polygon(polygon: Polygon) -> list[list[BasePoint]]:
    rings = [_ring_from_pairs(polygon.exterior.coords)]
    for interior in polygon.interiors:
        rings.append(_ring_from_pairs(interior.coords))
    return rings


def _single_ring(rings: list[list[BasePoint]]) -> list[BasePoint]:
    if not rings:
        raise InvalidArgumentError("polygon has no rings")
    if len(rings) > 1:
        raise UnsupportedShapeError()
    return rings[0]


class BasePolygon(BaseModel):
    """A single polygon that may carry holes."""
    base_points: list[list[BasePoint]] = Field(
        default_factory=list,
        description="Closed rings; the first is the outer boundary, the rest are holes",
    )

    @classmethod
    def from_triple_list(cls, triple_list: Optional[list]) -> Optional["BasePolygon"]:
        """Build from nested ``[[[lon, lat], ...], ...]`` lists."""
        if triple_list is None:
            return None
        return cls(base_points=[_ring_from_pairs(ring) for ring in triple_list])

    @classmethod
    def from_es_coordinates(cls, coordinates: Optional[list[EsCoordinate]]) -> Optional["BasePolygon"]:
        if coordinates is None:
            return None
        return cls(base_points=[_ring_from_pairs(coordinates)])

    @classmethod
    def from_polygon(cls, polygon: Polygon) -> "BasePolygon":
        """Convert a shapely Polygon, keeping its holes."""
        require(polygon, "polygon")
        return cls(base_points=_rings_from_polygon(polygon))

    @classmethod
    def from_geojson(cls, geojson: str) -> Optional["BasePolygon"]:
        """Parse GeoJSON; returns None unless it holds a Polygon."""
        polygon = geojson_to_polygon(geojson)
        if polygon is None:
            return None
        return cls.from_polygon(polygon)

    def to_triple_list(self) -> list[list[list[float]]]:
        return [[[p.lon, p.lat] for p in ring] for ring in self.base_points]

    def to_es_coordinates(self) -> list[EsCoordinate]:
        """Single ring of (lon, lat) pairs; raises UnsupportedShapeError on holes."""
        return [(p.lon, p.lat) for p in _single_ring(self.base_points)]

    def to_polygon(self) -> Optional[Polygon]:
        """
        Convert to a hole-free shapely Polygon.

        Returns:
            Polygon, or None if the ring is not a valid linear ring

        Raises:
            UnsupportedShapeError: If the polygon has holes
        """
        return DEFAULT_FACTORY.from_point_list(_single_ring(self.base_points))

    def to_geojson(self) -> str:
        return write_geojson(self.to_polygon())


class BaseMultiPolygon(BaseModel):
    """Several polygons, each a list of closed rings as in BasePolygon."""
    base_points: list[list[list[BasePoint]]] = Field(
        default_factory=list,
        description="One ring list per component polygon",
    )

    @classmethod
    def from_quadra_list(cls, quadra_list: Optional[list]) -> Optional["BaseMultiPolygon"]:
        """Build from nested ``[[[[lon, lat], ...], ...], ...]`` lists."""
        if quadra_list is None:
            return None
        return cls(base_points=[
            [_ring_from_pairs(ring) for ring in polygon] for polygon in quadra_list
        ])

    @classmethod
    def from_es_coordinates(
        cls, coordinates: Optional[list[list[EsCoordinate]]]
    ) -> Optional["BaseMultiPolygon"]:
        if coordinates is None:
            return None
        return cls(base_points=[[_ring_from_pairs(ring)] for ring in coordinates])

    @classmethod
    def from_multi_polygon(cls, multi_polygon: MultiPolygon) -> "BaseMultiPolygon":
        require(multi_polygon, "multi_polygon")
        return cls(base_points=[_rings_from_polygon(polygon) for polygon in multi_polygon.geoms])

    @classmethod
    def from_base_polygon(cls, polygon: Optional[BasePolygon]) -> Optional["BaseMultiPolygon"]:
        if polygon is None:
            return None
        return cls(base_points=[polygon.base_points])

    def to_quadra_list(self) -> list:
        return [
            [[[p.lon, p.lat] for p in ring] for ring in polygon]
            for polygon in self.base_points
        ]

    def to_es_coordinates(self) -> list[list[EsCoordinate]]:
        """One ring of (lon, lat) pairs per component; raises UnsupportedShapeError on holes."""
        return [
            [(p.lon, p.lat) for p in _single_ring(polygon)]
            for polygon in self.base_points
        ]

    def to_multi_polygon(self) -> Optional[MultiPolygon]:
        """Convert to a shapely MultiPolygon; raises UnsupportedShapeError on holes."""
        rings = [_single_ring(polygon) for polygon in self.base_points]
        return DEFAULT_FACTORY.from_multi_point_list(rings)
