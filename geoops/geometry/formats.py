"""
Format bridge between shapely geometries and external representations.

WKT round-trips at full precision. GeoJSON output is rounded to at most
``geojson_decimals`` digits and never carries a CRS member. Stored WKB carries
a 4-byte spatial-reference-id prefix ahead of a 2-D little-endian body.

Parse failures are logged with the offending input and turned into ``None``;
pass ``strict=True`` to get a ParseError instead.
"""

import json
import logging
from typing import Any, Optional

import shapely
from shapely.errors import ShapelyError
from shapely.geometry import Point, Polygon, mapping, shape
from shapely.geometry.base import BaseGeometry

from geoops.config import DEFAULT_POLICY, PrecisionPolicy
from geoops.errors import ParseError, require
from geoops.geometry.factory import DEFAULT_FACTORY, GeometryFactory
from geoops.geometry.wkb import get_wkb_reader, get_wkb_writer

logger = logging.getLogger(__name__)


def _parse_failed(kind: str, raw: Any, exc: Exception, strict: bool, exc_info: bool = False) -> None:
    if strict:
        raise ParseError(f"{kind} parse error: {exc}") from exc
    logger.error("%s parse error, input=%r", kind, raw, exc_info=exc_info)
    return None


# -----------------------------------------------------------------------------
# WKT
# -----------------------------------------------------------------------------

def parse_wkt(
    text: str,
    strict: bool = False,
    factory: GeometryFactory = DEFAULT_FACTORY,
) -> Optional[BaseGeometry]:
    """
    Parse WKT into a geometry on the factory's precision grid.

    Args:
        text: Well-known text
        strict: Raise ParseError instead of returning None on bad input
        factory: Factory whose precision model is applied

    Returns:
        Geometry, or None if the text could not be parsed
    """
    require(text, "text")
    try:
        return factory.make_precise(shapely.from_wkt(text))
    except (ShapelyError, ValueError, TypeError) as exc:
        return _parse_failed("wkt", text, exc, strict)


def write_wkt(geometry: BaseGeometry) -> str:
    """Write a geometry as WKT without losing precision."""
    require(geometry, "geometry")
    return shapely.to_wkt(geometry, rounding_precision=-1, trim=True)


# -----------------------------------------------------------------------------
# GeoJSON
# -----------------------------------------------------------------------------

def _round_coordinates(value: Any, decimals: int) -> Any:
    if isinstance(value, (list, tuple)):
        return [_round_coordinates(item, decimals) for item in value]
    return round(float(value), decimals)


def _round_geojson(geo: dict, decimals: int) -> dict:
    kind = geo["type"]
    if kind == "GeometryCollection":
        return {
            "type": "GeometryCollection",
            "geometries": [_round_geojson(item, decimals) for item in geo["geometries"]],
        }
    # GeoJSON has no ring type
    if kind == "LinearRing":
        kind = "LineString"
    return {
        "type": kind,
        "coordinates": _round_coordinates(geo["coordinates"], decimals),
    }


def parse_geojson(
    text: str,
    strict: bool = False,
    factory: GeometryFactory = DEFAULT_FACTORY,
) -> Optional[BaseGeometry]:
    """
    Parse a GeoJSON geometry object.

    No precision is lost beyond the factory's precision model.

    Returns:
        Geometry, or None if the text is not a GeoJSON geometry
    """
    require(text, "text")
    try:
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"expected a GeoJSON object, got {type(data).__name__}")
        return factory.make_precise(shape(data))
    except (ShapelyError, ValueError, TypeError, KeyError, AttributeError) as exc:
        return _parse_failed("geojson", text, exc, strict)


def write_geojson(geometry: BaseGeometry, policy: PrecisionPolicy = DEFAULT_POLICY) -> str:
    """
    Write a geometry as GeoJSON text.

    Coordinates are rounded to ``policy.geojson_decimals`` digits (7 by
    default), so the output is lossy. No CRS member is emitted.
    """
    require(geometry, "geometry")
    return json.dumps(_round_geojson(mapping(geometry), policy.geojson_decimals))


# -----------------------------------------------------------------------------
# WKB with SRID prefix
# -----------------------------------------------------------------------------

def parse_wkb(
    data: bytes,
    strict: bool = False,
    policy: PrecisionPolicy = DEFAULT_POLICY,
    factory: GeometryFactory = DEFAULT_FACTORY,
) -> Optional[BaseGeometry]:
    """
    Parse stored WKB: a spatial-reference-id prefix followed by a WKB body.

    The prefix value is ignored.

    Args:
        data: Prefixed WKB bytes
        strict: Raise ParseError instead of returning None on bad input
        policy: Supplies the prefix length
        factory: Factory whose precision model is applied

    Returns:
        Geometry, or None if the bytes could not be parsed
    """
    require(data, "data")
    prefix = policy.srid_prefix_length
    try:
        if len(data) <= prefix:
            raise ValueError(f"wkb too short: {len(data)} bytes")
        return get_wkb_reader(factory).read(bytes(data[prefix:]))
    except (ShapelyError, ValueError, TypeError) as exc:
        return _parse_failed("wkb", data, exc, strict, exc_info=True)


def write_wkb(geometry: BaseGeometry, policy: PrecisionPolicy = DEFAULT_POLICY) -> bytes:
    """Write a geometry as a zero SRID prefix followed by a 2-D little-endian WKB body."""
    require(geometry, "geometry")
    return bytes(policy.srid_prefix_length) + get_wkb_writer().write(geometry)


# -----------------------------------------------------------------------------
# Point text
# -----------------------------------------------------------------------------

def from_es_point(text: str, factory: GeometryFactory = DEFAULT_FACTORY) -> Optional[Point]:
    """
    Create a point from a geo-indexing ``"lat,lon"`` string.

    Returns:
        Point, or None if the string is malformed
    """
    try:
        parts = text.split(",")
        return factory.create_point(float(parts[1]), float(parts[0]))
    except (AttributeError, IndexError, ValueError):
        logger.debug("from_es_point could not parse %r", text)
        return None


def to_es_string(point: Point) -> str:
    """Format a point as a geo-indexing ``"lat,lon"`` string."""
    require(point, "point")
    return f"{point.y},{point.x}"


# -----------------------------------------------------------------------------
# Misc
# -----------------------------------------------------------------------------

def geojson_to_polygon(text: str) -> Optional[Polygon]:
    """Parse GeoJSON and return it only if it is a Polygon."""
    require(text, "text")
    geometry = parse_geojson(text)
    if isinstance(geometry, Polygon):
        return geometry
    return None


def reduce_precision(
    geometry: BaseGeometry,
    decimals: Optional[int] = None,
    policy: PrecisionPolicy = DEFAULT_POLICY,
) -> BaseGeometry:
    """
    Return a new geometry snapped to a coarser grid.

    Args:
        geometry: Input geometry
        decimals: Digits to keep (defaults to ``policy.geojson_decimals``)

    Returns:
        Geometry on a grid of size ``10 ** -decimals``
    """
    require(geometry, "geometry")
    if decimals is None:
        decimals = policy.geojson_decimals
    return shapely.set_precision(geometry, 10.0 ** -decimals)
