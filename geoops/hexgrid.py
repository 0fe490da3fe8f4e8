"""
H3 hexagonal grid helpers.
Thin pass-through to the h3 library: cell id <-> code <-> point <-> polygon.
"""

import h3
from shapely.geometry import Polygon

from geoops.errors import InvalidArgumentError, require
from geoops.geometry.factory import DEFAULT_FACTORY
from geoops.models.points import BasePoint
from geoops.models.polygons import BasePolygon


def code_to_id(h3_code: str) -> int:
    """Convert an H3 string code to its 64-bit cell id."""
    require(h3_code, "h3_code")
    if not h3_code.strip():
        raise InvalidArgumentError("h3_code must not be blank")
    return h3.str_to_int(h3_code)


def id_to_code(h3_id: int) -> str:
    """Convert a 64-bit cell id to its H3 string code."""
    require(h3_id, "h3_id")
    return h3.int_to_str(h3_id)


def get_center_point(h3_id: int) -> BasePoint:
    """Center of a cell."""
    lat, lng = h3.cell_to_latlng(id_to_code(h3_id))
    return BasePoint(lon=lng, lat=lat)


def get_cell_id(point: BasePoint, resolution: int) -> int:
    """Id of the cell at ``resolution`` that contains ``point``."""
    require(point, "point")
    require(resolution, "resolution")
    return code_to_id(h3.latlng_to_cell(point.lat, point.lon, resolution))


def cell_to_polygon(h3_id: int) -> Polygon:
    """Boundary of a cell as a shapely Polygon in (lon, lat) order."""
    boundary = h3.cell_to_boundary(id_to_code(h3_id))
    ring = [[lng, lat] for lat, lng in boundary]
    ring.append(ring[0])
    return DEFAULT_FACTORY.create_polygon([ring])


def cell_to_base_polygon(h3_id: int) -> BasePolygon:
    return BasePolygon.from_polygon(cell_to_polygon(h3_id))
