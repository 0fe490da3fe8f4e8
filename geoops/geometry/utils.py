"""
Geodesic and inspection helpers.
Distances are true geodesic on the WGS84 ellipsoid (geographiclib).
"""

import shapely
from geographiclib.geodesic import Geodesic
from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry

from geoops.errors import require


# WGS84 ellipsoid parameters
WGS84 = Geodesic.WGS84


def geodesic_distance(
    lat1: float, lon1: float, lat2: float, lon2: float
) -> float:
    """
    Calculate the geodesic distance between two points on WGS84 ellipsoid.

    Args:
        lat1: Latitude of first point in decimal degrees
        lon1: Longitude of first point in decimal degrees
        lat2: Latitude of second point in decimal degrees
        lon2: Longitude of second point in decimal degrees

    Returns:
        Distance in kilometers
    """
    return point_distance_m(lat1, lon1, lat2, lon2) / 1000.0


def point_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Geodesic distance in meters between two (lat, lon) pairs."""
    result = WGS84.Inverse(lat1, lon1, lat2, lon2)
    return result["s12"]


def point_distance(p1: Point, p2: Point) -> float:
    """
    Geodesic distance in meters between two shapely points.

    Points carry longitude in x and latitude in y.
    """
    require(p1, "p1")
    require(p2, "p2")
    return point_distance_m(p1.y, p1.x, p2.y, p2.x)


def extract_coordinates(geometry: BaseGeometry) -> list[tuple[float, float]]:
    """
    Flatten every (x, y) of a geometry, in storage order.

    Polygons give the exterior ring first, then each hole. Multi-part
    geometries and collections give their parts in order.
    """
    require(geometry, "geometry")
    return [(x, y) for x, y in shapely.get_coordinates(geometry).tolist()]


def count_vertices(geometry: BaseGeometry) -> int:
    """
    Number of stored vertices, counting ring closing points.

    Inspection helper for callers deciding whether a geometry is worth
    simplifying before a boolean operation.
    """
    require(geometry, "geometry")
    return int(shapely.get_num_coordinates(geometry))
