"""
Greedy distance-based clustering of points.

Both routines make a single pass over the input in order and are sensitive
to that order: a point joins the first existing group that qualifies, or
starts a new group. Membership is never revisited. Cost is O(n * groups).
"""

from typing import Callable, Iterable

from shapely.geometry import MultiPoint, Point

from geoops.geometry.factory import DEFAULT_FACTORY, GeometryFactory
from geoops.geometry.utils import point_distance

# Picks the point a group is measured from
Anchor = Callable[[list[Point]], Point]


def _first_point(group: list[Point]) -> Point:
    return group[0]


def _centroid(group: list[Point]) -> Point:
    return MultiPoint(group).centroid


def _group(
    points: Iterable[Point],
    distance: float,
    anchor: Anchor,
    factory: GeometryFactory,
) -> list[MultiPoint]:
    groups: list[list[Point]] = []
    for point in points:
        for group in groups:
            if point_distance(anchor(group), point) <= distance:
                group.append(point)
                break
        else:
            groups.append([point])
    return [factory.create_multi_point(group) for group in groups]


def group_by_distance(
    points: Iterable[Point],
    distance: float,
    factory: GeometryFactory = DEFAULT_FACTORY,
) -> list[MultiPoint]:
    """
    Group points by geodesic distance to each group's first point.

    Args:
        points: Points with longitude in x and latitude in y
        distance: Maximum distance in meters (inclusive)

    Returns:
        One MultiPoint per group, in group creation order
    """
    return _group(points, distance, _first_point, factory)


def group_by_centroid_distance(
    points: Iterable[Point],
    distance: float,
    factory: GeometryFactory = DEFAULT_FACTORY,
) -> list[MultiPoint]:
    """
    Group points by geodesic distance to each group's current centroid.

    The centroid is recomputed from all members on every comparison, so
    groups drift as they grow.

    Args:
        points: Points with longitude in x and latitude in y
        distance: Maximum distance in meters (inclusive)

    Returns:
        One MultiPoint per group, in group creation order
    """
    return _group(points, distance, _centroid, factory)
