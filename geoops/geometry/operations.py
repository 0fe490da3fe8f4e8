"""
Robust boolean operations and tolerance-based predicates.

GEOS can raise topology exceptions on numerically ill-conditioned inputs
(near-coincident vertices, tiny self-intersections). Every boolean operation
here first tries the exact operation. On a GEOS failure it normalizes both
operands (canonical vertex order, then a buffer/un-buffer pair) and retries
once. A second failure is raised as KernelOperationError.

References:
    https://locationtech.github.io/jts/jts-faq.html#robustness
"""

import logging
from typing import Callable, Optional

from shapely.errors import GEOSException
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry, BaseMultipartGeometry

from geoops.config import DEFAULT_POLICY, PrecisionPolicy
from geoops.errors import InvalidArgumentError, KernelOperationError, require
from geoops.geometry.factory import DEFAULT_FACTORY

logger = logging.getLogger(__name__)

BinaryOperation = Callable[[BaseGeometry, BaseGeometry], BaseGeometry]


def normalize(geometry: BaseGeometry, policy: PrecisionPolicy = DEFAULT_POLICY) -> BaseGeometry:
    """
    Repair common boundary problems at the cost of a tiny shape change.

    1. Put vertices in canonical order.
    2. Grow by ``policy.buffer_tolerance`` and shrink back by the same amount.

    Args:
        geometry: Geometry to normalize

    Returns:
        Normalized geometry
    """
    require(geometry, "geometry")
    tolerance = policy.buffer_tolerance
    return geometry.normalize().buffer(tolerance).buffer(-tolerance)


def retry_with_normalization(
    name: str,
    operation: BinaryOperation,
    g1: BaseGeometry,
    g2: BaseGeometry,
    policy: PrecisionPolicy = DEFAULT_POLICY,
) -> BaseGeometry:
    """
    Run a binary operation; on a GEOS failure normalize both operands and retry once.

    Args:
        name: Operation name used in log and error messages
        operation: Callable taking two geometries
        g1: First operand
        g2: Second operand

    Returns:
        The operation's result

    Raises:
        KernelOperationError: If the retry fails as well
    """
    require(g1, "g1")
    require(g2, "g2")
    try:
        return operation(g1, g2)
    except GEOSException as exc:
        logger.warning("%s failed, retrying with normalized operands: %s", name, exc)
    try:
        return operation(normalize(g1, policy), normalize(g2, policy))
    except GEOSException as exc:
        raise KernelOperationError(f"{name} failed after normalization: {exc}") from exc


def union(g1: BaseGeometry, g2: BaseGeometry, policy: PrecisionPolicy = DEFAULT_POLICY) -> BaseGeometry:
    """
    Union two geometries, closing sliver gaps between adjacent regions.

    If the exact union raises, or yields a MultiPolygon, both operands are
    grown by the buffer tolerance, unioned, and the result shrunk back.
    """
    require(g1, "g1")
    require(g2, "g2")
    geo = None
    try:
        geo = g1.union(g2)
    except GEOSException as exc:
        logger.warning("union failed, retrying with buffered operands: %s", exc)
    if geo is None or isinstance(geo, MultiPolygon):
        tolerance = policy.buffer_tolerance
        try:
            geo = g1.buffer(tolerance).union(g2.buffer(tolerance)).buffer(-tolerance)
        except GEOSException as exc:
            raise KernelOperationError(f"union failed after buffering: {exc}") from exc
    return geo


def intersection(g1: BaseGeometry, g2: BaseGeometry, policy: PrecisionPolicy = DEFAULT_POLICY) -> BaseGeometry:
    """Intersection of two geometries, normalizing and retrying once on failure."""
    return retry_with_normalization("intersection", lambda a, b: a.intersection(b), g1, g2, policy)


def difference(g1: BaseGeometry, g2: BaseGeometry, policy: PrecisionPolicy = DEFAULT_POLICY) -> BaseGeometry:
    """``g1`` minus ``g2``, normalizing and retrying once on failure."""
    return retry_with_normalization("difference", lambda a, b: a.difference(b), g1, g2, policy)


def intersects(
    g1: BaseGeometry,
    g2: BaseGeometry,
    tolerance: float,
    policy: PrecisionPolicy = DEFAULT_POLICY,
) -> bool:
    """
    Check whether two geometries overlap by more than a fraction of the smaller one.

    Args:
        g1: First geometry
        g2: Second geometry
        tolerance: Threshold on intersection area / min(area(g1), area(g2))

    Returns:
        True if the ratio exceeds the tolerance
    """
    require(g1, "g1")
    require(g2, "g2")
    smaller = min(g1.area, g2.area)
    if smaller == 0:
        return False
    return intersection(g1, g2, policy).area / smaller > tolerance


def is_intersection_over_deviation(
    g1: BaseGeometry,
    g2: BaseGeometry,
    deviation_area: float,
    policy: PrecisionPolicy = DEFAULT_POLICY,
) -> bool:
    """True if the intersection area exceeds an absolute area budget."""
    return intersection(g1, g2, policy).area > deviation_area


def covers(
    big: BaseGeometry,
    small: BaseGeometry,
    tolerance: float,
    policy: PrecisionPolicy = DEFAULT_POLICY,
) -> bool:
    """
    Check whether ``big`` covers ``small`` up to a fractional area discrepancy.

    Args:
        big: Covering geometry
        small: Covered geometry
        tolerance: Allowed |intersection area / area(small) - 1|, exclusive

    Returns:
        True if the discrepancy is strictly below the tolerance
    """
    require(big, "big")
    require(small, "small")
    small_area = small.area
    if small_area == 0:
        return False
    ratio = intersection(big, small, policy).area / small_area
    return abs(ratio - 1) < tolerance


def is_cover_in_deviation(
    big: BaseGeometry,
    small: BaseGeometry,
    deviation_area: float,
    policy: PrecisionPolicy = DEFAULT_POLICY,
) -> bool:
    """True if the uncovered part of ``small`` is at most ``deviation_area``."""
    require(small, "small")
    return abs(intersection(big, small, policy).area - small.area) <= deviation_area


def contains(g1: Optional[BaseGeometry], g2: Optional[BaseGeometry]) -> bool:
    """
    Check whether any single component of ``g1`` contains ``g2``.

    A non-collection ``g1`` is treated as a one-element collection. This is
    not a test against the union of the components. None inputs give False.
    """
    if g1 is None or g2 is None:
        return False
    if isinstance(g1, BaseMultipartGeometry):
        parts = list(g1.geoms)
    else:
        parts = [g1]
    return any(part.contains(g2) for part in parts)


def trim_polygon(geo: BaseGeometry, policy: PrecisionPolicy = DEFAULT_POLICY) -> Optional[BaseGeometry]:
    """
    Collapse a MultiPolygon with sliver artifacts into its one real polygon.

    Parts whose area / total area is below ``policy.omit_tolerance`` are
    dropped. Non-multipolygons are returned unchanged.

    Returns:
        The single surviving polygon, or None if zero or several survive
    """
    require(geo, "geo")
    if not isinstance(geo, MultiPolygon):
        return geo
    total = geo.area
    if total == 0:
        return None
    kept = [part for part in geo.geoms if part.area / total >= policy.omit_tolerance]
    if len(kept) != 1:
        return None
    return kept[0]


def has_holes(geometry: BaseGeometry) -> bool:
    """True if the geometry is a Polygon with at least one interior ring."""
    require(geometry, "geometry")
    if isinstance(geometry, Polygon):
        return len(geometry.interiors) > 0
    return False


def get_holes_area(geometry: BaseGeometry) -> float:
    """
    Sum of the areas of a polygon's interior rings.

    Each ring's area is taken unsigned, so winding order never makes the
    sum negative. Non-polygons give 0.
    """
    require(geometry, "geometry")
    if not isinstance(geometry, Polygon):
        return 0.0
    return float(sum(Polygon(ring).area for ring in geometry.interiors))


def remove_holes(geometry: BaseGeometry) -> BaseGeometry:
    """Return a hole-free copy of a Polygon; other geometries are returned as is."""
    require(geometry, "geometry")
    if isinstance(geometry, Polygon):
        return Polygon(geometry.exterior)
    return geometry


def merge(geometries: list) -> BaseGeometry:
    """
    Combine several geometries into the most specific uniform geometry.

    Raises:
        InvalidArgumentError: If the list is empty
    """
    if not geometries:
        raise InvalidArgumentError("merge requires at least one geometry")
    return DEFAULT_FACTORY.build_geometry(geometries)


def is_valid_simple_polygon(geometry: BaseGeometry) -> bool:
    """True if the geometry is a valid Polygon without holes."""
    return isinstance(geometry, Polygon) and not has_holes(geometry) and geometry.is_valid
