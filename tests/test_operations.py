import logging

import pytest
from shapely.errors import GEOSException
from shapely.geometry import MultiPolygon, Point, Polygon, box

from geoops.errors import InvalidArgumentError, KernelOperationError, NullInputError
from geoops.geometry import operations
from geoops.geometry.factory import DEFAULT_FACTORY


class FlakyGeometry:
    """Stands in for a geometry whose exact union always raises."""

    def __init__(self, geometry):
        self.geometry = geometry

    def union(self, other):
        raise GEOSException("TopologyException: side location conflict")

    def buffer(self, distance):
        return self.geometry.buffer(distance)


# -----------------------------------------------------------------------------
# retry combinator
# -----------------------------------------------------------------------------

def test_retry_uses_normalized_operands_after_failure(unit_square, caplog):
    calls = []

    def operation(a, b):
        calls.append((a, b))
        if len(calls) == 1:
            raise GEOSException("TopologyException")
        return a.intersection(b)

    with caplog.at_level(logging.WARNING):
        result = operations.retry_with_normalization("intersection", operation, unit_square, box(0.5, 0, 2, 1))
    assert len(calls) == 2
    assert calls[1][0] is not unit_square
    assert result.area == pytest.approx(0.5, abs=1e-4)
    assert "retrying with normalized operands" in caplog.text


def test_retry_raises_kernel_error_after_second_failure(unit_square):
    def operation(a, b):
        raise GEOSException("TopologyException")

    with pytest.raises(KernelOperationError) as info:
        operations.retry_with_normalization("difference", operation, unit_square, unit_square)
    assert isinstance(info.value.__cause__, GEOSException)


def test_retry_rejects_none(unit_square):
    with pytest.raises(NullInputError):
        operations.intersection(unit_square, None)


# -----------------------------------------------------------------------------
# union / intersection / difference
# -----------------------------------------------------------------------------

def test_union_of_adjacent_squares_is_one_polygon(unit_square, adjacent_square):
    result = operations.union(unit_square, adjacent_square)
    assert isinstance(result, Polygon)
    assert result.area == pytest.approx(2.0, abs=1e-6)


def test_union_closes_sliver_gap(unit_square):
    right = box(1.000001, 0, 2, 1)
    assert isinstance(unit_square.union(right), MultiPolygon)
    result = operations.union(unit_square, right)
    assert isinstance(result, Polygon)
    assert result.area == pytest.approx(2.000001, abs=1e-4)


def test_union_of_distant_squares_stays_multipolygon(unit_square):
    result = operations.union(unit_square, box(5, 5, 6, 6))
    assert isinstance(result, MultiPolygon)
    assert len(result.geoms) == 2


def test_union_falls_back_when_kernel_raises(unit_square, adjacent_square):
    result = operations.union(FlakyGeometry(unit_square), adjacent_square)
    assert isinstance(result, Polygon)
    assert result.area == pytest.approx(2.0, abs=1e-4)


def test_intersection_and_difference():
    a = box(0, 0, 2, 2)
    assert operations.intersection(a, box(1, 1, 3, 3)).area == pytest.approx(1.0)
    assert operations.difference(a, box(1, 0, 2, 2)).area == pytest.approx(2.0)


def test_normalize_keeps_shape(unit_square):
    result = operations.normalize(unit_square)
    assert isinstance(result, Polygon)
    assert result.area == pytest.approx(1.0, abs=1e-6)
    assert result.symmetric_difference(unit_square).area < 1e-6


# -----------------------------------------------------------------------------
# tolerance predicates
# -----------------------------------------------------------------------------

def test_intersects_uses_ratio_of_smaller_area():
    big = box(0, 0, 10, 10)
    half_inside = box(9.5, 0, 10.5, 1)
    assert operations.intersects(big, half_inside, 0.4)
    assert not operations.intersects(big, half_inside, 0.5)
    assert operations.intersects(big, box(0, 0, 1, 1), 0.99)


def test_intersects_is_false_for_zero_area(unit_square):
    assert not operations.intersects(unit_square, Point(0.5, 0.5), 0.0)


def test_is_intersection_over_deviation_uses_absolute_area():
    a = box(0, 0, 2, 2)
    b = box(1, 1, 3, 3)
    assert operations.is_intersection_over_deviation(a, b, 0.5)
    assert not operations.is_intersection_over_deviation(a, b, 1.0)


@pytest.mark.parametrize("right, expected", [
    (100.0, True),
    (99.5, True),
    (99.01, True),
    (99.0, False),
    (98.5, False),
])
def test_covers_one_percent_band(right, expected):
    small = box(0, 0, 100, 1)
    big = box(0, 0, right, 1)
    assert operations.covers(big, small, 0.01) is expected


def test_covers_is_false_for_zero_area_small(unit_square):
    assert not operations.covers(unit_square, Point(0.5, 0.5), 0.01)


def test_is_cover_in_deviation_is_inclusive():
    small = box(0, 0, 10, 1)
    big = box(0, 0, 9, 1)
    assert operations.is_cover_in_deviation(big, small, 1.0)
    assert not operations.is_cover_in_deviation(big, small, 0.5)


# -----------------------------------------------------------------------------
# contains
# -----------------------------------------------------------------------------

def test_contains_any_component_not_union():
    left = box(0, 0, 2, 2)
    right = box(2, 0, 4, 2)
    collection = DEFAULT_FACTORY.create_collection(left, right)
    inside_left = box(0.5, 0.5, 1, 1)
    straddling = box(1, 0.5, 3, 1.5)
    assert operations.contains(collection, inside_left)
    assert left.union(right).contains(straddling)
    assert not operations.contains(collection, straddling)


def test_contains_wraps_single_geometry(unit_square):
    assert operations.contains(unit_square, Point(0.5, 0.5))
    assert not operations.contains(unit_square, Point(5, 5))


def test_contains_is_null_safe(unit_square):
    assert not operations.contains(None, unit_square)
    assert not operations.contains(unit_square, None)


# -----------------------------------------------------------------------------
# trim_polygon
# -----------------------------------------------------------------------------

def test_trim_polygon_keeps_dominant_part(sliver_multipolygon):
    result = operations.trim_polygon(sliver_multipolygon)
    assert isinstance(result, Polygon)
    assert result.equals(box(0, 0, 100, 100))


def test_trim_polygon_refuses_comparable_parts(split_multipolygon):
    assert operations.trim_polygon(split_multipolygon) is None


def test_trim_polygon_passes_other_types_through(unit_square):
    assert operations.trim_polygon(unit_square) is unit_square


def test_trim_polygon_zero_area_returns_none():
    flat = MultiPolygon([Polygon([(0, 0), (1, 0), (2, 0), (0, 0)])])
    assert operations.trim_polygon(flat) is None


# -----------------------------------------------------------------------------
# holes, merge, validity
# -----------------------------------------------------------------------------

def test_holes(holed_polygon, unit_square, split_multipolygon):
    assert operations.has_holes(holed_polygon)
    assert not operations.has_holes(unit_square)
    assert not operations.has_holes(split_multipolygon)
    assert operations.get_holes_area(holed_polygon) == pytest.approx(4.0)
    assert operations.get_holes_area(split_multipolygon) == 0.0


def test_holes_area_ignores_winding_order():
    shell = [(0, 0), (10, 0), (10, 10), (0, 10)]
    clockwise = Polygon(shell, [[(2, 2), (2, 4), (4, 4), (4, 2)]])
    counter = Polygon(shell, [[(2, 2), (4, 2), (4, 4), (2, 4)]])
    assert operations.get_holes_area(clockwise) == pytest.approx(4.0)
    assert operations.get_holes_area(counter) == pytest.approx(4.0)


def test_remove_holes(holed_polygon, split_multipolygon):
    solid = operations.remove_holes(holed_polygon)
    assert len(solid.interiors) == 0
    assert solid.area == pytest.approx(100.0)
    assert operations.remove_holes(split_multipolygon) is split_multipolygon


def test_merge(unit_square):
    with pytest.raises(InvalidArgumentError):
        operations.merge([])
    assert operations.merge([unit_square]) is unit_square
    assert operations.merge([unit_square, box(5, 5, 6, 6)]).geom_type == "MultiPolygon"
    assert operations.merge([Point(0, 0), unit_square]).geom_type == "GeometryCollection"


def test_is_valid_simple_polygon(unit_square, holed_polygon, split_multipolygon):
    bowtie = Polygon([(0, 0), (1, 1), (1, 0), (0, 1)])
    assert operations.is_valid_simple_polygon(unit_square)
    assert not operations.is_valid_simple_polygon(holed_polygon)
    assert not operations.is_valid_simple_polygon(bowtie)
    assert not operations.is_valid_simple_polygon(split_multipolygon)
