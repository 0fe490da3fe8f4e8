import h3
import pytest

from geoops import hexgrid
from geoops.errors import InvalidArgumentError
from geoops.geometry.utils import point_distance
from geoops.models import BasePoint

BEIJING = BasePoint(lon=116.4, lat=39.9)


def test_cell_id_and_code_round_trip():
    cell_id = hexgrid.get_cell_id(BEIJING, 9)
    code = hexgrid.id_to_code(cell_id)
    assert h3.get_resolution(code) == 9
    assert hexgrid.code_to_id(code) == cell_id


def test_blank_code_is_rejected():
    with pytest.raises(InvalidArgumentError):
        hexgrid.code_to_id("  ")


def test_center_point_is_near_input():
    center = hexgrid.get_center_point(hexgrid.get_cell_id(BEIJING, 9))
    # resolution 9 cells have an edge of roughly 200 m
    assert point_distance(center.to_shapely(), BEIJING.to_shapely()) < 250


def test_cell_polygon_is_lon_lat_and_contains_input():
    polygon = hexgrid.cell_to_polygon(hexgrid.get_cell_id(BEIJING, 9))
    assert polygon.is_valid
    assert len(polygon.exterior.coords) == 7
    assert polygon.contains(BEIJING.to_shapely())


def test_cell_base_polygon():
    model = hexgrid.cell_to_base_polygon(hexgrid.get_cell_id(BEIJING, 9))
    ring = model.base_points[0]
    assert len(ring) == 7
    assert all(116 < point.lon < 117 and 39 < point.lat < 40 for point in ring)
