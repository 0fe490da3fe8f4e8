import pytest
from shapely.geometry import MultiPolygon, Polygon, box


@pytest.fixture
def unit_square():
    return box(0, 0, 1, 1)


@pytest.fixture
def adjacent_square():
    # shares the x=1 edge with unit_square
    return box(1, 0, 2, 1)


@pytest.fixture
def holed_polygon():
    shell = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
    hole = [(2, 2), (4, 2), (4, 4), (2, 4), (2, 2)]
    return Polygon(shell, [hole])


@pytest.fixture
def sliver_multipolygon():
    # one dominant part plus two parts far below the omit ratio
    return MultiPolygon([
        box(0, 0, 100, 100),
        box(200, 0, 200.01, 0.01),
        box(300, 0, 300.01, 0.01),
    ])


@pytest.fixture
def split_multipolygon():
    return MultiPolygon([box(0, 0, 1, 1), box(2, 0, 3, 1)])
