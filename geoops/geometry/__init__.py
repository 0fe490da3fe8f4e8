"""
Geometry package for geoops.
Construction, format bridge, robust operations and clustering on top of shapely.
"""

from geoops.geometry.factory import DEFAULT_FACTORY, GeometryFactory

from geoops.geometry.formats import (
    parse_wkt,
    write_wkt,
    parse_geojson,
    write_geojson,
    parse_wkb,
    write_wkb,
    from_es_point,
    to_es_string,
    geojson_to_polygon,
    reduce_precision,
)

from geoops.geometry.operations import (
    normalize,
    retry_with_normalization,
    union,
    intersection,
    difference,
    intersects,
    is_intersection_over_deviation,
    covers,
    is_cover_in_deviation,
    contains,
    trim_polygon,
    has_holes,
    get_holes_area,
    remove_holes,
    merge,
    is_valid_simple_polygon,
)

from geoops.geometry.clustering import (
    group_by_distance,
    group_by_centroid_distance,
)

from geoops.geometry.utils import (
    geodesic_distance,
    point_distance,
    extract_coordinates,
    count_vertices,
)

__all__ = [
    # Factory
    "DEFAULT_FACTORY",
    "GeometryFactory",
    # Formats
    "parse_wkt",
    "write_wkt",
    "parse_geojson",
    "write_geojson",
    "parse_wkb",
    "write_wkb",
    "from_es_point",
    "to_es_string",
    "geojson_to_polygon",
    "reduce_precision",
    # Operations
    "normalize",
    "retry_with_normalization",
    "union",
    "intersection",
    "difference",
    "intersects",
    "is_intersection_over_deviation",
    "covers",
    "is_cover_in_deviation",
    "contains",
    "trim_polygon",
    "has_holes",
    "get_holes_area",
    "remove_holes",
    "merge",
    "is_valid_simple_polygon",
    # Clustering
    "group_by_distance",
    "group_by_centroid_distance",
    # Utils
    "geodesic_distance",
    "point_distance",
    "extract_coordinates",
    "count_vertices",
]
