"""
Point model for geoops.

Two text conventions are supported:
    "lat,lon"  geo-indexing service convention, range-checked
    "lon,lat"  plain internal convention, not range-checked
"""

from pydantic import BaseModel, Field
from shapely.geometry import Point

from geoops.errors import CoordinateRangeError, InvalidArgumentError, require
from geoops.geometry.factory import DEFAULT_FACTORY
from geoops.geometry.formats import write_geojson


MAX_LON = 180.0
MIN_LON = -180.0
MAX_LAT = 90.0
MIN_LAT = -90.0


def _split_pair(text: str) -> tuple[float, float]:
    require(text, "text")
    parts = text.split(",")
    if len(parts) != 2:
        raise InvalidArgumentError(f"expected two comma separated values, got {text!r}")
    return float(parts[0]), float(parts[1])


class BasePoint(BaseModel):
    """A longitude/latitude coordinate. Raw values are not range-checked."""
    lon: float = Field(..., description="Longitude in decimal degrees")
    lat: float = Field(..., description="Latitude in decimal degrees")

    @staticmethod
    def is_valid_lon(lon: float) -> bool:
        return MIN_LON <= lon <= MAX_LON

    @staticmethod
    def is_valid_lat(lat: float) -> bool:
        return MIN_LAT <= lat <= MAX_LAT

    @classmethod
    def from_es_string(cls, es_string: str) -> "BasePoint":
        """
        Parse a geo-indexing ``"lat,lon"`` string.

        Raises:
            CoordinateRangeError: If latitude is outside [-90, 90] or
                longitude outside [-180, 180]
        """
        lat, lon = _split_pair(es_string)
        if not cls.is_valid_lat(lat):
            raise CoordinateRangeError(f"lat error val={lat}, expect[-90,90]")
        if not cls.is_valid_lon(lon):
            raise CoordinateRangeError(f"lon error val={lon}, expect[-180,180]")
        return cls(lon=lon, lat=lat)

    @staticmethod
    def format_es_string(lon: float, lat: float) -> str:
        """Format a coordinate as a geo-indexing ``"lat,lon"`` string."""
        return f"{lat},{lon}"

    def to_es_string(self) -> str:
        return self.format_es_string(self.lon, self.lat)

    @classmethod
    def from_text(cls, text: str) -> "BasePoint":
        """Parse a plain ``"lon,lat"`` string."""
        lon, lat = _split_pair(text)
        return cls(lon=lon, lat=lat)

    def to_text(self) -> str:
        return f"{self.lon},{self.lat}"

    def to_shapely(self) -> Point:
        return DEFAULT_FACTORY.create_point(self.lon, self.lat)

    def to_geojson(self) -> str:
        return write_geojson(self.to_shapely())

    @classmethod
    def from_shapely(cls, point: Point) -> "BasePoint":
        require(point, "point")
        return cls(lon=point.x, lat=point.y)
