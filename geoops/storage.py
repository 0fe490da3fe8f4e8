"""
Binary geometry column for relational stores.

Values are stored as a 4-byte spatial-reference-id prefix (always zero on
write, ignored on read) followed by a 2-D little-endian WKB body, which is
the layout MySQL uses for its internal geometry format.

    class Parcel(Base):
        __tablename__ = 'parcel'
        id: Mapped[int] = mapped_column(primary_key=True)
        geometry: Mapped[BaseGeometry] = mapped_column(GeometryBinary())
"""

from typing import Optional

from shapely.geometry.base import BaseGeometry
from sqlalchemy.types import LargeBinary, TypeDecorator

from geoops.geometry.formats import parse_wkb, write_wkb


class GeometryBinary(TypeDecorator):
    """Maps shapely geometries to SRID-prefixed WKB bytes."""

    impl = LargeBinary
    cache_ok = True

    def process_bind_param(self, value: Optional[BaseGeometry], dialect) -> Optional[bytes]:
        if value is None:
            return None
        return write_wkb(value)

    def process_result_value(self, value: Optional[bytes], dialect) -> Optional[BaseGeometry]:
        if value is None:
            return None
        return parse_wkb(value)
