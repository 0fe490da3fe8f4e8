"""
Per-thread WKB reader and writer.

Readers and writers are stateful codec objects and must not be used by two
threads at once. ``get_wkb_reader`` and ``get_wkb_writer`` lazily build one
instance per thread (one reader per factory) and keep reusing it for that
thread's lifetime.
Every geoops call runs synchronously to completion, so coroutines sharing a
thread never interleave inside a codec.
"""

import threading
from typing import Optional

import shapely
from shapely.geometry.base import BaseGeometry

from geoops.geometry.factory import DEFAULT_FACTORY, GeometryFactory

# shapely byte_order values
BIG_ENDIAN = 0
LITTLE_ENDIAN = 1

_local = threading.local()


class WKBReader:
    """Reads a WKB body into a geometry snapped to the factory's precision grid."""

    def __init__(self, factory: GeometryFactory = DEFAULT_FACTORY):
        self._factory = factory

    def read(self, data: bytes) -> BaseGeometry:
        return self._factory.make_precise(shapely.from_wkb(bytes(data)))


class WKBWriter:
    """Writes geometries as WKB with a fixed dimension and byte order."""

    def __init__(self, output_dimension: int = 2, byte_order: int = LITTLE_ENDIAN):
        self.output_dimension = output_dimension
        self.byte_order = byte_order

    def write(self, geometry: BaseGeometry) -> bytes:
        return shapely.to_wkb(
            geometry,
            hex=False,
            output_dimension=self.output_dimension,
            byte_order=self.byte_order,
            include_srid=False,
        )


def get_wkb_reader(factory: GeometryFactory = DEFAULT_FACTORY) -> WKBReader:
    """Return this thread's WKB reader for ``factory``, creating it on first use."""
    readers: Optional[dict] = getattr(_local, "readers", None)
    if readers is None:
        readers = _local.readers = {}
    reader = readers.get(factory)
    if reader is None:
        reader = readers[factory] = WKBReader(factory)
    return reader


def get_wkb_writer() -> WKBWriter:
    """Return this thread's WKB writer (2-D, little-endian), creating it on first use."""
    writer: Optional[WKBWriter] = getattr(_local, "writer", None)
    if writer is None:
        writer = WKBWriter(2, LITTLE_ENDIAN)
        _local.writer = writer
    return writer
