"""
Precision and tolerance policy for geoops.

A single immutable policy object is built when the process starts and shared
by every component. Components accept an explicit ``policy`` argument so
callers can inject a different one.
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


# Environment variable prefix for overrides
ENV_PREFIX = "GEOOPS_"

# Empty GeoJSON geometry collection
EMPTY_GEO_COLLECTION_JSON = '{"type": "GeometryCollection", "geometries": []}'


class PrecisionPolicy(BaseModel):
    """Fixed-point precision model plus every tolerance the operations consume."""

    model_config = ConfigDict(frozen=True)

    # 15 digits: at most 11.1 mm at the equator
    decimals: int = Field(15, ge=0, le=17, description="Digits kept when constructing geometries")
    geojson_decimals: int = Field(7, ge=0, le=17, description="Digits written to GeoJSON")
    buffer_tolerance: float = Field(
        0.00001, gt=0, description="Grow/shrink distance used to repair boundaries"
    )
    omit_tolerance: float = Field(
        0.0001, ge=0, lt=1, description="Area ratio below which multipolygon parts are dropped"
    )
    srid_prefix_length: int = Field(4, ge=0, description="Bytes of SRID prefix on stored WKB")

    @property
    def grid_size(self) -> float:
        """Size of one cell of the fixed-point grid."""
        return 10.0 ** -self.decimals

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PrecisionPolicy":
        """
        Build a policy from ``GEOOPS_*`` environment variables.

        Unset variables keep their defaults; malformed values raise a
        pydantic ValidationError.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            A frozen PrecisionPolicy
        """
        if environ is None:
            environ = os.environ
        overrides = {}
        for name in ("decimals", "geojson_decimals", "buffer_tolerance", "omit_tolerance"):
            value = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if value is not None and value.strip():
                overrides[name] = value.strip()
        return cls.model_validate(overrides)


DEFAULT_POLICY = PrecisionPolicy.from_env()
