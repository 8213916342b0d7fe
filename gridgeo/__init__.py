from pathlib import Path

from gridgeo.constructs.coordinate import GeographicCoordinate, PlanarCoordinate
from gridgeo.constructs.geometry import MultiPolygon, Polygon
from gridgeo.transformers.national_grid import (
    NationalGridTransformer,
    grid_to_geographic,
)
from gridgeo.utils.exceptions import (
    ConvergenceError,
    MalformedGeometryError,
    UnsupportedGeometryError,
)
from gridgeo.wkt.decoder import decode

__version__ = "0.1.0"

__all__ = [
    "ConvergenceError",
    "GeographicCoordinate",
    "MalformedGeometryError",
    "MultiPolygon",
    "NationalGridTransformer",
    "PlanarCoordinate",
    "Polygon",
    "UnsupportedGeometryError",
    "decode",
    "grid_to_geographic",
    "package_root",
]


def package_root() -> Path:
    return Path(__file__).parent
