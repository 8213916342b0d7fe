from __future__ import annotations

import math
from typing import Any

from pyproj import CRS, Transformer
from pyproj.exceptions import ProjError

from gridgeo.constructs.coordinate import GeographicCoordinate, PlanarCoordinate
from gridgeo.transformers.transformer_interface import TransformerInterface
from gridgeo.utils.crs import BNG_CRS, LATLON_CRS


class ProjTransformer(TransformerInterface):
    """
    Converts National Grid coordinates to WGS84 using PROJ through pyproj.

    PROJ picks the best available operation between the two CRSs. With the OSTN15
    grid installed (for example through `pyproj.sync` or the PROJ data package) this
    is the sub-meter Ordnance Survey transformation; without it PROJ falls back to a
    Helmert shift comparable to `NationalGridTransformer`.

    Args:
        source_crs: The CRS of the incoming eastings/northings. Anything `pyproj.CRS` accepts. Default is EPSG:27700.

    Examples:
        >>> from gridgeo.constructs.coordinate import PlanarCoordinate
        >>> from gridgeo.transformers.proj import ProjTransformer
        >>> transformer = ProjTransformer()
        >>> c = transformer.transform(PlanarCoordinate(easting=325482, northing=673143))
        >>> print(f"{c.latitude:.2f}, {c.longitude:.2f}")
        55.95, -3.19
    """

    def __init__(self, source_crs: Any = BNG_CRS):
        try:
            source_crs = CRS(source_crs)
        except ProjError as e:
            raise ValueError(
                f"Could not parse incoming `source_crs` parameter: {source_crs}"
            ) from e

        self.source_crs = source_crs
        self._transformer = Transformer.from_crs(
            source_crs, LATLON_CRS, always_xy=True
        )

    def transform(self, coordinate: PlanarCoordinate) -> GeographicCoordinate:
        """
        Convert one coordinate with PROJ.

        Raises:
            ValueError: If PROJ returns an infinite result, which signals the point is outside the area it can convert
        """
        lon, lat = self._transformer.transform(coordinate.easting, coordinate.northing)

        if math.isinf(lon) or math.isinf(lat):
            raise ValueError(
                f"Unable to convert {self.source_crs.to_authority()} "
                f"({coordinate.easting}, {coordinate.northing}) -> ({lon}, {lat})"
            )

        return GeographicCoordinate(latitude=lat, longitude=lon)
