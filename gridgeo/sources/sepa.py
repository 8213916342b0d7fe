from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import geopandas as gpd
import requests
from shapely.errors import GEOSException

from gridgeo.constructs.coordinate import PlanarCoordinate
from gridgeo.constructs.flood import FloodArea, FloodWarning
from gridgeo.transformers.national_grid import NationalGridTransformer
from gridgeo.transformers.transformer_interface import TransformerInterface
from gridgeo.utils.crs import LATLON_CRS
from gridgeo.utils.url import multiurljoin
from gridgeo.wkt.decoder import WKTDecoder

log = logging.getLogger(__name__)

DEFAULT_SEPA_ADDRESS = "https://eu2-apigateway.htkhorizon.com/sepa/ffims/v1"

# seconds
DEFAULT_TIMEOUT = 30


def parse_flood_areas_json(
    j: Any, transformer: Optional[TransformerInterface] = None
) -> List[FloodArea]:
    """
    Build FloodArea objects from a SEPA flood area response.

    Each record's `shape` is National Grid WKT. A record whose shape cannot be
    decoded is still returned, with `geometry=None`, and a warning is logged; one bad
    outline does not hide the other areas.

    Args:
        j: The decoded JSON response, expected to be a list of area records
        transformer: Used to decode the shapes. Default is a NationalGridTransformer.

    Returns:
        One FloodArea per record, in response order

    Raises:
        ValueError: If the response is not a list
    """
    if not isinstance(j, list):
        raise ValueError(f"expected a list of flood areas but got {type(j).__name__}")

    decoder = WKTDecoder(transformer)
    areas = []
    for record in j:
        name = record.get("name")
        shape = record.get("shape")

        geometry = None
        if shape:
            try:
                geometry = decoder.decode(shape)
            except (ValueError, ArithmeticError) as e:
                log.warning(f"could not parse shape for flood area {name!r}: {e}")

        areas.append(
            FloodArea(
                name=name,
                description=record.get("description") or "",
                geometry=geometry,
            )
        )

    return areas


def parse_warnings_json(j: Any) -> List[FloodWarning]:
    """
    Build FloodWarning objects from a SEPA warnings response.

    The service returns either a bare list of warnings or an object with a
    `warnings` list. Missing fields fall back to their older names (`name`,
    `description`, `time`) and then to placeholders.

    Args:
        j: The decoded JSON response

    Returns:
        The warnings, in response order; empty if there are none
    """
    if isinstance(j, list):
        records = j
    elif isinstance(j, dict):
        records = j.get("warnings") or []
    else:
        raise ValueError(f"unexpected warnings response type {type(j).__name__}")

    return [
        FloodWarning(
            severity=w.get("severity") or "Info",
            area_name=w.get("area_name") or w.get("name") or "Unknown Area",
            message=w.get("message") or w.get("description") or "",
            raised=w.get("raised") or w.get("time"),
            raw=w,
        )
        for w in records
    ]


def flood_areas_to_geodataframe(areas: List[FloodArea]) -> gpd.GeoDataFrame:
    """
    Convert flood areas to a GeoDataFrame in WGS84 (EPSG:4326).

    Areas without a decoded geometry are left out, as are areas whose rings
    are too short to form a valid shape; the latter are logged as warnings.

    Returns:
        A GeoDataFrame with name, description and geometry columns

    Examples:
        >>> gdf = flood_areas_to_geodataframe(client.areas_near(location, radius=500))
        >>> gdf.to_file('flood_areas.geojson', driver='GeoJSON')
    """
    rows = []
    for area in areas:
        if area.geometry is None:
            continue
        try:
            rows.append(area.to_flat_dict())
        except (ValueError, GEOSException) as e:
            log.warning(f"dropping flood area {area.name!r} with invalid outline: {e}")

    if not rows:
        return gpd.GeoDataFrame(
            {"name": [], "description": []}, geometry=[], crs=LATLON_CRS
        )

    return gpd.GeoDataFrame(rows, geometry="geometry", crs=LATLON_CRS)


class SepaFloodClient:
    """
    Queries the SEPA flood information service for areas and warnings around a point.

    The service is queried in National Grid coordinates and returns outlines as
    National Grid WKT, which are decoded to WGS84 on the way out.

    Args:
        api_key: The SEPA API key, sent in the `x-api-key` header
        address: The base URL of the service. Default is the public gateway.
        transformer: Used to decode area outlines. Default is a NationalGridTransformer.
        timeout: Request timeout in seconds. Default is 30.

    Examples:
        >>> client = SepaFloodClient(api_key="...")
        >>> areas = client.areas_near(location.planar, radius=1000)
        >>> warnings = client.warnings_near(location.planar, radius=1000)
    """

    def __init__(
        self,
        api_key: str,
        address: str = DEFAULT_SEPA_ADDRESS,
        transformer: Optional[TransformerInterface] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.api_key = api_key
        self.address = address
        self.transformer = transformer or NationalGridTransformer()
        self.timeout = timeout

    def _get(self, path: List[str], params: Dict[str, Any]) -> Any:
        url = multiurljoin([self.address, *path])
        log.debug(f"SEPA request: {url} params={params}")

        r = requests.get(
            url,
            params=params,
            headers={"x-api-key": self.api_key, "Accept": "application/json"},
            timeout=self.timeout,
        )

        log.debug(f"SEPA response: {r.status_code}")

        if not r.status_code == requests.codes.ok:
            r.raise_for_status()

        return r.json()

    def areas_near(
        self,
        location: PlanarCoordinate,
        radius: float,
        include_test_areas: bool = True,
    ) -> List[FloodArea]:
        """
        Fetch the flood areas within a radius of a grid position.

        Args:
            location: The National Grid position to search around
            radius: The search radius, in meters
            include_test_areas: Whether the service should include its test areas. Default is True.

        Returns:
            The flood areas with their outlines decoded to WGS84

        Raises:
            requests.HTTPError: If the service returns an error response (401/403 for a bad key)
        """
        j = self._get(
            ["areas", "location"],
            {
                "x": location.easting,
                "y": location.northing,
                "radius": radius,
                "includeTestAreas": str(include_test_areas).lower(),
            },
        )

        return parse_flood_areas_json(j, self.transformer)

    def warnings_near(self, location: PlanarCoordinate, radius: float) -> List[FloodWarning]:
        """
        Fetch the active flood warnings within a radius of a grid position.

        Raises:
            requests.HTTPError: If the service returns an error response
        """
        j = self._get(
            ["warnings", "location"],
            {"x": location.easting, "y": location.northing, "radius": radius},
        )

        return parse_warnings_json(j)
