from __future__ import annotations

import logging
from typing import Optional

import requests

from gridgeo.constructs.coordinate import PlanarCoordinate
from gridgeo.constructs.flood import Location
from gridgeo.transformers.national_grid import NationalGridTransformer
from gridgeo.transformers.transformer_interface import TransformerInterface
from gridgeo.utils.url import multiurljoin

log = logging.getLogger(__name__)

DEFAULT_OS_NAMES_ADDRESS = "https://api.os.uk/search/names/v1"

# seconds
DEFAULT_TIMEOUT = 30


def parse_names_json(j: dict) -> Location:
    """
    Read the best match out of an OS Names API `find` response.

    The gazetteer reports positions as National Grid eastings/northings in
    `GEOMETRY_X` / `GEOMETRY_Y`; the returned Location carries those as its planar
    coordinate and leaves the geographic coordinate for the caller to fill in.

    Args:
        j: The JSON response dictionary from the `find` endpoint

    Returns:
        A Location for the first result; `geographic` is None

    Raises:
        ValueError: If there are no results or the first result has no grid position
    """
    results = j.get("results")
    if not results:
        raise ValueError("postcode not found")

    entry = results[0].get("GAZETTEER_ENTRY")
    if not entry:
        raise ValueError("result has no gazetteer entry")

    try:
        easting = float(entry["GEOMETRY_X"])
        northing = float(entry["GEOMETRY_Y"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError("gazetteer entry has no usable grid position") from e

    return Location(
        name=entry.get("NAME1"),
        planar=PlanarCoordinate(easting=easting, northing=northing),
        geographic=None,
    )


class OsNamesGeocoder:
    """
    Looks up place names and postcodes with the Ordnance Survey Names API.

    Args:
        api_key: The OS Data Hub project key
        address: The base URL of the Names API. Default is the public v1 endpoint.
        transformer: Used to add WGS84 coordinates to each result. Default is a NationalGridTransformer.
        timeout: Request timeout in seconds. Default is 30.

    Examples:
        >>> geocoder = OsNamesGeocoder(api_key="...")
        >>> location = geocoder.find("EH1 2NG")
    """

    def __init__(
        self,
        api_key: str,
        address: str = DEFAULT_OS_NAMES_ADDRESS,
        transformer: Optional[TransformerInterface] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        if not api_key:
            raise ValueError("an OS API key is required")

        self.api_key = api_key
        self.find_url = multiurljoin([address, "find"])
        self.transformer = transformer or NationalGridTransformer()
        self.timeout = timeout

    def find(self, query: str) -> Location:
        """
        Geocode a postcode or place name.

        Args:
            query: The text to search for

        Returns:
            The best matching Location with both planar and geographic coordinates

        Raises:
            ValueError: If the query is empty or nothing was found
            requests.HTTPError: If the Names API returns an error response
        """
        if not query or not query.strip():
            raise ValueError("a search query is required")

        log.debug(f"OS Names request: {self.find_url} query={query!r}")

        r = requests.get(
            self.find_url,
            params={"query": query.strip(), "key": self.api_key},
            timeout=self.timeout,
        )

        log.debug(f"OS Names response: {r.status_code}")

        if not r.status_code == requests.codes.ok:
            r.raise_for_status()

        location = parse_names_json(r.json())

        return location._replace(
            geographic=self.transformer.transform(location.planar)
        )
