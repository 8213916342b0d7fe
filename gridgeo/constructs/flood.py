from __future__ import annotations

from typing import Any, Dict, NamedTuple, Optional

from gridgeo.constructs.coordinate import GeographicCoordinate, PlanarCoordinate
from gridgeo.constructs.geometry import Geometry


class Location(NamedTuple):
    """
    A geocoded place, in both grid and geographic coordinates.

    Attributes:
        name: The gazetteer name of the place (for example a postcode)
        planar: The National Grid position, used to query grid-based services
        geographic: The WGS84 position, used for display; None until transformed
    """

    name: Optional[str]
    planar: PlanarCoordinate
    geographic: Optional[GeographicCoordinate] = None


class FloodArea(NamedTuple):
    """
    A flood area record with its outline decoded to WGS84.

    Attributes:
        name: The area name
        description: A free text description, possibly empty
        geometry: The decoded outline, or None when the record had no usable shape
    """

    name: Optional[str]
    description: str
    geometry: Optional[Geometry] = None

    def to_flat_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "geometry": self.geometry.to_shapely() if self.geometry else None,
        }


class FloodWarning(NamedTuple):
    """
    An active flood warning.

    Attributes:
        severity: The severity label as published (for example "Flood Warning" or "High")
        area_name: The name of the warned area
        message: The warning text
        raised: When the warning was raised, as published
        raw: The full warning record
    """

    severity: str
    area_name: str
    message: str
    raised: Optional[str]
    raw: Dict[str, Any]

    @property
    def level(self) -> str:
        """
        The severity bucket: 'high', 'medium' or 'low'.
        """
        severity = self.severity.lower()
        if "high" in severity:
            return "high"
        elif "medium" in severity:
            return "medium"
        return "low"
