from __future__ import annotations

from typing import Any, Dict, List, NamedTuple, Tuple, Union

from shapely.geometry import MultiPolygon as ShapelyMultiPolygon
from shapely.geometry import Polygon as ShapelyPolygon

Position = Tuple[float, float]
Ring = List[Position]


class Polygon(NamedTuple):
    """
    A polygon made of one or more rings.

    Ring 0 is the exterior boundary and any further rings are holes. The order is
    positional only and is kept exactly as it appeared in the source text.

    Positions are (x, y) tuples: (longitude, latitude) once decoded, or
    (easting, northing) when produced by `parse_planar`.

    Attributes:
        rings: The rings of the polygon, each a list of positions

    Examples:
        >>> from gridgeo.wkt.decoder import decode
        >>> polygon = decode("POLYGON((0 0,0 10,10 10,10 0,0 0))")
        >>> len(polygon.exterior)
        5
        >>> polygon.to_geojson()["type"]
        'Polygon'
    """

    rings: List[Ring]

    geom_type = "Polygon"

    @property
    def exterior(self) -> Ring:
        return self.rings[0] if self.rings else []

    @property
    def interiors(self) -> List[Ring]:
        return self.rings[1:]

    @property
    def is_empty(self) -> bool:
        return not self.rings

    def to_geojson(self) -> Dict[str, Any]:
        """
        Convert to a GeoJSON geometry dictionary.

        Returns:
            A dictionary like {"type": "Polygon", "coordinates": [[[x, y], ...], ...]}
        """
        return {
            "type": self.geom_type,
            "coordinates": [[list(p) for p in ring] for ring in self.rings],
        }

    def to_shapely(self) -> ShapelyPolygon:
        if self.is_empty:
            return ShapelyPolygon()
        return ShapelyPolygon(shell=self.exterior, holes=self.interiors)


class MultiPolygon(NamedTuple):
    """
    An ordered collection of polygons.

    Attributes:
        polygons: The member polygons in source order
    """

    polygons: List[Polygon]

    geom_type = "MultiPolygon"

    @property
    def is_empty(self) -> bool:
        return all(p.is_empty for p in self.polygons)

    def to_geojson(self) -> Dict[str, Any]:
        """
        Convert to a GeoJSON geometry dictionary.

        Returns:
            A dictionary like {"type": "MultiPolygon", "coordinates": [[[[x, y], ...], ...], ...]}
        """
        return {
            "type": self.geom_type,
            "coordinates": [p.to_geojson()["coordinates"] for p in self.polygons],
        }

    def to_shapely(self) -> ShapelyMultiPolygon:
        members = [p.to_shapely() for p in self.polygons if not p.is_empty]
        if not members:
            return ShapelyMultiPolygon()
        return ShapelyMultiPolygon(members)


Geometry = Union[Polygon, MultiPolygon]
