from __future__ import annotations

from typing import NamedTuple, Tuple

from shapely.geometry import Point


class PlanarCoordinate(NamedTuple):
    """
    A point on the British National Grid (EPSG:27700).

    Attributes:
        easting: Distance east of the grid's false origin, in meters
        northing: Distance north of the grid's false origin, in meters

    Examples:
        >>> from gridgeo.constructs.coordinate import PlanarCoordinate
        >>> c = PlanarCoordinate(easting=325482, northing=673143)
        >>> c.to_point().x
        325482.0
    """

    easting: float
    northing: float

    @classmethod
    def from_point(cls, point: Point) -> PlanarCoordinate:
        """
        Create a planar coordinate from a Shapely Point whose x is the easting and y the northing.
        """
        return cls(easting=point.x, northing=point.y)

    def to_point(self) -> Point:
        return Point(self.easting, self.northing)


class GeographicCoordinate(NamedTuple):
    """
    A WGS84 (EPSG:4326) latitude/longitude pair in decimal degrees.

    Note the field order is (latitude, longitude) while `to_lon_lat` and `to_point`
    follow the GeoJSON (x=longitude, y=latitude) convention.

    Attributes:
        latitude: Decimal degrees north of the equator (range: -90 to 90)
        longitude: Decimal degrees east of Greenwich (range: -180 to 180)

    Examples:
        >>> c = GeographicCoordinate(latitude=55.9466, longitude=-3.1945)
        >>> c.to_lon_lat()
        (-3.1945, 55.9466)
    """

    latitude: float
    longitude: float

    def to_lon_lat(self) -> Tuple[float, float]:
        return self.longitude, self.latitude

    def to_point(self) -> Point:
        """
        Convert to a Shapely Point with x=longitude and y=latitude.
        """
        return Point(self.longitude, self.latitude)
