"""Reference ellipsoids, projection constants and datum shift parameters.

The defaults describe the Ordnance Survey National Grid: a Transverse Mercator
projection of the Airy 1830 ellipsoid (OSGB36 datum), and the published
7-parameter Helmert transformation from OSGB36 to WGS84. The Helmert shift is
accurate to a few meters; sub-meter work needs the OSTN15 correction grid.
"""

from __future__ import annotations

import math
from typing import NamedTuple


class Ellipsoid(NamedTuple):
    """
    A reference ellipsoid defined by its two semi-axes.

    Attributes:
        name: Human readable name of the ellipsoid
        semi_major_axis: The equatorial radius a, in meters
        semi_minor_axis: The polar radius b, in meters
    """

    name: str
    semi_major_axis: float
    semi_minor_axis: float

    @property
    def eccentricity_squared(self) -> float:
        a = self.semi_major_axis
        b = self.semi_minor_axis
        return 1 - (b * b) / (a * a)

    @property
    def flattening(self) -> float:
        return (self.semi_major_axis - self.semi_minor_axis) / self.semi_major_axis

    @property
    def third_flattening(self) -> float:
        """The parameter n = (a - b) / (a + b) used by the meridional arc series."""
        a = self.semi_major_axis
        b = self.semi_minor_axis
        return (a - b) / (a + b)


class ProjectionOrigin(NamedTuple):
    """
    The fixed constants of a Transverse Mercator grid.

    Attributes:
        origin_latitude: Latitude of the true origin, in decimal degrees
        origin_longitude: Longitude of the true origin (the central meridian), in decimal degrees
        scale_factor: Scale factor on the central meridian
        false_easting: Easting of the true origin, in meters
        false_northing: Northing of the true origin, in meters
    """

    origin_latitude: float
    origin_longitude: float
    scale_factor: float
    false_easting: float
    false_northing: float

    @property
    def origin_latitude_radians(self) -> float:
        return math.radians(self.origin_latitude)

    @property
    def origin_longitude_radians(self) -> float:
        return math.radians(self.origin_longitude)


class HelmertParameters(NamedTuple):
    """
    A 7-parameter similarity transformation between two Cartesian frames.

    Attributes:
        tx: Translation along X, in meters
        ty: Translation along Y, in meters
        tz: Translation along Z, in meters
        rx: Rotation about X, in arc-seconds
        ry: Rotation about Y, in arc-seconds
        rz: Rotation about Z, in arc-seconds
        scale: Scale change, in parts per million
    """

    tx: float
    ty: float
    tz: float
    rx: float
    ry: float
    rz: float
    scale: float

    def apply(self, x: float, y: float, z: float) -> tuple[float, float, float]:
        """
        Map a Cartesian point from the source frame to the target frame.

        Uses the small-angle approximation of the rotation matrix.

        Args:
            x: X in the source frame, in meters
            y: Y in the source frame, in meters
            z: Z in the source frame, in meters

        Returns:
            The (x, y, z) tuple in the target frame, in meters
        """
        rx = _arcseconds_to_radians(self.rx)
        ry = _arcseconds_to_radians(self.ry)
        rz = _arcseconds_to_radians(self.rz)
        s = 1 + self.scale * 1e-6

        x2 = self.tx + s * x - rz * y + ry * z
        y2 = self.ty + rz * x + s * y - rx * z
        z2 = self.tz - ry * x + rx * y + s * z

        return x2, y2, z2


def _arcseconds_to_radians(seconds: float) -> float:
    return math.radians(seconds / 3600)


AIRY_1830 = Ellipsoid(
    name="Airy 1830",
    semi_major_axis=6377563.396,
    semi_minor_axis=6356256.909,
)

WGS84 = Ellipsoid(
    name="WGS 84",
    semi_major_axis=6378137.000,
    semi_minor_axis=6356752.314245,
)

# Ordnance Survey National Grid (EPSG:27700)
NATIONAL_GRID = ProjectionOrigin(
    origin_latitude=49.0,
    origin_longitude=-2.0,
    scale_factor=0.9996012717,
    false_easting=400000.0,
    false_northing=-100000.0,
)

# OSGB36 -> WGS84
OSGB36_TO_WGS84 = HelmertParameters(
    tx=446.448,
    ty=-125.157,
    tz=542.060,
    rx=0.1502,
    ry=0.2470,
    rz=0.8421,
    scale=-20.4894,
)
