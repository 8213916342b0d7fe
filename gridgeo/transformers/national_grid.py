"""Conversion of National Grid easting/northing to WGS84 latitude/longitude.

The pipeline follows the Ordnance Survey's "A Guide to Coordinate Systems in
Great Britain":

1. solve for the foot-point latitude on the central meridian
2. apply the inverse Transverse Mercator series (Redfearn) on Airy 1830
3. convert OSGB36 latitude/longitude to Cartesian X, Y, Z
4. apply the OSGB36 -> WGS84 Helmert transformation
5. convert WGS84 Cartesian back to latitude/longitude

All arithmetic is in radians; degrees appear only at the boundary.
"""

from __future__ import annotations

import math
from typing import Tuple

from gridgeo.constructs.coordinate import GeographicCoordinate, PlanarCoordinate
from gridgeo.constructs.datum import (
    AIRY_1830,
    NATIONAL_GRID,
    OSGB36_TO_WGS84,
    WGS84,
    Ellipsoid,
    HelmertParameters,
    ProjectionOrigin,
)
from gridgeo.transformers.transformer_interface import TransformerInterface
from gridgeo.utils.exceptions import ConvergenceError

DEFAULT_MAX_ITERATIONS = 100

# meters; 0.01 mm as recommended by the Ordnance Survey
DEFAULT_ARC_TOLERANCE = 1e-5

# radians
DEFAULT_LATITUDE_TOLERANCE = 1e-9


def meridional_arc(
    latitude: float, ellipsoid: Ellipsoid, origin: ProjectionOrigin
) -> float:
    """
    Compute the scaled meridional arc length from the origin latitude to a latitude.

    Args:
        latitude: The latitude to measure to, in radians
        ellipsoid: The ellipsoid the grid is projected from
        origin: The projection constants

    Returns:
        The arc length M, in meters, already multiplied by the scale factor
    """
    b = ellipsoid.semi_minor_axis
    n = ellipsoid.third_flattening
    n2 = n * n
    n3 = n2 * n
    lat0 = origin.origin_latitude_radians
    dlat = latitude - lat0
    slat = latitude + lat0

    return (b * origin.scale_factor) * (
        (1 + n + (5 / 4) * n2 + (5 / 4) * n3) * dlat
        - (3 * n + 3 * n2 + (21 / 8) * n3) * math.sin(dlat) * math.cos(slat)
        + ((15 / 8) * n2 + (15 / 8) * n3) * math.sin(2 * dlat) * math.cos(2 * slat)
        - (35 / 24) * n3 * math.sin(3 * dlat) * math.cos(3 * slat)
    )


def foot_point_latitude(
    northing: float,
    ellipsoid: Ellipsoid,
    origin: ProjectionOrigin,
    tolerance: float = DEFAULT_ARC_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> float:
    """
    Find the latitude on the central meridian whose arc length matches a northing.

    Starting from the origin latitude offset by the northing, the estimate is moved
    by the remaining arc length until the residual drops below the tolerance.

    Args:
        northing: The grid northing, in meters
        ellipsoid: The ellipsoid the grid is projected from
        origin: The projection constants
        tolerance: The acceptable arc length residual, in meters
        max_iterations: The number of refinements allowed before giving up

    Returns:
        The foot-point latitude, in radians

    Raises:
        ConvergenceError: If the residual is still above the tolerance after max_iterations refinements
    """
    af0 = ellipsoid.semi_major_axis * origin.scale_factor
    target = northing - origin.false_northing

    latitude = target / af0 + origin.origin_latitude_radians
    residual = target - meridional_arc(latitude, ellipsoid, origin)

    iterations = 0
    while abs(residual) >= tolerance:
        if iterations >= max_iterations:
            raise ConvergenceError(
                f"foot-point latitude for northing {northing} did not converge "
                f"after {iterations} iterations (residual {residual} m)",
                iterations=iterations,
                residual=residual,
            )
        latitude += residual / af0
        residual = target - meridional_arc(latitude, ellipsoid, origin)
        iterations += 1

    return latitude


def grid_to_ellipsoidal(
    easting: float,
    latitude: float,
    ellipsoid: Ellipsoid,
    origin: ProjectionOrigin,
) -> Tuple[float, float]:
    """
    Apply the inverse Transverse Mercator series at a foot-point latitude.

    Args:
        easting: The grid easting, in meters
        latitude: The foot-point latitude, in radians
        ellipsoid: The ellipsoid the grid is projected from
        origin: The projection constants

    Returns:
        The (latitude, longitude) on the grid's ellipsoid, in radians
    """
    af0 = ellipsoid.semi_major_axis * origin.scale_factor
    e2 = ellipsoid.eccentricity_squared

    sin_lat = math.sin(latitude)
    cos_lat = math.cos(latitude)
    w = 1 - e2 * sin_lat * sin_lat

    # radii of curvature: transverse (nu) and meridional (rho)
    nu = af0 / math.sqrt(w)
    rho = af0 * (1 - e2) / w**1.5
    eta2 = nu / rho - 1

    tan_lat = math.tan(latitude)
    tan2 = tan_lat * tan_lat
    tan4 = tan2 * tan2
    tan6 = tan4 * tan2
    sec_lat = 1 / cos_lat
    nu3 = nu**3
    nu5 = nu**5
    nu7 = nu**7

    vii = tan_lat / (2 * rho * nu)
    viii = tan_lat / (24 * rho * nu3) * (5 + 3 * tan2 + eta2 - 9 * tan2 * eta2)
    ix = tan_lat / (720 * rho * nu5) * (61 + 90 * tan2 + 45 * tan4)
    x = sec_lat / nu
    xi = sec_lat / (6 * nu3) * (nu / rho + 2 * tan2)
    xii = sec_lat / (120 * nu5) * (5 + 28 * tan2 + 24 * tan4)
    xiia = sec_lat / (5040 * nu7) * (61 + 662 * tan2 + 1320 * tan4 + 720 * tan6)

    de = easting - origin.false_easting

    lat = latitude - vii * de**2 + viii * de**4 - ix * de**6
    lon = (
        origin.origin_longitude_radians
        + x * de
        - xi * de**3
        + xii * de**5
        - xiia * de**7
    )

    return lat, lon


def geodetic_to_cartesian(
    latitude: float,
    longitude: float,
    ellipsoid: Ellipsoid,
    height: float = 0.0,
) -> Tuple[float, float, float]:
    """
    Convert latitude/longitude (radians) and ellipsoidal height (meters) to Cartesian X, Y, Z.
    """
    a = ellipsoid.semi_major_axis
    e2 = ellipsoid.eccentricity_squared

    sin_lat = math.sin(latitude)
    cos_lat = math.cos(latitude)
    nu = a / math.sqrt(1 - e2 * sin_lat * sin_lat)

    x = (nu + height) * cos_lat * math.cos(longitude)
    y = (nu + height) * cos_lat * math.sin(longitude)
    z = ((1 - e2) * nu + height) * sin_lat

    return x, y, z


def cartesian_to_geodetic(
    x: float,
    y: float,
    z: float,
    ellipsoid: Ellipsoid,
    tolerance: float = DEFAULT_LATITUDE_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> Tuple[float, float]:
    """
    Recover latitude/longitude from Cartesian X, Y, Z on an ellipsoid.

    The latitude is seeded from atan2(Z, P(1 - e2)) and refined with the
    ellipsoid's transverse radius of curvature until successive estimates agree
    to within the tolerance.

    Args:
        x: X, in meters
        y: Y, in meters
        z: Z, in meters
        ellipsoid: The ellipsoid to project onto
        tolerance: The acceptable change between successive latitudes, in radians
        max_iterations: The number of refinements allowed before giving up

    Returns:
        The (latitude, longitude), in radians

    Raises:
        ConvergenceError: If the latitude has not settled after max_iterations refinements
    """
    a = ellipsoid.semi_major_axis
    e2 = ellipsoid.eccentricity_squared
    p = math.sqrt(x * x + y * y)

    latitude = math.atan2(z, p * (1 - e2))
    delta = math.inf

    for iterations in range(1, max_iterations + 1):
        previous = latitude
        sin_lat = math.sin(latitude)
        nu = a / math.sqrt(1 - e2 * sin_lat * sin_lat)
        latitude = math.atan2(z + e2 * nu * sin_lat, p)
        delta = abs(latitude - previous)
        if delta <= tolerance:
            break
    else:
        raise ConvergenceError(
            f"latitude for ({x}, {y}, {z}) did not converge "
            f"after {max_iterations} iterations (last change {delta} rad)",
            iterations=max_iterations,
            residual=delta,
        )

    longitude = math.atan2(y, x)

    return latitude, longitude


class NationalGridTransformer(TransformerInterface):
    """
    Converts Ordnance Survey National Grid coordinates to WGS84 with a 7-parameter Helmert shift.

    The transformer holds only immutable constants, so a single instance can be shared
    between threads. Accuracy is in the order of a few meters, which is limited by the
    Helmert transformation rather than the projection maths.

    Args:
        source: The ellipsoid the grid is projected from. Default is Airy 1830.
        target: The ellipsoid of the output coordinates. Default is WGS84.
        origin: The projection constants. Default is the National Grid.
        helmert: The datum shift from source to target frame. Default is OSGB36 -> WGS84.
        max_iterations: The cap on both iterative solves. Default is 100.
        arc_tolerance: Foot-point convergence tolerance, in meters. Default is 1e-5.
        latitude_tolerance: Cartesian to geodetic convergence tolerance, in radians. Default is 1e-9.

    Examples:
        >>> from gridgeo.transformers.national_grid import NationalGridTransformer
        >>> from gridgeo.constructs.coordinate import PlanarCoordinate
        >>>
        >>> transformer = NationalGridTransformer()
        >>> c = transformer.transform(PlanarCoordinate(easting=325482, northing=673143))
        >>> print(f"{c.latitude:.2f}, {c.longitude:.2f}")
        55.95, -3.19
    """

    def __init__(
        self,
        source: Ellipsoid = AIRY_1830,
        target: Ellipsoid = WGS84,
        origin: ProjectionOrigin = NATIONAL_GRID,
        helmert: HelmertParameters = OSGB36_TO_WGS84,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        arc_tolerance: float = DEFAULT_ARC_TOLERANCE,
        latitude_tolerance: float = DEFAULT_LATITUDE_TOLERANCE,
    ):
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")

        self.source = source
        self.target = target
        self.origin = origin
        self.helmert = helmert
        self.max_iterations = max_iterations
        self.arc_tolerance = arc_tolerance
        self.latitude_tolerance = latitude_tolerance

    def transform(self, coordinate: PlanarCoordinate) -> GeographicCoordinate:
        """
        Convert one National Grid coordinate to WGS84.

        Args:
            coordinate: The easting/northing to convert, in meters. Both values must be finite.

        Returns:
            The WGS84 latitude/longitude in decimal degrees

        Raises:
            ValueError: If the easting or northing is not a finite number, or is so far outside the grid that the projection series overflows
            ConvergenceError: If either iterative solve hits the iteration cap, which only happens far outside the grid
        """
        easting, northing = coordinate
        if not (math.isfinite(easting) and math.isfinite(northing)):
            raise ValueError(
                f"easting and northing must be finite but got ({easting}, {northing})"
            )

        foot_lat = foot_point_latitude(
            northing,
            self.source,
            self.origin,
            tolerance=self.arc_tolerance,
            max_iterations=self.max_iterations,
        )
        try:
            lat, lon = grid_to_ellipsoidal(
                easting, foot_lat, self.source, self.origin
            )
        except OverflowError as e:
            raise ValueError(
                f"({easting}, {northing}) is too far outside the grid to convert"
            ) from e

        if not (math.isfinite(lat) and math.isfinite(lon)):
            raise ValueError(
                f"({easting}, {northing}) is too far outside the grid to convert"
            )

        x1, y1, z1 = geodetic_to_cartesian(lat, lon, self.source)
        x2, y2, z2 = self.helmert.apply(x1, y1, z1)

        lat, lon = cartesian_to_geodetic(
            x2,
            y2,
            z2,
            self.target,
            tolerance=self.latitude_tolerance,
            max_iterations=self.max_iterations,
        )

        return GeographicCoordinate(
            latitude=math.degrees(lat), longitude=math.degrees(lon)
        )


_DEFAULT_TRANSFORMER = NationalGridTransformer()


def grid_to_geographic(easting: float, northing: float) -> GeographicCoordinate:
    """
    Convert a National Grid easting/northing to WGS84 with the default transformer.

    Args:
        easting: The grid easting, in meters
        northing: The grid northing, in meters

    Returns:
        The WGS84 latitude/longitude in decimal degrees

    Examples:
        >>> c = grid_to_geographic(400000, -100000)  # the false origin, near 49N 2W
        >>> print(f"{c.latitude:.2f}, {c.longitude:.2f}")
        49.00, -2.00
    """
    return _DEFAULT_TRANSFORMER.transform(PlanarCoordinate(easting, northing))
